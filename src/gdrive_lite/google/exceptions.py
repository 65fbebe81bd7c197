"""Google authentication exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class ConfigurationError(GoogleAuthError):
    """Raised when required client configuration is missing."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Missing required configuration value: {field}")


class CredentialsNotFoundError(GoogleAuthError):
    """No client credentials file at the path given to from_credentials_file()."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"No client credentials at {path}; set GDRIVE_CLIENT_ID and "
            "GDRIVE_CLIENT_SECRET or save the OAuth client JSON there."
        )


class TokenError(GoogleAuthError):
    """An authorization code or access token could not be obtained or used."""

    pass
