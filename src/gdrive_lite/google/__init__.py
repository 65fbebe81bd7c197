"""Google OAuth client configuration and authorization-code flow."""

from gdrive_lite.google.exceptions import (
    ConfigurationError,
    CredentialsNotFoundError,
    GoogleAuthError,
    TokenError,
)
from gdrive_lite.google.oauth import SCOPES, ClientConfig, GoogleOAuth, resolve_scopes

__all__ = [
    "ClientConfig",
    "GoogleOAuth",
    "SCOPES",
    "resolve_scopes",
    "GoogleAuthError",
    "ConfigurationError",
    "CredentialsNotFoundError",
    "TokenError",
]
