"""Google OAuth 2.0 authorization-code flow.

This module provides the protocol pieces of the installed-app OAuth flow:
- Client configuration (client id/secret, redirect URI, scope)
- The consent URL a user visits in a browser
- The token request body and the parsing of the token response

Requests themselves are sent by DriveClient over its own HTTP transport, so
the same session records failures for every network call.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from authlib.oauth2 import OAuth2Error
from authlib.oauth2.rfc6749.parameters import (
    parse_authorization_code_response,
    prepare_grant_uri,
)

from gdrive_lite.config import (
    DEFAULT_REDIRECT_URI,
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_REDIRECT_URI,
    ENV_SCOPE,
)
from gdrive_lite.google.exceptions import (
    ConfigurationError,
    CredentialsNotFoundError,
    TokenError,
)

logger = logging.getLogger(__name__)


# Common Google Drive OAuth scopes
SCOPES = {
    "drive": "https://www.googleapis.com/auth/drive",
    "drive_readonly": "https://www.googleapis.com/auth/drive.readonly",
    "drive_file": "https://www.googleapis.com/auth/drive.file",
    "drive_metadata": "https://www.googleapis.com/auth/drive.metadata",
    "drive_metadata_readonly": "https://www.googleapis.com/auth/drive.metadata.readonly",
    "drive_appdata": "https://www.googleapis.com/auth/drive.appdata",
}


def resolve_scopes(scopes: str | list[str]) -> str:
    """Resolve scope names to full URLs.

    Args:
        scopes: A list of scope names (e.g., ["drive_file"]) or full URLs, or a
            single string of them separated by spaces or commas.

    Returns:
        Space-separated scope string as sent to Google.
    """
    if isinstance(scopes, str):
        scopes = scopes.replace(",", " ").split()

    resolved = []
    for scope in scopes:
        if scope.startswith("https://"):
            resolved.append(scope)
        elif scope in SCOPES:
            resolved.append(SCOPES[scope])
        else:
            raise ValueError(
                f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
            )
    return " ".join(resolved)


@dataclass(frozen=True)
class ClientConfig:
    """OAuth client configuration.

    scope, redirect_uri and client_id are required. client_secret is only
    needed to exchange an authorization code for a token.
    """

    scope: str
    redirect_uri: str
    client_id: str
    client_secret: str | None = None

    def __post_init__(self) -> None:
        for name in ("scope", "redirect_uri", "client_id"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(name)

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build configuration from GDRIVE_* environment variables.

        GDRIVE_CLIENT_ID is required. GDRIVE_SCOPE defaults to the full drive
        scope and may use scope names; GDRIVE_REDIRECT_URI defaults to the
        out-of-band redirect.
        """
        return cls(
            scope=resolve_scopes(os.environ.get(ENV_SCOPE) or "drive"),
            redirect_uri=os.environ.get(ENV_REDIRECT_URI) or DEFAULT_REDIRECT_URI,
            client_id=os.environ.get(ENV_CLIENT_ID, ""),
            client_secret=os.environ.get(ENV_CLIENT_SECRET) or None,
        )

    @classmethod
    def from_credentials_file(
        cls,
        path: str | Path,
        scope: str | list[str] = "drive",
        redirect_uri: str | None = None,
    ) -> ClientConfig:
        """Build configuration from a Google Cloud Console credentials file.

        Args:
            path: Path to credentials.json ("installed" or "web" layout).
            scope: Scope names or URLs.
            redirect_uri: Redirect URI. Defaults to the first one registered in
                the file, or the out-of-band redirect.

        Raises:
            CredentialsNotFoundError: If the file does not exist.
            ConfigurationError: If the file has neither layout.
        """
        path = Path(path)
        if not path.exists():
            raise CredentialsNotFoundError(str(path))

        with open(path) as f:
            creds = json.load(f)

        # Handle both web and installed app credential formats
        if "installed" in creds:
            app_creds = creds["installed"]
        elif "web" in creds:
            app_creds = creds["web"]
        else:
            raise ConfigurationError(
                "client_id",
                "Invalid credentials.json format. Expected 'installed' or 'web' key.",
            )

        if redirect_uri is None:
            registered = app_creds.get("redirect_uris") or []
            redirect_uri = registered[0] if registered else DEFAULT_REDIRECT_URI

        return cls(
            scope=resolve_scopes(scope),
            redirect_uri=redirect_uri,
            client_id=app_creds.get("client_id", ""),
            client_secret=app_creds.get("client_secret") or None,
        )


class GoogleOAuth:
    """Google OAuth authorization-code flow helpers.

    Example:
        >>> oauth = GoogleOAuth(config)
        >>> print(f"Visit: {oauth.get_authorization_url()}")
        >>> data = oauth.token_request_data(code)
    """

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URL = "https://accounts.google.com/o/oauth2/token"

    def __init__(self, config: ClientConfig):
        self.config = config

    def get_authorization_url(self) -> str:
        """Build the consent URL for the user to visit.

        Returns:
            Authorization URL with response_type, client_id, redirect_uri and
            scope query parameters.
        """
        return prepare_grant_uri(
            self.AUTHORIZE_URL,
            client_id=self.config.client_id,
            response_type="code",
            redirect_uri=self.config.redirect_uri,
            scope=self.config.scope,
        )

    @staticmethod
    def code_from_redirect(authorization_response: str) -> str:
        """Extract the authorization code from a redirect URL.

        Args:
            authorization_response: The full redirect URL from the OAuth callback.

        Returns:
            The authorization code.

        Raises:
            TokenError: If the URL carries no code (e.g. consent was denied).
        """
        try:
            params = parse_authorization_code_response(authorization_response)
        except OAuth2Error as e:
            raise TokenError(f"No authorization code in redirect URL: {e}") from e
        return params["code"]

    def token_request_data(self, code: str) -> dict[str, str]:
        """Build the form body for exchanging an authorization code.

        Args:
            code: The authorization code, or the full redirect URL carrying it.

        Raises:
            ConfigurationError: If no client secret is configured. Checked
                before the code is looked at.
            TokenError: If a redirect URL carries no code.
        """
        if not self.config.client_secret:
            raise ConfigurationError("client_secret", "no client_secret given")

        if "://" in code:
            code = self.code_from_redirect(code)

        return {
            "code": code,
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "redirect_uri": self.config.redirect_uri,
            "grant_type": "authorization_code",
        }

    @staticmethod
    def parse_token_response(token: Any) -> str:
        """Return the access token from a decoded token response.

        Raises:
            TokenError: If the response has no access_token.
        """
        if not isinstance(token, dict) or not token.get("access_token"):
            raise TokenError("Token response did not include an access_token")
        return token["access_token"]
