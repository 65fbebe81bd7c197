"""Google Drive v2 API client implementation."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

import httpx
from google.oauth2.credentials import Credentials as GoogleCredentials

from gdrive_lite.drive.exceptions import (
    InvalidMetadataError,
    ResponseParseError,
    TransportError,
)
from gdrive_lite.drive.models import FileMetadata, HttpFailure, Result, Session
from gdrive_lite.google import ClientConfig, GoogleOAuth, TokenError

logger = logging.getLogger(__name__)

# Metadata key that may carry the file content for upload_simple()
CONTENT_KEY = "data"

DEFAULT_MIME_TYPE = "application/octet-stream"


class DriveClient:
    """Google Drive API client with OAuth authentication.

    Usage:
        client = DriveClient(ClientConfig.from_env())

        # Authorize once: send the user to the consent page, then exchange
        # the code Google hands back.
        print(client.login_link())
        client.exchange_token(code)

        # List files
        listing = client.list_files()

        # Download a file
        content = client.download(listing.value["items"][0]).value

        # Upload a file
        client.upload_multipart("/path/to/report.pdf", {
            "title": "report.pdf",
            "mimeType": "application/pdf",
        })

    Every network call returns a Result. A non-success HTTP status is not
    raised: the result has no value, the status line is recorded as
    ``client.error``, and a warning is logged.

    Note:
        One client holds one user's session and is not safe to share between
        threads. To reuse authorization across runs, store ``access_token``
        and pass it back to the constructor.
    """

    FILES_URL = "https://www.googleapis.com/drive/v2/files"
    UPLOAD_URL = "https://www.googleapis.com/upload/drive/v2/files"

    def __init__(
        self,
        config: ClientConfig,
        access_token: str | None = None,
        http_client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize Drive client.

        Args:
            config: OAuth client configuration.
            access_token: Previously obtained access token, to skip authorization.
            http_client: HTTP client to send requests with. A new one is created
                (and closed by close()) if not provided.
            timeout: Request timeout in seconds for a created client. None waits
                indefinitely.
        """
        self.config = config
        self.oauth = GoogleOAuth(config)
        self.session = Session(access_token=access_token)

        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    @property
    def access_token(self) -> str | None:
        return self.session.access_token

    @access_token.setter
    def access_token(self, value: str | None) -> None:
        self.session = self.session.with_token(value)

    @property
    def error(self) -> str | None:
        """Status line of the most recent failed request."""
        return self.session.error

    # =========================================================================
    # Authorization
    # =========================================================================

    def login_link(self) -> str:
        """Get the URL the user must visit to grant access.

        After consent, Google delivers an authorization code to the configured
        redirect URI; pass it to exchange_token().
        """
        return self.oauth.get_authorization_url()

    def exchange_token(self, code: str) -> Result[str]:
        """Exchange an authorization code for an access token.

        Args:
            code: The authorization code, or the full redirect URL carrying it.

        Returns:
            Result with the access token. On success the token is also stored
            in the session.

        Raises:
            ConfigurationError: If no client secret is configured. Nothing is
                sent in that case.
            TokenError: If the token response has no access_token.
        """
        data = self.oauth.token_request_data(code)
        response = self._send("POST", GoogleOAuth.TOKEN_URL, data=data)

        if not response.is_success:
            return self._failed(response)

        access_token = GoogleOAuth.parse_token_response(self._json(response))
        self.session = self.session.with_token(access_token)
        logger.info("Obtained access token")
        return Result(value=access_token)

    def get_credentials(self) -> GoogleCredentials:
        """Get Google Credentials object for API client libraries.

        Raises:
            TokenError: If no access token is set.
        """
        if not self.session.access_token:
            raise TokenError("Not authorized: no access token")

        return GoogleCredentials(
            token=self.session.access_token,
            token_uri=GoogleOAuth.TOKEN_URL,
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            scopes=self.config.scope.split(),
        )

    # =========================================================================
    # Files
    # =========================================================================

    def list_files(self) -> Result[dict[str, Any]]:
        """List files in Drive.

        Returns:
            Result with the files resource, unmodified. Its "items" holds the
            file metadata. Only the first page is returned.
        """
        session = self.session
        response = self._send("GET", self.FILES_URL, headers=session.auth_headers())

        if not response.is_success:
            return self._failed(response)

        return Result(value=self._json(response))

    def download(self, file: FileMetadata) -> Result[bytes]:
        """Download the content of a file.

        Args:
            file: File metadata as returned by list_files(); must include
                "downloadUrl" (Google Docs formats have none).

        Returns:
            Result with the raw file content.
        """
        url = file.get("downloadUrl")
        if not isinstance(url, str) or not url:
            raise InvalidMetadataError("downloadUrl")

        session = self.session
        response = self._send("GET", url, headers=session.auth_headers())

        if not response.is_success:
            return self._failed(response)

        return Result(value=response.content)

    def upload_simple(
        self,
        metadata: FileMetadata,
        content: bytes | str | None = None,
    ) -> Result[dict[str, Any]]:
        """Upload a file with two requests: metadata first, then content.

        Only suitable for small files: a failed transfer has to be redone
        from the start. See
        https://developers.google.com/drive/v2/reference/files/insert for the
        metadata fields.

        Args:
            metadata: File metadata; "mimeType" sets the content type. If
                content is not given it is taken from the "data" key, which is
                never sent as metadata. The mapping is not modified.
            content: The file content.

        Returns:
            Result with the file resource after the content upload. If the
            content request fails, the file created by the first request is
            left on Drive and its id is reported as orphaned_file_id.
        """
        metadata = dict(metadata)
        data = metadata.pop(CONTENT_KEY, None)
        if content is None:
            if data is not None and not isinstance(data, (bytes, str)):
                raise InvalidMetadataError(
                    CONTENT_KEY, "File content under 'data' must be bytes or str"
                )
            content = data if data is not None else b""

        session = self.session
        response = self._send(
            "POST",
            self.FILES_URL,
            headers=session.auth_headers(),
            json=metadata,
        )
        if not response.is_success:
            return self._failed(response, include_body=True)

        created = self._json(response)
        file_id = created.get("id") if isinstance(created, dict) else None
        if not file_id:
            raise ResponseParseError("File creation response has no id", response.text)

        headers = session.auth_headers()
        headers["Content-Type"] = str(metadata.get("mimeType") or DEFAULT_MIME_TYPE)
        response = self._send(
            "PUT",
            f"{self.UPLOAD_URL}/{file_id}",
            headers=headers,
            params={"uploadType": "media"},
            content=content,
        )
        if not response.is_success:
            logger.warning(f"File {file_id} was created without content")
            return self._failed(response, include_body=True, orphaned_file_id=file_id)

        logger.info(f"Uploaded {metadata.get('title', file_id)} ({file_id})")
        return Result(value=self._json(response))

    def upload_multipart(
        self,
        file_path: str | os.PathLike,
        metadata: FileMetadata,
    ) -> Result[dict[str, Any]]:
        """Upload a file and its metadata in a single multipart request.

        The whole file is sent in one request, so this suits files that can
        simply be re-uploaded if the transfer fails.

        Args:
            file_path: Local path of the file to upload.
            metadata: File metadata. "title" is used as the part's filename
                and "mimeType" as its content type.

        Returns:
            Result with the created file resource.
        """
        title = metadata.get("title")
        if not isinstance(title, str) or not title:
            raise InvalidMetadataError("title")
        mime_type = str(metadata.get("mimeType") or DEFAULT_MIME_TYPE)

        session = self.session
        with open(file_path, "rb") as fh:
            # Both parts are unnamed; the metadata part has no filename.
            files = [
                ("", (None, json.dumps(metadata), "application/json")),
                ("", (title, fh, mime_type)),
            ]
            response = self._send(
                "POST",
                self.UPLOAD_URL,
                headers=session.auth_headers(),
                params={"uploadType": "multipart"},
                files=files,
            )

        if not response.is_success:
            return self._failed(response, include_body=True)

        logger.info(f"Uploaded {title}")
        return Result(value=self._json(response))

    # =========================================================================
    # Transport
    # =========================================================================

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request and return the response, whatever its status.

        Raises:
            TransportError: If no response was received.
        """
        logger.debug(f"{method} {url}")
        try:
            return self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}") from e

    def _failed(
        self,
        response: httpx.Response,
        include_body: bool = False,
        orphaned_file_id: str | None = None,
    ) -> Result[Any]:
        """Record a failed response in the session and build its result."""
        failure = HttpFailure.from_response(response)
        self.session = self.session.with_error(failure.status_line)

        logger.warning(f"Something went wrong: {failure.status_line}")
        if include_body and failure.body:
            logger.warning(failure.body)

        return Result(failure=failure, orphaned_file_id=orphaned_file_id)

    def _json(self, response: httpx.Response) -> Any:
        """Decode a JSON response body."""
        try:
            return response.json()
        except ValueError as e:
            raise ResponseParseError(f"Invalid JSON in response: {e}", response.text) from e

    def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> DriveClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()
