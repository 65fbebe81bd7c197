"""Google Drive v2 API client with OAuth authentication.

List, upload and download Google Drive files over plain HTTPS.

Usage:
    from gdrive_lite.drive import DriveClient
    from gdrive_lite.google import ClientConfig

    client = DriveClient(ClientConfig.from_env(), access_token=token)

    # List files
    result = client.list_files()
    if result.ok:
        for item in result.value["items"]:
            print(item["title"])
    else:
        print(client.error)

    # Upload a file
    client.upload_simple({"title": "notes.txt", "mimeType": "text/plain"}, b"hello")

OAuth Setup:
    1. Download OAuth credentials from Google Cloud Console
    2. Authorize: gdrive-lite login
"""

from __future__ import annotations

from gdrive_lite.drive.client import DriveClient
from gdrive_lite.drive.exceptions import (
    DriveError,
    InvalidMetadataError,
    ResponseParseError,
    TransportError,
)
from gdrive_lite.drive.models import FileMetadata, HttpFailure, JsonValue, Result, Session

__all__ = [
    "DriveClient",
    "Session",
    "Result",
    "HttpFailure",
    "FileMetadata",
    "JsonValue",
    "DriveError",
    "InvalidMetadataError",
    "ResponseParseError",
    "TransportError",
]
