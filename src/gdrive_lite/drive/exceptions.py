"""Google Drive client exceptions.

HTTP error statuses are not raised; they come back as a failed Result. These
exceptions cover faults a caller cannot recover from by inspecting a result.
"""


class DriveError(Exception):
    """Base exception for Drive client errors."""

    pass


class ResponseParseError(DriveError):
    """Raised when a response body is not the JSON the API promises."""

    def __init__(self, message: str, body: str | None = None):
        self.body = body
        super().__init__(message)


class InvalidMetadataError(DriveError):
    """Raised when file metadata lacks a field an operation needs."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"File metadata has no '{field}' field")


class TransportError(DriveError):
    """Raised when a request could not be sent or no response arrived."""

    pass
