"""Session and result values for the Drive client."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, TypeVar, Union

import httpx

# JSON value as returned by the API; file metadata is passed through verbatim.
JsonValue = Union[str, int, float, bool, None, list["JsonValue"], dict[str, "JsonValue"]]
FileMetadata = dict[str, JsonValue]

T = TypeVar("T")


@dataclass(frozen=True)
class Session:
    """Access token and last error of one authorized user.

    Session values are immutable; the client swaps in a new value when the
    token is set or a request fails.
    """

    access_token: str | None = None
    error: str | None = None

    def with_token(self, access_token: str | None) -> Session:
        return replace(self, access_token=access_token)

    def with_error(self, error: str | None) -> Session:
        return replace(self, error=error)

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def auth_headers(self) -> dict[str, str]:
        """Get the Authorization header for API requests.

        Without a token the header is left out and the request still goes
        out; Drive answers it with 401.
        """
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}


@dataclass(frozen=True)
class HttpFailure:
    """A non-success HTTP response."""

    status_code: int
    reason: str
    body: str = ""

    @property
    def status_line(self) -> str:
        """Status code and reason phrase, e.g. "401 Unauthorized"."""
        return f"{self.status_code} {self.reason}".strip()

    @classmethod
    def from_response(cls, response: httpx.Response) -> HttpFailure:
        return cls(
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=response.text,
        )


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a Drive API call.

    value is None when the call failed; failure then describes the response.
    orphaned_file_id is set when a simple upload created the file but the
    content request failed, leaving an empty file behind on Drive.
    """

    value: T | None = None
    failure: HttpFailure | None = None
    orphaned_file_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def error(self) -> str | None:
        """Status line of the failed response, if any."""
        return self.failure.status_line if self.failure else None
