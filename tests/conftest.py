"""Shared fixtures: client configuration, a recording HTTP transport and a
local server for requests that go over a real connection."""

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest

from gdrive_lite.drive import DriveClient
from gdrive_lite.google import ClientConfig


class RecordingTransport:
    """Replays canned responses and keeps every request it receives."""

    def __init__(self, responses: list[httpx.Response]):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self.responses.pop(0)


@pytest.fixture
def config():
    """A complete client configuration."""
    return ClientConfig(
        scope="https://www.googleapis.com/auth/drive",
        redirect_uri="urn:ietf:wg:oauth:2.0:oob",
        client_id="test-client-id.apps.googleusercontent.com",
        client_secret="test-client-secret",
    )


@pytest.fixture
def make_client(config):
    """Build a DriveClient whose requests are answered by canned responses."""

    def _make(*responses, access_token="test-access-token", client_config=None):
        transport = RecordingTransport(list(responses))
        client = DriveClient(
            client_config or config,
            access_token=access_token,
            http_client=httpx.Client(transport=httpx.MockTransport(transport)),
        )
        return client, transport

    return _make


class _UnauthorizedHandler(BaseHTTPRequestHandler):
    """Answers every GET with 401 and keeps the request headers."""

    def do_GET(self):
        self.server.received_headers.append({k.lower(): v for k, v in self.headers.items()})
        body = b'{"error": {"code": 401, "message": "Login Required"}}'
        self.send_response(401)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def unauthorized_server():
    """A local HTTP server that rejects every request with 401."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _UnauthorizedHandler)
    server.received_headers = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join()
