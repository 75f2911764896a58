"""Pytest configuration and fixtures."""
from __future__ import annotations

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from omdb_proxy import create_app
from omdb_proxy.external_api import OmdbClient

TEST_API_KEY = "testkey"


def make_response(status_code: int = 200, body: object = None, raw: bytes | None = None) -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.url = "http://www.omdbapi.com/"
    if raw is None:
        raw = json.dumps(body if body is not None else {}).encode("utf-8")
    response._content = raw
    response._content_consumed = True
    response.encoding = "utf-8"
    return response


class FakeSession(requests.Session):
    """Session that replays queued responses or exceptions in order."""

    def __init__(self):
        super().__init__()
        self.queue: list = []
        self.calls: list[dict] = []

    def get(self, url, params=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if not self.queue:
            raise AssertionError("unexpected OMDB request")
        outcome = self.queue.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def fake_session():
    """Session double shared by the client and the test."""
    return FakeSession()


@pytest.fixture
def sleeps():
    """Recorded backoff delays."""
    return []


@pytest.fixture
def omdb_client(fake_session, sleeps):
    """OMDB client wired to the fake session and a recording sleep."""
    return OmdbClient(api_key=TEST_API_KEY, session=fake_session, sleep=sleeps.append)


@pytest.fixture
def app(omdb_client):
    """Create application for testing."""
    app = create_app({"TESTING": True, "OMDB_API_KEY": TEST_API_KEY})
    app.extensions["omdb_client"] = omdb_client
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def omdb_response():
    """Factory for canned OMDB responses."""
    return make_response


class StubOmdbHandler(BaseHTTPRequestHandler):
    """Hands every GET to the ``respond`` callable set on the server."""

    def do_GET(self):
        self.server.requests_seen.append(dict(self.headers))
        self.server.respond(self)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_omdb():
    """Start a local HTTP server; call with a respond(handler) function, get its URL."""
    servers = []

    def serve(respond):
        server = ThreadingHTTPServer(("127.0.0.1", 0), StubOmdbHandler)
        server.respond = respond
        server.requests_seen = []
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return f"http://127.0.0.1:{server.server_address[1]}/", server.requests_seen

    yield serve
    for server in servers:
        server.shutdown()
        server.server_close()
