"""Shared test fixtures for the GitHub CORS proxy tests."""

import os

# Add project root to path
import sys
from typing import Callable, Dict, List, Optional, Union

import httpx
import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def test_settings(monkeypatch):
    """Default settings, installed as the cached settings."""
    import settings

    s = settings.Settings()
    monkeypatch.setattr(settings, "_cached_settings", s)
    yield s
    settings.invalidate_cache()


# =============================================================================
# Mock GitHub Upstream
# =============================================================================


Reply = Union[Exception, Callable[[httpx.Request], httpx.Response]]


def unread_response(status_code: int = 200, content: bytes = b"", headers: Optional[dict] = None) -> httpx.Response:
    """Response whose body is still an unread stream, like one off the wire."""
    all_headers = {"content-length": str(len(content))}
    all_headers.update(headers or {})
    return httpx.Response(status_code, headers=all_headers, stream=httpx.ByteStream(content))


class MockGitHub:
    """Fake GitHub served through httpx.MockTransport.

    URLs without a registered reply answer 404. Every request that reaches
    the transport is recorded in ``requests``.
    """

    def __init__(self):
        self.replies: Dict[str, List[Reply]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        url: str,
        status_code: int = 200,
        content: bytes = b"",
        headers: Optional[dict] = None,
    ) -> None:
        """Queue a response for ``url``. The last one queued repeats."""
        self.add_reply(url, lambda request: unread_response(status_code, content, headers))

    def add_reply(self, url: str, reply: Reply) -> None:
        """Queue an arbitrary reply (exception or callable building a response)."""
        self.replies.setdefault(url, []).append(reply)

    def add_error(self, url: str, error_cls=httpx.ConnectError, message: str = "connection refused") -> None:
        """Make requests to ``url`` fail at the network level."""
        self.replies.setdefault(url, []).append(error_cls(message))

    @property
    def urls(self) -> List[str]:
        return [str(r.url) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.replies.get(str(request.url))
        if not queue:
            return unread_response(404, b"Not Found")

        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(reply, Exception):
            if isinstance(reply, httpx.RequestError):
                reply.request = request
            raise reply
        return reply(request)


@pytest.fixture
def mock_github(monkeypatch, test_settings):
    """Route the shared upstream client to a MockGitHub instance."""
    import upstream

    github = MockGitHub()
    client = httpx.AsyncClient(transport=httpx.MockTransport(github.handler), follow_redirects=True)
    monkeypatch.setattr(upstream, "_client", client)
    yield github


# =============================================================================
# App Fixtures
# =============================================================================


@pytest.fixture
def test_client(mock_github):
    """TestClient for the full application backed by the mock upstream."""
    from server import create_app

    with TestClient(create_app()) as client:
        yield client
