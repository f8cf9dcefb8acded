"""
pytest configuration and fixtures.
"""

from typing import Callable, List, Optional
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from prometheus_client import CollectorRegistry

from adaptd.http import HTTPRequest, HTTPResponse, ResponseRecorder, ResponseWriter


class CallLog:
    """Records which handlers ran, in order."""

    def __init__(self):
        self.calls: List[str] = []

    def handler(self, name: str, status: Optional[int] = None, body: str = "") -> Callable:
        """A handler that records `name` and optionally writes a response."""
        def record(writer: ResponseWriter, request: HTTPRequest) -> None:
            self.calls.append(name)
            if status is not None:
                writer.write_header(status)
            if body:
                writer.write(body)
        return record

    def count(self, name: str) -> int:
        return self.calls.count(name)


@pytest.fixture
def call_log() -> CallLog:
    """Fresh call log per test."""
    return CallLog()


@pytest.fixture
def recorder() -> ResponseRecorder:
    """In-memory response writer."""
    return ResponseRecorder()


@pytest.fixture
def registry() -> CollectorRegistry:
    """Isolated Prometheus registry so collectors can be created per test."""
    return CollectorRegistry()


@pytest.fixture
def get_request() -> HTTPRequest:
    """Plaintext GET with a query string."""
    return HTTPRequest.from_url(
        "GET",
        "http://example.com:8080/login?next=%2Fhome&x=1",
        headers={"User-Agent": "pytest"},
    )


@pytest.fixture
def tls_request() -> HTTPRequest:
    """GET that arrived over a completed TLS handshake."""
    return HTTPRequest.from_url("GET", "https://example.com/login")


@pytest.fixture
def run() -> Callable[..., HTTPResponse]:
    """Invoke a handler with a fresh recorder and return the recorded response."""
    def invoke(handler, request: HTTPRequest) -> HTTPResponse:
        writer = ResponseRecorder()
        handler(writer, request)
        return writer.result()
    return invoke
