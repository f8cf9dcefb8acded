"""
=============================================================================
RESPONSE SINK
=============================================================================

Handlers in this package do not RETURN a response. They are given a
ResponseWriter (the "sink") and write into it:

    def hello(writer, request):
        writer.headers.set("Content-Type", "text/plain; charset=utf-8")
        writer.write_header(HTTPStatus.OK)
        writer.write(b"hello")

Why a sink instead of a return value? Because adapters need to see the
response while it is being produced, not only after the fact. A metrics
adapter can slip a StatusRecorder between the transport and the handler
and learn the status without the handler knowing anything about it.

=============================================================================
THE WRITER CONTRACT
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  OPERATION            │  SEMANTICS                                  │
    ├───────────────────────┼─────────────────────────────────────────────┤
    │  headers              │  mutable Headers map, set before writing    │
    │  write_header(status) │  FIRST call wins; later calls are ignored   │
    │  write(data)          │  appends body; implies write_header(200)    │
    │                       │  when no status was written yet             │
    └───────────────────────┴─────────────────────────────────────────────┘

"First status set wins" is the rule every writer and every shim in this
package preserves. Once the status line is out, it cannot be taken back.

=============================================================================
WRITERS IN THIS MODULE
=============================================================================

ResponseRecorder:
    Buffers everything in memory. result() hands back an HTTPResponse.
    Use it in tests, or as the sink a transport flushes after the chain.

StatusRecorder:
    Decorator around another writer. Forwards everything unchanged and
    remembers the first status (200 if none was ever written). This is
    the shim the instrumentation adapters use.

=============================================================================
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from html import escape
from http.cookies import SimpleCookie
from typing import Optional, Union
from urllib.parse import urljoin, urlsplit
import logging

from .headers import Headers
from .request import HTTPRequest
from .status_codes import HTTPStatus, status_phrase


logger = logging.getLogger(__name__)


@dataclass
class HTTPResponse:
    """
    A finished response: what a ResponseRecorder captured.

    `status` is a plain int so codes outside HTTPStatus survive intact.
    """

    status: int = HTTPStatus.OK
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""

    @property
    def status_line(self) -> str:
        """Status line without the version: "307 Temporary Redirect"."""
        return f"{int(self.status)} {status_phrase(self.status)}"

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8", errors="replace")


class ResponseWriter(ABC):
    """
    Abstract response sink handed to every handler.

    Implementations must honor "first status set wins" and the implicit
    200 on a body write.
    """

    @property
    @abstractmethod
    def headers(self) -> Headers:
        """Headers that will be sent with the response."""

    @abstractmethod
    def write_header(self, status: int) -> None:
        """Send the status line. Only the first call has any effect."""

    @abstractmethod
    def write(self, data: Union[str, bytes]) -> int:
        """Append body bytes (str is UTF-8 encoded). Returns bytes written."""


class ResponseRecorder(ResponseWriter):
    """
    In-memory ResponseWriter.

    Headers are snapshotted when the status is written, the same way a
    real transport would flush them. Header changes made afterwards do not
    reach the recorded response.

    Usage:
        recorder = ResponseRecorder()
        handler(recorder, request)
        response = recorder.result()
        assert response.status == 200
    """

    def __init__(self):
        self._headers = Headers()
        self._sent_headers: Optional[Headers] = None
        self._status: Optional[int] = None
        self._body = bytearray()

    @property
    def headers(self) -> Headers:
        return self._headers

    @property
    def wrote_header(self) -> bool:
        return self._status is not None

    def write_header(self, status: int) -> None:
        if self._status is not None:
            logger.warning(
                f"Superfluous write_header({int(status)}) ignored; "
                f"status {self._status} was already written"
            )
            return
        self._status = int(status)
        self._sent_headers = Headers()
        for name, value in self._headers.items():
            self._sent_headers.add(name, value)

    def write(self, data: Union[str, bytes]) -> int:
        if self._status is None:
            self.write_header(HTTPStatus.OK)
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._body.extend(data)
        return len(data)

    def result(self) -> HTTPResponse:
        """
        The response as the client would receive it.

        A handler that wrote nothing at all still produced a 200 with an
        empty body.
        """
        if self._status is None:
            return HTTPResponse(status=HTTPStatus.OK, headers=self._headers, body=bytes(self._body))
        return HTTPResponse(status=self._status, headers=self._sent_headers, body=bytes(self._body))


class StatusRecorder(ResponseWriter):
    """
    Status-capturing decorator around another ResponseWriter.

    =========================================================================
    FIRST WRITE WINS
    =========================================================================

        recorder = StatusRecorder(writer)
        recorder.write_header(404)    # recorded, forwarded
        recorder.write_header(500)    # NOT recorded, still forwarded
        recorder.status               # 404

    A handler that only calls write() never chose a status, so the
    implicit 200 is what gets recorded. Every call is forwarded untouched;
    the wrapped writer applies its own first-wins rule.

    =========================================================================
    """

    def __init__(self, writer: ResponseWriter):
        self.writer = writer
        self.status: int = HTTPStatus.OK
        self._captured = False

    @property
    def headers(self) -> Headers:
        return self.writer.headers

    def write_header(self, status: int) -> None:
        if not self._captured:
            self.status = int(status)
            self._captured = True
        self.writer.write_header(status)

    def write(self, data: Union[str, bytes]) -> int:
        # Body without a status means the implicit 200 is now final
        self._captured = True
        return self.writer.write(data)


# =============================================================================
# RESPONSE HELPERS
# =============================================================================
#
# Small writers for the responses this package produces itself:
#
#     error(writer, "Request method not allowed", 405)
#     redirect(writer, request, "https://example.com/", 307)
#     not_found(writer, request)
#
# =============================================================================

def error(writer: ResponseWriter, message: str, status: int) -> None:
    """
    Write a plain-text error response.

    The body is the message plus a newline. `nosniff` stops browsers from
    guessing a different content type for the body.
    """
    writer.headers.set("Content-Type", "text/plain; charset=utf-8")
    writer.headers.set("X-Content-Type-Options", "nosniff")
    writer.write_header(status)
    writer.write(message + "\n")


def not_found(writer: ResponseWriter, request: HTTPRequest) -> None:
    """Standard 404 handler. The default responder for path gating."""
    error(writer, "404 page not found", HTTPStatus.NOT_FOUND)


def redirect(
    writer: ResponseWriter,
    request: HTTPRequest,
    location: str,
    status: int = HTTPStatus.TEMPORARY_REDIRECT,
) -> None:
    """
    Write a redirect response.

    =====================================================================
    LOCATION RESOLUTION
    =====================================================================

        "https://example.com/a"   → used as is (has a scheme)
        "/login"                  → used as is (absolute path)
        "edit"  on /users/42      → "/users/edit" (relative to the path)

    For GET and HEAD a short HTML body with a link is added when the
    handler has not picked a Content-Type yet, so old clients that
    ignore Location still have something to click. The link is
    HTML-escaped since the location often echoes the request URL. HEAD
    gets the header but no body.

    =====================================================================
    """
    if not urlsplit(location).scheme and not location.startswith("/"):
        location = urljoin(request.path, location)

    writer.headers.set("Location", location)

    add_body = request.method in ("GET", "HEAD") and "Content-Type" not in writer.headers
    if add_body:
        writer.headers.set("Content-Type", "text/html; charset=utf-8")

    writer.write_header(status)

    if add_body and request.method == "GET":
        writer.write(f'<a href="{escape(location, quote=True)}">{status_phrase(status)}</a>.\n')


def set_cookie(
    writer: ResponseWriter,
    name: str,
    value: str,
    path: str = "/",
    max_age: Optional[int] = None,
    domain: Optional[str] = None,
    secure: bool = False,
    http_only: bool = True,
    same_site: Optional[str] = None,
) -> None:
    """
    Append a Set-Cookie header.

    Each call adds its own header line; earlier cookies are kept.

    Example:
        set_cookie(writer, "csrf", token, secure=True, same_site="Strict")
        # Set-Cookie: csrf=...; HttpOnly; Path=/; SameSite=Strict; Secure
    """
    cookie = SimpleCookie()
    cookie[name] = value
    morsel = cookie[name]
    morsel["path"] = path
    if max_age is not None:
        morsel["max-age"] = str(max_age)
    if domain:
        morsel["domain"] = domain
    if secure:
        morsel["secure"] = True
    if http_only:
        morsel["httponly"] = True
    if same_site:
        morsel["samesite"] = same_site

    writer.headers.add("Set-Cookie", morsel.OutputString())
