"""
=============================================================================
HTTP REQUEST MODEL
=============================================================================

The request as every adapter sees it. Parsing wire bytes is the transport's
job; by the time a request reaches an adapter chain it is already a
structured object.

=============================================================================
WHAT ADAPTERS LOOK AT
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  ADAPTER                 │  REQUEST FIELDS IT READS                 │
    ├──────────────────────────┼──────────────────────────────────────────┤
    │  request_method          │  method                                  │
    │  get_and_other_request   │  method                                  │
    │  disallow_longer_paths   │  path                                    │
    │  ensure_https            │  tls, headers["x-forwarded-proto"],      │
    │                          │  host, path, query                       │
    │  https_redirect          │  host, path, query                       │
    │  notify                  │  method, url                             │
    │  count/track responses   │  path, method                            │
    │  put_value_on_context    │  context (the one writable field)        │
    └──────────────────────────┴──────────────────────────────────────────┘

Adapters treat the request as read-only. The single exception is
`context`: a plain dict where an adapter may attach a per-request value
(a transaction handle, a user record) for handlers further in.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlsplit, unquote


@dataclass(frozen=True)
class TLSState:
    """
    Transport security facts the listener reports for a connection.

    Only `handshake_complete` drives behavior. A request that arrived on a
    plaintext socket has no TLSState at all (`request.tls is None`).
    """

    handshake_complete: bool = True
    server_name: str = ""       # SNI name the client asked for


@dataclass
class HTTPRequest:
    """
    Represents an incoming HTTP request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         HTTP method, exact case ("GET", "POST", ...)

        path:           Request path WITHOUT query string
                        "/login" not "/login?next=/home"

        query:          Raw query string without the leading "?"
                        Kept raw so redirects reproduce it byte for byte

        headers:        Dictionary of headers with LOWERCASE keys
                        {"x-forwarded-proto": "https", ...}

        tls:            TLSState when the connection is TLS, else None

        context:        Per-request values injected by adapters

        client_address: (ip, port) of the peer

        body:           Raw request body

    =========================================================================
    """

    method: str
    path: str
    query: str = ""

    headers: Dict[str, str] = field(default_factory=dict)
    tls: Optional[TLSState] = None
    context: Dict[str, Any] = field(default_factory=dict)

    client_address: tuple[str, int] = ("", 0)
    body: bytes = b""

    def __post_init__(self):
        # Normalize once so every lookup can use lowercase names
        self.headers = {name.lower(): value for name, value in self.headers.items()}

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        tls: Optional[TLSState] = None,
        **kwargs: Any,
    ) -> "HTTPRequest":
        """
        Build a request from a URL.

        Accepts an absolute URL ("http://example.com:8080/a?b=1") or an
        origin-form target ("/a?b=1"). For absolute URLs the netloc
        becomes the Host header unless one is given explicitly, and an
        "https" scheme implies a completed TLS handshake.

        Example:
            request = HTTPRequest.from_url("GET", "http://example.com/login?next=/")
            request.host    # "example.com"
            request.path    # "/login"
            request.query   # "next=/"
        """
        parts = urlsplit(url)
        merged = {name.lower(): value for name, value in (headers or {}).items()}
        if parts.netloc and "host" not in merged:
            merged["host"] = parts.netloc
        if tls is None and parts.scheme == "https":
            tls = TLSState(handshake_complete=True, server_name=parts.hostname or "")

        return cls(
            method=method,
            path=unquote(parts.path) or "/",
            query=parts.query,
            headers=merged,
            tls=tls,
            **kwargs,
        )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def host(self) -> str:
        """
        Get the Host header value, port included ("example.com:8080").

        Required in HTTP/1.1 requests. Redirects reuse it verbatim.
        """
        return self.headers.get("host", "")

    @property
    def hostname(self) -> str:
        """
        Host without the port: "example.com:8080" → "example.com".

        Bracketed IPv6 literals keep their brackets: "[::1]:80" → "[::1]".
        """
        host = self.host
        if host.startswith("["):
            end = host.find("]")
            return host[: end + 1] if end != -1 else host
        return host.split(":", 1)[0]

    @property
    def url(self) -> str:
        """Request target as it appeared on the request line: path plus query."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path

    @property
    def query_params(self) -> Dict[str, list[str]]:
        """
        Parsed query string as dict of lists.

        "?a=1&a=2&b=3" → {"a": ["1", "2"], "b": ["3"]}
        """
        return parse_qs(self.query, keep_blank_values=True)

    @property
    def is_tls(self) -> bool:
        """True when the connection itself finished a TLS handshake."""
        return self.tls is not None and self.tls.handshake_complete

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def get_header(self, name: str, default: str = "") -> str:
        """
        Get a header value (case-insensitive lookup).

        Example:
            request.get_header("X-Forwarded-Proto")
            # Works because headers are stored lowercase
        """
        return self.headers.get(name.lower(), default)

    def get_query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """First value of a query parameter, or `default`."""
        values = self.query_params.get(name, [])
        return values[0] if values else default
