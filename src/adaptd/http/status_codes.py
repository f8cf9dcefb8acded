"""
=============================================================================
HTTP STATUS CODES
=============================================================================

Status codes the adapters produce, pass through, or record as metric labels.

=============================================================================
CODES THIS PACKAGE WRITES ITSELF
=============================================================================

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  307   │ Temporary Redirect - HTTPS enforcement, check-and-redirect│
    │  404   │ Not Found          - path gating (default responder)     │
    │  405   │ Method Not Allowed - method gating                       │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  200   │ Implicit status recorded when a handler never sets one   │
    │  500   │ Never generated here, only passed through                │
    └────────┴───────────────────────────────────────────────────────────┘

Why 307 and not 302 for the HTTPS upgrade? 307 guarantees the client
repeats the request with the SAME method and body. A POST that hits the
plaintext listener is re-sent as a POST to the https URL, not turned into
a GET.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.
    
    IntEnum, so members compare equal to plain integers:
    
        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """
    
    # 2xx SUCCESS
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204
    
    # 3xx REDIRECTION
    MOVED_PERMANENTLY = 301
    FOUND = 302
    SEE_OTHER = 303
    NOT_MODIFIED = 304
    TEMPORARY_REDIRECT = 307
    PERMANENT_REDIRECT = 308
    
    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    CONFLICT = 409
    TOO_MANY_REQUESTS = 429
    
    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    
    @property
    def phrase(self) -> str:
        """Reason phrase for the status line, e.g. "Temporary Redirect"."""
        return _STATUS_PHRASES.get(self, "Unknown")
    
    @property
    def is_redirect(self) -> bool:
        """Check if this is a 3xx (redirection) status code."""
        return 300 <= self < 400
    
    @property
    def is_error(self) -> bool:
        """Check if this is an error status code (4xx or 5xx)."""
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.ACCEPTED: "Accepted",
    HTTPStatus.NO_CONTENT: "No Content",
    
    HTTPStatus.MOVED_PERMANENTLY: "Moved Permanently",
    HTTPStatus.FOUND: "Found",
    HTTPStatus.SEE_OTHER: "See Other",
    HTTPStatus.NOT_MODIFIED: "Not Modified",
    HTTPStatus.TEMPORARY_REDIRECT: "Temporary Redirect",
    HTTPStatus.PERMANENT_REDIRECT: "Permanent Redirect",
    
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.UNAUTHORIZED: "Unauthorized",
    HTTPStatus.FORBIDDEN: "Forbidden",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.CONFLICT: "Conflict",
    HTTPStatus.TOO_MANY_REQUESTS: "Too Many Requests",
    
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HTTPStatus.NOT_IMPLEMENTED: "Not Implemented",
    HTTPStatus.BAD_GATEWAY: "Bad Gateway",
    HTTPStatus.SERVICE_UNAVAILABLE: "Service Unavailable",
    HTTPStatus.GATEWAY_TIMEOUT: "Gateway Timeout",
}


def status_phrase(code: int) -> str:
    """
    Reason phrase for any integer status code.
    
    Handlers may write codes this enum does not list; those get "Unknown"
    rather than raising ValueError.
    """
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return "Unknown"
