"""
=============================================================================
HTTP MODEL
=============================================================================

The request, the response sink, and the small vocabulary both share.

    HTTPRequest         what a handler reads
    ResponseWriter      what a handler writes into
    ResponseRecorder    in-memory writer (tests, buffering transports)
    StatusRecorder      writer decorator that captures the first status
    Headers             case-insensitive multi-valued header map
    HTTPStatus          status codes with reason phrases

=============================================================================
"""

from .headers import Headers, canonical_header_name
from .request import HTTPRequest, TLSState
from .response import (
    HTTPResponse,
    ResponseWriter,
    ResponseRecorder,
    StatusRecorder,
    error,          # plain-text error response
    not_found,      # 404 handler
    redirect,       # Location + 3xx
    set_cookie,     # append a Set-Cookie header
)
from .status_codes import HTTPStatus, status_phrase

__all__ = [
    # Request
    "HTTPRequest",
    "TLSState",

    # Response sink
    "HTTPResponse",
    "ResponseWriter",
    "ResponseRecorder",
    "StatusRecorder",

    # Response helpers
    "error",
    "not_found",
    "redirect",
    "set_cookie",

    # Headers
    "Headers",
    "canonical_header_name",

    # Status codes
    "HTTPStatus",
    "status_phrase",
]
