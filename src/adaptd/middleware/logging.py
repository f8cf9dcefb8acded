"""
=============================================================================
REQUEST NOTIFY ADAPTER
=============================================================================

Logs when a request starts being handled and when it is done:

    Handling GET request at URL /login?next=/home
    GET request at URL /login?next=/home was handled

=============================================================================
GUARANTEED COMPLETION LINE
=============================================================================

The "was handled" line sits in a `finally` block. It is registered before
control goes inward and fires exactly once however control comes back:

    normal return          → entry line, completion line
    handler raises         → entry line, completion line, exception propagates
    inner adapter rejects  → entry line, completion line

This adapter never swallows an exception. Recovering from a failing
handler is somebody else's job; this one only makes sure the log shows
the request finished.

=============================================================================
POSITION
=============================================================================

Put notify FIRST so it sees every request, including ones that inner
adapters reject:

    adapt(app, [notify(), ensure_https(False), request_method("GET")])

=============================================================================
"""

from typing import Optional
import logging

from .base import Adapter, Handler
from ..http.request import HTTPRequest
from ..http.response import ResponseWriter


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════
# Namespaced so access lines can be routed separately:
#   logging.getLogger("adaptd.access").setLevel(logging.INFO)
#   logging.getLogger("adaptd.access").addHandler(file_handler)
# ═══════════════════════════════════════════════════════════════════════════
access_logger = logging.getLogger("adaptd.access")


def notify(logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> Adapter:
    """
    Log the start and the end of every request.

    Args:
        logger: Logger to write to (default: "adaptd.access")
        level: Level of both lines

    Returns:
        Adapter
    """
    log = logger or access_logger

    def adapter(handler: Handler) -> Handler:
        def notified(writer: ResponseWriter, request: HTTPRequest) -> None:
            log.log(level, "Handling %s request at URL %s", request.method, request.url)
            try:
                handler(writer, request)
            finally:
                log.log(level, "%s request at URL %s was handled", request.method, request.url)

        return notified

    return adapter
