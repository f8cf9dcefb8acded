"""
=============================================================================
adaptd: COMPOSABLE HTTP HANDLER ADAPTERS
=============================================================================

Write a handler once, then wrap it with independent policies: HTTPS
enforcement, method and path gating, conditional redirects, header and
cookie injection, request logging and Prometheus instrumentation. No
policy knows about any other.

=============================================================================
QUICK START
=============================================================================

    from adaptd import adapt, AdaptConfig, HTTPRequest, ResponseRecorder
    from adaptd.middleware import (
        notify, ensure_https, request_method, disallow_longer_paths,
        count_http_responses,
    )

    def home(writer, request):
        writer.headers.set("Content-Type", "text/plain; charset=utf-8")
        writer.write("welcome home")

    config = AdaptConfig.from_env()
    config.validate()

    handler = adapt(home, [
        notify(),
        count_http_responses(config=config),
        config.ensure_https(),
        request_method("GET"),
        disallow_longer_paths("/"),
    ])

    # Hand `handler` to whatever transport you run. To try it in memory:
    recorder = ResponseRecorder()
    handler(recorder, HTTPRequest.from_url("GET", "https://example.com/"))
    recorder.result().status     # 200

=============================================================================
WHAT THIS IS NOT
=============================================================================

Not a router, not a framework, not a server. It never touches sockets or
raw HTTP bytes. It only composes functions of (writer, request).

=============================================================================
"""

__version__ = "1.0.0"

from .config import AdaptConfig, ConfigurationError
from .http import (
    HTTPRequest,
    HTTPResponse,
    HTTPStatus,
    ResponseRecorder,
    ResponseWriter,
    TLSState,
)
from .middleware import Adapter, AdapterChain, Handler, HandlerChecker, adapt

__all__ = [
    "AdaptConfig",
    "ConfigurationError",
    "HTTPRequest",
    "HTTPResponse",
    "HTTPStatus",
    "ResponseRecorder",
    "ResponseWriter",
    "TLSState",
    "Adapter",
    "AdapterChain",
    "Handler",
    "HandlerChecker",
    "adapt",
    "__version__",
]
