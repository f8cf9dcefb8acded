"""
=============================================================================
ADAPTERS
=============================================================================

Every adapter takes a Handler and returns a Handler. Compose them with
adapt() or AdapterChain; the first adapter listed is the outermost.

    handler = adapt(app, [
        notify(),                               # log start/end
        count_http_responses(),                 # metrics (create once!)
        ensure_https(allow_forwarded_proto=True),
        request_method("GET"),
        disallow_longer_paths("/"),
        add_header("X-Frame-Options", "DENY"),
    ])

=============================================================================
AVAILABLE ADAPTERS
=============================================================================

Logging:        notify
Gating:         request_method, get_and_other_request, disallow_longer_paths
HTTPS:          ensure_https (adapter), https_redirect (standalone handler)
Branching:      on_check, check_and_redirect
Injection:      add_header, add_header_with_func, add_cookie_with_func,
                put_value_on_context
Metrics:        count_http_responses, track_http_response_times

=============================================================================
"""

from .base import Adapter, AdapterChain, Handler, HandlerChecker, adapt
from .conditional import check_and_redirect, on_check, redirect_handler
from .gating import disallow_longer_paths, get_and_other_request, request_method
from .https import ensure_https, https_redirect, https_url, is_https
from .injection import (
    add_cookie_with_func,
    add_header,
    add_header_with_func,
    put_value_on_context,
)
from .logging import notify
from .metrics import DuplicateCollectorError, count_http_responses, track_http_response_times

__all__ = [
    # Composition
    "Adapter",
    "AdapterChain",
    "Handler",
    "HandlerChecker",
    "adapt",

    # Logging
    "notify",

    # Gating
    "request_method",
    "get_and_other_request",
    "disallow_longer_paths",

    # HTTPS
    "ensure_https",
    "https_redirect",
    "https_url",
    "is_https",

    # Branching
    "on_check",
    "check_and_redirect",
    "redirect_handler",

    # Injection
    "add_header",
    "add_header_with_func",
    "add_cookie_with_func",
    "put_value_on_context",

    # Metrics
    "count_http_responses",
    "track_http_response_times",
    "DuplicateCollectorError",
]
