"""
=============================================================================
METHOD AND PATH GATING
=============================================================================

Adapters that decide whether a request reaches the handler at all.

    request_method("POST")                  only POST gets through, else 405
    get_and_other_request(save, "POST")     GET → wrapped handler,
                                            POST → save, else 405
    disallow_longer_paths("/login")         only exactly "/login", else 404

=============================================================================
WHY DISALLOW LONGER PATHS?
=============================================================================

Prefix-matching muxes send every unmatched URL to the handler registered
for the closest prefix: "/" ends up serving "/favicon.ico", "/wp-admin",
"/anything". Wrapping the "/" handler with disallow_longer_paths("/")
turns those into 404s (or into a custom not-found page).

Comparison is EXACT string equality. No prefixes, no wildcards, no
trailing-slash forgiveness: "/login/" is not "/login".

=============================================================================
"""

import logging

from .base import Adapter, Handler
from ..http.request import HTTPRequest
from ..http.response import ResponseWriter, error, not_found
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED_MESSAGE = "Request method not allowed"


def request_method(method: str) -> Adapter:
    """
    Only let requests with exactly `method` through.

    Anything else gets 405 Method Not Allowed and the wrapped handler is
    not called.
    """
    def adapter(handler: Handler) -> Handler:
        def gated(writer: ResponseWriter, request: HTTPRequest) -> None:
            if request.method == method:
                handler(writer, request)
            else:
                error(writer, METHOD_NOT_ALLOWED_MESSAGE, HTTPStatus.METHOD_NOT_ALLOWED)

        return gated

    return adapter


def get_and_other_request(other: Handler, method: str) -> Adapter:
    """
    Serve GET with the wrapped handler and `method` with `other`.

    The typical form page: GET shows the form, POST processes it.

        get_and_other_request(save_form, "POST")(show_form)

    Every other method gets 405 and neither handler runs.
    """
    def adapter(handler: Handler) -> Handler:
        def dispatch(writer: ResponseWriter, request: HTTPRequest) -> None:
            if request.method == method:
                other(writer, request)
            elif request.method == "GET":
                handler(writer, request)
            else:
                error(writer, METHOD_NOT_ALLOWED_MESSAGE, HTTPStatus.METHOD_NOT_ALLOWED)

        return dispatch

    return adapter


def disallow_longer_paths(path: str, not_found_handler: Handler = not_found) -> Adapter:
    """
    Send every request whose path is not exactly `path` to `not_found_handler`.

    Args:
        path: The one path the wrapped handler answers
        not_found_handler: Responder for mismatches (default: plain 404)
    """
    def adapter(handler: Handler) -> Handler:
        def exact(writer: ResponseWriter, request: HTTPRequest) -> None:
            if request.path != path:
                logger.info(
                    "Handler expects URL %s but received a request at %s", path, request.path
                )
                not_found_handler(writer, request)
                return
            handler(writer, request)

        return exact

    return adapter
