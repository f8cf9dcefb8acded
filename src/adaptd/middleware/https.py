"""
=============================================================================
HTTPS ENFORCEMENT
=============================================================================

Two tools, for two different listeners:

    ┌─────────────────────────────────────────────────────────────────────┐
    │  PLAINTEXT LISTENER (:80)                                           │
    │      https_redirect()  ← the ONLY handler bound here                │
    │      every request → 307 https://<same host><same path>?<query>     │
    ├─────────────────────────────────────────────────────────────────────┤
    │  APPLICATION LISTENER (TLS, or plaintext behind a TLS proxy)        │
    │      ensure_https(allow_forwarded_proto)(app)                       │
    │      secure request   → app                                         │
    │      insecure request → 307 https://...  (app never runs)           │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
WHAT COUNTS AS SECURE?
=============================================================================

    secure = (TLS handshake completed on this connection)
             OR (allow_forwarded_proto AND X-Forwarded-Proto == "https")

A TLS-terminating proxy talks plaintext to the app and reports the
original scheme in X-Forwarded-Proto. Trust that header ONLY when such a
proxy sits in front and overwrites it; otherwise any client can send
"X-Forwarded-Proto: https" and skip the redirect.

307 Temporary Redirect is used, not 301/302: the client repeats the
request with the same method and body, and nobody caches the redirect.

=============================================================================
"""

from typing import Optional
from urllib.parse import quote
import logging

from .base import Adapter, Handler
from ..http.request import HTTPRequest
from ..http.response import ResponseWriter, redirect
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)

# RFC 3986 pchar plus "/"; "%" is absent so decoded escapes are re-encoded
_PATH_SAFE = "/:@!$&'()*+,;="


def is_https(request: HTTPRequest, allow_forwarded_proto: bool) -> bool:
    """Whether `request` counts as secure under the given proxy policy."""
    if request.is_tls:
        return True
    return allow_forwarded_proto and request.get_header("X-Forwarded-Proto") == "https"


def https_url(request: HTTPRequest, port: Optional[str] = None) -> str:
    """
    The https:// twin of the request's URL.

    Host, path and query are kept. The decoded path is percent-encoded
    again, so "/a%3Fb" stays one path segment instead of growing a query.
    With `port`, the host's port is replaced:
    "example.com:8080" + port "8443" → "example.com:8443".
    """
    host = request.host if port is None else f"{request.hostname}:{port}"
    target = f"https://{host}{quote(request.path, safe=_PATH_SAFE)}"
    if request.query:
        target += "?" + request.query
    return target


def https_redirect(port: Optional[str] = None) -> Handler:
    """
    Handler that redirects every request to HTTPS.

    Meant to be the sole handler of a plaintext listener:

        plain_server.serve(https_redirect())          # same host and port
        plain_server.serve(https_redirect("8443"))    # TLS on another port
    """
    def redirect_to_https(writer: ResponseWriter, request: HTTPRequest) -> None:
        target = https_url(request, port)
        logger.info("HTTP request redirected to: %s", target)
        redirect(writer, request, target, HTTPStatus.TEMPORARY_REDIRECT)

    return redirect_to_https


def ensure_https(allow_forwarded_proto: bool) -> Adapter:
    """
    Redirect insecure requests to HTTPS; let secure ones through.

    Args:
        allow_forwarded_proto: Also accept "X-Forwarded-Proto: https"
    """
    def adapter(handler: Handler) -> Handler:
        def secured(writer: ResponseWriter, request: HTTPRequest) -> None:
            if not is_https(request, allow_forwarded_proto):
                target = https_url(request)
                logger.info("redirect to: %s", target)
                redirect(writer, request, target, HTTPStatus.TEMPORARY_REDIRECT)
                return
            handler(writer, request)

        return secured

    return adapter
