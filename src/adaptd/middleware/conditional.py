"""
=============================================================================
CONDITIONAL BRANCH ADAPTERS
=============================================================================

Pick between two handlers per request with a HandlerChecker:

    on_check(is_logged_out, redirect_handler("/home"))(login_page)

        is_logged_out(writer, request) is True  → login_page
        is_logged_out(writer, request) is False → redirect to /home

Exactly ONE of the two handlers runs for each request.

check_and_redirect is the common special case where the false branch is
a redirect:

    check_and_redirect(is_logged_out, "/home", "user already logged in")(login_page)

    # log on false: "user already logged in redirecting"

=============================================================================
"""

from typing import Union
import logging

from .base import Adapter, Handler, HandlerChecker
from ..http.request import HTTPRequest
from ..http.response import ResponseWriter, redirect
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)


def redirect_handler(location: str, status: int = HTTPStatus.TEMPORARY_REDIRECT) -> Handler:
    """Handler that always redirects to `location` with `status`."""
    def redirect_to(writer: ResponseWriter, request: HTTPRequest) -> None:
        redirect(writer, request, location, status)

    return redirect_to


def on_check(check: HandlerChecker, else_handler: Handler, log_on_false: str = "") -> Adapter:
    """
    Run the wrapped handler when `check` passes, `else_handler` otherwise.

    Args:
        check: (writer, request) -> bool
        else_handler: Handler for the False branch
        log_on_false: Logged (when non-empty) before else_handler runs
    """
    def adapter(handler: Handler) -> Handler:
        def branch(writer: ResponseWriter, request: HTTPRequest) -> None:
            if check(writer, request):
                handler(writer, request)
                return
            if log_on_false:
                logger.info(log_on_false)
            else_handler(writer, request)

        return branch

    return adapter


def check_and_redirect(
    check: HandlerChecker,
    redirect_to: Union[Handler, str],
    log_on_redirect: str = "",
    status: int = HTTPStatus.TEMPORARY_REDIRECT,
) -> Adapter:
    """
    Run the wrapped handler when `check` passes, redirect otherwise.

    Args:
        check: (writer, request) -> bool
        redirect_to: A ready-made redirect handler, or a URL to redirect to
        log_on_redirect: Logged with " redirecting" appended
        status: Redirect status when `redirect_to` is a URL
    """
    if isinstance(redirect_to, str):
        redirect_to = redirect_handler(redirect_to, status)

    message = f"{log_on_redirect} redirecting" if log_on_redirect else "redirecting"
    return on_check(check, redirect_to, message)
