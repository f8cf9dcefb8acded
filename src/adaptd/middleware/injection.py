"""
=============================================================================
HEADER, COOKIE AND CONTEXT INJECTION
=============================================================================

Adapters that add something to the response (or the request context)
and then always delegate:

    add_header("X-Frame-Options", "DENY")           static header
    add_header_with_func("X-CSRF-Token", new_token) header minted per request
    add_cookie_with_func("csrf", write_csrf_cookie) cookie written per request
    put_value_on_context("user", load_user)         value for inner handlers

None of them ever short-circuits the chain.

=============================================================================
COOKIE GENERATOR FAILURES: LOG AND CONTINUE
=============================================================================

A cookie generator may raise (token store down, signing key missing).
The policy here is LOG AND CONTINUE:

    generator raises → logged with traceback → wrapped handler still runs

The request is served without that cookie. Handlers that cannot work
without it should check for it themselves and fail loudly; this adapter
does not turn a cookie problem into a 500 on every page.

=============================================================================
"""

from typing import Any, Callable
import logging

from .base import Adapter, Handler
from ..http.request import HTTPRequest
from ..http.response import ResponseWriter


logger = logging.getLogger(__name__)

# Writes the cookie itself, usually with set_cookie(); may raise
CookieGenerator = Callable[[ResponseWriter, HTTPRequest], None]


def add_header(name: str, value: str) -> Adapter:
    """Set response header `name` to `value`, then delegate."""
    def adapter(handler: Handler) -> Handler:
        def with_header(writer: ResponseWriter, request: HTTPRequest) -> None:
            writer.headers.set(name, value)
            handler(writer, request)

        return with_header

    return adapter


def add_header_with_func(name: str, generator: Callable[[], str]) -> Adapter:
    """
    Set header `name` to a value minted per request by `generator()`.

    Useful for things like CSRF tokens:

        add_header_with_func("X-CSRF-Token", lambda: secrets.token_urlsafe(32))
    """
    def adapter(handler: Handler) -> Handler:
        def with_generated_header(writer: ResponseWriter, request: HTTPRequest) -> None:
            writer.headers.set(name, generator())
            handler(writer, request)

        return with_generated_header

    return adapter


def add_cookie_with_func(name: str, generator: CookieGenerator) -> Adapter:
    """
    Let `generator(writer, request)` write cookie `name`, then delegate.

    A failing generator is logged and the wrapped handler still runs.
    """
    def adapter(handler: Handler) -> Handler:
        def with_cookie(writer: ResponseWriter, request: HTTPRequest) -> None:
            try:
                generator(writer, request)
            except Exception:
                logger.exception(
                    "Cookie generator for %r failed on %s %s; continuing without it",
                    name, request.method, request.path,
                )
            handler(writer, request)

        return with_cookie

    return adapter


def put_value_on_context(key: str, factory: Callable[[HTTPRequest], Any]) -> Adapter:
    """
    Store `factory(request)` in `request.context[key]`, then delegate.

    Example:
        put_value_on_context("db", lambda request: pool.connection())

    The value lives as long as the request. Opening, committing, closing
    whatever it refers to is up to the caller.
    """
    def adapter(handler: Handler) -> Handler:
        def with_value(writer: ResponseWriter, request: HTTPRequest) -> None:
            request.context[key] = factory(request)
            handler(writer, request)

        return with_value

    return adapter
