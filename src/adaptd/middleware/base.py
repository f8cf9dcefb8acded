"""
=============================================================================
ADAPTER COMPOSITION
=============================================================================

A Handler writes a response for a request. An Adapter turns one Handler
into another Handler. Composition nests adapters around a base handler.

    Handler         = (writer, request) -> None
    Adapter         = Handler -> Handler
    HandlerChecker  = (writer, request) -> bool

=============================================================================
ORDERING: FIRST ADAPTER IS OUTERMOST
=============================================================================

    handler = adapt(app, [notify(), ensure_https(False), request_method("GET")])

    ┌─────────────────────────────────────────────────────────────────────┐
    │  notify                                                             │
    │  ┌───────────────────────────────────────────────────────────────┐  │
    │  │  ensure_https                                                 │  │
    │  │  ┌─────────────────────────────────────────────────────────┐  │  │
    │  │  │  request_method                                         │  │  │
    │  │  │  ┌───────────────────────────────────────────────────┐  │  │  │
    │  │  │  │                     app                           │  │  │  │
    │  │  │  └───────────────────────────────────────────────────┘  │  │  │
    │  │  └─────────────────────────────────────────────────────────┘  │  │
    │  └───────────────────────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────────────────────┘

Request flows INWARD in list order:   notify → ensure_https → request_method → app
Control returns OUTWARD in reverse:   app → request_method → ensure_https → notify

To get that, the fold runs from the LAST adapter to the first, so the
innermost wrapper is built first:

    current = app
    current = request_method("GET")(current)
    current = ensure_https(False)(current)
    current = notify()(current)

Any adapter can stop the inward flow: write its own response and return
without calling the handler it wraps (method gating, HTTPS redirects), or
call a different handler instead (on_check, disallow_longer_paths).

=============================================================================
"""

from typing import Callable, Iterator, List, Sequence
import logging

from ..config import ConfigurationError
from ..http.request import HTTPRequest
from ..http.response import ResponseWriter


logger = logging.getLogger(__name__)


# =============================================================================
# TYPE ALIASES
# =============================================================================

Handler = Callable[[ResponseWriter, HTTPRequest], None]

Adapter = Callable[[Handler], Handler]

# Decides between two handlers, e.g. "is a user logged in?" on a login page
HandlerChecker = Callable[[ResponseWriter, HTTPRequest], bool]


def adapt(handler: Handler, adapters: Sequence[Adapter] = ()) -> Handler:
    """
    Wrap `handler` with `adapters`, first adapter outermost.

    Equivalent to adapters[0](adapters[1](... adapters[-1](handler) ...)).
    With no adapters the handler itself is returned (identity).

    Args:
        handler: The base handler
        adapters: Ordered adapters; order is fixed here, never at request time

    Returns:
        The composed handler
    """
    current = handler
    for adapter in reversed(list(adapters)):
        current = adapter(current)
    return current


class AdapterChain:
    """
    Fluent builder for an ordered adapter list.

    =========================================================================
    USAGE
    =========================================================================

        chain = AdapterChain()
        chain.add(notify())                     # First added = outermost
        chain.add(ensure_https(False))
        chain.use(count_http_responses(), request_method("GET"))

        handler = chain.wrap(app)

    Adding is only allowed BEFORE the first wrap(). A chain is built once
    at startup and read-only afterwards, so the handlers it produced can
    be shared by every request thread without locking.

    =========================================================================
    """

    def __init__(self, adapters: Sequence[Adapter] = ()):
        self._adapters: List[Adapter] = list(adapters)
        self._frozen = False

    def add(self, adapter: Adapter) -> "AdapterChain":
        """
        Append an adapter (it ends up inside every adapter added before it).

        Returns:
            Self for method chaining

        Raises:
            ConfigurationError: If the chain has already been wrapped
        """
        if self._frozen:
            raise ConfigurationError("Cannot add adapters to a chain that has already been wrapped")
        self._adapters.append(adapter)
        logger.debug(f"Added adapter: {_adapter_name(adapter)}")
        return self

    def use(self, *adapters: Adapter) -> "AdapterChain":
        """
        Add several adapters at once, in order.

        Example:
            chain.use(notify(), ensure_https(False), request_method("GET"))
        """
        for adapter in adapters:
            self.add(adapter)
        return self

    def wrap(self, handler: Handler) -> Handler:
        """
        Compose the chain around `handler` and freeze the chain.

        The same chain may wrap several handlers; each wrap builds a fresh
        nesting around the same adapter sequence.
        """
        self._frozen = True
        return adapt(handler, self._adapters)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._adapters)

    def __iter__(self) -> Iterator[Adapter]:
        return iter(self._adapters)


def _adapter_name(adapter: Adapter) -> str:
    return getattr(adapter, "__qualname__", None) or type(adapter).__name__
