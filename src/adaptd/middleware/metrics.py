"""
=============================================================================
RESPONSE INSTRUMENTATION
=============================================================================

Two adapters that feed Prometheus collectors, labelled by
endpoint (request path), code (response status) and method:

    count_http_responses()        Counter  http_requests_total
    track_http_response_times()   Summary  http_requests_secs

    # after 3 GET /login that all ended in 200:
    http_requests_total{endpoint="/login",code="200",method="GET"} 3.0

=============================================================================
HOW THE STATUS IS LEARNED
=============================================================================

The handler never returns its status, it writes it into the sink. So the
adapter hands the handler a StatusRecorder instead of the real writer:

    transport writer ◄── StatusRecorder ◄── handler
                              │
                              └── first status written (200 if none)

Everything is forwarded unchanged; the recorder only remembers.

=============================================================================
ONE COLLECTOR PER NAME PER REGISTRY
=============================================================================

Each call to count_http_responses() creates AND registers a collector.
Calling it twice against the same registry is a setup bug (two counters
fighting over one metric name) and raises DuplicateCollectorError:

    count_http_responses()                       # registers http_requests_total
    count_http_responses()                       # DuplicateCollectorError

Build the adapter once and reuse it in every chain that needs it. Tests
pass their own CollectorRegistry so each test starts from zero.

Thread safety of the counters themselves is prometheus_client's business;
the adapters hold no locks.

=============================================================================
"""

from typing import Callable, Optional, TypeVar
import logging
import time

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Summary

from .base import Adapter, Handler
from ..config import AdaptConfig, ConfigurationError
from ..http.request import HTTPRequest
from ..http.response import ResponseWriter, StatusRecorder


logger = logging.getLogger(__name__)

LABELS = ["endpoint", "code", "method"]

C = TypeVar("C")


class DuplicateCollectorError(ConfigurationError):
    """
    A collector with this name is already registered in the registry.

    Fatal by intent: it means an instrumentation adapter was created more
    than once for the same registry.
    """

    def __init__(self, name: str, cause: Exception):
        super().__init__(
            f"Collector {name!r} is already registered; "
            f"create each instrumentation adapter once per registry ({cause})"
        )
        self.name = name


def _register(name: str, build: Callable[[], C]) -> C:
    # prometheus_client raises ValueError on a duplicated timeseries name
    try:
        collector = build()
    except ValueError as e:
        raise DuplicateCollectorError(name, e) from e
    logger.debug(f"Registered collector: {name}")
    return collector


def _labels(recorder: StatusRecorder, request: HTTPRequest) -> dict:
    return {
        "endpoint": request.path,
        "code": str(int(recorder.status)),
        "method": request.method,
    }


def count_http_responses(
    registry: Optional[CollectorRegistry] = None,
    config: Optional[AdaptConfig] = None,
) -> Adapter:
    """
    Count responses by endpoint, status code and method.

    Create once per registry; the returned adapter can wrap any number
    of handlers.

    Args:
        registry: Registry to register in (default: prometheus_client.REGISTRY)
        config: Collector naming (default: AdaptConfig())

    Raises:
        DuplicateCollectorError: If the counter name is already registered
    """
    config = config or AdaptConfig()
    name = config.metric_name(config.request_counter_name)
    requests_total = _register(name, lambda: Counter(
        name,
        "How many HTTP requests processed, partitioned by endpoint, status code, and HTTP method.",
        LABELS,
        registry=REGISTRY if registry is None else registry,
    ))

    def adapter(handler: Handler) -> Handler:
        def counted(writer: ResponseWriter, request: HTTPRequest) -> None:
            recorder = StatusRecorder(writer)
            handler(recorder, request)
            requests_total.labels(**_labels(recorder, request)).inc()

        return counted

    return adapter


def track_http_response_times(
    registry: Optional[CollectorRegistry] = None,
    config: Optional[AdaptConfig] = None,
) -> Adapter:
    """
    Observe response times (seconds) by endpoint, status code and method.

    Same single-registration rule as count_http_responses.

    Raises:
        DuplicateCollectorError: If the summary name is already registered
    """
    config = config or AdaptConfig()
    name = config.metric_name(config.response_time_name)
    response_seconds = _register(name, lambda: Summary(
        name,
        "The response times to HTTP requests, partitioned by endpoint, status code, and HTTP method.",
        LABELS,
        registry=REGISTRY if registry is None else registry,
    ))

    def adapter(handler: Handler) -> Handler:
        def timed(writer: ResponseWriter, request: HTTPRequest) -> None:
            recorder = StatusRecorder(writer)
            start = time.perf_counter()
            handler(recorder, request)
            response_seconds.labels(**_labels(recorder, request)).observe(
                time.perf_counter() - start
            )

        return timed

    return adapter
