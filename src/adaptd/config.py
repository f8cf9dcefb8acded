"""
=============================================================================
CONFIGURATION
=============================================================================

Settings an application usually wants to flip per deployment without
touching the code that builds its adapter chains.

=============================================================================
TWELVE-FACTOR STYLE
=============================================================================

Behind a load balancer that terminates TLS, the app only ever sees
plaintext and must trust X-Forwarded-Proto. Run the same image directly
on the internet and it must NOT trust that header (any client can send
it). That difference belongs in the environment, not in code:

    # behind an ALB / nginx
    ADAPTD_ALLOW_FORWARDED_PROTO=true python app.py

    # in code
    config = AdaptConfig.from_env()
    config.validate()
    handler = adapt(app, [config.ensure_https(), ...])

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


class ConfigurationError(Exception):
    """
    Raised for mistakes made while SETTING UP adapters, never per request.

    Examples: registering the same metric collector twice, adding to a
    chain after it was wrapped, invalid configuration values. These are
    meant to stop the process at startup.
    """


_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class AdaptConfig:
    """
    Configuration for the shipped adapters.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    HTTPS ENFORCEMENT
    - allow_forwarded_proto, https_port

    METRICS
    - metrics_namespace, request_counter_name, response_time_name

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # HTTPS ENFORCEMENT
    # ─────────────────────────────────────────────────────────────────────

    allow_forwarded_proto: bool = False
    """
    Trust "X-Forwarded-Proto: https" as proof of a secure request.
    Only enable behind a proxy that overwrites the header.
    """

    https_port: Optional[str] = None
    """
    Port for https_redirect targets. None keeps the incoming Host as is.
    """

    # ─────────────────────────────────────────────────────────────────────
    # METRICS
    # ─────────────────────────────────────────────────────────────────────

    metrics_namespace: str = ""
    """
    Prefix joined to collector names with "_" (e.g. "shop" → shop_http_requests_total).
    """

    request_counter_name: str = "http_requests_total"
    """Name of the response counter."""

    response_time_name: str = "http_requests_secs"
    """Name of the response time summary."""

    @classmethod
    def from_env(cls) -> "AdaptConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        ADAPTD_ALLOW_FORWARDED_PROTO   true/false (default: false)
        ADAPTD_HTTPS_PORT              Port for HTTPS redirects (default: None)
        ADAPTD_METRICS_NAMESPACE       Collector name prefix (default: "")
        ADAPTD_REQUEST_COUNTER_NAME    (default: http_requests_total)
        ADAPTD_RESPONSE_TIME_NAME      (default: http_requests_secs)

        =====================================================================
        """
        return cls(
            allow_forwarded_proto=os.getenv("ADAPTD_ALLOW_FORWARDED_PROTO", "false").strip().lower() in _TRUE_VALUES,
            https_port=os.getenv("ADAPTD_HTTPS_PORT") or None,
            metrics_namespace=os.getenv("ADAPTD_METRICS_NAMESPACE", ""),
            request_counter_name=os.getenv("ADAPTD_REQUEST_COUNTER_NAME", "http_requests_total"),
            response_time_name=os.getenv("ADAPTD_RESPONSE_TIME_NAME", "http_requests_secs"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called at startup so a bad value fails the deploy, not the first
        request hours later.
        """
        if self.https_port is not None:
            if not self.https_port.isdigit() or not 0 < int(self.https_port) < 65536:
                raise ConfigurationError(
                    f"Invalid https_port: {self.https_port!r}. Must be 1-65535."
                )

        if not self.request_counter_name:
            raise ConfigurationError("request_counter_name must not be empty")

        if not self.response_time_name:
            raise ConfigurationError("response_time_name must not be empty")

    def metric_name(self, name: str) -> str:
        """Collector name with the namespace prefix applied."""
        if self.metrics_namespace:
            return f"{self.metrics_namespace}_{name}"
        return name

    # =========================================================================
    # ADAPTER FACTORIES
    # =========================================================================

    def ensure_https(self):
        """ensure_https adapter using this config's forwarded-proto policy."""
        from .middleware.https import ensure_https
        return ensure_https(self.allow_forwarded_proto)

    def https_redirect(self):
        """https_redirect handler for a plaintext listener, using https_port."""
        from .middleware.https import https_redirect
        return https_redirect(self.https_port)
