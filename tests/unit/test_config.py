"""
Unit tests for AdaptConfig.
"""

import pytest

from adaptd import AdaptConfig, ConfigurationError
from adaptd.http import HTTPRequest


class TestAdaptConfig:
    """Tests for AdaptConfig."""

    def test_defaults(self):
        config = AdaptConfig()
        assert config.allow_forwarded_proto is False
        assert config.https_port is None
        assert config.request_counter_name == "http_requests_total"
        assert config.response_time_name == "http_requests_secs"
        config.validate()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ADAPTD_ALLOW_FORWARDED_PROTO", "true")
        monkeypatch.setenv("ADAPTD_HTTPS_PORT", "8443")
        monkeypatch.setenv("ADAPTD_METRICS_NAMESPACE", "shop")

        config = AdaptConfig.from_env()

        assert config.allow_forwarded_proto is True
        assert config.https_port == "8443"
        assert config.metric_name("http_requests_total") == "shop_http_requests_total"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("ADAPTD_ALLOW_FORWARDED_PROTO", "ADAPTD_HTTPS_PORT", "ADAPTD_METRICS_NAMESPACE",
                     "ADAPTD_REQUEST_COUNTER_NAME", "ADAPTD_RESPONSE_TIME_NAME"):
            monkeypatch.delenv(name, raising=False)

        config = AdaptConfig.from_env()
        assert config == AdaptConfig()

    @pytest.mark.parametrize("port", ["0", "70000", "https", ""])
    def test_invalid_port(self, port):
        with pytest.raises(ConfigurationError):
            AdaptConfig(https_port=port).validate()

    def test_empty_metric_name(self):
        with pytest.raises(ConfigurationError):
            AdaptConfig(request_counter_name="").validate()

    def test_ensure_https_uses_forwarded_proto_policy(self, run, call_log):
        request = HTTPRequest.from_url("GET", "http://example.com/", headers={"X-Forwarded-Proto": "https"})

        trusting = AdaptConfig(allow_forwarded_proto=True).ensure_https()(call_log.handler("primary"))
        strict = AdaptConfig().ensure_https()(call_log.handler("primary"))

        assert run(trusting, request).status == 200
        assert run(strict, request).status == 307

    def test_https_redirect_uses_port(self, run):
        handler = AdaptConfig(https_port="8443").https_redirect()
        response = run(handler, HTTPRequest.from_url("GET", "http://example.com/a"))
        assert response.headers.get("Location") == "https://example.com:8443/a"
