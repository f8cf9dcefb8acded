"""
Unit tests for HTTPS enforcement.
"""

import pytest

from adaptd.http import HTTPRequest, HTTPStatus, TLSState
from adaptd.middleware import ensure_https, https_redirect, https_url, is_https


class TestIsHTTPS:
    """Tests for the secure-request check."""

    def test_tls_handshake_is_secure(self, tls_request):
        assert is_https(tls_request, allow_forwarded_proto=False)

    def test_incomplete_handshake_is_not_secure(self):
        request = HTTPRequest(method="GET", path="/", tls=TLSState(handshake_complete=False))
        assert not is_https(request, allow_forwarded_proto=False)

    def test_plaintext_is_not_secure(self, get_request):
        assert not is_https(get_request, allow_forwarded_proto=True)

    def test_forwarded_proto_needs_opt_in(self):
        """The header only counts when the caller allows it."""
        request = HTTPRequest.from_url("GET", "http://example.com/", headers={"X-Forwarded-Proto": "https"})

        assert is_https(request, allow_forwarded_proto=True)
        assert not is_https(request, allow_forwarded_proto=False)

    def test_forwarded_proto_must_be_https(self):
        request = HTTPRequest.from_url("GET", "http://example.com/", headers={"X-Forwarded-Proto": "http"})
        assert not is_https(request, allow_forwarded_proto=True)


class TestEnsureHTTPS:
    """Tests for ensure_https()."""

    def test_plaintext_redirects_with_same_host_path_query(self, run, call_log, get_request):
        """307 to https with identical host, path and raw query; handler skipped."""
        handler = ensure_https(False)(call_log.handler("primary"))
        response = run(handler, get_request)

        assert response.status == HTTPStatus.TEMPORARY_REDIRECT
        assert response.headers.get("Location") == "https://example.com:8080/login?next=%2Fhome&x=1"
        assert call_log.count("primary") == 0

    def test_redirect_without_query_has_no_question_mark(self, run, call_log):
        handler = ensure_https(False)(call_log.handler("primary"))
        response = run(handler, HTTPRequest.from_url("GET", "http://example.com/a/b"))

        assert response.headers.get("Location") == "https://example.com/a/b"

    def test_get_redirect_has_link_body(self, run, call_log, get_request):
        handler = ensure_https(False)(call_log.handler("primary"))
        response = run(handler, get_request)

        assert response.headers.get("Content-Type") == "text/html; charset=utf-8"
        assert b"Temporary Redirect" in response.body

    def test_post_redirect_keeps_no_body(self, run, call_log):
        """Non-GET redirects carry only the Location header."""
        handler = ensure_https(False)(call_log.handler("primary"))
        response = run(handler, HTTPRequest.from_url("POST", "http://example.com/submit"))

        assert response.status == 307
        assert response.body == b""

    def test_tls_request_passes_through(self, run, call_log, tls_request):
        """Handler runs and its status comes back unchanged."""
        handler = ensure_https(False)(call_log.handler("primary", status=HTTPStatus.ACCEPTED, body="ok"))
        response = run(handler, tls_request)

        assert response.status == HTTPStatus.ACCEPTED
        assert response.body == b"ok"
        assert "Location" not in response.headers
        assert call_log.count("primary") == 1

    def test_forwarded_proto_allowed(self, run, call_log):
        """ensure_https(True) trusts X-Forwarded-Proto: https."""
        request = HTTPRequest.from_url("GET", "http://example.com/", headers={"X-Forwarded-Proto": "https"})
        handler = ensure_https(True)(call_log.handler("primary"))
        response = run(handler, request)

        assert response.status == 200
        assert call_log.count("primary") == 1

    def test_forwarded_proto_ignored_when_not_allowed(self, run, call_log):
        request = HTTPRequest.from_url("GET", "http://example.com/", headers={"X-Forwarded-Proto": "https"})
        handler = ensure_https(False)(call_log.handler("primary"))
        response = run(handler, request)

        assert response.status == 307
        assert call_log.calls == []


class TestHTTPSRedirect:
    """Tests for the standalone https_redirect() handler."""

    def test_redirects_everything(self, run, get_request):
        response = run(https_redirect(), get_request)

        assert response.status == HTTPStatus.TEMPORARY_REDIRECT
        assert response.headers.get("Location") == "https://example.com:8080/login?next=%2Fhome&x=1"

    def test_port_replaces_incoming_port(self, run, get_request):
        response = run(https_redirect("8443"), get_request)
        assert response.headers.get("Location") == "https://example.com:8443/login?next=%2Fhome&x=1"

    def test_port_added_when_host_has_none(self, run):
        response = run(https_redirect("443"), HTTPRequest.from_url("GET", "http://example.com/x"))
        assert response.headers.get("Location") == "https://example.com:443/x"

    @pytest.mark.parametrize("host,expected", [
        ("example.com", "https://example.com:8443/"),
        ("example.com:80", "https://example.com:8443/"),
        ("[::1]:80", "https://[::1]:8443/"),
    ])
    def test_https_url_hostnames(self, host, expected):
        request = HTTPRequest(method="GET", path="/", headers={"Host": host})
        assert https_url(request, "8443") == expected


class TestHTTPSURLPath:
    """Tests for path encoding in the https:// target."""

    def test_encoded_question_mark_stays_in_path(self, run):
        request = HTTPRequest.from_url("GET", "http://example.com/a%3Fb")
        response = run(https_redirect(), request)

        assert request.path == "/a?b"
        assert response.headers.get("Location") == "https://example.com/a%3Fb"

    def test_path_characters_are_reencoded(self):
        request = HTTPRequest.from_url("GET", "http://example.com/a%20b/100%25?q=1")
        assert https_url(request) == "https://example.com/a%20b/100%25?q=1"

    def test_sub_delims_left_alone(self):
        request = HTTPRequest(method="GET", path="/users/ada;v=1:x@y", headers={"Host": "example.com"})
        assert https_url(request) == "https://example.com/users/ada;v=1:x@y"

    def test_markup_in_path_is_not_echoed(self, run, call_log):
        request = HTTPRequest(method="GET", path='/"><script>alert(1)</script>', headers={"Host": "example.com"})
        response = run(ensure_https(False)(call_log.handler("primary")), request)

        assert response.status == HTTPStatus.TEMPORARY_REDIRECT
        assert b"<script>" not in response.body
        assert "<script>" not in response.headers.get("Location")
