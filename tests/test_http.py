"""Tests for the low-level HTTP client."""

import httpx
from pytest_httpserver import HTTPServer

from httpmock_sdk.http import HttpClient, _build_request, _build_url


class TestBuildUrl:
    def test_hostname(self) -> None:
        assert _build_url("localhost", 5000, "/__mocks") == "http://localhost:5000/__mocks"

    def test_ipv6_host_is_bracketed(self) -> None:
        assert _build_url("::1", 5000, "/__mocks/3") == "http://[::1]:5000/__mocks/3"
        httpx.URL(_build_url("::1", 5000, "/__mocks"))

    def test_bracketed_ipv6_host_kept(self) -> None:
        assert _build_url("[::1]", 5000, "/__mocks") == "http://[::1]:5000/__mocks"


class TestBuildRequest:
    def test_json_content_type_replaces_caller_header(self) -> None:
        req = _build_request("POST", "http://localhost:5000/__mocks", "{}", {"content-type": "text/plain"})
        assert req.headers.get_list("Content-Type") == ["application/json"]

    def test_no_content_type_without_body(self) -> None:
        req = _build_request("GET", "http://localhost:5000/__mocks/1", None, {"X-Run": "1"})
        assert "Content-Type" not in req.headers
        assert req.headers["x-run"] == "1"


class TestHttpClient:
    def test_request_returns_raw_status(self, httpserver: HTTPServer) -> None:
        httpserver.expect_request("/__mocks", method="DELETE").respond_with_data("nope", status=409)
        with HttpClient(httpserver.host, httpserver.port) as client:
            assert client.request("DELETE", "/__mocks") == (409, "nope")
