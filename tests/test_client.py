"""Tests for the top-level adapters and shared types."""

import asyncio

import pytest
from pytest_httpserver import HTTPServer

from httpmock_sdk.client import AsyncMockServerHttpAdapter, MockServerHttpAdapter
from httpmock_sdk.exceptions import SerializationError, UnexpectedStatusError
from httpmock_sdk.runtime import ExecutionBridge
from httpmock_sdk.types import Method
from tests.conftest import FakeMockStore

DEFINITION = {
    "request": {"path": "/users", "method": "POST"},
    "response": {"status": 201},
}


class TestMockServerHttpAdapter:
    def test_server_address(self) -> None:
        server = MockServerHttpAdapter("localhost", 5050)
        assert server.server_host == "localhost"
        assert server.server_port == 5050
        assert server.server_address == "localhost:5050"
        assert repr(server) == "MockServerHttpAdapter('localhost:5050')"
        server.close()

    def test_from_address(self) -> None:
        with MockServerHttpAdapter.from_address("127.0.0.1:8080") as server:
            assert server.server_host == "127.0.0.1"
            assert server.server_port == 8080

    @pytest.mark.parametrize("address", ["localhost", ":80", "host:", "host:port"])
    def test_from_address_invalid(self, address: str) -> None:
        with pytest.raises(ValueError):
            MockServerHttpAdapter.from_address(address)

    def test_extra_headers(self, httpserver: HTTPServer) -> None:
        httpserver.expect_request(
            "/__mocks", method="DELETE", headers={"X-Test-Run": "42"}
        ).respond_with_data("", status=202)
        with MockServerHttpAdapter(httpserver.host, httpserver.port, headers={"X-Test-Run": "42"}) as server:
            server.delete_all_mocks()

    def test_injected_bridge_is_not_closed(self, httpserver: HTTPServer) -> None:
        httpserver.expect_request("/__mocks", method="DELETE").respond_with_data("", status=202)
        bridge = ExecutionBridge()
        with MockServerHttpAdapter(httpserver.host, httpserver.port, bridge=bridge) as server:
            server.delete_all_mocks()
        ctx = bridge.context()
        assert not ctx.closed
        bridge.close()
        assert ctx.closed

    def test_shared_bridge_between_adapters(self, httpserver: HTTPServer, mock_store: FakeMockStore) -> None:
        with ExecutionBridge() as bridge:
            first = MockServerHttpAdapter(httpserver.host, httpserver.port, bridge=bridge)
            second = MockServerHttpAdapter(httpserver.host, httpserver.port, bridge=bridge)
            mock_id = first.create_mock(DEFINITION)["mock_id"]
            assert second.fetch_mock(mock_id)["request"]["path"] == "/users"


class TestAsyncMockServerHttpAdapter:
    def test_lifecycle(self, httpserver: HTTPServer, mock_store: FakeMockStore) -> None:
        async def scenario() -> None:
            async with AsyncMockServerHttpAdapter(httpserver.host, httpserver.port) as server:
                ident = await server.create_mock(DEFINITION)
                active = await server.fetch_mock(ident["mock_id"])
                assert active["call_counter"] == 0
                await server.delete_mock(ident["mock_id"])
                with pytest.raises(UnexpectedStatusError):
                    await server.fetch_mock(ident["mock_id"])
                await server.delete_all_mocks()

        asyncio.run(scenario())

    def test_serialization_error(self, httpserver: HTTPServer) -> None:
        async def scenario() -> None:
            async with AsyncMockServerHttpAdapter.from_address(f"{httpserver.host}:{httpserver.port}") as server:
                assert server.server_address == f"{httpserver.host}:{httpserver.port}"
                with pytest.raises(SerializationError):
                    await server.create_mock({"request": {"body": b"raw"}, "response": {}})

        asyncio.run(scenario())
        assert httpserver.log == []


class TestMethod:
    def test_display(self) -> None:
        assert str(Method.GET) == "GET"
        assert f"{Method.PATCH}" == "PATCH"

    def test_members(self) -> None:
        assert [m.name for m in Method] == [
            "GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH",
        ]
