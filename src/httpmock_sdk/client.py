"""Top-level mock server adapters (sync + async)."""

from __future__ import annotations

from typing import Any, Mapping

from httpmock_sdk.http import DEFAULT_HOST, DEFAULT_PORT, AsyncHttpClient, HttpClient
from httpmock_sdk.mocks import AsyncMocksApi, MocksApi
from httpmock_sdk.runtime import ExecutionBridge
from httpmock_sdk.types import ActiveMock, MockDefinition, MockIdentification


def _parse_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"invalid mock server address {address!r}, expected 'host:port'")
    return host, int(port)


class MockServerHttpAdapter:
    """Synchronous adapter for a running mock server's management API.

    Usage::

        with MockServerHttpAdapter("127.0.0.1", 5000) as server:
            ident = server.create_mock({"request": {"path": "/hello"},
                                        "response": {"status": 200}})
            active = server.fetch_mock(ident["mock_id"])
            server.delete_mock(ident["mock_id"])

    Every call blocks until the server has answered. Calls from different
    threads run on independent execution contexts.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        *,
        bridge: ExecutionBridge | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.http = HttpClient(host, port, bridge=bridge, headers=headers)
        self.mocks = MocksApi(self.http)

    @classmethod
    def from_address(cls, address: str, **kwargs: Any) -> "MockServerHttpAdapter":
        """Build an adapter from a ``host:port`` string."""
        host, port = _parse_address(address)
        return cls(host, port, **kwargs)

    @property
    def server_host(self) -> str:
        return self.http.host

    @property
    def server_port(self) -> int:
        return self.http.port

    @property
    def server_address(self) -> str:
        return f"{self.server_host}:{self.server_port}"

    def create_mock(self, definition: MockDefinition | Mapping[str, Any]) -> MockIdentification:
        return self.mocks.create(definition)

    def fetch_mock(self, mock_id: int) -> ActiveMock:
        return self.mocks.fetch(mock_id)

    def delete_mock(self, mock_id: int) -> None:
        self.mocks.delete(mock_id)

    def delete_all_mocks(self) -> None:
        self.mocks.delete_all()

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "MockServerHttpAdapter":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"MockServerHttpAdapter({self.server_address!r})"


class AsyncMockServerHttpAdapter:
    """Asynchronous adapter for a running mock server's management API.

    Usage::

        async with AsyncMockServerHttpAdapter("127.0.0.1", 5000) as server:
            ident = await server.create_mock(definition)
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        *,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.http = AsyncHttpClient(host, port, headers=headers)
        self.mocks = AsyncMocksApi(self.http)

    @classmethod
    def from_address(cls, address: str, **kwargs: Any) -> "AsyncMockServerHttpAdapter":
        host, port = _parse_address(address)
        return cls(host, port, **kwargs)

    @property
    def server_host(self) -> str:
        return self.http.host

    @property
    def server_port(self) -> int:
        return self.http.port

    @property
    def server_address(self) -> str:
        return f"{self.server_host}:{self.server_port}"

    async def create_mock(self, definition: MockDefinition | Mapping[str, Any]) -> MockIdentification:
        return await self.mocks.create(definition)

    async def fetch_mock(self, mock_id: int) -> ActiveMock:
        return await self.mocks.fetch(mock_id)

    async def delete_mock(self, mock_id: int) -> None:
        await self.mocks.delete(mock_id)

    async def delete_all_mocks(self) -> None:
        await self.mocks.delete_all()

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "AsyncMockServerHttpAdapter":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
