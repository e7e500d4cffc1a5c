"""Low-level HTTP client for the mock server management API (sync + async)."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from httpmock_sdk.exceptions import SerializationError, TransportError
from httpmock_sdk.runtime import ExecutionBridge

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000


def _build_url(host: str, port: int, path: str) -> str:
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"http://{host}:{port}{path}"


def encode_json(value: Any) -> str:
    """Serialize *value* to a JSON string or raise :class:`SerializationError`."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"cannot serialize mock object to JSON: {exc}") from exc


def _build_request(
    method: str,
    url: str,
    body: str | None,
    headers: dict[str, str],
) -> httpx.Request:
    _headers = httpx.Headers(headers)
    if body is not None:
        _headers["Content-Type"] = "application/json"
        return httpx.Request(method, url, headers=_headers, content=body.encode("utf-8"))
    return httpx.Request(method, url, headers=_headers)


# ---------------------------------------------------------------------------
# Synchronous client
# ---------------------------------------------------------------------------

class HttpClient:
    """Synchronous HTTP client driving requests through an :class:`ExecutionBridge`.

    When no *bridge* is given the client creates one and closes it in
    :meth:`close`; an injected bridge is left to its owner.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        *,
        bridge: ExecutionBridge | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self._headers: dict[str, str] = dict(headers or {})
        self._owns_bridge = bridge is None
        self.bridge = bridge if bridge is not None else ExecutionBridge()

    def url_for(self, path: str) -> str:
        return _build_url(self.host, self.port, path)

    def request(self, method: str, path: str, body: str | None = None) -> tuple[int, str]:
        """Send one request and return ``(status, body)`` without judging the status."""
        req = _build_request(method, self.url_for(path), body, self._headers)
        return self.bridge.execute(req)

    def close(self) -> None:
        if self._owns_bridge:
            self.bridge.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Asynchronous client
# ---------------------------------------------------------------------------

class AsyncHttpClient:
    """Asynchronous HTTP client wrapping ``httpx.AsyncClient``."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        *,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self._headers: dict[str, str] = dict(headers or {})
        self._client = httpx.AsyncClient(timeout=None, trust_env=False)

    def url_for(self, path: str) -> str:
        return _build_url(self.host, self.port, path)

    async def request(self, method: str, path: str, body: str | None = None) -> tuple[int, str]:
        req = _build_request(method, self.url_for(path), body, self._headers)
        logger.debug("%s %s", req.method, req.url)
        try:
            resp = await self._client.send(req)
            text = resp.content.decode("utf-8")
        except httpx.RequestError as exc:
            raise TransportError(f"cannot send request to mock server: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise TransportError(f"mock server response body is not valid UTF-8: {exc}") from exc
        logger.debug("%s %s -> %d", req.method, req.url, resp.status_code)
        return resp.status_code, text

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
