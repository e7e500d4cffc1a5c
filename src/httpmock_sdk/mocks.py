"""Mocks API — create, fetch and delete mocks on the server."""

from __future__ import annotations

import json
from typing import Any, Mapping, cast

from httpmock_sdk.exceptions import DeserializationError, UnexpectedStatusError
from httpmock_sdk.http import AsyncHttpClient, HttpClient, encode_json
from httpmock_sdk.types import ActiveMock, MockDefinition, MockIdentification

MOCKS_PATH = "/__mocks"


def _mock_path(mock_id: int) -> str:
    if isinstance(mock_id, bool) or not isinstance(mock_id, int) or mock_id < 0:
        raise ValueError(f"mock id must be a non-negative integer, got {mock_id!r}")
    return f"{MOCKS_PATH}/{mock_id}"


def _expect_status(action: str, status: int, body: str, expected: int) -> None:
    if status != expected:
        raise UnexpectedStatusError(
            f"could not {action}. Mock server response: status = {status}, message = {body}",
            status=status,
            body=body,
            expected=expected,
        )


def _field_ok(value: Any, kind: type) -> bool:
    if kind is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, kind)


def _decode(body: str, fields: dict[str, type]) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise DeserializationError(
            f"cannot deserialize mock server response: {exc}", body=body
        ) from exc
    if not isinstance(data, dict):
        raise DeserializationError(
            f"cannot deserialize mock server response: expected a JSON object, "
            f"got {type(data).__name__}",
            body=body,
        )
    invalid = [key for key, kind in fields.items() if not _field_ok(data.get(key), kind)]
    if invalid:
        raise DeserializationError(
            f"cannot deserialize mock server response: missing or invalid field(s) {invalid}",
            body=body,
        )
    return data


def _decode_identification(body: str) -> MockIdentification:
    return cast(MockIdentification, _decode(body, {"mock_id": int}))


def _decode_active_mock(body: str) -> ActiveMock:
    fields = {"id": int, "call_counter": int, "request": dict, "response": dict}
    return cast(ActiveMock, _decode(body, fields))


class MocksApi:
    """Synchronous Mocks API."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def create(self, definition: MockDefinition | Mapping[str, Any]) -> MockIdentification:
        """Create a mock and return the id the server assigned to it.

        Raises :class:`SerializationError` before any I/O when *definition*
        is not JSON encodable.
        """
        payload = encode_json(definition)
        status, body = self._http.request("POST", MOCKS_PATH, payload)
        _expect_status("create mock", status, body, 201)
        return _decode_identification(body)

    def fetch(self, mock_id: int) -> ActiveMock:
        """Fetch the server-side state of a mock, including its call counter."""
        status, body = self._http.request("GET", _mock_path(mock_id))
        _expect_status("fetch mock", status, body, 200)
        return _decode_active_mock(body)

    def delete(self, mock_id: int) -> None:
        status, body = self._http.request("DELETE", _mock_path(mock_id))
        _expect_status("delete mock", status, body, 202)

    def delete_all(self) -> None:
        """Delete every mock on the server. Succeeds on an empty server too."""
        status, body = self._http.request("DELETE", MOCKS_PATH)
        _expect_status("delete mocks", status, body, 202)


class AsyncMocksApi:
    """Asynchronous Mocks API."""

    def __init__(self, http: AsyncHttpClient) -> None:
        self._http = http

    async def create(self, definition: MockDefinition | Mapping[str, Any]) -> MockIdentification:
        payload = encode_json(definition)
        status, body = await self._http.request("POST", MOCKS_PATH, payload)
        _expect_status("create mock", status, body, 201)
        return _decode_identification(body)

    async def fetch(self, mock_id: int) -> ActiveMock:
        status, body = await self._http.request("GET", _mock_path(mock_id))
        _expect_status("fetch mock", status, body, 200)
        return _decode_active_mock(body)

    async def delete(self, mock_id: int) -> None:
        status, body = await self._http.request("DELETE", _mock_path(mock_id))
        _expect_status("delete mock", status, body, 202)

    async def delete_all(self) -> None:
        status, body = await self._http.request("DELETE", MOCKS_PATH)
        _expect_status("delete mocks", status, body, 202)
