"""Shared test fixtures — a pytest-httpserver instance speaking the mock management API."""

from __future__ import annotations

import json
import re
import socket
import threading
from typing import Any

import pytest
from pytest_httpserver import HTTPServer
from werkzeug import Request, Response

from httpmock_sdk.client import MockServerHttpAdapter

MOCK_ID_PATH = re.compile(r"^/__mocks/\d+$")


def json_response(data: Any, status: int = 200) -> Response:
    """Build a Werkzeug JSON response."""
    return Response(
        json.dumps(data),
        status=status,
        content_type="application/json",
    )


class FakeMockStore:
    """In-memory stand-in for the server's mock storage."""

    def __init__(self, first_id: int = 0) -> None:
        self.mocks: dict[int, dict[str, Any]] = {}
        self.next_id = first_id
        self._lock = threading.Lock()

    def create(self, request: Request) -> Response:
        definition = json.loads(request.get_data(as_text=True))
        with self._lock:
            mock_id = self.next_id
            self.next_id += 1
            self.mocks[mock_id] = {"id": mock_id, "call_counter": 0, **definition}
        return json_response({"mock_id": mock_id}, status=201)

    def fetch(self, request: Request) -> Response:
        mock_id = int(request.path.rsplit("/", 1)[1])
        with self._lock:
            mock = self.mocks.get(mock_id)
        if mock is None:
            return Response("mock not found", status=404)
        return json_response(mock)

    def delete(self, request: Request) -> Response:
        mock_id = int(request.path.rsplit("/", 1)[1])
        with self._lock:
            self.mocks.pop(mock_id, None)
        return Response(status=202)

    def delete_all(self, request: Request) -> Response:
        with self._lock:
            self.mocks.clear()
        return Response(status=202)


@pytest.fixture()
def mock_store(httpserver: HTTPServer) -> FakeMockStore:
    """Serve the management API from a fresh :class:`FakeMockStore`."""
    store = FakeMockStore(first_id=7)
    httpserver.expect_request("/__mocks", method="POST").respond_with_handler(store.create)
    httpserver.expect_request("/__mocks", method="DELETE").respond_with_handler(store.delete_all)
    httpserver.expect_request(MOCK_ID_PATH, method="GET").respond_with_handler(store.fetch)
    httpserver.expect_request(MOCK_ID_PATH, method="DELETE").respond_with_handler(store.delete)
    return store


@pytest.fixture()
def adapter(httpserver: HTTPServer):
    """A synchronous adapter pointed at the test server."""
    with MockServerHttpAdapter(httpserver.host, httpserver.port) as server:
        yield server


def unused_port() -> int:
    """Return a local port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
