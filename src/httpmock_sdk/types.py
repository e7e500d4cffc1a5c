"""Shapes of the JSON documents exchanged with the ``/__mocks`` endpoints.

Mocks travel as plain dicts; the ``TypedDict``s below only describe which
keys a definition may carry and which ones the server sends back.
"""

from __future__ import annotations

import enum
from typing import Any, TypedDict


# ---------------------------------------------------------------------------
# Mock definitions
# ---------------------------------------------------------------------------

class RequestRequirements(TypedDict, total=False):
    path: str | None
    path_contains: list[str] | None
    path_matches: list[str] | None
    method: str | None
    headers: list[list[str]] | None
    header_exists: list[str] | None
    cookies: list[list[str]] | None
    cookie_exists: list[str] | None
    body: str | None
    json_body: Any
    json_body_partial: list[str] | None
    body_contains: list[str] | None
    body_matches: list[str] | None
    query_param_exists: list[str] | None
    query_param: list[list[str]] | None
    x_www_form_urlencoded: list[list[str]] | None


class MockServerHttpResponse(TypedDict, total=False):
    status: int | None
    headers: list[list[str]] | None
    body: str | None
    delay: dict[str, int] | None


class MockDefinition(TypedDict):
    request: RequestRequirements
    response: MockServerHttpResponse


# ---------------------------------------------------------------------------
# Server-side state
# ---------------------------------------------------------------------------

class MockIdentification(TypedDict):
    mock_id: int


class ActiveMock(TypedDict, total=False):
    id: int
    call_counter: int
    request: RequestRequirements
    response: MockServerHttpResponse


# ---------------------------------------------------------------------------
# HTTP methods
# ---------------------------------------------------------------------------

class Method(enum.Enum):
    """HTTP verbs, for display and for building :class:`RequestRequirements`."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"

    def __str__(self) -> str:
        return self.value
