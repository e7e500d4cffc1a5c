"""httpmock Python SDK — manage mocks on a running HTTP mock server."""

from httpmock_sdk.client import AsyncMockServerHttpAdapter, MockServerHttpAdapter
from httpmock_sdk.exceptions import (
    DeserializationError,
    MockServerError,
    ReentrantCallError,
    SerializationError,
    ShutdownSignalError,
    TransportError,
    UnexpectedStatusError,
)
from httpmock_sdk.local import LocalMockServerAdapter
from httpmock_sdk.runtime import ExecutionBridge, ExecutionContext
from httpmock_sdk.shutdown import ShutdownReceiver, ShutdownSender, oneshot
from httpmock_sdk.types import ActiveMock, Method, MockDefinition, MockIdentification

__all__ = [
    "MockServerHttpAdapter",
    "AsyncMockServerHttpAdapter",
    "LocalMockServerAdapter",
    "ExecutionBridge",
    "ExecutionContext",
    "oneshot",
    "ShutdownSender",
    "ShutdownReceiver",
    "MockDefinition",
    "MockIdentification",
    "ActiveMock",
    "Method",
    "MockServerError",
    "SerializationError",
    "TransportError",
    "ReentrantCallError",
    "UnexpectedStatusError",
    "DeserializationError",
    "ShutdownSignalError",
]

__version__ = "0.1.0"
