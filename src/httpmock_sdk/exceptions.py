"""Custom exceptions for the httpmock SDK."""

from __future__ import annotations


class MockServerError(Exception):
    """Base class for every error raised while talking to the mock server."""

    def __init__(
        self,
        message: str,
        *,
        status: int = 0,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, message={str(self)!r})"


class SerializationError(MockServerError):
    """Raised when a value cannot be encoded to JSON. No request was sent."""


class TransportError(MockServerError):
    """Raised when the HTTP round trip itself fails (connection, I/O, protocol)."""


class ReentrantCallError(TransportError):
    """Raised when the blocking bridge is called from inside a running event loop."""


class UnexpectedStatusError(MockServerError):
    """Raised when the server answers with a status other than the expected one."""

    def __init__(self, message: str, *, status: int, body: str, expected: int) -> None:
        super().__init__(message, status=status, body=body)
        self.expected = expected

    def __repr__(self) -> str:
        return (
            f"UnexpectedStatusError(status={self.status}, expected={self.expected}, "
            f"body={self.body!r})"
        )


class DeserializationError(MockServerError):
    """Raised when a response body cannot be decoded into the expected type."""


class ShutdownSignalError(Exception):
    """Raised when a shutdown signal cannot be delivered."""
