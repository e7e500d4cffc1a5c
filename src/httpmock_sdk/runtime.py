"""Blocking execution of HTTP requests over ``httpx.AsyncClient``.

Every calling thread gets its own :class:`ExecutionContext` (an event loop
plus an async client bound to it). Contexts are created on first use and
reused by later calls from the same thread; they are never shared.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import weakref
from typing import Any, Coroutine, TypeVar

import httpx

from httpmock_sdk.exceptions import ReentrantCallError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _ensure_no_running_loop() -> None:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return
    raise ReentrantCallError(
        "cannot block on a mock server request from inside a running event loop; "
        "use AsyncMockServerHttpAdapter from async code"
    )


class ExecutionContext:
    """A private event loop and the ``httpx.AsyncClient`` that lives on it."""

    def __init__(self) -> None:
        self._loop = asyncio.new_event_loop()
        self._client = httpx.AsyncClient(timeout=None, trust_env=False)
        self._closed = False
        self.thread_id = threading.get_ident()
        self._owner = weakref.ref(threading.current_thread())

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def owner_alive(self) -> bool:
        """Whether the thread that created this context is still running."""
        owner = self._owner()
        return owner is not None and owner.is_alive()

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """Drive *coro* to completion on this context's loop."""
        if self._closed:
            coro.close()
            raise RuntimeError("execution context is closed")
        return self._loop.run_until_complete(coro)

    async def _send(self, request: httpx.Request) -> tuple[int, str]:
        resp = await self._client.send(request)
        return resp.status_code, resp.content.decode("utf-8")

    def execute(self, request: httpx.Request) -> tuple[int, str]:
        try:
            return self.run(self._send(request))
        except httpx.RequestError as exc:
            raise TransportError(f"cannot send request to mock server: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise TransportError(f"mock server response body is not valid UTF-8: {exc}") from exc

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._loop.run_until_complete(self._client.aclose())
        finally:
            self._loop.close()
        logger.debug("closed execution context of thread %s", self.thread_id)


class ExecutionBridge:
    """Synchronous facade that runs requests on a per-thread execution context.

    Usage::

        with ExecutionBridge() as bridge:
            status, body = bridge.execute(httpx.Request("GET", url))
    """

    def __init__(self) -> None:
        self._local = threading.local()
        self._lock = threading.Lock()
        self._contexts: list[ExecutionContext] = []

    def context(self) -> ExecutionContext:
        """Return the calling thread's context, creating it on first use."""
        ctx: ExecutionContext | None = getattr(self._local, "context", None)
        if ctx is None or ctx.closed:
            self.prune()
            ctx = ExecutionContext()
            self._local.context = ctx
            with self._lock:
                self._contexts.append(ctx)
            logger.debug("created execution context for thread %s", ctx.thread_id)
        return ctx

    def prune(self) -> None:
        """Close the contexts of threads that have exited.

        Runs whenever a thread creates its context, so a bridge shared by a
        churning thread pool keeps at most one stale context around.
        """
        with self._lock:
            dead = [ctx for ctx in self._contexts if not ctx.owner_alive]
            self._contexts = [ctx for ctx in self._contexts if ctx.owner_alive]
        for ctx in dead:
            ctx.close()

    def execute(self, request: httpx.Request) -> tuple[int, str]:
        """Send *request* and block until the whole response has been read.

        Returns the status code and the body decoded as UTF-8. Raises
        :class:`TransportError` on network failure and
        :class:`ReentrantCallError` when called from a running event loop.
        """
        _ensure_no_running_loop()
        logger.debug("%s %s", request.method, request.url)
        status, body = self.context().execute(request)
        logger.debug("%s %s -> %d", request.method, request.url, status)
        return status, body

    def close(self) -> None:
        """Close every context created by this bridge.

        No request may be in flight on any thread while closing.
        """
        with self._lock:
            contexts, self._contexts = self._contexts, []
        for ctx in contexts:
            ctx.close()

    def __enter__(self) -> "ExecutionBridge":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
