"""One-shot shutdown signal shared between a server and whoever owns it.

The channel has exactly one sender and one receiver. The sender fires at
most once; the receiver can wait for that from a thread
(:meth:`ShutdownReceiver.wait`) or from a coroutine
(:meth:`ShutdownReceiver.recv`) and is consumed by the first successful
receive.
"""

from __future__ import annotations

import asyncio
import contextlib
import threading

from httpmock_sdk.exceptions import ShutdownSignalError


def _wake(fut: asyncio.Future[None]) -> None:
    if not fut.done():
        fut.set_result(None)


class _Channel:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.event = threading.Event()
        self.sent = False
        self.receiver_closed = False
        self.waiters: list[tuple[asyncio.AbstractEventLoop, asyncio.Future[None]]] = []


class ShutdownSender:
    """Sending half of a :func:`oneshot` channel."""

    def __init__(self, channel: _Channel) -> None:
        self._channel = channel

    @property
    def fired(self) -> bool:
        return self._channel.sent

    def send(self) -> None:
        """Fire the signal.

        Raises :class:`ShutdownSignalError` if the signal was already sent or
        the receiver is gone. A failed send leaves the channel unchanged.
        """
        ch = self._channel
        with ch.lock:
            if ch.sent:
                raise ShutdownSignalError("shutdown signal was already sent")
            if ch.receiver_closed:
                raise ShutdownSignalError("shutdown receiver is gone")
            ch.sent = True
            ch.event.set()
            waiters, ch.waiters = ch.waiters, []
        for loop, fut in waiters:
            # A closed loop has nobody left to wake.
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(_wake, fut)


class ShutdownReceiver:
    """Receiving half of a :func:`oneshot` channel."""

    def __init__(self, channel: _Channel) -> None:
        self._channel = channel
        self._consumed = False

    @property
    def fired(self) -> bool:
        return self._channel.sent

    @property
    def closed(self) -> bool:
        return self._channel.receiver_closed

    def _check_usable(self) -> None:
        if self._consumed:
            raise RuntimeError("shutdown receiver was already consumed")
        if self._channel.receiver_closed:
            raise RuntimeError("shutdown receiver is closed")

    def _consume(self) -> None:
        self._consumed = True
        self.close()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the signal fires. Returns ``False`` on timeout."""
        self._check_usable()
        fired = self._channel.event.wait(timeout)
        if fired:
            self._consume()
        return fired

    async def recv(self) -> None:
        """Suspend the current task until the signal fires."""
        self._check_usable()
        ch = self._channel
        loop = asyncio.get_running_loop()
        fut: asyncio.Future[None] = loop.create_future()
        entry = (loop, fut)
        with ch.lock:
            if ch.sent:
                fut.set_result(None)
            else:
                ch.waiters.append(entry)
        try:
            await fut
        finally:
            with ch.lock:
                if entry in ch.waiters:
                    ch.waiters.remove(entry)
        self._consume()

    def close(self) -> None:
        """Drop the receiver. Later sends fail with :class:`ShutdownSignalError`."""
        with self._channel.lock:
            self._channel.receiver_closed = True

    def __del__(self) -> None:
        channel = getattr(self, "_channel", None)
        if channel is not None:
            channel.receiver_closed = True


def oneshot() -> tuple[ShutdownSender, ShutdownReceiver]:
    """Create a connected ``(sender, receiver)`` pair."""
    channel = _Channel()
    return ShutdownSender(channel), ShutdownReceiver(channel)
