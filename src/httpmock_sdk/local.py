"""Handle on a locally started mock server."""

from __future__ import annotations

import logging
import threading
from typing import Any

from httpmock_sdk.exceptions import ShutdownSignalError
from httpmock_sdk.shutdown import ShutdownSender

logger = logging.getLogger(__name__)


class LocalMockServerAdapter:
    """Owns the shutdown signal of a mock server running in this process.

    The signal is sent exactly once, by the first :meth:`close`. Use the
    handle as a context manager so that happens on every exit path::

        sender, receiver = oneshot()
        # ... start the server so that it stops once ``receiver`` fires ...
        with LocalMockServerAdapter(sender, state):
            run_tests()
    """

    def __init__(self, shutdown_sender: ShutdownSender, local_state: Any) -> None:
        self._lock = threading.Lock()
        self._shutdown_sender: ShutdownSender | None = shutdown_sender
        self._local_state = local_state

    @property
    def state(self) -> Any:
        """The server-side state shared with the running server."""
        return self._local_state

    @property
    def armed(self) -> bool:
        return self._shutdown_sender is not None

    def close(self) -> None:
        """Send the shutdown signal. Calls after the first one do nothing.

        A server that already went away is logged, never raised.
        """
        with self._lock:
            sender, self._shutdown_sender = self._shutdown_sender, None
        if sender is None:
            return
        try:
            sender.send()
        except ShutdownSignalError as exc:
            logger.warning("Cannot send mock server shutdown signal: %s", exc)
        else:
            logger.debug("Sent mock server shutdown signal")

    def __enter__(self) -> "LocalMockServerAdapter":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_shutdown_sender", None) is not None:
            self.close()
