"""Background NOOP pings that keep a long upload session alive."""

from __future__ import annotations

import logging
import threading
from types import TracebackType

from ..core.interfaces import MailboxSession

LOGGER = logging.getLogger(__name__)


class KeepAlive:
    """Ping ``session`` every ``interval`` seconds until stopped."""

    def __init__(self, session: MailboxSession, interval: float = 30.0) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._session = session
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.pings = 0

    def __enter__(self) -> KeepAlive:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()

    def start(self) -> None:
        """Start the ping thread; calling twice is a no-op."""
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="imap-keepalive", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the thread to finish and wait for it."""
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join()

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._session.noop()
            except Exception as exc:  # pylint: disable=broad-except
                LOGGER.warning("Keep-alive ping failed: %s", exc)
                continue
            self.pings += 1
            LOGGER.debug("Keep-alive")


__all__ = ["KeepAlive"]
