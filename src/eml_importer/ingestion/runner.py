"""Run orchestration: one session per attempt, retried as a whole."""

from __future__ import annotations

import logging
import time
from typing import Callable

from ..core.config import AppSettings
from ..core.interfaces import MailboxSession, UploadLedger
from ..core.models import RunStats
from ..storage import FileLedger
from ..transport import ImapClient, KeepAlive
from .parser import MessageDateParser
from .scanner import discover_source_files
from .uploader import DateParserProtocol, MessageUploader

LOGGER = logging.getLogger(__name__)

SessionFactory = Callable[[AppSettings], MailboxSession]


class RunAbortedError(RuntimeError):
    """Raised when an attempt stops before all files were considered."""


def _connect_imap(settings: AppSettings) -> MailboxSession:
    client = ImapClient(settings.imap)
    client.connect()
    return client


class ImportRunner:
    """Drive uploads of every candidate file through a single session."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        session_factory: SessionFactory = _connect_imap,
        ledger: UploadLedger | None = None,
        parser: DateParserProtocol | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialise the runner; ``session_factory`` must return an open session."""
        self._settings = settings
        self._session_factory = session_factory
        self._ledger = (
            ledger if ledger is not None else FileLedger(settings.storage.ledger_path)
        )
        self._parser = parser if parser is not None else MessageDateParser()
        self._sleep = sleep

    def run_once(self) -> RunStats:
        """Perform one full pass over the source directory.

        The session and its keep-alive are always released before returning.
        Anything that is not a per-file failure surfaces as
        :class:`RunAbortedError`.
        """
        stats = RunStats()
        session: MailboxSession | None = None
        keepalive: KeepAlive | None = None
        try:
            self._ledger.load()
            session = self._session_factory(self._settings)
            keepalive = KeepAlive(
                session, self._settings.retry.keepalive_interval_seconds
            )
            keepalive.start()

            files = discover_source_files(
                self._settings.source.directory, self._settings.source.extension
            )
            uploader = MessageUploader(session, self._ledger, self._parser)
            count = len(files)
            for index, source in enumerate(files, start=1):
                LOGGER.info("Processing %s/%s file: %s", index, count, source.filename)
                stats.record(uploader.upload(source))
                LOGGER.info(
                    "Processed %s/%s files: %s successes, %s failures",
                    stats.total,
                    count,
                    stats.succeeded,
                    stats.failed,
                )
        except Exception as exc:  # pylint: disable=broad-except
            LOGGER.error("Run failed: %s", exc)
            raise RunAbortedError(str(exc)) from exc
        finally:
            if keepalive is not None:
                keepalive.stop()
            if session is not None:
                try:
                    session.close()
                except Exception as close_error:  # pylint: disable=broad-except
                    LOGGER.error("Error closing IMAP connection: %s", close_error)

        LOGGER.info(
            "Completed. Total files: %s, Successes: %s, Failures: %s, Skipped: %s",
            stats.total,
            stats.succeeded,
            stats.failed,
            stats.skipped,
        )
        return stats

    def run_with_retry(
        self,
        max_attempts: int | None = None,
        delay_seconds: float | None = None,
    ) -> RunStats | None:
        """Call :meth:`run_once` until an attempt completes or attempts run out.

        Returns the statistics of the completed attempt, or ``None`` after the
        final attempt failed. Never raises :class:`RunAbortedError`.
        """
        attempts = (
            self._settings.retry.max_attempts if max_attempts is None else max_attempts
        )
        delay = (
            self._settings.retry.delay_seconds if delay_seconds is None else delay_seconds
        )
        if attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        for attempt in range(1, attempts + 1):
            LOGGER.info("Starting attempt %s of %s", attempt, attempts)
            try:
                stats = self.run_once()
            except RunAbortedError as exc:
                LOGGER.error("Attempt %s failed: %s", attempt, exc)
                if attempt == attempts:
                    LOGGER.error("Max retries reached. Giving up.")
                    return None
                LOGGER.info("Waiting %ss before retrying...", delay)
                self._sleep(delay)
                continue
            LOGGER.info("Import completed successfully")
            return stats
        return None


__all__ = ["ImportRunner", "RunAbortedError", "SessionFactory"]
