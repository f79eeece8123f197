"""Upload a single message file into the remote mailbox."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from ..core.interfaces import MailboxSession, UploadLedger
from ..core.models import SourceFile, UploadOutcome, UploadStatus
from ..transport import AppendRejectedError

LOGGER = logging.getLogger(__name__)


class DateParserProtocol(Protocol):
    """Minimal protocol implemented by message date parsers."""

    def extract_date(self, payload: bytes) -> datetime | None:
        """Return an aware datetime or ``None``."""
        raise NotImplementedError


class MessageUploader:
    """Append source files to a session, skipping those already ledgered."""

    def __init__(
        self,
        session: MailboxSession,
        ledger: UploadLedger,
        parser: DateParserProtocol,
    ) -> None:
        """Initialise the uploader with the open session, ledger and parser."""
        self._session = session
        self._ledger = ledger
        self._parser = parser

    def upload(self, source: SourceFile) -> UploadOutcome:
        """Upload ``source`` and record it in the ledger on success.

        Per-file problems become a failed :class:`UploadOutcome`. Losing the
        connection is not a per-file problem and propagates to the caller.
        """
        filename = source.filename
        if self._ledger.contains(filename):
            LOGGER.info("Already processed, skipping %s", filename)
            return UploadOutcome(filename, UploadStatus.SKIPPED)

        try:
            LOGGER.debug("Reading %s", source.path)
            payload = source.path.read_bytes()
        except OSError as exc:
            LOGGER.error("Error reading %s: %s", filename, exc)
            return UploadOutcome(filename, UploadStatus.FAILED, f"unreadable: {exc}")

        try:
            internal_date = self._parser.extract_date(payload)
        except Exception as exc:  # pylint: disable=broad-except
            LOGGER.warning("Could not parse headers of %s: %s", filename, exc)
            internal_date = None
        if internal_date is None:
            LOGGER.info("No usable Date header in %s; server will assign one", filename)
        else:
            LOGGER.debug("Date is %s", internal_date.isoformat())

        try:
            LOGGER.debug("Uploading %s to %s", filename, self._session.mailbox)
            self._session.append(payload, internal_date=internal_date)
        except AppendRejectedError as exc:
            LOGGER.error("Failed to upload %s: %s", filename, exc)
            return UploadOutcome(filename, UploadStatus.FAILED, str(exc))

        LOGGER.info("Successfully uploaded %s", filename)
        self._ledger.record(filename)
        return UploadOutcome(filename, UploadStatus.UPLOADED)


__all__ = ["DateParserProtocol", "MessageUploader"]
