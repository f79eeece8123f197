"""Protocol interfaces for decoupling components."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class MailboxSession(Protocol):
    """An authenticated connection with a mailbox selected for writing."""

    mailbox: str

    def append(self, payload: bytes, *, internal_date: datetime | None = None) -> None:
        """Store a raw RFC822 message in the selected mailbox."""
        raise NotImplementedError

    def noop(self) -> None:
        """Issue a no-op command to keep the session alive."""
        raise NotImplementedError

    def close(self) -> None:
        """Release any network resources."""
        raise NotImplementedError


class UploadLedger(Protocol):
    """Durable record of file names that were uploaded successfully."""

    def load(self) -> set[str]:
        """Return the file names recorded so far."""
        raise NotImplementedError

    def contains(self, filename: str) -> bool:
        """Return ``True`` when ``filename`` was uploaded by an earlier run."""
        raise NotImplementedError

    def record(self, filename: str) -> None:
        """Persist ``filename`` as uploaded."""
        raise NotImplementedError


__all__ = ["MailboxSession", "UploadLedger"]
