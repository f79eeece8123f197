"""Core domain models used across the application."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class UploadStatus(str, Enum):
    """Terminal state of a single file within a run."""

    UPLOADED = "uploaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class SourceFile:
    """A message file on disk, identified by its file name."""

    filename: str
    path: Path


@dataclass(slots=True, frozen=True)
class UploadOutcome:
    """Result of attempting to upload one source file."""

    filename: str
    status: UploadStatus
    reason: str | None = None

    @property
    def succeeded(self) -> bool:
        """Whether the file is now present in the remote mailbox."""
        return self.status is not UploadStatus.FAILED


@dataclass(slots=True)
class RunStats:
    """Counters accumulated over one run; skipped files count as successes."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0

    def record(self, outcome: UploadOutcome) -> None:
        """Account for a per-file outcome."""
        self.total += 1
        if outcome.succeeded:
            self.succeeded += 1
        else:
            self.failed += 1
        if outcome.status is UploadStatus.SKIPPED:
            self.skipped += 1


__all__ = ["RunStats", "SourceFile", "UploadOutcome", "UploadStatus"]
