"""Append-only text file recording which source files were uploaded."""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.interfaces import UploadLedger

LOGGER = logging.getLogger(__name__)


class FileLedger(UploadLedger):
    """Track uploaded file names, one per line, in a UTF-8 text file.

    Entries are only ever appended. Duplicate lines are harmless because
    membership is checked against the set built by :meth:`load`.
    """

    def __init__(self, path: Path | str) -> None:
        """Bind the ledger to ``path``; nothing is read until :meth:`load`."""
        self.path = Path(path)
        self._entries: set[str] | None = None

    def load(self) -> set[str]:
        """Read the ledger from disk, degrading to an empty set on failure."""
        self._entries = self._read()
        LOGGER.debug(
            "Loaded %s processed file name(s) from %s", len(self._entries), self.path
        )
        return set(self._entries)

    def contains(self, filename: str) -> bool:
        """Return ``True`` if ``filename`` has been recorded."""
        return filename in self._ensure_loaded()

    def record(self, filename: str) -> None:
        """Append ``filename``; failures are logged and not raised."""
        entries = self._ensure_loaded()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(f"{filename}\n")
        except OSError as exc:
            LOGGER.error("Error appending %s to %s: %s", filename, self.path, exc)
            return
        entries.add(filename)

    def __len__(self) -> int:
        return len(self._ensure_loaded())

    def _ensure_loaded(self) -> set[str]:
        if self._entries is None:
            self._entries = self._read()
        return self._entries

    def _read(self) -> set[str]:
        try:
            if not self.path.exists():
                return set()
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.error("Error reading processed files from %s: %s", self.path, exc)
            return set()
        return {line for line in content.split("\n") if line}


__all__ = ["FileLedger"]
