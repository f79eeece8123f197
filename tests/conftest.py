"""Shared fixtures and fakes for importer tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from eml_importer.core.config import AppSettings
from eml_importer.transport import AppendRejectedError, ImapConnectionError


class FakeSession:
    """In-memory mailbox session recording appended messages."""

    def __init__(
        self,
        mailbox: str = "Imported",
        *,
        reject: set[bytes] | None = None,
        drop_after: int | None = None,
    ) -> None:
        self.mailbox = mailbox
        self.appended: list[tuple[bytes, datetime | None]] = []
        self.noops = 0
        self.closed = 0
        self._reject = reject or set()
        self._drop_after = drop_after

    def append(self, payload: bytes, *, internal_date: datetime | None = None) -> None:
        if self._drop_after is not None and len(self.appended) >= self._drop_after:
            raise ImapConnectionError("Connection lost during APPEND")
        if payload in self._reject:
            raise AppendRejectedError("APPEND rejected: [ALERT] message too large")
        self.appended.append((payload, internal_date))

    def noop(self) -> None:
        self.noops += 1

    def close(self) -> None:
        self.closed += 1


def write_message(directory: Path, name: str, subject: str = "Hello") -> Path:
    """Write a small RFC822 message into ``directory``."""
    path = directory / name
    path.write_bytes(
        (
            "From: sender@example.com\r\n"
            f"Subject: {subject}\r\n"
            "Date: Fri, 24 Oct 2025 15:00:00 +0000\r\n"
            "\r\n"
            "Body.\r\n"
        ).encode()
    )
    return path


@pytest.fixture()
def source_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "eml"
    directory.mkdir()
    return directory


@pytest.fixture()
def settings(tmp_path: Path, source_dir: Path) -> AppSettings:
    """Settings pointing at temporary source and ledger paths."""
    return AppSettings.model_validate(
        {
            "imap": {"username": "user", "app_password": "secret"},
            "source": {"directory": source_dir},
            "storage": {"ledger_path": tmp_path / "processed_eml.txt"},
            "logging": {"file": None},
            "retry": {"max_attempts": 3, "delay_seconds": 5.0},
        }
    )
