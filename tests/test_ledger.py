"""Tests for the append-only upload ledger."""

from __future__ import annotations

from pathlib import Path

import pytest

from eml_importer.storage import FileLedger


def test_missing_file_loads_as_empty(tmp_path: Path) -> None:
    ledger = FileLedger(tmp_path / "processed_eml.txt")

    assert ledger.load() == set()
    assert not ledger.contains("a.eml")


def test_load_discards_blank_lines_and_duplicates(tmp_path: Path) -> None:
    path = tmp_path / "processed_eml.txt"
    path.write_text("a.eml\n\nb.eml\na.eml\n", encoding="utf-8")

    ledger = FileLedger(path)

    assert ledger.load() == {"a.eml", "b.eml"}
    assert len(ledger) == 2


def test_record_appends_and_survives_reload(tmp_path: Path) -> None:
    path = tmp_path / "state" / "processed_eml.txt"
    ledger = FileLedger(path)
    ledger.load()

    ledger.record("a.eml")
    ledger.record("a.eml")
    ledger.record("b.eml")

    assert ledger.contains("a.eml")
    assert path.read_text(encoding="utf-8") == "a.eml\na.eml\nb.eml\n"
    assert FileLedger(path).load() == {"a.eml", "b.eml"}


def test_unreadable_ledger_degrades_to_empty(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "processed_eml.txt"
    path.mkdir()

    ledger = FileLedger(path)

    assert ledger.load() == set()
    assert "Error reading processed files" in caplog.text


def test_append_failure_is_logged_not_raised(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    ledger = FileLedger(blocker / "processed_eml.txt")

    ledger.record("a.eml")

    assert not ledger.contains("a.eml")
    assert "Error appending a.eml" in caplog.text


def test_record_before_load_reads_existing_entries(tmp_path: Path) -> None:
    path = tmp_path / "processed_eml.txt"
    path.write_text("a.eml\n", encoding="utf-8")
    ledger = FileLedger(path)

    ledger.record("b.eml")

    assert ledger.contains("a.eml")
    assert ledger.contains("b.eml")
    assert len(ledger) == 2


def test_record_on_empty_ledger_is_remembered(tmp_path: Path) -> None:
    ledger = FileLedger(tmp_path / "processed_eml.txt")

    assert len(ledger) == 0
    ledger.record("a.eml")

    assert ledger.contains("a.eml")
    assert len(ledger) == 1
