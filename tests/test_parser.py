"""Tests for extracting message dates from raw RFC822 payloads."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

from eml_importer.ingestion import MessageDateParser

FIXTURE_PATH = Path(__file__).parent / "fixtures" / "sample_email.eml"


def test_extract_date_reads_date_header() -> None:
    payload = FIXTURE_PATH.read_bytes()

    value = MessageDateParser().extract_date(payload)

    assert value == datetime(
        2025, 10, 24, 15, 0, tzinfo=timezone(timedelta(hours=2))
    )


def test_missing_date_header_returns_none() -> None:
    payload = b"Subject: no date\r\n\r\nBody\r\n"

    assert MessageDateParser().extract_date(payload) is None


def test_unparseable_date_returns_none() -> None:
    payload = b"Subject: bad\r\nDate: sometime last week\r\n\r\nBody\r\n"

    assert MessageDateParser().extract_date(payload) is None


def test_naive_date_is_treated_as_utc() -> None:
    payload = b"Date: Fri, 24 Oct 2025 15:00:00 -0000\r\n\r\nBody\r\n"

    value = MessageDateParser().extract_date(payload)

    assert value is not None
    assert value.tzinfo is not None
    assert value.utcoffset() == timedelta(0)
