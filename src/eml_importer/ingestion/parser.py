"""Utilities for reading header data out of raw RFC822 messages."""

from __future__ import annotations

from datetime import datetime
from email import policy
from email.parser import BytesParser
from email.utils import parsedate_to_datetime

from ..core.datetime_utils import ensure_aware


class MessageDateParser:
    """Extract the ``Date`` header of a raw message as a datetime."""

    def __init__(self) -> None:
        """Prepare internal parser instance."""
        self._parser = BytesParser(policy=policy.compat32)

    def extract_date(self, payload: bytes) -> datetime | None:
        """Return the message date, or ``None`` when absent or unparseable."""
        headers = self._parser.parsebytes(payload, headersonly=True)
        return _try_parse_datetime(headers.get("Date"))


def _try_parse_datetime(header_value: object) -> datetime | None:
    if header_value is None:
        return None
    try:
        return ensure_aware(parsedate_to_datetime(str(header_value)))
    except (TypeError, ValueError, IndexError):
        return None


__all__ = ["MessageDateParser"]
