"""Datetime helpers shared across the application."""

from __future__ import annotations

from datetime import UTC, datetime

__all__ = ["ensure_aware"]


def ensure_aware(value: datetime | None) -> datetime | None:
    """Return ``value`` with naive datetimes interpreted as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
