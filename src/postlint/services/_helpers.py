"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, date, datetime


def today() -> date:
    """Today's UTC calendar date."""
    return datetime.now(UTC).date()


def iso_or_none(value: date | None) -> str | None:
    """``YYYY-MM-DD`` for a date, None otherwise."""
    return value.isoformat() if value is not None else None
