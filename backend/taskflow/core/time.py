"""Time helpers shared by models, services, and stores.

Timestamps are naive UTC everywhere so values round-trip identically through
JSON documents, SQLite, and PostgreSQL `timestamp` columns.
"""

from __future__ import annotations

from datetime import UTC, date, datetime


def utcnow() -> datetime:
    """Return the current UTC timestamp without tzinfo."""
    return datetime.now(UTC).replace(tzinfo=None)


def utc_today() -> date:
    """Return today's calendar date in UTC."""
    return utcnow().date()


def as_naive_utc(value: datetime) -> datetime:
    """Convert an aware timestamp to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
