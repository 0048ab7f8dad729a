from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as sent by the backend.

    Accepts a trailing ``Z`` and plain dates. Aware values are converted to
    local naive time so they compare with ``now_local()``.
    """

    if not value:
        return None
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    dt = datetime.fromisoformat(v)
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    """Date part of an ISO date or timestamp, or None."""
    if not value:
        return None
    return parse_iso_datetime(value).date()


def to_iso_utc(d: date) -> str:
    """Midnight UTC of ``d`` in the format the backend stores for date fields."""
    return datetime(d.year, d.month, d.day, tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
