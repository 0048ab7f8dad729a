"""Display helpers shared by the pages.

These are the small derivations every page needs (phone numbers, elapsed
time, hour totals). They are pure so they can be tested without Flask.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from .datetime_utils import now_local

_NON_DIGITS = re.compile(r"\D")


def format_phone_number(phone: str) -> str:
    cleaned = _NON_DIGITS.sub("", phone or "")
    if len(cleaned) == 10:
        return f"({cleaned[:3]}) {cleaned[3:6]}-{cleaned[6:]}"
    return phone


def format_call_duration(seconds: int) -> str:
    seconds = max(int(seconds or 0), 0)
    return f"{seconds // 60}:{seconds % 60:02d}"


def elapsed_seconds(start: datetime, end: Optional[datetime] = None, *, now: Optional[datetime] = None) -> int:
    end = end or now or now_local()
    return max(int((end - start).total_seconds()), 0)


def format_clock_duration(start: datetime, end: Optional[datetime] = None, *, now: Optional[datetime] = None) -> str:
    """Running clock for a session: ``M:SS`` under an hour, ``H:MM:SS`` after."""
    total = elapsed_seconds(start, end, now=now)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_hours_minutes(start: datetime, end: Optional[datetime] = None, *, now: Optional[datetime] = None) -> str:
    total = elapsed_seconds(start, end, now=now)
    return f"{total // 3600}h {(total % 3600) // 60}m"


def format_minutes_hhmm(minutes: int) -> str:
    minutes = max(int(minutes), 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_money(amount) -> str:
    return f"${float(amount or 0):,.2f}"
