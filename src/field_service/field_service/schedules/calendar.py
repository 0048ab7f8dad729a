"""Calendar grid math for the schedules page.

Weeks start on Sunday. ``anchor`` is the date the user is looking at; the
view mode decides how many days around it are shown.
"""

from __future__ import annotations

import calendar as _calendar
from datetime import date, timedelta
from typing import Iterable, Sequence

from ..core.enums import CalendarView
from .model import Schedule

MONTH_GRID_CELLS = 42


def week_start(d: date) -> date:
    """Sunday on or before ``d``."""
    return d - timedelta(days=(d.weekday() + 1) % 7)


def week_end(d: date) -> date:
    """Saturday on or after ``d``."""
    return week_start(d) + timedelta(days=6)


def month_end(d: date) -> date:
    return d.replace(day=_calendar.monthrange(d.year, d.month)[1])


def add_months(d: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month length."""
    index = d.year * 12 + (d.month - 1) + int(months)
    year, month = divmod(index, 12)
    month += 1
    day = min(d.day, _calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _span(start: date, end: date) -> list[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def view_range(anchor: date, view_mode: CalendarView) -> tuple[date, date]:
    """First and last day shown for ``view_mode``."""

    view_mode = CalendarView(view_mode)
    if view_mode == CalendarView.ONE_WEEK:
        start = week_start(anchor)
        return start, start + timedelta(days=6)
    if view_mode == CalendarView.TWO_WEEKS:
        start = week_start(anchor)
        return start, start + timedelta(days=13)
    if view_mode == CalendarView.ONE_MONTH:
        first = anchor.replace(day=1)
        start = week_start(first)
        end = week_end(month_end(first))
        min_end = start + timedelta(days=MONTH_GRID_CELLS - 1)
        return start, max(end, min_end)

    first = add_months(anchor.replace(day=1), -1)
    last = month_end(add_months(anchor.replace(day=1), 1))
    return week_start(first), week_end(last)


def days_for_view(anchor: date, view_mode: CalendarView) -> list[date]:
    start, end = view_range(anchor, view_mode)
    return _span(start, end)


def weeks(days: Sequence[date]) -> list[list[date]]:
    return [list(days[i:i + 7]) for i in range(0, len(days), 7)]


def navigate(anchor: date, view_mode: CalendarView, direction: int) -> date:
    step = 1 if direction >= 0 else -1
    view_mode = CalendarView(view_mode)
    if view_mode == CalendarView.ONE_WEEK:
        return anchor + timedelta(days=7 * step)
    if view_mode == CalendarView.TWO_WEEKS:
        return anchor + timedelta(days=14 * step)
    if view_mode == CalendarView.ONE_MONTH:
        return add_months(anchor, step)
    return add_months(anchor, 3 * step)


def view_title(anchor: date, view_mode: CalendarView) -> str:
    view_mode = CalendarView(view_mode)
    if view_mode == CalendarView.ONE_MONTH:
        return anchor.strftime("%B %Y")
    if view_mode == CalendarView.THREE_MONTHS:
        first = add_months(anchor, -1)
        last = add_months(anchor, 1)
        if first.year == last.year:
            return f"{first:%B} - {last:%B} {last.year}"
        return f"{first:%B %Y} - {last:%B %Y}"

    start, end = view_range(anchor, view_mode)
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"


def is_current_period(day: date, anchor: date, view_mode: CalendarView) -> bool:
    """Whether ``day`` belongs to the period being viewed (not the padding)."""

    view_mode = CalendarView(view_mode)
    if view_mode == CalendarView.ONE_MONTH:
        return (day.year, day.month) == (anchor.year, anchor.month)
    if view_mode == CalendarView.THREE_MONTHS:
        first = add_months(anchor.replace(day=1), -1)
        last = month_end(add_months(anchor.replace(day=1), 1))
        return first <= day <= last
    start, end = view_range(anchor, view_mode)
    return start <= day <= end


def schedules_for_date(schedules: Iterable[Schedule], day: date) -> list[Schedule]:
    out = [s for s in schedules if s.start_date and s.start_date <= day <= s.last_date]
    out.sort(key=lambda s: s.start_time)
    return out


def months_in_range(start: date, end: date) -> list[tuple[int, int]]:
    """(month, year) pairs touched by [start, end], for month-scoped queries."""
    out = []
    cur = start.replace(day=1)
    while cur <= end:
        out.append((cur.month, cur.year))
        cur = add_months(cur, 1)
    return out
