from __future__ import annotations

from datetime import date, datetime
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.formatting import format_clock_duration
from ..common.validators import optional_text, require_choice, require_non_empty, require_positive_int
from ..core.enums import CalendarView, Priority
from ..core.exceptions import ValidationError
from .calendar import months_in_range, view_range
from .model import Schedule
from .repository import ScheduleRepository


def _parse_hhmm(value: str, field_name: str) -> str:
    try:
        return datetime.strptime(value, "%H:%M").strftime("%H:%M")
    except ValueError:
        raise ValidationError(f"{field_name} is invalid (HH:MM)")


def _parse_day(value: str, field_name: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} is invalid (YYYY-MM-DD)")


def build_schedule_payload(form: Mapping[str, str]) -> dict:
    title = require_non_empty(form.get("title"), "Title")
    start_date = _parse_day(require_non_empty(form.get("start_date"), "Start date"), "Start date")
    start_time = _parse_hhmm(require_non_empty(form.get("start_time"), "Start time"), "Start time")
    end_time = _parse_hhmm(require_non_empty(form.get("end_time"), "End time"), "End time")
    priority = require_choice(form.get("priority") or "medium", Priority, "Priority")
    user_id = require_positive_int(form.get("user_id"), "User")

    end_raw = (form.get("end_date") or "").strip()
    end_date = _parse_day(end_raw, "End date") if end_raw else None
    if end_date and end_date < start_date:
        raise ValidationError("End date cannot be before start date")
    if (end_date is None or end_date == start_date) and end_time <= start_time:
        raise ValidationError("End time must be after start time")

    return {
        "title": title,
        "description": optional_text(form.get("description")) or "",
        "startDate": start_date.isoformat(),
        "endDate": end_date.isoformat() if end_date else "",
        "startTime": start_time,
        "endTime": end_time,
        "location": optional_text(form.get("location")) or "",
        "address": optional_text(form.get("address")) or "",
        "priority": priority.value,
        "color": optional_text(form.get("color")) or "",
        "notes": optional_text(form.get("notes")) or "",
        "userId": user_id,
    }


def schedule_duration(schedule: Schedule, *, now: Optional[datetime] = None) -> str:
    if not schedule.clock_in_time:
        return "-"
    return format_clock_duration(schedule.clock_in_time, schedule.clock_out_time, now=now)


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def list_month(self, *, month: int, year: int) -> Sequence[Schedule]:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month is invalid")
        return self._schedules.list_month(month=int(month), year=int(year))

    def list_for_view(self, *, anchor: date, view_mode: CalendarView) -> list[Schedule]:
        """Schedules for every month the calendar grid touches, de-duplicated."""

        start, end = view_range(anchor, view_mode)
        seen: dict[int, Schedule] = {}
        for month, year in months_in_range(start, end):
            for s in self._schedules.list_month(month=month, year=year):
                if s.start_date is not None:
                    seen.setdefault(s.schedule_id, s)
        return sorted(seen.values(), key=lambda s: (s.start_date, s.start_time))

    def my_schedule(self) -> Sequence[Schedule]:
        return self._schedules.list_mine()

    def create(self, form: Mapping[str, str]) -> Optional[int]:
        return self._schedules.create(payload=build_schedule_payload(form))

    def update(self, schedule_id: int, form: Mapping[str, str]) -> None:
        self._schedules.update(schedule_id=int(schedule_id), payload=build_schedule_payload(form))

    def delete(self, schedule_id: int) -> None:
        self._schedules.delete(schedule_id=int(schedule_id))

    def clock_in(self, schedule_id: int) -> None:
        self._schedules.clock_in(schedule_id=int(schedule_id))

    def clock_out(self, schedule_id: int) -> None:
        self._schedules.clock_out(schedule_id=int(schedule_id))
