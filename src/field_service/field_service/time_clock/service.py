from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.formatting import format_clock_duration, format_hours_minutes
from ..core.enums import ClockStatus
from ..core.exceptions import ValidationError
from .model import CurrentEntry, TimeClockEntry
from .repository import TimeClockRepository

STATUS_LABELS = {
    ClockStatus.CLOCKED_IN: "Clocked In",
    ClockStatus.ON_BREAK: "On Break",
    ClockStatus.CLOCKED_OUT: "Clocked Out",
}


def status_label(status: ClockStatus) -> str:
    return STATUS_LABELS.get(status, str(getattr(status, "value", status)))


def elapsed(current: Optional[CurrentEntry], *, now: Optional[datetime] = None) -> str:
    if current is None:
        return "0:00"
    return format_clock_duration(current.clock_in_time, now=now)


def entry_duration(entry: TimeClockEntry, *, now: Optional[datetime] = None) -> str:
    return format_hours_minutes(entry.clock_in_time, entry.clock_out_time, now=now)


class TimeClockService:
    def __init__(self, time_clock: TimeClockRepository):
        self._time_clock = time_clock

    def current(self) -> Optional[CurrentEntry]:
        return self._time_clock.get_current()

    def entries(self) -> Sequence[TimeClockEntry]:
        return self._time_clock.list_entries()

    def clock_in(self) -> None:
        if self.current() is not None:
            raise ValidationError("You are already clocked in")
        # Location capture is not supported; the backend accepts an empty string.
        self._time_clock.clock_in(location="")

    def clock_out(self, notes: str = "") -> None:
        if self.current() is None:
            raise ValidationError("You are not clocked in")
        self._time_clock.clock_out(notes=(notes or "").strip())

    def start_break(self) -> None:
        cur = self.current()
        if cur is None:
            raise ValidationError("You are not clocked in")
        if cur.on_break:
            raise ValidationError("You are already on break")
        self._time_clock.start_break()

    def end_break(self) -> None:
        cur = self.current()
        if cur is None or not cur.on_break:
            raise ValidationError("You are not on break")
        self._time_clock.end_break()
