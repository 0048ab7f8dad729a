from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..api.http_repository import HttpRepository, as_bool, as_decimal, as_enum, as_int
from ..common.datetime_utils import parse_iso_datetime
from ..core.constants import TIME_CLOCK_POLL_SECONDS
from ..core.enums import ClockStatus, Priority, TriggerEvent, TriggerFrequency
from .model import CurrentEntry, TimeClockEntry, TimeClockTaskTrigger
from .repository import TaskTriggerRepository, TimeClockRepository

CURRENT_KEY = "/api/time-clock/current"
ENTRIES_KEY = "/api/time-clock/entries"
TRIGGERS_KEY = "/api/time-clock/task-triggers"

logger = logging.getLogger(__name__)


def _row_to_entry(r: dict) -> TimeClockEntry:
    return TimeClockEntry(
        entry_id=int(r["id"]),
        clock_in_time=parse_iso_datetime(r.get("clockInTime")),
        clock_out_time=parse_iso_datetime(r.get("clockOutTime")),
        total_hours=as_decimal(r.get("totalHours")),
        break_minutes=int(as_decimal(r.get("breakDuration")) or 0),
        status=as_enum(ClockStatus, r.get("status"), ClockStatus.CLOCKED_OUT),
        notes=r.get("notes"),
        supervisor_approval=as_bool(r.get("supervisorApproval")),
    )


def _row_to_current(r: dict) -> CurrentEntry:
    return CurrentEntry(
        entry_id=int(r["id"]),
        clock_in_time=parse_iso_datetime(r.get("clockInTime")),
        status=as_enum(ClockStatus, r.get("status"), ClockStatus.CLOCKED_IN),
        break_start=parse_iso_datetime(r.get("breakStart")),
    )


def _row_to_trigger(r: dict) -> TimeClockTaskTrigger:
    return TimeClockTaskTrigger(
        trigger_id=int(r["id"]),
        name=str(r.get("name") or ""),
        trigger_event=as_enum(TriggerEvent, r.get("triggerEvent"), TriggerEvent.CLOCK_IN),
        task_title=str(r.get("taskTitle") or ""),
        task_description=r.get("taskDescription"),
        priority=as_enum(Priority, r.get("priority"), Priority.MEDIUM),
        assign_to_user_id=as_int(r.get("assignToUserId")),
        frequency=as_enum(TriggerFrequency, r.get("frequency"), TriggerFrequency.EVERY_TIME),
        is_active=as_bool(r.get("isActive")),
    )


class HttpTimeClockRepository(HttpRepository, TimeClockRepository):
    def get_current(self) -> Optional[CurrentEntry]:
        r = self._query(CURRENT_KEY, refetch_interval=TIME_CLOCK_POLL_SECONDS)
        if not r or not isinstance(r, dict) or r.get("id") is None:
            return None
        return _row_to_current(r)

    def list_entries(self) -> Sequence[TimeClockEntry]:
        out = []
        for r in self._query_list(ENTRIES_KEY):
            e = _row_to_entry(r)
            if e.clock_in_time is None:
                logger.warning("skipping time clock entry %s without clock-in time", e.entry_id)
                continue
            out.append(e)
        return out

    def clock_in(self, *, location: str = "") -> None:
        self._mutate(
            "POST",
            "/api/time-clock/clock-in",
            {"location": location},
            invalidate=[(CURRENT_KEY,), (ENTRIES_KEY,)],
        )

    def clock_out(self, *, notes: str = "") -> None:
        self._mutate(
            "POST",
            "/api/time-clock/clock-out",
            {"notes": notes},
            invalidate=[(CURRENT_KEY,), (ENTRIES_KEY,)],
        )

    def start_break(self) -> None:
        self._mutate("POST", "/api/time-clock/start-break", invalidate=[(CURRENT_KEY,)])

    def end_break(self) -> None:
        self._mutate("POST", "/api/time-clock/end-break", invalidate=[(CURRENT_KEY,)])


class HttpTaskTriggerRepository(HttpRepository, TaskTriggerRepository):
    def list_triggers(self) -> Sequence[TimeClockTaskTrigger]:
        return [_row_to_trigger(r) for r in self._query_list(TRIGGERS_KEY)]

    def create_trigger(self, *, payload: dict) -> None:
        self._mutate("POST", TRIGGERS_KEY, payload, invalidate=[(TRIGGERS_KEY,)])

    def update_trigger(self, *, trigger_id: int, payload: dict) -> None:
        self._mutate("PUT", f"{TRIGGERS_KEY}/{int(trigger_id)}", payload, invalidate=[(TRIGGERS_KEY,)])

    def delete_trigger(self, *, trigger_id: int) -> None:
        self._mutate("DELETE", f"{TRIGGERS_KEY}/{int(trigger_id)}", invalidate=[(TRIGGERS_KEY,)])
