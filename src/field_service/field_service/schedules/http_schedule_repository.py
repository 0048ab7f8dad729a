from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..api.http_repository import HttpRepository, as_decimal, as_enum, as_int
from ..common.datetime_utils import parse_iso_datetime, parse_optional_date
from ..core.enums import Priority, ScheduleStatus
from .model import Schedule
from .repository import ScheduleRepository

SCHEDULES_KEY = "/api/schedules"
MY_SCHEDULE_KEY = "/api/my-schedule"
_INVALIDATE = [(SCHEDULES_KEY,), (MY_SCHEDULE_KEY,)]

logger = logging.getLogger(__name__)


def _user_name(r: dict) -> Optional[str]:
    if r.get("userName"):
        return str(r["userName"])
    parts = [r.get("userFirstName"), r.get("userLastName")]
    name = " ".join(p for p in parts if p)
    return name or None


def _row_to_schedule(r: dict) -> Schedule:
    return Schedule(
        schedule_id=int(r["id"]),
        title=str(r.get("title") or ""),
        start_date=parse_optional_date(r.get("startDate")),
        start_time=str(r.get("startTime") or "")[:5],
        end_time=str(r.get("endTime") or "")[:5],
        status=as_enum(ScheduleStatus, r.get("status"), ScheduleStatus.SCHEDULED),
        priority=as_enum(Priority, r.get("priority"), Priority.MEDIUM),
        user_id=as_int(r.get("userId")) or 0,
        description=r.get("description"),
        end_date=parse_optional_date(r.get("endDate")),
        location=r.get("location"),
        address=r.get("address"),
        color=r.get("color"),
        notes=r.get("notes"),
        clock_in_time=parse_iso_datetime(r.get("clockInTime")),
        clock_out_time=parse_iso_datetime(r.get("clockOutTime")),
        actual_hours=as_decimal(r.get("actualHours")),
        user_name=_user_name(r),
    )


def _rows_to_schedules(rows) -> list[Schedule]:
    out = []
    for r in rows:
        s = _row_to_schedule(r)
        if s.start_date is None:
            logger.warning("skipping schedule %s without start date", s.schedule_id)
            continue
        out.append(s)
    return out


class HttpScheduleRepository(HttpRepository, ScheduleRepository):
    def list_month(self, *, month: int, year: int) -> Sequence[Schedule]:
        params = {"month": f"{int(month):02d}", "year": str(int(year))}
        return _rows_to_schedules(self._query_list(SCHEDULES_KEY, params=params))

    def list_mine(self) -> Sequence[Schedule]:
        return _rows_to_schedules(self._query_list(MY_SCHEDULE_KEY))

    def create(self, *, payload: dict) -> Optional[int]:
        created = self._mutate("POST", SCHEDULES_KEY, payload, invalidate=_INVALIDATE)
        if isinstance(created, dict) and created.get("id") is not None:
            return int(created["id"])
        return None

    def update(self, *, schedule_id: int, payload: dict) -> None:
        self._mutate("PUT", f"{SCHEDULES_KEY}/{int(schedule_id)}", payload, invalidate=_INVALIDATE)

    def delete(self, *, schedule_id: int) -> None:
        self._mutate("DELETE", f"{SCHEDULES_KEY}/{int(schedule_id)}", invalidate=_INVALIDATE)

    def clock_in(self, *, schedule_id: int) -> None:
        self._mutate("POST", f"{SCHEDULES_KEY}/{int(schedule_id)}/clock-in", invalidate=_INVALIDATE)

    def clock_out(self, *, schedule_id: int) -> None:
        self._mutate("POST", f"{SCHEDULES_KEY}/{int(schedule_id)}/clock-out", invalidate=_INVALIDATE)
