from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import Priority, ScheduleStatus


@dataclass(frozen=True)
class Schedule:
    schedule_id: int
    title: str
    start_date: date
    start_time: str
    end_time: str
    status: ScheduleStatus
    priority: Priority
    user_id: int
    description: Optional[str] = None
    end_date: Optional[date] = None
    location: Optional[str] = None
    address: Optional[str] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    clock_in_time: Optional[datetime] = None
    clock_out_time: Optional[datetime] = None
    actual_hours: Optional[Decimal] = None
    user_name: Optional[str] = None

    @property
    def last_date(self) -> date:
        return self.end_date or self.start_date
