from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ClockStatus, Priority, TriggerEvent, TriggerFrequency


@dataclass(frozen=True)
class TimeClockEntry:
    entry_id: int
    clock_in_time: datetime
    clock_out_time: Optional[datetime]
    total_hours: Optional[Decimal]
    break_minutes: int
    status: ClockStatus
    notes: Optional[str] = None
    supervisor_approval: bool = False


@dataclass(frozen=True)
class CurrentEntry:
    entry_id: int
    clock_in_time: datetime
    status: ClockStatus
    break_start: Optional[datetime] = None

    @property
    def on_break(self) -> bool:
        return self.status == ClockStatus.ON_BREAK


@dataclass(frozen=True)
class TimeClockTaskTrigger:
    trigger_id: int
    name: str
    trigger_event: TriggerEvent
    task_title: str
    task_description: Optional[str]
    priority: Priority
    assign_to_user_id: Optional[int]
    frequency: TriggerFrequency
    is_active: bool


@dataclass(frozen=True)
class TimeClockReportRow:
    entry_id: int
    work_date: str
    clock_in: str
    clock_out: str
    break_minutes: int
    worked_minutes: int
    status: str
    notes: str
