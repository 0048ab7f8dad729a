from __future__ import annotations

from abc import ABC, abstractmethod

from .model import TimeClockEntry


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_minutes(self, entry: TimeClockEntry) -> int:
        raise NotImplementedError


class StandardWorkedTimeCalculator(WorkedTimeCalculator):
    """Standard rule: (out - in) - break minutes, not below 0."""

    def worked_minutes(self, entry: TimeClockEntry) -> int:
        if not entry.clock_out_time:
            return 0
        minutes = int((entry.clock_out_time - entry.clock_in_time).total_seconds() // 60)
        minutes -= int(entry.break_minutes or 0)
        return max(minutes, 0)
