from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CurrentEntry, TimeClockEntry, TimeClockTaskTrigger


class TimeClockRepository(Protocol):
    def get_current(self) -> Optional[CurrentEntry]:
        """Open entry of the current user, or None when clocked out."""

        raise NotImplementedError

    def list_entries(self) -> Sequence[TimeClockEntry]:
        raise NotImplementedError

    def clock_in(self, *, location: str = "") -> None:
        raise NotImplementedError

    def clock_out(self, *, notes: str = "") -> None:
        raise NotImplementedError

    def start_break(self) -> None:
        raise NotImplementedError

    def end_break(self) -> None:
        raise NotImplementedError


class TaskTriggerRepository(Protocol):
    def list_triggers(self) -> Sequence[TimeClockTaskTrigger]:
        raise NotImplementedError

    def create_trigger(self, *, payload: dict) -> None:
        raise NotImplementedError

    def update_trigger(self, *, trigger_id: int, payload: dict) -> None:
        raise NotImplementedError

    def delete_trigger(self, *, trigger_id: int) -> None:
        raise NotImplementedError
