from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def list_month(self, *, month: int, year: int) -> Sequence[Schedule]:
        raise NotImplementedError

    def list_mine(self) -> Sequence[Schedule]:
        raise NotImplementedError

    def create(self, *, payload: dict) -> Optional[int]:
        raise NotImplementedError

    def update(self, *, schedule_id: int, payload: dict) -> None:
        raise NotImplementedError

    def delete(self, *, schedule_id: int) -> None:
        raise NotImplementedError

    def clock_in(self, *, schedule_id: int) -> None:
        raise NotImplementedError

    def clock_out(self, *, schedule_id: int) -> None:
        raise NotImplementedError
