from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import DisciplinaryStatus, RequestStatus
from .model import DisciplinaryAction, Department, Employee, PerformanceReview, TimeOffRequest


class EmployeeRepository(Protocol):
    def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create_employee(self, *, payload: dict) -> None:
        raise NotImplementedError

    def update_employee(self, *, employee_id: int, payload: dict) -> None:
        raise NotImplementedError

    def delete_employee(self, *, employee_id: int) -> None:
        raise NotImplementedError

    def list_departments(self) -> Sequence[Department]:
        raise NotImplementedError


class HrRecordRepository(Protocol):
    # Time off
    def list_time_off(self) -> Sequence[TimeOffRequest]:
        raise NotImplementedError

    def create_time_off(self, *, payload: dict) -> None:
        raise NotImplementedError

    def decide_time_off(self, *, request_id: int, status: RequestStatus) -> None:
        raise NotImplementedError

    # Performance reviews
    def list_reviews(self) -> Sequence[PerformanceReview]:
        raise NotImplementedError

    def create_review(self, *, payload: dict) -> None:
        raise NotImplementedError

    # Disciplinary actions
    def list_disciplinary(self) -> Sequence[DisciplinaryAction]:
        raise NotImplementedError

    def create_disciplinary(self, *, payload: dict) -> None:
        raise NotImplementedError

    def update_disciplinary_status(self, *, action_id: int, status: DisciplinaryStatus, notes: dict) -> None:
        raise NotImplementedError
