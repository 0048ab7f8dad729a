from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import (
    DisciplinaryStatus,
    DisciplinaryType,
    EmployeeStatus,
    RequestStatus,
    ReviewStatus,
    Severity,
    TimeOffType,
)


@dataclass(frozen=True)
class Employee:
    employee_id: int
    first_name: str
    last_name: str
    email: str
    position: str
    department: str
    hire_date: Optional[date]
    status: EmployeeStatus
    phone: Optional[str] = None
    salary: Optional[Decimal] = None
    manager: Optional[str] = None
    location: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Department:
    department_id: int
    name: str


@dataclass(frozen=True)
class TimeOffRequest:
    request_id: int
    employee_id: int
    employee_name: str
    type: TimeOffType
    start_date: date
    end_date: date
    days: int
    status: RequestStatus
    reason: Optional[str] = None
    requested_at: Optional[datetime] = None


@dataclass(frozen=True)
class PerformanceReview:
    review_id: int
    employee_id: int
    employee_name: str
    review_period: str
    overall_rating: int
    feedback: str
    review_date: Optional[date]
    reviewer_name: Optional[str]
    status: ReviewStatus
    goals: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DisciplinaryAction:
    action_id: int
    employee_id: int
    employee_name: str
    type: DisciplinaryType
    severity: Severity
    description: str
    incident: str
    action_taken: str
    follow_up_required: bool
    issued_by: Optional[str]
    date_issued: Optional[date]
    status: DisciplinaryStatus
    follow_up_date: Optional[date] = None
    witness_name: Optional[str] = None
    appeal_notes: Optional[str] = None
    resolution_notes: Optional[str] = None
