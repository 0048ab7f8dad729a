from __future__ import annotations

from typing import Sequence

from ..api.http_repository import HttpRepository, as_bool, as_decimal, as_enum, as_int
from ..common.datetime_utils import parse_iso_datetime, parse_optional_date
from ..core.enums import (
    DisciplinaryStatus,
    DisciplinaryType,
    EmployeeStatus,
    RequestStatus,
    ReviewStatus,
    Severity,
    TimeOffType,
)
from .model import DisciplinaryAction, Department, Employee, PerformanceReview, TimeOffRequest
from .repository import EmployeeRepository, HrRecordRepository

EMPLOYEES_KEY = "/api/hr/employees"
DEPARTMENTS_KEY = "/api/hr/departments"
TIME_OFF_KEY = "/api/hr/time-off-requests"
REVIEWS_KEY = "/api/hr/performance-reviews"
DISCIPLINARY_KEY = "/api/hr/disciplinary-actions"


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["id"]),
        first_name=str(r.get("firstName") or ""),
        last_name=str(r.get("lastName") or ""),
        email=str(r.get("email") or ""),
        position=str(r.get("position") or ""),
        department=str(r.get("department") or ""),
        hire_date=parse_optional_date(r.get("hireDate")),
        status=as_enum(EmployeeStatus, r.get("status"), EmployeeStatus.ACTIVE),
        phone=r.get("phone"),
        salary=as_decimal(r.get("salary")),
        manager=r.get("manager"),
        location=r.get("location"),
    )


def _row_to_department(r: dict) -> Department:
    return Department(department_id=int(r["id"]), name=str(r.get("name") or ""))


def _row_to_time_off(r: dict) -> TimeOffRequest:
    return TimeOffRequest(
        request_id=int(r["id"]),
        employee_id=as_int(r.get("employeeId")) or 0,
        employee_name=str(r.get("employeeName") or ""),
        type=as_enum(TimeOffType, r.get("type"), TimeOffType.OTHER),
        start_date=parse_optional_date(r.get("startDate")),
        end_date=parse_optional_date(r.get("endDate")),
        days=as_int(r.get("days")) or 0,
        status=as_enum(RequestStatus, r.get("status"), RequestStatus.PENDING),
        reason=r.get("reason"),
        requested_at=parse_iso_datetime(r.get("requestedAt")),
    )


def _row_to_review(r: dict) -> PerformanceReview:
    return PerformanceReview(
        review_id=int(r["id"]),
        employee_id=as_int(r.get("employeeId")) or 0,
        employee_name=str(r.get("employeeName") or ""),
        review_period=str(r.get("reviewPeriod") or ""),
        overall_rating=as_int(r.get("overallRating")) or 0,
        feedback=str(r.get("feedback") or ""),
        review_date=parse_optional_date(r.get("reviewDate")),
        reviewer_name=r.get("reviewerName"),
        status=as_enum(ReviewStatus, r.get("status"), ReviewStatus.DRAFT),
        goals=tuple(str(g) for g in (r.get("goals") or ())),
    )


def _row_to_action(r: dict) -> DisciplinaryAction:
    return DisciplinaryAction(
        action_id=int(r["id"]),
        employee_id=as_int(r.get("employeeId")) or 0,
        employee_name=str(r.get("employeeName") or ""),
        type=as_enum(DisciplinaryType, r.get("type"), DisciplinaryType.COUNSELING),
        severity=as_enum(Severity, r.get("severity"), Severity.LOW),
        description=str(r.get("description") or ""),
        incident=str(r.get("incident") or ""),
        action_taken=str(r.get("actionTaken") or ""),
        follow_up_required=as_bool(r.get("followUpRequired")),
        issued_by=r.get("issuedBy"),
        date_issued=parse_optional_date(r.get("dateIssued")),
        status=as_enum(DisciplinaryStatus, r.get("status"), DisciplinaryStatus.ACTIVE),
        follow_up_date=parse_optional_date(r.get("followUpDate")),
        witness_name=r.get("witnessName"),
        appeal_notes=r.get("appealNotes"),
        resolution_notes=r.get("resolutionNotes"),
    )


class HttpEmployeeRepository(HttpRepository, EmployeeRepository):
    def list_employees(self) -> Sequence[Employee]:
        return [_row_to_employee(r) for r in self._query_list(EMPLOYEES_KEY)]

    def create_employee(self, *, payload: dict) -> None:
        self._mutate("POST", EMPLOYEES_KEY, payload, invalidate=[(EMPLOYEES_KEY,)])

    def update_employee(self, *, employee_id: int, payload: dict) -> None:
        self._mutate("PUT", f"{EMPLOYEES_KEY}/{int(employee_id)}", payload, invalidate=[(EMPLOYEES_KEY,)])

    def delete_employee(self, *, employee_id: int) -> None:
        self._mutate("DELETE", f"{EMPLOYEES_KEY}/{int(employee_id)}", invalidate=[(EMPLOYEES_KEY,)])

    def list_departments(self) -> Sequence[Department]:
        return [_row_to_department(r) for r in self._query_list(DEPARTMENTS_KEY)]


class HttpHrRecordRepository(HttpRepository, HrRecordRepository):
    def list_time_off(self) -> Sequence[TimeOffRequest]:
        return [_row_to_time_off(r) for r in self._query_list(TIME_OFF_KEY)]

    def create_time_off(self, *, payload: dict) -> None:
        self._mutate("POST", TIME_OFF_KEY, payload, invalidate=[(TIME_OFF_KEY,)])

    def decide_time_off(self, *, request_id: int, status: RequestStatus) -> None:
        self._mutate(
            "PATCH",
            f"{TIME_OFF_KEY}/{int(request_id)}",
            {"status": status.value},
            invalidate=[(TIME_OFF_KEY,)],
        )

    def list_reviews(self) -> Sequence[PerformanceReview]:
        return [_row_to_review(r) for r in self._query_list(REVIEWS_KEY)]

    def create_review(self, *, payload: dict) -> None:
        self._mutate("POST", REVIEWS_KEY, payload, invalidate=[(REVIEWS_KEY,)])

    def list_disciplinary(self) -> Sequence[DisciplinaryAction]:
        return [_row_to_action(r) for r in self._query_list(DISCIPLINARY_KEY)]

    def create_disciplinary(self, *, payload: dict) -> None:
        self._mutate("POST", DISCIPLINARY_KEY, payload, invalidate=[(DISCIPLINARY_KEY,)])

    def update_disciplinary_status(self, *, action_id: int, status: DisciplinaryStatus, notes: dict) -> None:
        body = {"status": status.value}
        body.update(notes or {})
        self._mutate("PATCH", f"{DISCIPLINARY_KEY}/{int(action_id)}", body, invalidate=[(DISCIPLINARY_KEY,)])
