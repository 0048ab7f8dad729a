from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import (
    form_flag,
    optional_decimal,
    optional_text,
    require_choice,
    require_non_empty,
    require_positive_int,
)
from ..core.enums import (
    DisciplinaryStatus,
    DisciplinaryType,
    EmployeeStatus,
    RequestStatus,
    ReviewStatus,
    Severity,
    TimeOffType,
)
from ..core.exceptions import ValidationError
from .model import DisciplinaryAction, Department, Employee, PerformanceReview, TimeOffRequest
from .repository import EmployeeRepository, HrRecordRepository


def _required_date(value: Optional[str], field_name: str) -> date:
    v = require_non_empty(value, field_name)
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} is invalid (YYYY-MM-DD)")


def _optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    if not (value or "").strip():
        return None
    return _required_date(value, field_name)


def time_off_days(start: date, end: date) -> int:
    """Inclusive number of calendar days requested."""
    if end < start:
        raise ValidationError("End date cannot be before start date")
    return (end - start).days + 1


def filter_employees(
    employees: Iterable[Employee],
    search: str = "",
    department: str = "all",
    status: str = "all",
) -> list[Employee]:
    q = (search or "").strip().lower()
    out = []
    for e in employees:
        if q and not (q in e.full_name.lower() or q in e.email.lower() or q in e.position.lower()):
            continue
        if department and department != "all" and e.department != department:
            continue
        if status and status != "all" and e.status.value != status:
            continue
        out.append(e)
    return out


def hr_stats(
    employees: Sequence[Employee],
    time_off: Sequence[TimeOffRequest],
    actions: Sequence[DisciplinaryAction],
) -> dict[str, int]:
    return {
        "total_employees": len(employees),
        "active_employees": sum(1 for e in employees if e.status == EmployeeStatus.ACTIVE),
        "on_leave": sum(1 for e in employees if e.status == EmployeeStatus.ON_LEAVE),
        "pending_time_off": sum(1 for r in time_off if r.status == RequestStatus.PENDING),
        "active_disciplinary": sum(1 for a in actions if a.status == DisciplinaryStatus.ACTIVE),
    }


def department_distribution(employees: Sequence[Employee]) -> list[dict]:
    """Headcount and share of total per department, largest first."""

    total = len(employees)
    counts = Counter(e.department or "Unassigned" for e in employees)
    rows = [
        {
            "department": name,
            "count": count,
            "percentage": round(count * 100 / total, 1) if total else 0.0,
        }
        for name, count in counts.items()
    ]
    rows.sort(key=lambda r: (-r["count"], r["department"]))
    return rows


def build_employee_payload(form: Mapping[str, str]) -> dict:
    hire_date = _required_date(form.get("hire_date"), "Hire date")
    salary = optional_decimal(form.get("salary"), "Salary")
    return {
        "firstName": require_non_empty(form.get("first_name"), "First name"),
        "lastName": require_non_empty(form.get("last_name"), "Last name"),
        "email": require_non_empty(form.get("email"), "Email"),
        "phone": optional_text(form.get("phone")),
        "position": require_non_empty(form.get("position"), "Position"),
        "department": require_non_empty(form.get("department"), "Department"),
        "hireDate": hire_date.isoformat(),
        "salary": float(salary) if salary is not None else None,
        "status": require_choice(form.get("status") or "active", EmployeeStatus, "Status").value,
        "manager": optional_text(form.get("manager")),
        "location": optional_text(form.get("location")),
    }


class HrService:
    def __init__(self, employees: EmployeeRepository, records: HrRecordRepository):
        self._employees = employees
        self._records = records

    # ===== EMPLOYEES =====

    def list_employees(self, *, search: str = "", department: str = "all", status: str = "all") -> list[Employee]:
        return filter_employees(self._employees.list_employees(), search, department, status)

    def list_departments(self) -> Sequence[Department]:
        return self._employees.list_departments()

    def create_employee(self, form: Mapping[str, str]) -> None:
        self._employees.create_employee(payload=build_employee_payload(form))

    def update_employee(self, employee_id: int, form: Mapping[str, str]) -> None:
        self._employees.update_employee(employee_id=int(employee_id), payload=build_employee_payload(form))

    def delete_employee(self, employee_id: int) -> None:
        self._employees.delete_employee(employee_id=int(employee_id))

    # ===== TIME OFF =====

    def list_time_off(self) -> Sequence[TimeOffRequest]:
        return self._records.list_time_off()

    def submit_time_off(self, form: Mapping[str, str]) -> int:
        employee_id = require_positive_int(form.get("employee_id"), "Employee")
        kind = require_choice(form.get("type") or "vacation", TimeOffType, "Type")
        start = _required_date(form.get("start_date"), "Start date")
        end = _required_date(form.get("end_date"), "End date")
        days = time_off_days(start, end)
        self._records.create_time_off(
            payload={
                "employeeId": employee_id,
                "type": kind.value,
                "startDate": start.isoformat(),
                "endDate": end.isoformat(),
                "days": days,
                "reason": optional_text(form.get("reason")),
            }
        )
        return days

    def decide_time_off(self, request_id: int, status: str) -> None:
        decision = require_choice(status, RequestStatus, "Status")
        if decision == RequestStatus.PENDING:
            raise ValidationError("Status is invalid")

        req = next((r for r in self._records.list_time_off() if r.request_id == int(request_id)), None)
        if not req:
            raise ValidationError("Time off request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Time off request has already been processed")

        self._records.decide_time_off(request_id=int(request_id), status=decision)

    # ===== PERFORMANCE REVIEWS =====

    def list_reviews(self) -> Sequence[PerformanceReview]:
        return self._records.list_reviews()

    def create_review(self, form: Mapping[str, str]) -> None:
        employee_id = require_positive_int(form.get("employee_id"), "Employee")
        rating = require_positive_int(form.get("overall_rating"), "Overall rating")
        if rating > 5:
            raise ValidationError("Overall rating must be between 1 and 5")
        review_date = _optional_date(form.get("review_date"), "Review date") or now_local().date()
        goals = [g.strip() for g in (form.get("goals") or "").splitlines() if g.strip()]
        self._records.create_review(
            payload={
                "employeeId": employee_id,
                "reviewPeriod": require_non_empty(form.get("review_period"), "Review period"),
                "overallRating": rating,
                "goals": goals,
                "feedback": require_non_empty(form.get("feedback"), "Feedback"),
                "reviewDate": review_date.isoformat(),
                "status": require_choice(form.get("status") or "draft", ReviewStatus, "Status").value,
            }
        )

    # ===== DISCIPLINARY ACTIONS =====

    def list_disciplinary(self) -> Sequence[DisciplinaryAction]:
        return self._records.list_disciplinary()

    def issue_disciplinary(self, form: Mapping[str, str]) -> None:
        follow_up = form_flag(form.get("follow_up_required"))
        follow_up_date = _optional_date(form.get("follow_up_date"), "Follow-up date")
        if follow_up and not follow_up_date:
            raise ValidationError("Follow-up date is required when follow-up is required")

        date_issued = _optional_date(form.get("date_issued"), "Date issued") or now_local().date()
        self._records.create_disciplinary(
            payload={
                "employeeId": require_positive_int(form.get("employee_id"), "Employee"),
                "type": require_choice(form.get("type"), DisciplinaryType, "Type").value,
                "severity": require_choice(form.get("severity") or "low", Severity, "Severity").value,
                "description": require_non_empty(form.get("description"), "Description"),
                "incident": require_non_empty(form.get("incident"), "Incident"),
                "actionTaken": require_non_empty(form.get("action_taken"), "Action taken"),
                "followUpRequired": follow_up,
                "followUpDate": follow_up_date.isoformat() if follow_up_date else None,
                "witnessName": optional_text(form.get("witness_name")),
                "dateIssued": date_issued.isoformat(),
            }
        )

    def resolve_disciplinary(self, action_id: int, notes: str = "") -> None:
        self._records.update_disciplinary_status(
            action_id=int(action_id),
            status=DisciplinaryStatus.RESOLVED,
            notes={"resolutionNotes": optional_text(notes)},
        )

    def appeal_disciplinary(self, action_id: int, notes: str = "") -> None:
        self._records.update_disciplinary_status(
            action_id=int(action_id),
            status=DisciplinaryStatus.APPEALED,
            notes={"appealNotes": require_non_empty(notes, "Appeal notes")},
        )

    # ===== REPORTS =====

    def overview(self) -> dict:
        employees = self._employees.list_employees()
        time_off = self._records.list_time_off()
        actions = self._records.list_disciplinary()
        return {
            "stats": hr_stats(employees, time_off, actions),
            "departments": department_distribution(employees),
        }
