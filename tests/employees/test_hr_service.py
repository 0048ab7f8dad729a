from datetime import date

import pytest

from src.field_service.field_service.core.enums import (
    DisciplinaryStatus,
    EmployeeStatus,
    RequestStatus,
    TimeOffType,
)
from src.field_service.field_service.core.exceptions import ValidationError
from src.field_service.field_service.employees.model import Employee, TimeOffRequest
from src.field_service.field_service.employees.service import (
    HrService,
    department_distribution,
    filter_employees,
    hr_stats,
    time_off_days,
)


def _employee(employee_id, first, department, status=EmployeeStatus.ACTIVE, position="Technician"):
    return Employee(
        employee_id=employee_id,
        first_name=first,
        last_name="Smith",
        email=f"{first.lower()}@example.com",
        position=position,
        department=department,
        hire_date=date(2024, 1, 1),
        status=status,
    )


def _request(request_id, status=RequestStatus.PENDING):
    return TimeOffRequest(
        request_id=request_id,
        employee_id=1,
        employee_name="Ana Smith",
        type=TimeOffType.VACATION,
        start_date=date(2025, 2, 3),
        end_date=date(2025, 2, 5),
        days=3,
        status=status,
    )


class InMemoryRecords:
    def __init__(self, time_off=()):
        self.time_off = list(time_off)
        self.created = []
        self.decisions = []
        self.status_updates = []

    def list_time_off(self):
        return self.time_off

    def create_time_off(self, *, payload):
        self.created.append(payload)

    def decide_time_off(self, *, request_id, status):
        self.decisions.append((request_id, status))

    def create_review(self, *, payload):
        self.created.append(payload)

    def create_disciplinary(self, *, payload):
        self.created.append(payload)

    def update_disciplinary_status(self, *, action_id, status, notes):
        self.status_updates.append((action_id, status, notes))


EMPLOYEES = [
    _employee(1, "Ana", "Field Ops"),
    _employee(2, "Bo", "Field Ops", status=EmployeeStatus.ON_LEAVE),
    _employee(3, "Cy", "Office", position="Dispatcher"),
    _employee(4, "Di", "Field Ops", status=EmployeeStatus.INACTIVE),
]


def test_filter_by_search_department_and_status():
    assert [e.employee_id for e in filter_employees(EMPLOYEES, search="dispatch")] == [3]
    assert [e.employee_id for e in filter_employees(EMPLOYEES, department="Field Ops")] == [1, 2, 4]
    assert [e.employee_id for e in filter_employees(EMPLOYEES, status="on_leave")] == [2]
    assert len(filter_employees(EMPLOYEES)) == 4


def test_stats_and_department_distribution():
    stats = hr_stats(EMPLOYEES, [_request(1), _request(2, RequestStatus.APPROVED)], [])

    assert stats == {
        "total_employees": 4,
        "active_employees": 2,
        "on_leave": 1,
        "pending_time_off": 1,
        "active_disciplinary": 0,
    }
    assert department_distribution(EMPLOYEES) == [
        {"department": "Field Ops", "count": 3, "percentage": 75.0},
        {"department": "Office", "count": 1, "percentage": 25.0},
    ]


def test_time_off_days_is_inclusive():
    assert time_off_days(date(2025, 2, 3), date(2025, 2, 5)) == 3
    with pytest.raises(ValidationError):
        time_off_days(date(2025, 2, 5), date(2025, 2, 3))


def test_submit_time_off_sends_day_count():
    records = InMemoryRecords()
    days = HrService(None, records).submit_time_off(
        {"employee_id": "1", "type": "sick", "start_date": "2025-02-03", "end_date": "2025-02-03"}
    )

    assert days == 1
    assert records.created[0]["days"] == 1
    assert records.created[0]["type"] == "sick"


def test_only_pending_requests_can_be_decided():
    records = InMemoryRecords([_request(1), _request(2, RequestStatus.APPROVED)])
    svc = HrService(None, records)

    svc.decide_time_off(1, "approved")
    assert records.decisions == [(1, RequestStatus.APPROVED)]

    with pytest.raises(ValidationError, match="already been processed"):
        svc.decide_time_off(2, "rejected")
    with pytest.raises(ValidationError, match="not found"):
        svc.decide_time_off(9, "approved")
    with pytest.raises(ValidationError, match="Status is invalid"):
        svc.decide_time_off(1, "pending")


def test_review_rating_must_be_one_to_five():
    svc = HrService(None, InMemoryRecords())
    form = {"employee_id": "1", "review_period": "Q1 2025", "feedback": "Good", "overall_rating": "6"}

    with pytest.raises(ValidationError, match="between 1 and 5"):
        svc.create_review(form)


def test_disciplinary_follow_up_needs_date():
    svc = HrService(None, InMemoryRecords())
    form = {
        "employee_id": "1",
        "type": "verbal_warning",
        "description": "Late",
        "incident": "Late to site",
        "action_taken": "Talked",
        "follow_up_required": "on",
    }

    with pytest.raises(ValidationError, match="Follow-up date is required"):
        svc.issue_disciplinary(form)


def test_appeal_requires_notes_and_resolve_does_not():
    records = InMemoryRecords()
    svc = HrService(None, records)

    with pytest.raises(ValidationError, match="Appeal notes is required"):
        svc.appeal_disciplinary(3, "")
    svc.resolve_disciplinary(3)

    assert records.status_updates == [(3, DisciplinaryStatus.RESOLVED, {"resolutionNotes": None})]
