from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.enums import DisciplinaryType, EmployeeStatus, ReviewStatus, Severity, TimeOffType
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)

HR_TABS = ("employees", "time-off", "reviews", "disciplinary", "reports")


def register(app: Flask, container: Container) -> None:
    service = container.hr_service

    def _mutate(action, *, ok: str, fallback: str, tab: str):
        try:
            action()
            flash(ok, "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or fallback, "danger")
        except Exception:
            logger.exception("hr action failed: %s", fallback)
            flash(fallback, "danger")
        return redirect(url_for("hr", tab=tab))

    @app.route("/hr", methods=["GET"], endpoint="hr")
    def hr():
        tab = request.args.get("tab", "employees")
        if tab not in HR_TABS:
            tab = "employees"
        search = request.args.get("q", "")
        department = request.args.get("department", "all")
        status = request.args.get("status", "all")
        edit_id = request.args.get("edit", type=int)

        ctx = {"employees": [], "departments": [], "time_off": [], "reviews": [], "actions": [], "overview": None}
        try:
            ctx["employees"] = service.list_employees(search=search, department=department, status=status)
            ctx["departments"] = service.list_departments()
            if tab == "time-off":
                ctx["time_off"] = service.list_time_off()
            elif tab == "reviews":
                ctx["reviews"] = service.list_reviews()
            elif tab == "disciplinary":
                ctx["actions"] = service.list_disciplinary()
            elif tab == "reports":
                ctx["overview"] = service.overview()
        except ApiError as e:
            flash(str(e) or "Failed to load HR data", "danger")

        editing = next((e for e in ctx["employees"] if e.employee_id == edit_id), None) if edit_id else None
        return render_template(
            "hr/index.html",
            tab=tab,
            tabs=HR_TABS,
            search=search,
            department=department,
            status=status,
            editing=editing,
            employee_statuses=list(EmployeeStatus),
            time_off_types=list(TimeOffType),
            review_statuses=list(ReviewStatus),
            disciplinary_types=list(DisciplinaryType),
            severities=list(Severity),
            active_page="hr",
            **ctx,
        )

    @app.route("/hr/employees/new", methods=["POST"], endpoint="create_employee")
    def create_employee():
        return _mutate(lambda: service.create_employee(request.form),
                       ok="Employee created successfully", fallback="Failed to create employee", tab="employees")

    @app.route("/hr/employees/<int:employee_id>/edit", methods=["POST"], endpoint="update_employee")
    def update_employee(employee_id: int):
        return _mutate(lambda: service.update_employee(employee_id, request.form),
                       ok="Employee updated successfully", fallback="Failed to update employee", tab="employees")

    @app.route("/hr/employees/<int:employee_id>/delete", methods=["POST"], endpoint="delete_employee")
    def delete_employee(employee_id: int):
        return _mutate(lambda: service.delete_employee(employee_id),
                       ok="Employee deleted successfully", fallback="Failed to delete employee", tab="employees")

    @app.route("/hr/time-off/new", methods=["POST"], endpoint="submit_time_off")
    def submit_time_off():
        return _mutate(lambda: service.submit_time_off(request.form),
                       ok="Time off request submitted", fallback="Failed to submit time off request", tab="time-off")

    @app.route("/hr/time-off/<int:request_id>/<any(approved, rejected):decision>", methods=["POST"],
               endpoint="decide_time_off")
    def decide_time_off(request_id: int, decision: str):
        return _mutate(lambda: service.decide_time_off(request_id, decision),
                       ok=f"Time off request {decision}", fallback="Failed to update time off request", tab="time-off")

    @app.route("/hr/reviews/new", methods=["POST"], endpoint="create_review")
    def create_review():
        return _mutate(lambda: service.create_review(request.form),
                       ok="Performance review created", fallback="Failed to create performance review", tab="reviews")

    @app.route("/hr/disciplinary/new", methods=["POST"], endpoint="issue_disciplinary")
    def issue_disciplinary():
        return _mutate(lambda: service.issue_disciplinary(request.form),
                       ok="Disciplinary action issued", fallback="Failed to issue disciplinary action",
                       tab="disciplinary")

    @app.route("/hr/disciplinary/<int:action_id>/resolve", methods=["POST"], endpoint="resolve_disciplinary")
    def resolve_disciplinary(action_id: int):
        return _mutate(lambda: service.resolve_disciplinary(action_id, request.form.get("notes", "")),
                       ok="Disciplinary action resolved", fallback="Failed to update disciplinary action",
                       tab="disciplinary")

    @app.route("/hr/disciplinary/<int:action_id>/appeal", methods=["POST"], endpoint="appeal_disciplinary")
    def appeal_disciplinary(action_id: int):
        return _mutate(lambda: service.appeal_disciplinary(action_id, request.form.get("notes", "")),
                       ok="Appeal recorded", fallback="Failed to update disciplinary action", tab="disciplinary")
