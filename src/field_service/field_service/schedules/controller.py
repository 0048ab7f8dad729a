from __future__ import annotations

import logging
from datetime import date, datetime

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import now_local
from ..container import Container
from ..core.enums import CalendarView, Priority
from ..core.exceptions import ApiError, ValidationError
from .calendar import days_for_view, is_current_period, navigate, schedules_for_date, view_title, weeks
from .service import schedule_duration

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    def _parse_date(v: str) -> date:
        return datetime.strptime(v, "%Y-%m-%d").date()

    def _anchor() -> date:
        try:
            return _parse_date(request.args.get("date") or "")
        except ValueError:
            return now_local().date()

    def _view() -> CalendarView:
        try:
            return CalendarView(request.args.get("view") or CalendarView.ONE_MONTH.value)
        except ValueError:
            return CalendarView.ONE_MONTH

    def _back():
        return redirect(url_for("schedules", date=request.form.get("return_date") or None,
                                view=request.form.get("return_view") or None))

    @app.route("/schedules", methods=["GET"], endpoint="schedules")
    def schedules():
        anchor = _anchor()
        view = _view()
        mode = request.args.get("mode", "calendar")
        edit_id = request.args.get("edit", type=int)

        items = []
        try:
            if mode == "mine":
                items = list(service.my_schedule())
            else:
                items = service.list_for_view(anchor=anchor, view_mode=view)
        except ApiError as e:
            flash(str(e) or "Failed to load schedules", "danger")

        days = days_for_view(anchor, view)
        editing = next((s for s in items if s.schedule_id == edit_id), None) if edit_id else None
        return render_template(
            "schedules/index.html",
            anchor=anchor,
            view=view,
            views=list(CalendarView),
            mode=mode,
            title=view_title(anchor, view),
            weeks=weeks(days),
            today=now_local().date(),
            prev_date=navigate(anchor, view, -1),
            next_date=navigate(anchor, view, 1),
            schedules=items,
            editing=editing,
            priorities=list(Priority),
            schedules_for_date=schedules_for_date,
            is_current_period=lambda d: is_current_period(d, anchor, view),
            schedule_duration=schedule_duration,
            active_page="schedules",
        )

    @app.route("/schedules/new", methods=["POST"], endpoint="create_schedule")
    def create_schedule():
        try:
            service.create(request.form)
            flash("Schedule created successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to create schedule", "danger")
        except Exception:
            logger.exception("create schedule failed")
            flash("Failed to create schedule", "danger")
        return _back()

    @app.route("/schedules/<int:schedule_id>/edit", methods=["POST"], endpoint="update_schedule")
    def update_schedule(schedule_id: int):
        try:
            service.update(schedule_id, request.form)
            flash("Schedule updated successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to update schedule", "danger")
        except Exception:
            logger.exception("update schedule %s failed", schedule_id)
            flash("Failed to update schedule", "danger")
        return _back()

    @app.route("/schedules/<int:schedule_id>/delete", methods=["POST"], endpoint="delete_schedule")
    def delete_schedule(schedule_id: int):
        try:
            service.delete(schedule_id)
            flash("Schedule deleted successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to delete schedule", "danger")
        return _back()

    @app.route("/schedules/<int:schedule_id>/clock-in", methods=["POST"], endpoint="schedule_clock_in")
    def schedule_clock_in(schedule_id: int):
        try:
            service.clock_in(schedule_id)
            flash("Clocked in successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to clock in", "danger")
        return _back()

    @app.route("/schedules/<int:schedule_id>/clock-out", methods=["POST"], endpoint="schedule_clock_out")
    def schedule_clock_out(schedule_id: int):
        try:
            service.clock_out(schedule_id)
            flash("Clocked out successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to clock out", "danger")
        return _back()
