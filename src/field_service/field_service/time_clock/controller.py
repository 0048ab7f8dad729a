from __future__ import annotations

import logging
from datetime import date, datetime

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import now_local
from ..container import Container
from ..core.constants import TIME_CLOCK_POLL_SECONDS
from ..core.enums import Priority, TriggerEvent, TriggerFrequency
from ..core.exceptions import ApiError, ValidationError
from .report import report_csv_bytes
from .service import elapsed, entry_duration, status_label
from .triggers import upcoming_triggers

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.time_clock_service
    triggers = container.task_trigger_service
    reports = container.time_clock_report_service

    def _parse_date(v: str) -> date:
        return datetime.strptime(v, "%Y-%m-%d").date()

    def _run(action, *, ok: str, fallback: str):
        try:
            action()
            flash(ok, "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or fallback, "danger")
        except Exception:
            logger.exception("time clock action failed")
            flash(fallback, "danger")
        return redirect(url_for("time_clock"))

    @app.route("/time-clock", methods=["GET"], endpoint="time_clock")
    def time_clock():
        current, entries = None, []
        try:
            current = service.current()
            entries = service.entries()
        except ApiError as e:
            flash(str(e) or "Failed to load time clock", "danger")
        try:
            upcoming = upcoming_triggers(triggers.list_triggers(), current)
        except ApiError:
            logger.warning("could not load task triggers")
            upcoming = {}
        return render_template(
            "time_clock/index.html",
            current=current,
            entries=entries,
            elapsed=elapsed(current),
            entry_duration=entry_duration,
            status_label=status_label,
            upcoming=upcoming,
            refresh_seconds=TIME_CLOCK_POLL_SECONDS,
            active_page="time_clock",
        )

    @app.route("/time-clock/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        return _run(service.clock_in,
                    ok="Clocked In. Successfully clocked in for work", fallback="Failed to clock in")

    @app.route("/time-clock/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        notes = request.form.get("notes", "")
        return _run(lambda: service.clock_out(notes),
                    ok="Clocked Out. Successfully clocked out", fallback="Failed to clock out")

    @app.route("/time-clock/start-break", methods=["POST"], endpoint="start_break")
    def start_break():
        return _run(service.start_break,
                    ok="Break Started. You are now on break", fallback="Failed to start break")

    @app.route("/time-clock/end-break", methods=["POST"], endpoint="end_break")
    def end_break():
        return _run(service.end_break,
                    ok="Break Ended. You are back to work", fallback="Failed to end break")

    # ===== TASK TRIGGERS =====

    @app.route("/time-clock/triggers", methods=["GET"], endpoint="task_triggers")
    def task_triggers():
        edit_id = request.args.get("edit", type=int)
        try:
            items = triggers.list_triggers()
        except ApiError as e:
            flash(str(e) or "Failed to load task triggers", "danger")
            items = []
        editing = next((t for t in items if t.trigger_id == edit_id), None) if edit_id else None
        return render_template(
            "time_clock/triggers.html",
            triggers=items,
            editing=editing,
            events=list(TriggerEvent),
            frequencies=list(TriggerFrequency),
            priorities=list(Priority),
            active_page="task_triggers",
        )

    @app.route("/time-clock/triggers/new", methods=["POST"], endpoint="create_task_trigger")
    def create_task_trigger():
        try:
            triggers.create_trigger(request.form)
            flash("Task trigger created", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to create task trigger", "danger")
        except Exception:
            logger.exception("create task trigger failed")
            flash("Failed to create task trigger", "danger")
        return redirect(url_for("task_triggers"))

    @app.route("/time-clock/triggers/<int:trigger_id>/edit", methods=["POST"], endpoint="update_task_trigger")
    def update_task_trigger(trigger_id: int):
        try:
            triggers.update_trigger(trigger_id, request.form)
            flash("Task trigger updated", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to update task trigger", "danger")
        except Exception:
            logger.exception("update task trigger %s failed", trigger_id)
            flash("Failed to update task trigger", "danger")
        return redirect(url_for("task_triggers"))

    @app.route("/time-clock/triggers/<int:trigger_id>/toggle", methods=["POST"], endpoint="toggle_task_trigger")
    def toggle_task_trigger(trigger_id: int):
        try:
            active = triggers.toggle_trigger(trigger_id)
            flash("Task trigger enabled" if active else "Task trigger disabled", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to update task trigger", "danger")
        return redirect(url_for("task_triggers"))

    @app.route("/time-clock/triggers/<int:trigger_id>/delete", methods=["POST"], endpoint="delete_task_trigger")
    def delete_task_trigger(trigger_id: int):
        try:
            triggers.delete_trigger(trigger_id)
            flash("Task trigger deleted", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to delete task trigger", "danger")
        return redirect(url_for("task_triggers"))

    # ===== REPORT =====

    def _report_range():
        today = now_local().date()
        start_s = request.args.get("start") or today.replace(day=1).strftime("%Y-%m-%d")
        end_s = request.args.get("end") or today.strftime("%Y-%m-%d")
        return _parse_date(start_s), _parse_date(end_s)

    @app.route("/time-clock/report", methods=["GET"], endpoint="time_clock_report")
    def time_clock_report():
        try:
            start, end = _report_range()
        except ValueError:
            flash("Invalid date (YYYY-MM-DD)", "danger")
            return redirect(url_for("time_clock_report"))
        try:
            data = reports.build_report(start=start, end=end)
        except ApiError as e:
            flash(str(e) or "Failed to load time clock entries", "danger")
            return redirect(url_for("time_clock"))
        return render_template(
            "time_clock/report.html",
            start=start.strftime("%Y-%m-%d"),
            end=end.strftime("%Y-%m-%d"),
            data=data,
            active_page="time_clock_report",
        )

    @app.route("/time-clock/report.csv", methods=["GET"], endpoint="time_clock_report_csv")
    def time_clock_report_csv():
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        if not start_s or not end_s:
            flash("Missing start/end parameters", "warning")
            return redirect(url_for("time_clock_report"))
        try:
            start, end = _parse_date(start_s), _parse_date(end_s)
            data = reports.build_report(start=start, end=end)
        except ValueError:
            flash("Invalid date (YYYY-MM-DD)", "danger")
            return redirect(url_for("time_clock_report"))
        except ApiError as e:
            flash(str(e) or "Failed to load time clock entries", "danger")
            return redirect(url_for("time_clock_report"))

        filename = f"time_clock_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            report_csv_bytes(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
