from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.formatting import format_call_duration, format_phone_number
from ..container import Container
from ..core.constants import ACTIVE_CALLS_POLL_SECONDS
from ..core.exceptions import ApiError, ValidationError
from .model import ActiveCall
from .service import call_duration_label

logger = logging.getLogger(__name__)

ACTIVE_CALL_SESSION_KEY = "active_call"


def register(app: Flask, container: Container) -> None:
    service = container.call_service

    def _active_call():
        return ActiveCall.from_session(session.get(ACTIVE_CALL_SESSION_KEY))

    def _store(call):
        if call is None:
            session.pop(ACTIVE_CALL_SESSION_KEY, None)
        else:
            session[ACTIVE_CALL_SESSION_KEY] = call.to_session()

    @app.route("/calls", methods=["GET"], endpoint="calls")
    def calls():
        tab = request.args.get("tab", "dialer")
        query = request.args.get("q", "")
        logs, contacts, active_calls = [], [], []
        try:
            logs = service.list_logs()
            contacts = service.list_contacts(query)
            active_calls = service.list_active_calls()
        except ApiError as e:
            flash(str(e) or "Failed to load call data", "danger")

        active_call = _active_call()
        return render_template(
            "calls/index.html",
            tab=tab,
            query=query,
            logs=logs,
            contacts=contacts,
            active_calls=active_calls,
            active_call=active_call,
            active_call_duration=call_duration_label(active_call) if active_call else None,
            refresh_seconds=ACTIVE_CALLS_POLL_SECONDS,
            format_phone_number=format_phone_number,
            format_call_duration=format_call_duration,
            active_page="calls",
        )

    @app.route("/calls/make", methods=["POST"], endpoint="make_call")
    def make_call():
        if _active_call() is not None:
            flash("A call is already in progress", "warning")
            return redirect(url_for("calls"))
        phone = request.form.get("phone_number", "")
        try:
            call = service.make_call(phone, request.form.get("contact_id"))
            _store(call)
            flash(f"Call initiated. Calling {phone.strip()}...", "success")
        except ValidationError as e:
            flash(f"{e}. Please enter a phone number to call.", "danger")
        except ApiError:
            flash("Call failed. Unable to initiate call. Please try again.", "danger")
        except Exception:
            logger.exception("make call failed")
            flash("Call failed. Unable to initiate call. Please try again.", "danger")
        return redirect(url_for("calls"))

    @app.route("/calls/end", methods=["POST"], endpoint="end_call")
    def end_call():
        call = _active_call()
        if call is None:
            return redirect(url_for("calls"))
        try:
            service.end_call(call)
            _store(None)
            flash("Call ended. Call has been disconnected.", "success")
        except ApiError as e:
            flash(str(e) or "Failed to end call", "danger")
        return redirect(url_for("calls"))

    @app.route("/calls/hold", methods=["POST"], endpoint="toggle_hold")
    def toggle_hold():
        call = _active_call()
        if call is None:
            return redirect(url_for("calls"))
        try:
            _store(service.toggle_hold(call))
        except ApiError as e:
            flash(str(e) or "Failed to update call", "danger")
        return redirect(url_for("calls"))

    @app.route("/calls/mute", methods=["POST"], endpoint="toggle_mute")
    def toggle_mute():
        call = _active_call()
        if call is None:
            return redirect(url_for("calls"))
        try:
            _store(service.toggle_mute(call))
        except ApiError as e:
            flash(str(e) or "Failed to update call", "danger")
        return redirect(url_for("calls"))
