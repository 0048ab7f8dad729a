from __future__ import annotations

from flask import Flask, flash, render_template

from ..common.datetime_utils import now_local
from ..container import Container
from ..core.constants import FUEL_POLL_SECONDS
from ..core.exceptions import ApiError
from .service import fuel_totals


def register(app: Flask, container: Container) -> None:
    service = container.fuel_service

    @app.route("/fuel/today", methods=["GET"], endpoint="fuel_today")
    def fuel_today():
        try:
            rows = service.today()
        except ApiError as e:
            flash(str(e) or "Failed to load fuel usage", "danger")
            rows = []
        return render_template(
            "fuel/today.html",
            rows=rows,
            totals=fuel_totals(rows),
            today=now_local(),
            refresh_seconds=FUEL_POLL_SECONDS,
            active_page="fuel_today",
        )
