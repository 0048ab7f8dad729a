from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, redirect, url_for

from config import get_settings_module

from .common.formatting import format_money, format_phone_number
from .common.logging_setup import setup_logging
from .container import Container, build_container
from .calls.controller import register as register_calls
from .employees.controller import register as register_employees
from .fuel.controller import register as register_fuel
from .organizations.controller import register as register_organizations
from .promotions.controller import register as register_promotions
from .schedules.controller import register as register_schedules
from .time_clock.controller import register as register_time_clock

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    api_config = getattr(settings, "API_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    if container is None:
        container = build_container(
            api_config=api_config,
            stale_seconds=int(getattr(settings, "QUERY_STALE_SECONDS", 300)),
            max_items=int(getattr(settings, "QUERY_CACHE_MAX_ITEMS", 5000)),
        )

    app.jinja_env.globals.update(format_money=format_money, format_phone_number=format_phone_number)

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return redirect(url_for("time_clock"))

    register_organizations(app, container)
    register_promotions(app, container)
    register_employees(app, container)
    register_schedules(app, container)
    register_time_clock(app, container)
    register_calls(app, container)
    register_fuel(app, container)

    return app
