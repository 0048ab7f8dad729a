from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.enums import SubscriptionStatus
from ..core.exceptions import ApiError, ValidationError
from .service import FEATURE_OPTIONS, can_add_user, seat_usage

logger = logging.getLogger(__name__)

SAAS_TABS = ("overview", "organizations", "users", "plans", "settings")


def register(app: Flask, container: Container) -> None:
    service = container.saas_admin_service

    def _mutate(action, *, ok: str, fallback: str, tab: str, **params):
        try:
            action()
            flash(ok, "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or fallback, "danger")
        except Exception:
            logger.exception("saas admin action failed: %s", fallback)
            flash(fallback, "danger")
        return redirect(url_for("saas_admin", tab=tab, **params))

    @app.route("/saas-admin", methods=["GET"], endpoint="saas_admin")
    def saas_admin():
        tab = request.args.get("tab", "overview")
        if tab not in SAAS_TABS:
            tab = "overview"
        org_id = request.args.get("org", type=int)

        ctx = {"metrics": None, "organizations": [], "plans": [], "users": [], "settings": {}, "selected_org": None}
        try:
            ctx["organizations"] = service.list_organizations()
            ctx["plans"] = service.list_plans()
            if tab == "overview":
                ctx["metrics"] = service.metrics()
            elif tab in ("users", "organizations") and (org_id or tab == "users"):
                ctx["users"] = service.list_users(org_id)
            elif tab == "settings":
                ctx["settings"] = service.system_settings()
        except ApiError as e:
            flash(str(e) or "Failed to load SaaS administration data", "danger")

        if org_id:
            ctx["selected_org"] = next((o for o in ctx["organizations"] if o.organization_id == org_id), None)

        return render_template(
            "saas_admin/index.html",
            tab=tab,
            tabs=SAAS_TABS,
            org_id=org_id,
            feature_options=FEATURE_OPTIONS,
            subscription_statuses=list(SubscriptionStatus),
            seat_usage=seat_usage,
            can_add_user=can_add_user,
            active_page="saas_admin",
            **ctx,
        )

    @app.route("/saas-admin/organizations/<int:org_id>/edit", methods=["POST"], endpoint="update_organization")
    def update_organization(org_id: int):
        return _mutate(lambda: service.update_organization(org_id, request.form),
                       ok="Organization updated successfully", fallback="Failed to update organization",
                       tab="organizations", org=org_id)

    @app.route("/saas-admin/organizations/<int:org_id>/suspend", methods=["POST"], endpoint="suspend_organization")
    def suspend_organization(org_id: int):
        return _mutate(lambda: service.suspend_organization(org_id),
                       ok="Organization suspended", fallback="Failed to suspend organization", tab="organizations")

    @app.route("/saas-admin/organizations/<int:org_id>/users/<int:user_id>/edit", methods=["POST"],
               endpoint="update_org_user")
    def update_org_user(org_id: int, user_id: int):
        return _mutate(lambda: service.update_user(org_id, user_id, request.form),
                       ok="User updated successfully", fallback="Failed to update user", tab="users", org=org_id)

    @app.route("/saas-admin/organizations/<int:org_id>/users/<int:user_id>/delete", methods=["POST"],
               endpoint="delete_org_user")
    def delete_org_user(org_id: int, user_id: int):
        return _mutate(lambda: service.delete_user(org_id, user_id),
                       ok="User deleted successfully", fallback="Failed to delete user", tab="users", org=org_id)

    @app.route("/saas-admin/plans/new", methods=["POST"], endpoint="create_plan")
    def create_plan():
        return _mutate(lambda: service.create_plan(request.form),
                       ok="Subscription plan created successfully", fallback="Failed to create subscription plan",
                       tab="plans")

    @app.route("/saas-admin/plans/<int:plan_id>/features", methods=["POST"], endpoint="update_plan_feature")
    def update_plan_feature(plan_id: int):
        return _mutate(
            lambda: service.update_plan_feature(plan_id, request.form.get("feature", ""), request.form.get("value")),
            ok="Plan feature updated successfully", fallback="Failed to update plan feature", tab="plans",
        )

    @app.route("/saas-admin/subscriptions/new", methods=["POST"], endpoint="create_subscription")
    def create_subscription():
        return _mutate(lambda: service.create_subscription(request.form),
                       ok="Subscription created successfully", fallback="Failed to create subscription",
                       tab="organizations")

    @app.route("/saas-admin/settings", methods=["POST"], endpoint="update_system_setting")
    def update_system_setting():
        return _mutate(
            lambda: service.update_system_setting(request.form.get("key", ""), request.form.get("value", "")),
            ok="Setting updated successfully", fallback="Failed to update setting", tab="settings",
        )
