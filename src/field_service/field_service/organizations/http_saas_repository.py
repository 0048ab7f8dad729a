from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Sequence

from ..api.http_repository import HttpRepository, as_bool, as_decimal, as_enum, as_int
from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import SubscriptionStatus
from .model import Organization, OrganizationUser, SaasMetrics, SubscriptionPlan
from .repository import SaasAdminRepository

PLANS_KEY = "/api/saas/plans"
ORGANIZATIONS_KEY = "/api/admin/saas/organizations"
METRICS_KEY = "/api/admin/saas/metrics"
SETTINGS_KEY = "/api/admin/system/settings"
USERS_KEY = "/api/admin/users"


def _row_to_organization(r: dict) -> Organization:
    plan = r.get("subscriptionPlan")
    plan_name = plan.get("name") if isinstance(plan, dict) else plan
    return Organization(
        organization_id=int(r["id"]),
        name=str(r.get("name") or ""),
        slug=r.get("slug"),
        email=r.get("email"),
        phone=r.get("phone"),
        address=r.get("address"),
        city=r.get("city"),
        state=r.get("state"),
        zip_code=r.get("zipCode"),
        status=str(r.get("status") or "active"),
        subscription_status=as_enum(SubscriptionStatus, r.get("subscriptionStatus"), SubscriptionStatus.TRIAL),
        plan_id=as_int(r.get("planId")),
        plan_name=str(plan_name) if plan_name else None,
        max_users=as_int(r.get("maxUsers")),
        user_count=as_int(r.get("userCount")) or 0,
        created_at=parse_iso_datetime(r.get("createdAt")),
    )


def _row_to_plan(r: dict) -> SubscriptionPlan:
    return SubscriptionPlan(
        plan_id=int(r["id"]),
        name=str(r.get("name") or ""),
        price=as_decimal(r.get("price")) or Decimal("0"),
        billing_interval=str(r.get("billingInterval") or "monthly"),
        is_active=as_bool(r.get("isActive", True)),
        description=r.get("description"),
        features=dict(r.get("features") or {}),
    )


def _row_to_user(r: dict) -> OrganizationUser:
    return OrganizationUser(
        user_id=int(r["id"]),
        organization_id=as_int(r.get("organizationId")),
        username=r.get("username"),
        first_name=str(r.get("firstName") or ""),
        last_name=str(r.get("lastName") or ""),
        email=str(r.get("email") or ""),
        role=str(r.get("role") or "user"),
        is_active=as_bool(r.get("isActive")),
        last_login_at=parse_iso_datetime(r.get("lastLoginAt")),
    )


def _row_to_metrics(r: Optional[dict]) -> SaasMetrics:
    r = r or {}
    return SaasMetrics(
        total_organizations=as_int(r.get("totalOrganizations")) or 0,
        new_organizations_this_month=as_int(r.get("newOrganizationsThisMonth")) or 0,
        active_subscriptions=as_int(r.get("activeSubscriptions")) or 0,
        trial_subscriptions=as_int(r.get("trialSubscriptions")) or 0,
        monthly_revenue=as_decimal(r.get("monthlyRevenue")) or Decimal("0"),
        revenue_growth=as_decimal(r.get("revenueGrowth")) or Decimal("0"),
        churn_rate=as_decimal(r.get("churnRate")) or Decimal("0"),
        churn_trend=as_decimal(r.get("churnTrend")) or Decimal("0"),
    )


class HttpSaasAdminRepository(HttpRepository, SaasAdminRepository):
    def list_plans(self) -> Sequence[SubscriptionPlan]:
        return [_row_to_plan(r) for r in self._query_list(PLANS_KEY)]

    def list_organizations(self) -> Sequence[Organization]:
        return [_row_to_organization(r) for r in self._query_list(ORGANIZATIONS_KEY)]

    def get_metrics(self) -> SaasMetrics:
        return _row_to_metrics(self._query(METRICS_KEY))

    def list_settings(self) -> Sequence[dict]:
        return self._query_list(SETTINGS_KEY)

    def list_users(self, *, organization_id: Optional[int] = None) -> Sequence[OrganizationUser]:
        if organization_id:
            rows = self._query_list(ORGANIZATIONS_KEY, int(organization_id), "users")
        else:
            rows = self._query_list(USERS_KEY)
        return [_row_to_user(r) for r in rows]

    def update_organization(self, *, organization_id: int, payload: dict) -> None:
        self._mutate("PUT", f"{ORGANIZATIONS_KEY}/{int(organization_id)}", payload, invalidate=[(ORGANIZATIONS_KEY,)])

    def suspend_organization(self, *, organization_id: int) -> None:
        self._mutate("POST", f"{ORGANIZATIONS_KEY}/{int(organization_id)}/suspend", {}, invalidate=[(ORGANIZATIONS_KEY,)])

    def update_user(self, *, organization_id: int, user_id: int, payload: dict) -> None:
        self._mutate(
            "PUT",
            f"{ORGANIZATIONS_KEY}/{int(organization_id)}/users/{int(user_id)}",
            payload,
            invalidate=[(ORGANIZATIONS_KEY, int(organization_id)), (USERS_KEY,)],
        )

    def delete_user(self, *, organization_id: int, user_id: int) -> None:
        self._mutate(
            "DELETE",
            f"{ORGANIZATIONS_KEY}/{int(organization_id)}/users/{int(user_id)}",
            invalidate=[(ORGANIZATIONS_KEY,), (USERS_KEY,)],
        )

    def create_plan(self, *, payload: dict) -> None:
        self._mutate("POST", "/api/admin/saas/plans", payload, invalidate=[(PLANS_KEY,)])

    def update_plan_feature(self, *, plan_id: int, feature: str, value: Any) -> None:
        self._mutate(
            "PUT",
            f"/api/admin/saas/plans/{int(plan_id)}/features",
            {"feature": feature, "value": value},
            invalidate=[(PLANS_KEY,)],
        )

    def create_subscription(self, *, payload: dict) -> None:
        self._mutate("POST", "/api/admin/saas/subscriptions", payload, invalidate=[(ORGANIZATIONS_KEY,), (METRICS_KEY,)])

    def update_setting(self, *, key: str, value: str) -> None:
        self._mutate("PUT", SETTINGS_KEY, {"key": key, "value": value}, invalidate=[(SETTINGS_KEY,)])
