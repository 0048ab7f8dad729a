from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import (
    form_flag,
    optional_decimal,
    optional_int,
    optional_text,
    require_choice,
    require_min_length,
    require_non_empty,
    require_positive_int,
)
from ..core.constants import DEFAULT_MAX_USERS, DEFAULT_TRIAL_DAYS, MIN_ADMIN_PASSWORD_LENGTH
from ..core.enums import SubscriptionStatus
from ..core.exceptions import ValidationError
from .model import FeatureOption, Organization, OrganizationUser, SaasMetrics, SubscriptionPlan
from .repository import SaasAdminRepository

FEATURE_OPTIONS: tuple[FeatureOption, ...] = (
    FeatureOption("maxUsers", "Max Users", "limit"),
    FeatureOption("maxProjects", "Max Projects", "limit"),
    FeatureOption("maxStorageGB", "Max Storage (GB)", "limit"),
    FeatureOption("hasAdvancedReporting", "Advanced Reporting", "feature"),
    FeatureOption("hasApiAccess", "API Access", "feature"),
    FeatureOption("hasCustomBranding", "Custom Branding", "feature"),
    FeatureOption("hasIntegrations", "Third-party Integrations", "feature"),
    FeatureOption("hasPrioritySupport", "Priority Support", "feature"),
    FeatureOption("hasDocuSignIntegration", "DocuSign Integration", "feature"),
    FeatureOption("hasAdvancedSecurity", "Advanced Security", "feature"),
    FeatureOption("hasCustomDomain", "Custom Domain", "feature"),
    FeatureOption("hasSSOIntegration", "SSO Integration", "feature"),
    FeatureOption("hasDataExport", "Data Export", "feature"),
    FeatureOption("hasAdvancedPermissions", "Advanced Permissions", "feature"),
)

_FEATURES_BY_ID = {f.feature_id: f for f in FEATURE_OPTIONS}


def coerce_feature_value(feature_id: str, raw: Any) -> Any:
    """Limits become int (None = Unlimited); flags become bool."""

    option = _FEATURES_BY_ID.get(feature_id)
    if option is None:
        raise ValidationError("Unknown plan feature")
    if option.kind == "feature":
        if isinstance(raw, bool):
            return raw
        return form_flag(str(raw))

    v = str(raw if raw is not None else "").strip()
    if not v or v.lower() == "unlimited":
        return None
    n = optional_int(v, option.label)
    if n is None or n < 0:
        raise ValidationError(f"{option.label} is invalid")
    return n


def fold_settings(rows: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for row in rows:
        value = row.get("value")
        if value == "true":
            value = True
        elif value == "false":
            value = False
        out[str(row.get("key"))] = value
    return out


def seat_usage(org: Organization, users: Optional[Sequence[OrganizationUser]] = None) -> str:
    count = len(users) if users is not None else org.user_count
    return f"{count} / {org.max_users if org.max_users else 'Unlimited'}"


def can_add_user(org: Organization, users: Optional[Sequence[OrganizationUser]] = None) -> bool:
    count = len(users) if users is not None else org.user_count
    return not org.max_users or count < org.max_users


def build_subscription_payload(form: Mapping[str, str], *, today: Optional[date] = None) -> dict:
    status = require_choice(form.get("status") or "trial", SubscriptionStatus, "Status")
    plan_id = require_positive_int(form.get("plan_id"), "Plan")

    start_raw = (form.get("start_date") or "").strip()
    try:
        start = parse_iso_date(start_raw) if start_raw else (today or now_local().date())
    except ValueError:
        raise ValidationError("Start date is invalid (YYYY-MM-DD)")

    trial_days = optional_int(form.get("trial_days"), "Trial days")
    if trial_days is None:
        trial_days = DEFAULT_TRIAL_DAYS
    if trial_days < 0:
        raise ValidationError("Trial days cannot be negative")

    payload: dict[str, Any] = {
        "planId": plan_id,
        "status": status.value,
        "startDate": start.isoformat(),
        "trialDays": trial_days,
        "trialEndsAt": (start + timedelta(days=trial_days)).isoformat() if status == SubscriptionStatus.TRIAL else None,
    }

    create_new = form_flag(form.get("create_new_org"))
    payload["createNewOrg"] = create_new
    if not create_new:
        payload["organizationId"] = require_positive_int(form.get("organization_id"), "Organization")
        return payload

    max_users = optional_int(form.get("max_users"), "Max users")
    if max_users is None:
        max_users = DEFAULT_MAX_USERS
    if max_users < 1:
        raise ValidationError("Max users must be at least 1")

    payload.update(
        {
            "orgName": require_non_empty(form.get("org_name"), "Organization name"),
            "orgEmail": require_non_empty(form.get("org_email"), "Organization email"),
            "orgPhone": optional_text(form.get("org_phone")) or "",
            "orgAddress": optional_text(form.get("org_address")) or "",
            "orgCity": optional_text(form.get("org_city")) or "",
            "orgState": optional_text(form.get("org_state")) or "",
            "orgZipCode": optional_text(form.get("org_zip_code")) or "",
            "maxUsers": max_users,
            "adminFirstName": require_non_empty(form.get("admin_first_name"), "Admin first name"),
            "adminLastName": require_non_empty(form.get("admin_last_name"), "Admin last name"),
            "adminEmail": require_non_empty(form.get("admin_email"), "Admin email"),
            "adminPassword": require_min_length(form.get("admin_password"), "Admin password", MIN_ADMIN_PASSWORD_LENGTH),
        }
    )
    return payload


class SaasAdminService:
    def __init__(self, saas: SaasAdminRepository):
        self._saas = saas

    def list_plans(self) -> Sequence[SubscriptionPlan]:
        return self._saas.list_plans()

    def list_organizations(self) -> Sequence[Organization]:
        return self._saas.list_organizations()

    def metrics(self) -> SaasMetrics:
        return self._saas.get_metrics()

    def list_users(self, organization_id: Optional[int] = None) -> Sequence[OrganizationUser]:
        return self._saas.list_users(organization_id=organization_id)

    def system_settings(self) -> dict[str, Any]:
        return fold_settings(self._saas.list_settings())

    def update_organization(self, organization_id: int, form: Mapping[str, str]) -> None:
        max_users = optional_int(form.get("max_users"), "Max users")
        if max_users is not None and max_users < 1:
            raise ValidationError("Max users must be at least 1")
        payload = {
            "name": require_non_empty(form.get("name"), "Organization name"),
            "email": optional_text(form.get("email")),
            "phone": optional_text(form.get("phone")),
            "address": optional_text(form.get("address")),
            "city": optional_text(form.get("city")),
            "state": optional_text(form.get("state")),
            "zipCode": optional_text(form.get("zip_code")),
            "maxUsers": max_users,
        }
        if form.get("subscription_status"):
            payload["subscriptionStatus"] = require_choice(
                form.get("subscription_status"), SubscriptionStatus, "Subscription status"
            ).value
        self._saas.update_organization(organization_id=int(organization_id), payload=payload)

    def suspend_organization(self, organization_id: int) -> None:
        self._saas.suspend_organization(organization_id=int(organization_id))

    def update_user(self, organization_id: int, user_id: int, form: Mapping[str, str]) -> None:
        payload = {
            "firstName": require_non_empty(form.get("first_name"), "First name"),
            "lastName": require_non_empty(form.get("last_name"), "Last name"),
            "email": require_non_empty(form.get("email"), "Email"),
            "role": require_non_empty(form.get("role") or "user", "Role"),
            "isActive": form_flag(form.get("is_active")),
        }
        self._saas.update_user(organization_id=int(organization_id), user_id=int(user_id), payload=payload)

    def delete_user(self, organization_id: int, user_id: int) -> None:
        self._saas.delete_user(organization_id=int(organization_id), user_id=int(user_id))

    def create_plan(self, form: Mapping[str, str]) -> None:
        price = optional_decimal(form.get("price"), "Price")
        if price is None:
            raise ValidationError("Price is required")
        interval = (form.get("billing_interval") or "monthly").strip()
        if interval not in {"monthly", "yearly"}:
            raise ValidationError("Billing interval is invalid")
        self._saas.create_plan(
            payload={
                "name": require_non_empty(form.get("name"), "Plan name"),
                "description": optional_text(form.get("description")),
                "price": str(price),
                "billingInterval": interval,
                "isActive": True,
            }
        )

    def update_plan_feature(self, plan_id: int, feature: str, raw_value: Any) -> None:
        value = coerce_feature_value(feature, raw_value)
        self._saas.update_plan_feature(plan_id=int(plan_id), feature=feature, value=value)

    def create_subscription(self, form: Mapping[str, str]) -> None:
        self._saas.create_subscription(payload=build_subscription_payload(form))

    def update_system_setting(self, key: str, value: str) -> None:
        key = require_non_empty(key, "Setting key")
        self._saas.update_setting(key=key, value="" if value is None else str(value))
