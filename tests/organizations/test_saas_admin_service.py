from datetime import date

import pytest

from src.field_service.field_service.core.enums import SubscriptionStatus
from src.field_service.field_service.core.exceptions import ValidationError
from src.field_service.field_service.organizations.model import Organization
from src.field_service.field_service.organizations.service import (
    FEATURE_OPTIONS,
    SaasAdminService,
    build_subscription_payload,
    can_add_user,
    coerce_feature_value,
    fold_settings,
    seat_usage,
)

NEW_ORG_FORM = {
    "plan_id": "2",
    "status": "trial",
    "start_date": "2025-03-01",
    "create_new_org": "on",
    "org_name": "Acme HVAC",
    "org_email": "ops@acme.test",
    "admin_first_name": "Ana",
    "admin_last_name": "Ruiz",
    "admin_email": "ana@acme.test",
    "admin_password": "s3cretpass",
}


def _org(max_users=5, user_count=3):
    return Organization(
        organization_id=1, name="Acme", slug="acme", email=None, phone=None, address=None, city=None,
        state=None, zip_code=None, status="active", subscription_status=SubscriptionStatus.ACTIVE,
        plan_id=1, plan_name="Pro", max_users=max_users, user_count=user_count,
    )


class FakeSaasRepo:
    def __init__(self):
        self.features = []
        self.settings = []

    def update_plan_feature(self, *, plan_id, feature, value):
        self.features.append((plan_id, feature, value))

    def update_setting(self, *, key, value):
        self.settings.append((key, value))


def test_seat_usage_and_limit():
    assert seat_usage(_org()) == "3 / 5"
    assert seat_usage(_org(max_users=None)) == "3 / Unlimited"
    assert can_add_user(_org())
    assert not can_add_user(_org(user_count=5))
    assert can_add_user(_org(max_users=None, user_count=500))


def test_new_org_subscription_payload_with_trial():
    payload = build_subscription_payload(NEW_ORG_FORM)

    assert payload["planId"] == 2
    assert payload["createNewOrg"] is True
    assert payload["trialDays"] == 14
    assert payload["trialEndsAt"] == "2025-03-15"
    assert payload["maxUsers"] == 5
    assert payload["adminEmail"] == "ana@acme.test"
    assert "organizationId" not in payload


def test_existing_org_subscription_needs_org():
    form = {"plan_id": "2", "status": "active", "organization_id": "", "start_date": "2025-03-01"}
    with pytest.raises(ValidationError, match="Organization is invalid"):
        build_subscription_payload(form)

    payload = build_subscription_payload({**form, "organization_id": "9"}, today=date(2025, 3, 1))
    assert payload["organizationId"] == 9
    assert payload["trialEndsAt"] is None


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"admin_password": "short"}, "at least 8 characters"),
        ({"org_name": ""}, "Organization name is required"),
        ({"max_users": "0"}, "Max users must be at least 1"),
        ({"trial_days": "-1"}, "Trial days cannot be negative"),
        ({"plan_id": ""}, "Plan is invalid"),
    ],
)
def test_subscription_validation(overrides, message):
    with pytest.raises(ValidationError, match=message):
        build_subscription_payload({**NEW_ORG_FORM, **overrides})


def test_feature_values_are_coerced_by_kind():
    assert len(FEATURE_OPTIONS) == 14
    assert coerce_feature_value("maxUsers", "25") == 25
    assert coerce_feature_value("maxUsers", "Unlimited") is None
    assert coerce_feature_value("hasApiAccess", "true") is True
    assert coerce_feature_value("hasApiAccess", "false") is False
    with pytest.raises(ValidationError, match="Unknown plan feature"):
        coerce_feature_value("hasTeleport", "true")
    with pytest.raises(ValidationError, match="Max Users is invalid"):
        coerce_feature_value("maxUsers", "-3")


def test_update_plan_feature_sends_coerced_value():
    repo = FakeSaasRepo()
    SaasAdminService(repo).update_plan_feature(3, "maxProjects", " 10 ")

    assert repo.features == [(3, "maxProjects", 10)]


def test_settings_fold_boolean_strings():
    assert fold_settings([{"key": "maintenance", "value": "true"}, {"key": "motd", "value": "hi"}]) == {
        "maintenance": True,
        "motd": "hi",
    }


def test_setting_key_required():
    with pytest.raises(ValidationError, match="Setting key is required"):
        SaasAdminService(FakeSaasRepo()).update_system_setting("", "x")
