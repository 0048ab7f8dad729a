from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Organization, OrganizationUser, SaasMetrics, SubscriptionPlan


class SaasAdminRepository(Protocol):
    def list_plans(self) -> Sequence[SubscriptionPlan]:
        raise NotImplementedError

    def list_organizations(self) -> Sequence[Organization]:
        raise NotImplementedError

    def get_metrics(self) -> SaasMetrics:
        raise NotImplementedError

    def list_settings(self) -> Sequence[dict]:
        """Raw ``{key, value}`` rows."""

        raise NotImplementedError

    def list_users(self, *, organization_id: Optional[int] = None) -> Sequence[OrganizationUser]:
        raise NotImplementedError

    def update_organization(self, *, organization_id: int, payload: dict) -> None:
        raise NotImplementedError

    def suspend_organization(self, *, organization_id: int) -> None:
        raise NotImplementedError

    def update_user(self, *, organization_id: int, user_id: int, payload: dict) -> None:
        raise NotImplementedError

    def delete_user(self, *, organization_id: int, user_id: int) -> None:
        raise NotImplementedError

    def create_plan(self, *, payload: dict) -> None:
        raise NotImplementedError

    def update_plan_feature(self, *, plan_id: int, feature: str, value: Any) -> None:
        raise NotImplementedError

    def create_subscription(self, *, payload: dict) -> None:
        raise NotImplementedError

    def update_setting(self, *, key: str, value: str) -> None:
        raise NotImplementedError
