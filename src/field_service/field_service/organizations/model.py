from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..core.enums import SubscriptionStatus


@dataclass(frozen=True)
class Organization:
    organization_id: int
    name: str
    slug: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    city: Optional[str]
    state: Optional[str]
    zip_code: Optional[str]
    status: str
    subscription_status: SubscriptionStatus
    plan_id: Optional[int]
    plan_name: Optional[str]
    max_users: Optional[int]
    user_count: int
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SubscriptionPlan:
    plan_id: int
    name: str
    price: Decimal
    billing_interval: str
    is_active: bool
    description: Optional[str] = None
    features: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OrganizationUser:
    user_id: int
    organization_id: Optional[int]
    username: Optional[str]
    first_name: str
    last_name: str
    email: str
    role: str
    is_active: bool
    last_login_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or (self.username or self.email)


@dataclass(frozen=True)
class SaasMetrics:
    total_organizations: int = 0
    new_organizations_this_month: int = 0
    active_subscriptions: int = 0
    trial_subscriptions: int = 0
    monthly_revenue: Decimal = Decimal("0")
    revenue_growth: Decimal = Decimal("0")
    churn_rate: Decimal = Decimal("0")
    churn_trend: Decimal = Decimal("0")


@dataclass(frozen=True)
class FeatureOption:
    feature_id: str
    label: str
    kind: str  # "limit" or "feature"
