from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import DiscountType, PromotionStatus


@dataclass(frozen=True)
class CouponCode:
    code_id: int
    promotion_id: int
    code: str
    max_redemptions: Optional[int]
    current_redemptions: int
    is_active: bool
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class Promotion:
    promotion_id: int
    organization_id: Optional[int]
    name: str
    description: Optional[str]
    status: PromotionStatus
    discount_type: DiscountType
    discount_value: Optional[Decimal]
    start_date: Optional[date]
    end_date: Optional[date]
    max_redemptions: Optional[int]
    current_redemptions: int
    per_customer_limit: int = 1
    applies_to: str = "all"
    minimum_purchase: Optional[Decimal] = None
    stackable: bool = False
    auto_apply: bool = False
    coupon_codes: tuple[CouponCode, ...] = field(default_factory=tuple)

    @property
    def remaining_redemptions(self) -> Optional[int]:
        if self.max_redemptions is None:
            return None
        return max(self.max_redemptions - self.current_redemptions, 0)


@dataclass(frozen=True)
class PromotionRedemption:
    redemption_id: int
    promotion_id: int
    coupon_code_id: Optional[int]
    discount_amount: Decimal
    original_amount: Optional[Decimal]
    status: str
    redeemed_at: Optional[datetime]
