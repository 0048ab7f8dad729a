from __future__ import annotations

import secrets
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..core.constants import COUPON_CODE_ALPHABET, COUPON_CODE_LENGTH
from ..core.enums import DiscountType, PromotionStatus
from .model import CouponCode, Promotion

_CENTS = Decimal("0.01")


def _plain_number(value: Any) -> str:
    """``Decimal("20.00")`` -> ``"20"``, ``"12.5"`` -> ``"12.5"``."""
    try:
        d = Decimal(str(value))
    except InvalidOperation:
        return str(value)
    if d == d.to_integral_value():
        return str(d.quantize(Decimal(1)))
    return str(d.normalize())


def discount_display(discount_type: Any, value: Any) -> str:
    kind = getattr(discount_type, "value", discount_type)
    if kind == DiscountType.PERCENTAGE.value:
        return f"{_plain_number(value)}%"
    if kind == DiscountType.FIXED_AMOUNT.value:
        return f"${_plain_number(value)}"
    if kind == DiscountType.FREE_TRIAL.value:
        return "Free Trial"
    if value in (None, ""):
        return "-"
    return str(value)


def generate_coupon_code(length: int = COUPON_CODE_LENGTH) -> str:
    return "".join(secrets.choice(COUPON_CODE_ALPHABET) for _ in range(int(length)))


def calculate_discount(promotion: Promotion, amount: Decimal) -> Decimal:
    """Discount a purchase of ``amount`` would get, in currency units."""

    amount = Decimal(amount)
    if amount <= 0:
        return Decimal("0.00")
    if promotion.minimum_purchase is not None and amount < promotion.minimum_purchase:
        return Decimal("0.00")

    value = promotion.discount_value or Decimal("0")
    if promotion.discount_type == DiscountType.PERCENTAGE:
        return (amount * value / Decimal(100)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    if promotion.discount_type == DiscountType.FIXED_AMOUNT:
        return min(value, amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return Decimal("0.00")


def is_redeemable(promotion: Promotion, code: Optional[CouponCode] = None, *, now: Optional[datetime] = None) -> bool:
    now = now or now_local()
    today = now.date()

    if promotion.status != PromotionStatus.ACTIVE:
        return False
    if promotion.start_date and today < promotion.start_date:
        return False
    if promotion.end_date and today > promotion.end_date:
        return False
    if promotion.max_redemptions is not None and promotion.current_redemptions >= promotion.max_redemptions:
        return False

    if code is None:
        return True
    if not code.is_active:
        return False
    if code.expires_at and code.expires_at <= now:
        return False
    if code.max_redemptions is not None and code.current_redemptions >= code.max_redemptions:
        return False
    return True
