from __future__ import annotations

from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, to_iso_utc
from ..common.validators import (
    form_flag,
    optional_decimal,
    optional_int,
    optional_text,
    require_choice,
    require_non_empty,
)
from ..core.enums import DiscountType, PromotionStatus
from ..core.exceptions import ValidationError
from .discount import calculate_discount, generate_coupon_code
from .model import Promotion, PromotionRedemption
from .repository import PromotionRepository


def _optional_iso_date(value: Optional[str], field_name: str) -> Optional[str]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return to_iso_utc(parse_iso_date(v))
    except ValueError:
        raise ValidationError(f"{field_name} is invalid (YYYY-MM-DD)")


def build_promotion_payload(form: Mapping[str, str]) -> dict:
    """Turn the promotion form into the JSON body the backend expects."""

    name = require_non_empty(form.get("name"), "Name")
    discount_type = require_choice(form.get("discount_type") or "percentage", DiscountType, "Discount type")
    status = require_choice(form.get("status") or "active", PromotionStatus, "Status")

    value = optional_decimal(form.get("discount_value"), "Discount value")
    if discount_type == DiscountType.PERCENTAGE and value is not None and not (Decimal(0) < value <= Decimal(100)):
        raise ValidationError("Percentage discount must be between 0 and 100")

    start = _optional_iso_date(form.get("start_date"), "Start date")
    end = _optional_iso_date(form.get("end_date"), "End date")
    if start and end and end < start:
        raise ValidationError("End date cannot be before start date")

    minimum = optional_decimal(form.get("minimum_purchase"), "Minimum purchase")
    per_customer = optional_int(form.get("per_customer_limit"), "Per customer limit")

    return {
        "name": name,
        "description": optional_text(form.get("description")),
        "status": status.value,
        "discountType": discount_type.value,
        "discountValue": str(value) if value is not None else None,
        "startDate": start,
        "endDate": end,
        "maxRedemptions": optional_int(form.get("max_redemptions"), "Max redemptions"),
        "perCustomerLimit": per_customer or 1,
        "appliesTo": (form.get("applies_to") or "all").strip() or "all",
        "minimumPurchase": str(minimum) if minimum is not None else None,
        "stackable": form_flag(form.get("stackable")),
        "autoApply": form_flag(form.get("auto_apply")),
    }


def build_code_payload(form: Mapping[str, str]) -> dict:
    code = (form.get("code") or "").strip().upper() or generate_coupon_code()
    return {
        "code": code,
        "maxRedemptions": optional_int(form.get("max_redemptions"), "Max redemptions"),
        "expiresAt": optional_text(form.get("expires_at")),
    }


class PromotionService:
    def __init__(self, promotions: PromotionRepository):
        self._promotions = promotions

    def list_promotions(self) -> Sequence[Promotion]:
        return self._promotions.list_promotions()

    def list_public(self) -> Sequence[Promotion]:
        return self._promotions.list_public()

    def get_promotion(self, promotion_id: int) -> Promotion:
        promotion = self._promotions.get_promotion(promotion_id=int(promotion_id))
        if not promotion:
            raise ValidationError("Promotion not found")
        return promotion

    def list_redemptions(self, promotion_id: int) -> Sequence[PromotionRedemption]:
        return self._promotions.list_redemptions(promotion_id=int(promotion_id))

    def create_promotion(self, form: Mapping[str, str]) -> Optional[int]:
        payload = build_promotion_payload(form)
        return self._promotions.create_promotion(payload=payload)

    def update_promotion(self, promotion_id: int, form: Mapping[str, str]) -> None:
        payload = build_promotion_payload(form)
        self._promotions.update_promotion(promotion_id=int(promotion_id), payload=payload)

    def delete_promotion(self, promotion_id: int) -> None:
        self._promotions.delete_promotion(promotion_id=int(promotion_id))

    def create_code(self, promotion_id: int, form: Mapping[str, str]) -> str:
        payload = build_code_payload(form)
        self._promotions.create_code(promotion_id=int(promotion_id), payload=payload)
        return payload["code"]

    def toggle_code(self, promotion_id: int, code_id: int) -> None:
        self._promotions.toggle_code(promotion_id=int(promotion_id), code_id=int(code_id))

    def delete_code(self, promotion_id: int, code_id: int) -> None:
        self._promotions.delete_code(promotion_id=int(promotion_id), code_id=int(code_id))

    @staticmethod
    def discount_preview(promotion: Promotion, amount: str) -> Optional[dict]:
        value = optional_decimal(amount, "Amount")
        if value is None:
            return None
        discount = calculate_discount(promotion, value)
        return {"amount": value, "discount": discount, "total": value - discount}
