from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..api.http_repository import HttpRepository, as_bool, as_decimal, as_enum, as_int
from ..common.datetime_utils import parse_iso_datetime, parse_optional_date
from ..core.enums import DiscountType, PromotionStatus
from ..core.exceptions import NotFoundError
from .model import CouponCode, Promotion, PromotionRedemption
from .repository import PromotionRepository

PROMOTIONS_KEY = "/api/promotions"


def _row_to_code(r: dict) -> CouponCode:
    return CouponCode(
        code_id=int(r["id"]),
        promotion_id=int(r.get("promotionId") or 0),
        code=str(r.get("code") or ""),
        max_redemptions=as_int(r.get("maxRedemptions")),
        current_redemptions=int(r.get("currentRedemptions") or 0),
        is_active=as_bool(r.get("isActive")),
        created_at=parse_iso_datetime(r.get("createdAt")),
        expires_at=parse_iso_datetime(r.get("expiresAt")),
    )


def _row_to_promotion(r: dict) -> Promotion:
    return Promotion(
        promotion_id=int(r["id"]),
        organization_id=as_int(r.get("organizationId")),
        name=str(r.get("name") or ""),
        description=r.get("description"),
        status=as_enum(PromotionStatus, r.get("status"), PromotionStatus.INACTIVE),
        discount_type=as_enum(DiscountType, r.get("discountType"), DiscountType.PERCENTAGE),
        discount_value=as_decimal(r.get("discountValue")),
        start_date=parse_optional_date(r.get("startDate")),
        end_date=parse_optional_date(r.get("endDate")),
        max_redemptions=as_int(r.get("maxRedemptions")),
        current_redemptions=int(r.get("currentRedemptions") or 0),
        per_customer_limit=as_int(r.get("perCustomerLimit")) or 1,
        applies_to=str(r.get("appliesTo") or "all"),
        minimum_purchase=as_decimal(r.get("minimumPurchase")),
        stackable=as_bool(r.get("stackable")),
        auto_apply=as_bool(r.get("autoApply")),
        coupon_codes=tuple(_row_to_code(c) for c in (r.get("couponCodes") or [])),
    )


def _row_to_redemption(r: dict) -> PromotionRedemption:
    return PromotionRedemption(
        redemption_id=int(r["id"]),
        promotion_id=int(r.get("promotionId") or 0),
        coupon_code_id=as_int(r.get("couponCodeId")),
        discount_amount=as_decimal(r.get("discountAmount")) or Decimal("0"),
        original_amount=as_decimal(r.get("originalAmount")),
        status=str(r.get("status") or ""),
        redeemed_at=parse_iso_datetime(r.get("redeemedAt")),
    )


class HttpPromotionRepository(HttpRepository, PromotionRepository):
    def list_promotions(self) -> Sequence[Promotion]:
        return [_row_to_promotion(r) for r in self._query_list(PROMOTIONS_KEY)]

    def get_promotion(self, *, promotion_id: int) -> Optional[Promotion]:
        try:
            r = self._query(PROMOTIONS_KEY, int(promotion_id))
        except NotFoundError:
            return None
        return _row_to_promotion(r) if r else None

    def list_redemptions(self, *, promotion_id: int) -> Sequence[PromotionRedemption]:
        return [_row_to_redemption(r) for r in self._query_list(PROMOTIONS_KEY, int(promotion_id), "redemptions")]

    def list_public(self) -> Sequence[Promotion]:
        return [_row_to_promotion(r) for r in self._query_list(PROMOTIONS_KEY, "public")]

    def create_promotion(self, *, payload: dict) -> Optional[int]:
        created = self._mutate("POST", PROMOTIONS_KEY, payload, invalidate=[(PROMOTIONS_KEY,)])
        if isinstance(created, dict) and created.get("id") is not None:
            return int(created["id"])
        return None

    def update_promotion(self, *, promotion_id: int, payload: dict) -> None:
        self._mutate("PUT", f"{PROMOTIONS_KEY}/{int(promotion_id)}", payload, invalidate=[(PROMOTIONS_KEY,)])

    def delete_promotion(self, *, promotion_id: int) -> None:
        self._mutate("DELETE", f"{PROMOTIONS_KEY}/{int(promotion_id)}", invalidate=[(PROMOTIONS_KEY,)])

    def create_code(self, *, promotion_id: int, payload: dict) -> None:
        self._mutate(
            "POST",
            f"{PROMOTIONS_KEY}/{int(promotion_id)}/codes",
            payload,
            invalidate=[(PROMOTIONS_KEY, int(promotion_id))],
        )

    def toggle_code(self, *, promotion_id: int, code_id: int) -> None:
        self._mutate(
            "PATCH",
            f"{PROMOTIONS_KEY}/codes/{int(code_id)}/toggle",
            invalidate=[(PROMOTIONS_KEY, int(promotion_id))],
        )

    def delete_code(self, *, promotion_id: int, code_id: int) -> None:
        self._mutate(
            "DELETE",
            f"{PROMOTIONS_KEY}/codes/{int(code_id)}",
            invalidate=[(PROMOTIONS_KEY, int(promotion_id))],
        )
