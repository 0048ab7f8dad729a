from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Promotion, PromotionRedemption


class PromotionRepository(Protocol):
    def list_promotions(self) -> Sequence[Promotion]:
        raise NotImplementedError

    def get_promotion(self, *, promotion_id: int) -> Optional[Promotion]:
        """Promotion including its coupon codes."""

        raise NotImplementedError

    def list_redemptions(self, *, promotion_id: int) -> Sequence[PromotionRedemption]:
        raise NotImplementedError

    def list_public(self) -> Sequence[Promotion]:
        raise NotImplementedError

    def create_promotion(self, *, payload: dict) -> Optional[int]:
        raise NotImplementedError

    def update_promotion(self, *, promotion_id: int, payload: dict) -> None:
        raise NotImplementedError

    def delete_promotion(self, *, promotion_id: int) -> None:
        raise NotImplementedError

    def create_code(self, *, promotion_id: int, payload: dict) -> None:
        raise NotImplementedError

    def toggle_code(self, *, promotion_id: int, code_id: int) -> None:
        raise NotImplementedError

    def delete_code(self, *, promotion_id: int, code_id: int) -> None:
        raise NotImplementedError
