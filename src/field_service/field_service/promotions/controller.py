from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import ApiError, ValidationError
from .discount import discount_display, is_redeemable

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.promotion_service

    @app.route("/promotions", methods=["GET"], endpoint="promotions")
    def promotions():
        edit_id = request.args.get("edit", type=int)
        try:
            items = service.list_promotions()
        except ApiError as e:
            flash(str(e) or "Failed to load promotions", "danger")
            items = []
        editing = next((p for p in items if p.promotion_id == edit_id), None) if edit_id else None
        return render_template(
            "promotions/index.html",
            promotions=items,
            editing=editing,
            discount_display=discount_display,
            active_page="promotions",
        )

    @app.route("/promotions/new", methods=["POST"], endpoint="create_promotion")
    def create_promotion():
        try:
            service.create_promotion(request.form)
            flash("Promotion created successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to create promotion", "danger")
        except Exception:
            logger.exception("create promotion failed")
            flash("Failed to create promotion", "danger")
        return redirect(url_for("promotions"))

    @app.route("/promotions/<int:promotion_id>/edit", methods=["POST"], endpoint="update_promotion")
    def update_promotion(promotion_id: int):
        try:
            service.update_promotion(promotion_id, request.form)
            flash("Promotion updated successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to update promotion", "danger")
            return redirect(url_for("promotions", edit=promotion_id))
        except Exception:
            logger.exception("update promotion %s failed", promotion_id)
            flash("Failed to update promotion", "danger")
        return redirect(url_for("promotions"))

    @app.route("/promotions/<int:promotion_id>/delete", methods=["POST"], endpoint="delete_promotion")
    def delete_promotion(promotion_id: int):
        try:
            service.delete_promotion(promotion_id)
            flash("Promotion deleted successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to delete promotion", "danger")
        except Exception:
            logger.exception("delete promotion %s failed", promotion_id)
            flash("Failed to delete promotion", "danger")
        return redirect(url_for("promotions"))

    @app.route("/promotions/<int:promotion_id>", methods=["GET"], endpoint="promotion_detail")
    def promotion_detail(promotion_id: int):
        tab = request.args.get("tab", "codes")
        try:
            promotion = service.get_promotion(promotion_id)
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to load promotion", "danger")
            return redirect(url_for("promotions"))

        redemptions = []
        if tab == "redemptions":
            try:
                redemptions = service.list_redemptions(promotion_id)
            except ApiError as e:
                flash(str(e) or "Failed to load redemptions", "danger")

        preview = None
        amount = request.args.get("amount", "")
        if amount:
            try:
                preview = service.discount_preview(promotion, amount)
            except ValidationError as e:
                flash(str(e), "danger")

        return render_template(
            "promotions/detail.html",
            promotion=promotion,
            tab=tab,
            redemptions=redemptions,
            preview=preview,
            amount=amount,
            redeemable=is_redeemable(promotion),
            discount_display=discount_display,
            active_page="promotions",
        )

    @app.route("/promotions/<int:promotion_id>/codes", methods=["POST"], endpoint="create_coupon_code")
    def create_coupon_code(promotion_id: int):
        try:
            code = service.create_code(promotion_id, request.form)
            flash(f"Coupon code {code} created successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to create coupon code", "danger")
        except Exception:
            logger.exception("create coupon code for promotion %s failed", promotion_id)
            flash("Failed to create coupon code", "danger")
        return redirect(url_for("promotion_detail", promotion_id=promotion_id))

    @app.route(
        "/promotions/<int:promotion_id>/codes/<int:code_id>/toggle",
        methods=["POST"],
        endpoint="toggle_coupon_code",
    )
    def toggle_coupon_code(promotion_id: int, code_id: int):
        try:
            service.toggle_code(promotion_id, code_id)
            flash("Coupon code status updated", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to toggle coupon code", "danger")
        except Exception:
            logger.exception("toggle coupon code %s failed", code_id)
            flash("Failed to toggle coupon code", "danger")
        return redirect(url_for("promotion_detail", promotion_id=promotion_id))

    @app.route(
        "/promotions/<int:promotion_id>/codes/<int:code_id>/delete",
        methods=["POST"],
        endpoint="delete_coupon_code",
    )
    def delete_coupon_code(promotion_id: int, code_id: int):
        try:
            service.delete_code(promotion_id, code_id)
            flash("Coupon code deleted successfully", "success")
        except (ValidationError, ApiError) as e:
            flash(str(e) or "Failed to delete coupon code", "danger")
        except Exception:
            logger.exception("delete coupon code %s failed", code_id)
            flash("Failed to delete coupon code", "danger")
        return redirect(url_for("promotion_detail", promotion_id=promotion_id))

    @app.route("/promotions/public", methods=["GET"], endpoint="public_promotions")
    def public_promotions():
        try:
            items = service.list_public()
        except ApiError as e:
            flash(str(e) or "Failed to load promotions", "danger")
            items = []
        return render_template(
            "promotions/public.html",
            promotions=items,
            discount_display=discount_display,
            active_page="public_promotions",
        )
