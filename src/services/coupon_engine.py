# src/services/coupon_engine.py

"""Demo coupon resolution and discounted-price calculation."""

import logging
from typing import cast

from src.config.settings import Settings
from src.models.coupon import Coupon
from src.models.product import Product

logger = logging.getLogger("veribuy.coupons")


class CouponEngine:
    """Resolve coupon codes against the static rule table."""

    @staticmethod
    def apply_coupon(code: str | None) -> Coupon | None:
        """Resolve *code* (trimmed, case-insensitive) to a Coupon.

        Blank input clears the coupon and returns None. Unknown codes
        return an unverified zero-amount Coupon carrying the code.
        """
        normalised = (code or "").strip().upper()
        if not normalised:
            logger.debug("Coupon cleared")
            return None

        rule = Settings.COUPON_RULES.get(normalised)
        if rule is None:
            logger.info("Coupon code '%s' not found", normalised)
            return Coupon(
                code=normalised,
                amount=0.0,
                verified=False,
                message=f'Code "{normalised}" not found (demo).',
            )

        coupon = Coupon(
            code=normalised,
            amount=float(cast(float, rule["amount"])),
            verified=bool(rule["verified"]),
            message=str(rule["message"]),
        )
        logger.info(
            "Coupon '%s' applied (amount=%.2f, verified=%s)",
            coupon.code,
            coupon.amount,
            coupon.verified,
        )
        return coupon

    @staticmethod
    def discounted_price(
        product: Product, coupon: Coupon | None
    ) -> float | None:
        """Price after the coupon, or None when no discount applies."""
        if coupon is None or product.price is None:
            return None
        return max(0.0, round(product.price - coupon.amount, 2))

    @staticmethod
    def coupon_status(coupon: Coupon | None) -> str:
        """Short status label used by the comparison rows."""
        if coupon is None:
            return "—"
        return "Verified applied" if coupon.verified else "Unverified"

    @staticmethod
    def describe(coupon: Coupon | None) -> str:
        """Full user-facing message for the coupon panel."""
        if coupon is None:
            return "Enter a code to see verified/unverified behavior."
        if coupon.amount <= 0:
            return coupon.message
        return f"{coupon.message} Discount: ${coupon.amount:.2f}"
