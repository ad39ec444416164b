# src/filters/value_ranker.py

"""Composite price/trust ranking score."""

from src.config.settings import Settings
from src.models.product import Product

PRICE_WEIGHT = 0.55
TRUST_WEIGHT = 0.45


def value_score(product: Product, trust_score: int) -> float:
    """Blend price and trust into one "best value" number (higher wins).

    Unpriced products use the 999 sentinel, which zeroes the price
    component instead of failing.
    """
    price = (
        product.price
        if product.price is not None
        else Settings.UNKNOWN_PRICE
    )
    price_component = max(0.0, 120 - price * 5)
    return price_component * PRICE_WEIGHT + trust_score * TRUST_WEIGHT
