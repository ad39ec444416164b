# src/models/wishlist_entry.py

"""Saved-product model for the wishlist."""

from dataclasses import dataclass
from datetime import datetime

from src.models.product import Product

WishlistKey = tuple[str, str | None, float | None]


def wishlist_key(product: Product) -> WishlistKey:
    """Composite identity of a saved product: (title, source, price)."""
    return (product.title, product.source, product.price)


def format_key(key: WishlistKey) -> str:
    """Human-readable ``title::source::price`` form of a key."""
    title, source, price = key
    price_part = "" if price is None else f"{price:g}"
    return f"{title}::{source}::{price_part}"


@dataclass(frozen=True)
class WishlistEntry:
    """A product saved by the user."""

    product: Product
    dedupe_key: WishlistKey
    saved_at: datetime

    @property
    def key_text(self) -> str:
        """Display form of :attr:`dedupe_key`."""
        return format_key(self.dedupe_key)
