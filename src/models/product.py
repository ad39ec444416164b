# src/models/product.py

"""Product data model for inter-module data flow."""

import math
from dataclasses import dataclass
from typing import Any


def _as_number(value: Any) -> float | None:
    """Return *value* as a float, or None when it is not a real number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _as_count(value: Any) -> int | None:
    """Return *value* as an int count, or None when it is not numeric."""
    number = _as_number(value)
    return int(number) if number is not None else None


def _as_text(value: Any) -> str | None:
    """Return a non-empty string, or None for blanks and non-strings."""
    if isinstance(value, str) and value.strip():
        return value
    return None


@dataclass(frozen=True)
class Product:
    """A single shopping-search result.

    Unknown values are ``None``; they are never coerced to 0 or "".
    """

    title: str
    source: str | None = None
    link: str | None = None
    thumbnail: str | None = None
    price: float | None = None
    price_text: str | None = None
    rating: float | None = None
    reviews: int | None = None
    delivery: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Product":
        """Build a Product from an inbound search-result record.

        Accepts both ``priceText`` and ``price_text`` keys. Missing or
        wrongly-typed fields resolve to ``None``.
        """
        price_text = record.get("priceText", record.get("price_text"))
        return cls(
            title=_as_text(record.get("title")) or "Untitled",
            source=_as_text(record.get("source")),
            link=_as_text(record.get("link")),
            thumbnail=_as_text(record.get("thumbnail")),
            price=_as_number(record.get("price")),
            price_text=_as_text(price_text),
            rating=_as_number(record.get("rating")),
            reviews=_as_count(record.get("reviews")),
            delivery=_as_text(record.get("delivery")),
        )

    def to_record(self) -> dict[str, Any]:
        """Serialise to the inbound record shape (camelCase price text)."""
        return {
            "title": self.title,
            "source": self.source,
            "link": self.link,
            "thumbnail": self.thumbnail,
            "price": self.price,
            "priceText": self.price_text,
            "rating": self.rating,
            "reviews": self.reviews,
            "delivery": self.delivery,
        }
