# src/models/filter_config.py

"""User filter and sort configuration."""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.config.settings import Settings

logger = logging.getLogger("veribuy.filters")


class SortBy(Enum):
    """Primary sort orders offered to the user."""

    BEST_VALUE = "bestValue"
    LOWEST = "lowest"
    HIGHEST = "highest"
    MOST_REVIEWS = "mostReviews"

    @classmethod
    def parse(cls, value: Any) -> "SortBy":
        """Resolve a sort name, falling back to best value."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value in (member.value, member.name, member.name.lower()):
                return member
        return cls.BEST_VALUE


def _coerce_number(raw: Any, default: float) -> float:
    """Parse a user-entered number, returning *default* when invalid.

    Blank input, non-numeric text, booleans, NaN and infinities all
    fall back to the permissive default.
    """
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric filter input %r", raw)
        return default
    if not math.isfinite(value):
        return default
    return value


@dataclass(frozen=True)
class FilterConfig:
    """Active filter state driving the ranked view."""

    max_price: float = Settings.DEFAULT_MAX_PRICE
    min_rating: float = Settings.DEFAULT_MIN_RATING
    sort_by: SortBy = SortBy.BEST_VALUE
    strict: bool = True
    prefer_major: bool = False

    @classmethod
    def from_inputs(
        cls,
        max_price: Any = None,
        min_rating: Any = None,
        sort_by: Any = None,
        strict: Any = True,
        prefer_major: Any = False,
    ) -> "FilterConfig":
        """Build a config from raw form/CLI values without rejecting any."""
        return cls(
            max_price=_coerce_number(
                max_price, Settings.DEFAULT_MAX_PRICE
            ),
            min_rating=_coerce_number(
                min_rating, Settings.DEFAULT_MIN_RATING
            ),
            sort_by=SortBy.parse(sort_by),
            strict=bool(strict),
            prefer_major=bool(prefer_major),
        )
