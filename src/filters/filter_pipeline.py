# src/filters/filter_pipeline.py

"""Filter, partition and rank raw search results."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from src.config.settings import Settings
from src.filters.trust_scorer import TrustScorer, is_major_retailer
from src.filters.value_ranker import value_score
from src.models.filter_config import FilterConfig, SortBy
from src.models.product import Product
from src.models.trust import TrustAssessment

logger = logging.getLogger("veribuy.filters")


@dataclass(frozen=True)
class RankedProduct:
    """A product paired with its trust assessment under the active config."""

    product: Product
    trust: TrustAssessment

    @property
    def value(self) -> float:
        """Best-value score of this entry."""
        return value_score(self.product, self.trust.score)


def _sort_key(sort_by: SortBy) -> Callable[[RankedProduct], float]:
    """Ascending key function implementing *sort_by*.

    Descending orders negate the key so every sort stays a single
    stable ``sorted`` call.
    """
    if sort_by is SortBy.LOWEST:
        return lambda r: (
            r.product.price
            if r.product.price is not None
            else Settings.UNKNOWN_PRICE
        )
    if sort_by is SortBy.HIGHEST:
        return lambda r: -(r.product.rating or 0.0)
    if sort_by is SortBy.MOST_REVIEWS:
        return lambda r: -(r.product.reviews or 0)
    return lambda r: -r.value


class FilterPipeline:
    """Apply a :class:`FilterConfig` to a raw product list."""

    @staticmethod
    def matches(product: Product, config: FilterConfig) -> bool:
        """Return True when *product* passes the price and rating bounds.

        Unknown prices always pass. Unknown ratings pass only while no
        minimum rating is set.
        """
        price_ok = (
            product.price is None or product.price <= config.max_price
        )
        if product.rating is None:
            rating_ok = config.min_rating == 0
        else:
            rating_ok = product.rating >= config.min_rating
        return price_ok and rating_ok

    @staticmethod
    def apply(
        products: Iterable[Product],
        config: FilterConfig,
    ) -> list[RankedProduct]:
        """Filter, optionally partition by retailer, then sort.

        The primary sort is stable over the whole list, so the
        major-retailer partition only decides between equal keys.
        """
        raw = list(products)
        kept = [p for p in raw if FilterPipeline.matches(p, config)]

        if config.prefer_major:
            kept = sorted(
                kept, key=lambda p: not is_major_retailer(p.source)
            )

        ranked = [
            RankedProduct(p, TrustScorer.score(p, config.strict))
            for p in kept
        ]
        ranked = sorted(ranked, key=_sort_key(config.sort_by))

        logger.debug(
            "Pipeline kept %d of %d products (sort=%s, strict=%s, "
            "prefer_major=%s)",
            len(ranked),
            len(raw),
            config.sort_by.value,
            config.strict,
            config.prefer_major,
        )
        return ranked
