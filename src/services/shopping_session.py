# src/services/shopping_session.py

"""Composition root tying search results to filters, coupons and lists."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from src.config.settings import Settings
from src.filters.filter_pipeline import FilterPipeline, RankedProduct
from src.models.alert import Alert
from src.models.coupon import Coupon
from src.models.filter_config import FilterConfig
from src.models.history_point import HistoryPoint
from src.models.product import Product
from src.models.trust import Tone
from src.models.wishlist_entry import WishlistEntry, WishlistKey
from src.services.coupon_engine import CouponEngine
from src.services.history_simulator import HistorySimulator
from src.services.search_client import SerpApiClient
from src.storage.alert_store import AlertStore
from src.storage.search_cache import SearchCache
from src.storage.wishlist_store import WishlistStore

logger = logging.getLogger("veribuy.session")

# Label shown in comparison rows for each trust tone
TRUST_LABELS: dict[Tone, str] = {
    Tone.GOOD: "Trusted",
    Tone.WARN: "Mixed",
    Tone.BAD: "Flagged",
}


@dataclass
class ShoppingState:
    """All mutable state for one user session."""

    query: str = ""
    raw: list[Product] = field(default_factory=list)
    config: FilterConfig = field(default_factory=FilterConfig)
    coupon: Coupon | None = None
    wishlist: WishlistStore = field(default_factory=WishlistStore)
    alerts: AlertStore = field(default_factory=AlertStore)


@dataclass(frozen=True)
class ViewRow:
    """One ranked result plus its price after the active coupon."""

    ranked: RankedProduct
    discounted_price: float | None

    @property
    def product(self) -> Product:
        return self.ranked.product


@dataclass(frozen=True)
class ComparisonRow:
    """A compact side-by-side row for the top-ranked offers."""

    source: str
    price: float | None
    trust_label: str
    trust_score: int
    coupon_status: str


class ShoppingSession:
    """Operations a front end performs against the session state.

    The ranked view is recomputed from ``state`` on every call, so a
    new search, filter change or coupon is always reflected.
    """

    def __init__(
        self,
        state: ShoppingState | None = None,
        client: Any = None,
        history: HistorySimulator | None = None,
        cache: SearchCache | None = None,
    ) -> None:
        self.state = state or ShoppingState()
        self._client = client
        self.history = history or HistorySimulator()
        self.cache = cache if cache is not None else SearchCache()

    @property
    def client(self) -> Any:
        """Search client, created on first use."""
        if self._client is None:
            self._client = SerpApiClient()
        return self._client

    # ── Results ──────────────────────────────────────────

    async def search(self, query: str) -> list[ViewRow]:
        """Fetch results for *query* and replace the raw list.

        Recent identical queries are served from the cache. Search
        errors propagate unchanged and keep the previous results.
        """
        cached = self.cache.get(query)
        if cached is not None:
            products = cached
        else:
            products = await asyncio.to_thread(self.client.search, query)
            self.cache.store(query, products)
        self.load_products(products, query=query.strip())
        return self.view()

    def load_products(
        self, products: list[Product], query: str = "",
    ) -> None:
        """Replace the raw result set wholesale."""
        self.state.raw = list(products)
        self.state.query = query
        logger.info(
            "Loaded %d raw products for '%s'", len(products), query
        )

    def update_config(self, config: FilterConfig) -> list[ViewRow]:
        """Switch to *config* and return the recomputed view."""
        self.state.config = config
        return self.view()

    def ranked(self) -> list[RankedProduct]:
        """Filtered and sorted products under the current config."""
        return FilterPipeline.apply(self.state.raw, self.state.config)

    def view(self) -> list[ViewRow]:
        """Ranked rows annotated with coupon-adjusted prices."""
        coupon = self.state.coupon
        return [
            ViewRow(
                ranked=r,
                discounted_price=CouponEngine.discounted_price(
                    r.product, coupon
                ),
            )
            for r in self.ranked()
        ]

    def comparison_rows(self) -> list[ComparisonRow]:
        """Comparison table rows for the top-ranked offers."""
        status = CouponEngine.coupon_status(self.state.coupon)
        return [
            ComparisonRow(
                source=r.product.source or "Unknown",
                price=r.product.price,
                trust_label=TRUST_LABELS[r.trust.tone],
                trust_score=r.trust.score,
                coupon_status=status,
            )
            for r in self.ranked()[: Settings.COMPARE_LIMIT]
        ]

    def _product_at(self, index: int) -> Product | None:
        """Product at *index* of the current view, if in range."""
        ranked = self.ranked()
        if 0 <= index < len(ranked):
            return ranked[index].product
        logger.debug("View index %d out of range (%d)", index, len(ranked))
        return None

    # ── Coupon ───────────────────────────────────────────

    def apply_coupon(self, code: str | None) -> Coupon | None:
        """Resolve *code* and make it the single active coupon."""
        self.state.coupon = CouponEngine.apply_coupon(code)
        return self.state.coupon

    # ── Wishlist ─────────────────────────────────────────

    def save_item(self, index: int) -> WishlistEntry | None:
        """Save the product at *index* of the current view."""
        product = self._product_at(index)
        if product is None:
            return None
        return self.state.wishlist.add(product)

    def remove_saved(self, key: WishlistKey) -> bool:
        return self.state.wishlist.remove(key)

    def wishlist(self) -> list[WishlistEntry]:
        return self.state.wishlist.list()

    # ── Alerts ───────────────────────────────────────────

    def save_alert(self, name: str) -> Alert | None:
        """Snapshot the current filter config as a named alert."""
        return self.state.alerts.add_from_config(name, self.state.config)

    def remove_alert(self, alert_id: str) -> bool:
        return self.state.alerts.remove(alert_id)

    def alerts(self) -> list[Alert]:
        return self.state.alerts.list()

    # ── History ──────────────────────────────────────────

    def history_for(
        self, index: int,
    ) -> tuple[Product, list[HistoryPoint]] | None:
        """Simulated price history for the product at *index*."""
        product = self._product_at(index)
        if product is None:
            return None
        return product, self.history.generate(product.price)
