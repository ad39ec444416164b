# tests/test_shopping_session.py

"""Tests for the ShoppingSession composition root."""

import random
import unittest
from datetime import date
from unittest.mock import MagicMock

from src.models.filter_config import FilterConfig, SortBy
from src.models.product import Product
from src.services.history_simulator import HistorySimulator
from src.services.search_client import MissingApiKeyError
from src.services.shopping_session import ShoppingSession, ShoppingState

_PRODUCTS = [
    Product(
        title="Velvet Matte", source="Ulta Beauty", price=12.0,
        rating=4.6, reviews=1402, link="https://ulta.com/p/1",
    ),
    Product(
        title="Budget Matte", source="lipshop.example", price=4.0,
        rating=None, reviews=0,
    ),
    Product(
        title="Luxe Matte", source="Sephora", price=28.0,
        rating=4.8, reviews=90,
    ),
]


def _session(client: MagicMock | None = None) -> ShoppingSession:
    history = HistorySimulator(
        rng=random.Random(1), today=lambda: date(2026, 3, 15)
    )
    return ShoppingSession(client=client, history=history)


class TestShoppingState(unittest.TestCase):
    """Default state construction."""

    def test_defaults_are_independent(self) -> None:
        first, second = ShoppingState(), ShoppingState()
        first.raw.append(_PRODUCTS[0])
        self.assertEqual(second.raw, [])
        self.assertIsNot(first.wishlist, second.wishlist)


class TestView(unittest.TestCase):
    """Ranked view and comparison rows."""

    def setUp(self) -> None:
        self.session = _session()
        self.session.load_products(_PRODUCTS, query="matte")

    def test_view_uses_config(self) -> None:
        rows = self.session.update_config(
            FilterConfig(sort_by=SortBy.LOWEST)
        )
        self.assertEqual(
            [r.product.title for r in rows],
            ["Budget Matte", "Velvet Matte", "Luxe Matte"],
        )

    def test_load_replaces_wholesale(self) -> None:
        self.session.load_products(_PRODUCTS[:1], query="velvet")
        self.assertEqual(len(self.session.view()), 1)
        self.assertEqual(self.session.state.query, "velvet")

    def test_coupon_reflected_in_view(self) -> None:
        self.session.apply_coupon("VERIBUY5")
        by_title = {
            r.product.title: r.discounted_price
            for r in self.session.view()
        }
        self.assertEqual(by_title["Velvet Matte"], 11.25)

    def test_clearing_coupon(self) -> None:
        self.session.apply_coupon("WELCOME")
        self.assertIsNone(self.session.apply_coupon(""))
        self.assertTrue(
            all(r.discounted_price is None for r in self.session.view())
        )

    def test_comparison_rows(self) -> None:
        self.session.apply_coupon("SAVE10")
        rows = self.session.comparison_rows()
        self.assertEqual(len(rows), 3)
        # Cheap-but-flagged edges out the trusted offer on value
        self.assertEqual(
            [r.source for r in rows],
            ["lipshop.example", "Ulta Beauty", "Sephora"],
        )
        flagged, trusted = rows[0], rows[1]
        self.assertEqual(flagged.trust_label, "Flagged")
        self.assertEqual(flagged.trust_score, 41)
        self.assertEqual(trusted.trust_label, "Trusted")
        self.assertEqual(trusted.trust_score, 88)
        self.assertTrue(
            all(r.coupon_status == "Unverified" for r in rows)
        )

    def test_comparison_rows_capped_at_eight(self) -> None:
        many = [
            Product(title=f"P{i}", source="Target", price=float(i))
            for i in range(12)
        ]
        self.session.load_products(many)
        self.assertEqual(len(self.session.comparison_rows()), 8)

    def test_unknown_source_label(self) -> None:
        self.session.load_products([Product(title="Anon", price=3.0)])
        row = self.session.comparison_rows()[0]
        self.assertEqual(row.source, "Unknown")
        self.assertEqual(row.trust_label, "Flagged")


class TestCollections(unittest.TestCase):
    """Wishlist, alerts and history via the session."""

    def setUp(self) -> None:
        self.session = _session()
        self.session.load_products(_PRODUCTS)

    def test_save_item_by_view_index(self) -> None:
        self.session.update_config(FilterConfig(sort_by=SortBy.LOWEST))
        entry = self.session.save_item(0)
        assert entry is not None
        self.assertEqual(entry.product.title, "Budget Matte")
        self.assertIsNone(self.session.save_item(0))
        self.assertEqual(len(self.session.wishlist()), 1)

    def test_save_item_out_of_range(self) -> None:
        self.assertIsNone(self.session.save_item(99))
        self.assertIsNone(self.session.save_item(-1))

    def test_wishlist_survives_new_results(self) -> None:
        self.session.save_item(0)
        self.session.load_products([])
        self.assertEqual(len(self.session.wishlist()), 1)

    def test_remove_saved(self) -> None:
        entry = self.session.save_item(0)
        assert entry is not None
        self.assertTrue(self.session.remove_saved(entry.dedupe_key))
        self.assertEqual(self.session.wishlist(), [])

    def test_save_alert_snapshots_config(self) -> None:
        self.session.update_config(
            FilterConfig(max_price=15.0, min_rating=4.0, strict=False)
        )
        alert = self.session.save_alert("Under 15")
        assert alert is not None
        self.assertEqual(alert.max_price, 15.0)
        self.assertEqual(alert.min_rating, 4.0)
        self.assertFalse(alert.strict)
        self.assertIsNone(self.session.save_alert("  "))
        self.assertTrue(self.session.remove_alert(alert.id))
        self.assertEqual(self.session.alerts(), [])

    def test_history_for(self) -> None:
        found = self.session.history_for(0)
        assert found is not None
        product, points = found
        self.assertEqual(product, self.session.view()[0].product)
        self.assertEqual(len(points), 8)
        self.assertEqual(points[-1].date, date(2026, 3, 15))

    def test_history_out_of_range(self) -> None:
        self.assertIsNone(self.session.history_for(10))


class TestSearch(unittest.IsolatedAsyncioTestCase):
    """Async search through an injected client."""

    async def test_search_loads_results(self) -> None:
        client = MagicMock()
        client.search.return_value = _PRODUCTS
        session = _session(client)

        rows = await session.search(" matte ")

        client.search.assert_called_once_with(" matte ")
        self.assertEqual(len(rows), 3)
        self.assertEqual(session.state.query, "matte")

    async def test_repeated_query_served_from_cache(self) -> None:
        client = MagicMock()
        client.search.return_value = _PRODUCTS
        session = _session(client)

        await session.search("matte")
        rows = await session.search("MATTE ")

        client.search.assert_called_once()
        self.assertEqual(len(rows), 3)

    async def test_failed_search_is_not_cached(self) -> None:
        client = MagicMock()
        client.search.side_effect = [MissingApiKeyError(), _PRODUCTS]
        session = _session(client)

        with self.assertRaises(MissingApiKeyError):
            await session.search("matte")
        rows = await session.search("matte")

        self.assertEqual(client.search.call_count, 2)
        self.assertEqual(len(rows), 3)

    async def test_search_error_keeps_previous_results(self) -> None:
        client = MagicMock()
        client.search.side_effect = MissingApiKeyError()
        session = _session(client)
        session.load_products(_PRODUCTS)

        with self.assertRaises(MissingApiKeyError):
            await session.search("matte")
        self.assertEqual(len(session.state.raw), 3)


if __name__ == "__main__":
    unittest.main()
