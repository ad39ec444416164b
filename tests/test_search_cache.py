# tests/test_search_cache.py

"""Tests for the short-lived search result cache."""

import unittest

from src.models.product import Product
from src.storage.search_cache import SearchCache


class _Clock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestSearchCache(unittest.TestCase):
    """SearchCache unit tests."""

    def setUp(self) -> None:
        self.clock = _Clock()
        self.cache = SearchCache(ttl=60.0, clock=self.clock)
        self.products = [Product(title="Velvet Matte", price=12.0)]

    def test_miss_on_empty_cache(self) -> None:
        self.assertIsNone(self.cache.get("matte"))

    def test_hit_after_store(self) -> None:
        self.cache.store("matte", self.products)
        self.assertEqual(self.cache.get("matte"), self.products)

    def test_key_ignores_case_and_spacing(self) -> None:
        self.cache.store("Matte  Lipstick", self.products)
        self.assertEqual(
            self.cache.get("  matte lipstick "), self.products
        )

    def test_returned_list_is_a_copy(self) -> None:
        self.cache.store("matte", self.products)
        first = self.cache.get("matte")
        assert first is not None
        first.clear()
        self.assertEqual(len(self.cache.get("matte") or []), 1)

    def test_entry_expires_after_ttl(self) -> None:
        self.cache.store("matte", self.products)
        self.clock.now += 59.0
        self.assertIsNotNone(self.cache.get("matte"))
        self.clock.now += 1.0
        self.assertIsNone(self.cache.get("matte"))
        self.assertEqual(len(self.cache), 0)

    def test_store_overwrites(self) -> None:
        self.cache.store("matte", self.products)
        self.cache.store("MATTE", [])
        self.assertEqual(self.cache.get("matte"), [])
        self.assertEqual(len(self.cache), 1)

    def test_clear(self) -> None:
        self.cache.store("matte", self.products)
        self.cache.store("gloss", self.products)
        self.assertEqual(self.cache.clear(), 2)
        self.assertIsNone(self.cache.get("gloss"))


if __name__ == "__main__":
    unittest.main()
