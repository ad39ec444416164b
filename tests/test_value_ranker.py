# tests/test_value_ranker.py

"""Tests for the best-value composite score."""

import unittest

from src.filters.value_ranker import value_score
from src.models.product import Product


class TestValueScore(unittest.TestCase):
    """value_score behaviour."""

    def test_formula(self) -> None:
        """(120 - 10*5) * 0.55 + 80 * 0.45 = 74.5."""
        product = Product(title="A", price=10.0)
        self.assertAlmostEqual(value_score(product, 80), 74.5)

    def test_price_component_floors_at_zero(self) -> None:
        """Prices above 24 contribute nothing."""
        product = Product(title="A", price=50.0)
        self.assertAlmostEqual(value_score(product, 60), 27.0)

    def test_unknown_price_ranks_low(self) -> None:
        """Unpriced items score on trust alone instead of failing."""
        unpriced = Product(title="A")
        cheap = Product(title="B", price=5.0)
        self.assertAlmostEqual(value_score(unpriced, 100), 45.0)
        self.assertGreater(
            value_score(cheap, 50), value_score(unpriced, 100)
        )

    def test_free_item(self) -> None:
        """A zero price earns the full price component."""
        product = Product(title="A", price=0.0)
        self.assertAlmostEqual(value_score(product, 0), 66.0)


if __name__ == "__main__":
    unittest.main()
