# tests/test_history_simulator.py

"""Tests for the synthetic price history generator."""

import random
import unittest
from datetime import date, timedelta
from unittest.mock import MagicMock

from src.config.settings import Settings
from src.services.history_simulator import HistorySimulator

_TODAY = date(2026, 3, 15)


def _simulator(seed: int = 7) -> HistorySimulator:
    return HistorySimulator(rng=random.Random(seed), today=lambda: _TODAY)


class TestHistorySimulator(unittest.TestCase):
    """HistorySimulator.generate behaviour."""

    def test_eight_points(self) -> None:
        self.assertEqual(len(_simulator().generate(12.0)), 8)

    def test_dates_weekly_ending_today(self) -> None:
        points = _simulator().generate(12.0)
        self.assertEqual(points[-1].date, _TODAY)
        self.assertEqual(points[0].date, _TODAY - timedelta(days=49))
        for prev, cur in zip(points, points[1:]):
            self.assertEqual(cur.date - prev.date, timedelta(days=7))

    def test_price_floor(self) -> None:
        """Prices never fall below 4, even from a tiny start."""
        rng = MagicMock()
        rng.uniform.return_value = -0.9
        points = HistorySimulator(rng=rng, today=lambda: _TODAY).generate(
            4.5
        )
        self.assertTrue(all(p.price >= 4 for p in points))
        self.assertEqual(points[-1].price, 4.0)

    def test_floor_across_seeds(self) -> None:
        for seed in range(30):
            points = _simulator(seed).generate(4.0)
            self.assertTrue(all(p.price >= 4 for p in points))

    def test_drift_bounded(self) -> None:
        """Each step moves at most 0.9 (plus rounding)."""
        points = _simulator().generate(20.0)
        prices = [20.0] + [p.price for p in points]
        for prev, cur in zip(prices, prices[1:]):
            self.assertLessEqual(abs(cur - prev), 0.9 + 0.011)

    def test_rounded_to_cents(self) -> None:
        for p in _simulator().generate(13.37):
            self.assertEqual(p.price, round(p.price, 2))

    def test_notes_cycle_in_order(self) -> None:
        notes = [p.note for p in _simulator().generate(10.0)]
        self.assertEqual(notes, Settings.HISTORY_NOTES[:8])

    def test_seeded_output_is_reproducible(self) -> None:
        self.assertEqual(
            _simulator(3).generate(10.0), _simulator(3).generate(10.0)
        )

    def test_exact_sequence_with_fixed_drift(self) -> None:
        rng = MagicMock()
        rng.uniform.return_value = 0.5
        points = HistorySimulator(rng=rng, today=lambda: _TODAY).generate(
            10.0
        )
        self.assertEqual(
            [p.price for p in points],
            [10.5, 11.0, 11.5, 12.0, 12.5, 13.0, 13.5, 14.0],
        )
        rng.uniform.assert_called_with(-0.9, 0.9)

    def test_unknown_price_uses_fallback(self) -> None:
        rng = MagicMock()
        rng.uniform.return_value = 0.0
        points = HistorySimulator(rng=rng, today=lambda: _TODAY).generate(
            None
        )
        self.assertTrue(all(p.price == 18.0 for p in points))


if __name__ == "__main__":
    unittest.main()
