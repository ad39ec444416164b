# src/services/history_simulator.py

"""Synthetic weekly price history for the history panel."""

import logging
import random
from collections.abc import Callable
from datetime import date, timedelta

from src.config.settings import Settings
from src.models.history_point import HistoryPoint

logger = logging.getLogger("veribuy.history")


class HistorySimulator:
    """Generate a bounded random walk of weekly prices ending today.

    Pass a seeded :class:`random.Random` and a fixed ``today`` callable
    for reproducible output.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._rng = rng or random.Random()
        self._today = today

    def generate(self, current_price: float | None) -> list[HistoryPoint]:
        """Return the simulated series, oldest point first."""
        price = (
            current_price
            if current_price is not None
            else Settings.HISTORY_FALLBACK_PRICE
        )
        notes = Settings.HISTORY_NOTES
        drift = Settings.HISTORY_MAX_DRIFT
        end = self._today()
        count = Settings.HISTORY_POINTS
        start = price

        points: list[HistoryPoint] = []
        for step in range(count):
            weeks_back = count - 1 - step
            price = max(
                Settings.HISTORY_PRICE_FLOOR,
                price + self._rng.uniform(-drift, drift),
            )
            points.append(
                HistoryPoint(
                    date=end - timedelta(
                        days=weeks_back * Settings.HISTORY_STEP_DAYS
                    ),
                    price=round(price, 2),
                    note=notes[step % len(notes)],
                )
            )

        logger.debug(
            "Simulated %d history points starting at %.2f",
            len(points),
            start,
        )
        return points
