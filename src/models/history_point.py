# src/models/history_point.py

"""Simulated price observation for the history view."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class HistoryPoint:
    """A single weekly price point in a simulated history."""

    date: date
    price: float
    note: str
