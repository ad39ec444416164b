# src/models/alert.py

"""Named price-alert snapshot of a filter configuration."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Alert:
    """A saved alert; ``id`` is unique for the process lifetime."""

    id: str
    name: str
    max_price: float
    min_rating: float
    strict: bool
    created_at: datetime
