# src/storage/alert_store.py

"""In-memory store of named price alerts."""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from src.models.alert import Alert
from src.models.filter_config import FilterConfig

logger = logging.getLogger("veribuy.alerts")


class AlertStore:
    """Most-recent-first list of filter snapshots saved as alerts."""

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ) -> None:
        self._alerts: list[Alert] = []
        self._clock = clock
        self._new_id = id_factory

    def _unique_id(self) -> str:
        """Draw ids until one is not already in use."""
        taken = {a.id for a in self._alerts}
        candidate = self._new_id()
        while candidate in taken:
            candidate = self._new_id()
        return candidate

    def add(
        self,
        name: str,
        max_price: float,
        min_rating: float,
        strict: bool,
    ) -> Alert | None:
        """Create and prepend an alert; blank names are ignored."""
        clean_name = (name or "").strip()
        if not clean_name:
            logger.debug("Rejected alert with blank name")
            return None

        alert = Alert(
            id=self._unique_id(),
            name=clean_name,
            max_price=max_price,
            min_rating=min_rating,
            strict=strict,
            created_at=self._clock(),
        )
        self._alerts.insert(0, alert)
        logger.info(
            "Alert '%s' saved (id=%s, max=%.2f, min_rating=%.1f)",
            alert.name,
            alert.id,
            alert.max_price,
            alert.min_rating,
        )
        return alert

    def add_from_config(
        self, name: str, config: FilterConfig,
    ) -> Alert | None:
        """Snapshot the bounds of *config* under *name*."""
        return self.add(
            name, config.max_price, config.min_rating, config.strict
        )

    def remove(self, alert_id: str) -> bool:
        """Delete the alert with *alert_id*; no-op when missing."""
        before = len(self._alerts)
        self._alerts = [a for a in self._alerts if a.id != alert_id]
        removed = len(self._alerts) < before
        if removed:
            logger.info("Alert %s removed", alert_id)
        return removed

    def list(self) -> list[Alert]:
        """Snapshot of the alerts, newest first."""
        return list(self._alerts)

    def __len__(self) -> int:
        return len(self._alerts)
