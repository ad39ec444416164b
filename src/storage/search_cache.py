# src/storage/search_cache.py

"""Short-lived in-memory cache of search results per query."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("veribuy.cache")


@dataclass
class CacheEntry:
    """Results fetched for one normalised query."""

    query: str
    results: list[Product]
    timestamp: float


class SearchCache:
    """TTL cache so repeated searches skip the provider round trip.

    Queries are matched case- and whitespace-insensitively. Entries
    expire after ``Settings.SEARCH_CACHE_TTL`` seconds.
    """

    def __init__(
        self,
        ttl: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._ttl = Settings.SEARCH_CACHE_TTL if ttl is None else ttl
        self._clock = clock

    @staticmethod
    def _key(query: str) -> str:
        return " ".join(query.lower().split())

    def get(self, query: str) -> list[Product] | None:
        """Cached results for *query*, or None on a miss."""
        self._evict_expired(self._clock())
        entry = self._entries.get(self._key(query))
        if entry is None:
            return None
        logger.info("Cache hit for '%s'", entry.query)
        return list(entry.results)

    def store(self, query: str, results: list[Product]) -> None:
        """Remember *results* for *query*."""
        key = self._key(query)
        self._entries[key] = CacheEntry(
            query=key, results=list(results), timestamp=self._clock()
        )
        logger.debug("Cached %d results for '%s'", len(results), key)

    def clear(self) -> int:
        """Purge all entries, returning how many were removed."""
        count = len(self._entries)
        self._entries.clear()
        logger.info("Search cache purged (%d entries removed)", count)
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_expired(self, now: float) -> None:
        """Drop entries older than the TTL."""
        expired = [
            k for k, e in self._entries.items()
            if now - e.timestamp >= self._ttl
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Evicted %d expired cache entries", len(expired))
