# src/storage/wishlist_store.py

"""In-memory, deduplicated wishlist of saved products."""

import logging
from collections.abc import Callable, Iterator
from datetime import datetime

from src.models.product import Product
from src.models.wishlist_entry import (
    WishlistEntry,
    WishlistKey,
    format_key,
    wishlist_key,
)

logger = logging.getLogger("veribuy.wishlist")


class WishlistStore:
    """Ordered (most-recent-first) collection of saved products.

    Entries are unique by their ``(title, source, price)`` key. The
    store itself is unbounded; renderers truncate for display.
    Mutations are not atomic: callers on more than one thread must
    serialise access.
    """

    def __init__(
        self, clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._entries: list[WishlistEntry] = []
        self._keys: set[WishlistKey] = set()
        self._clock = clock

    def add(self, product: Product) -> WishlistEntry | None:
        """Save *product*; returns None if it is already saved."""
        key = wishlist_key(product)
        if key in self._keys:
            logger.debug("Wishlist already holds %s", format_key(key))
            return None

        entry = WishlistEntry(
            product=product, dedupe_key=key, saved_at=self._clock()
        )
        self._entries.insert(0, entry)
        self._keys.add(key)
        logger.info("Saved to wishlist: %s", format_key(key))
        return entry

    def remove(self, key: WishlistKey) -> bool:
        """Remove the entry with *key*; returns False when absent."""
        if key not in self._keys:
            return False
        self._entries = [e for e in self._entries if e.dedupe_key != key]
        self._keys.discard(key)
        logger.info("Removed from wishlist: %s", format_key(key))
        return True

    def list(self) -> list[WishlistEntry]:
        """Snapshot of the entries, newest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, product: object) -> bool:
        if not isinstance(product, Product):
            return False
        return wishlist_key(product) in self._keys

    def __iter__(self) -> Iterator[WishlistEntry]:
        return iter(self.list())
