"""In-memory TTL cache holding the last resolved catalog snapshot."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from src.models.product import CatalogStatus, Product

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """A catalog snapshot with its capture time."""

    products: tuple[Product, ...]
    timestamp: float
    ttl: float
    source: str | None = None

    def is_valid(self, now: float) -> bool:
        return now - self.timestamp < self.ttl

    def age(self, now: float) -> float:
        return max(now - self.timestamp, 0.0)


class CatalogCache:
    """Single-slot cache with a fixed time-to-live.

    There is no invalidation API: entries go stale when the TTL elapses and
    are superseded by the next ``put``. Writes are last-write-wins.
    """

    def __init__(self, ttl_seconds: float, *, clock: Clock | None = None) -> None:
        if ttl_seconds <= 0:
            raise ValueError("Cache TTL must be positive")
        self._ttl = float(ttl_seconds)
        self._clock = clock or time.monotonic
        self._entry: CacheEntry | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self) -> list[Product] | None:
        """Return a copy of the cached snapshot, or None when empty or stale."""

        entry = self._entry
        if entry is None:
            return None
        if not entry.is_valid(self._clock()):
            logger.debug("Catalog cache entry from %s is stale", entry.source)
            return None
        return list(entry.products)

    def put(self, products: list[Product], *, source: str | None = None) -> None:
        self._entry = CacheEntry(
            products=tuple(products),
            timestamp=self._clock(),
            ttl=self._ttl,
            source=source,
        )
        logger.debug("Cached %d catalog products from %s", len(products), source)

    def status(self) -> CatalogStatus:
        entry = self._entry
        if entry is None:
            return CatalogStatus(state="empty", ttl_seconds=self._ttl)

        now = self._clock()
        return CatalogStatus(
            state="valid" if entry.is_valid(now) else "stale",
            size=len(entry.products),
            age_seconds=round(entry.age(now), 3),
            ttl_seconds=self._ttl,
            source=entry.source,
        )
