"""Catalog source resolution with a layered fallback chain."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from src.config import settings
from src.models.product import CatalogStatus, Product
from src.services.catalog.cache import CatalogCache
from src.services.catalog.seed_data import load_emergency_catalog, load_seed_catalog
from src.services.catalog.tiers import (
    CatalogTier,
    RemoteCatalogTier,
    StaticCatalogTier,
    TierOutcome,
    select_outcome,
)
from src.services.clients.catalog_client import get_catalog_service_client

logger = logging.getLogger(__name__)


class CatalogUnavailableError(RuntimeError):
    """Raised when every catalog tier failed or came back empty."""

    def __init__(self, outcomes: Sequence[TierOutcome]):
        self.outcomes = list(outcomes)
        summary = ", ".join(
            f"{outcome.tier}={outcome.status}" for outcome in self.outcomes
        )
        super().__init__(f"No products available ({summary})")


class CatalogResolver:
    """Serve the catalog from cache, re-resolving through the tiers when stale.

    ``tiers`` are loaded concurrently and chosen in priority order. The
    ``emergency`` tier is only consulted when none of them produced products.
    """

    def __init__(
        self,
        cache: CatalogCache,
        tiers: Sequence[CatalogTier],
        emergency: CatalogTier | None = None,
    ) -> None:
        if not tiers:
            raise ValueError("At least one catalog tier is required")
        self._cache = cache
        self._tiers = list(tiers)
        self._emergency = emergency
        self._last_source: str | None = None

    @property
    def last_source(self) -> str | None:
        return self._last_source

    def cache_status(self) -> CatalogStatus:
        return self._cache.status()

    async def resolve(self, *, force_refresh: bool = False) -> list[Product]:
        if not force_refresh:
            cached = self._cache.get()
            if cached is not None:
                return cached

        outcomes = list(await asyncio.gather(*(tier.load() for tier in self._tiers)))
        chosen = select_outcome(outcomes)

        if chosen is None and self._emergency is not None:
            logger.warning(
                "All primary catalog tiers unavailable, using %s dataset",
                self._emergency.name,
                extra={"outcomes": [o.status for o in outcomes]},
            )
            emergency_outcome = await self._emergency.load()
            outcomes.append(emergency_outcome)
            chosen = select_outcome([emergency_outcome])

        if chosen is None:
            logger.error(
                "Catalog resolution exhausted every tier",
                extra={"outcomes": {o.tier: o.error or o.status for o in outcomes}},
            )
            raise CatalogUnavailableError(outcomes)

        self._cache.put(chosen.products, source=chosen.tier)
        self._last_source = chosen.tier
        logger.info(
            "Resolved %d catalog products from %s tier",
            len(chosen.products),
            chosen.tier,
        )
        return chosen.products


def create_catalog_resolver() -> CatalogResolver:
    """Build a resolver wired to the configured remote service and datasets."""

    cache = CatalogCache(settings.CATALOG_CACHE_TTL_SECONDS)
    tiers: list[CatalogTier] = [
        RemoteCatalogTier(
            get_catalog_service_client(),
            timeout=settings.CATALOG_FETCH_TIMEOUT_SECONDS,
        ),
        StaticCatalogTier("seed", load_seed_catalog),
    ]
    emergency = StaticCatalogTier("emergency", load_emergency_catalog)
    return CatalogResolver(cache, tiers, emergency)


_catalog_resolver: CatalogResolver | None = None


def get_catalog_resolver() -> CatalogResolver:
    """Return a singleton resolver for the current process."""

    global _catalog_resolver
    if _catalog_resolver is None:
        _catalog_resolver = create_catalog_resolver()
    return _catalog_resolver
