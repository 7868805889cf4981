"""Fallback tiers the catalog resolver draws products from."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Literal

from src.models.product import Product
from src.services.clients.catalog_client import CatalogServiceClient

logger = logging.getLogger(__name__)

OutcomeStatus = Literal["success", "empty", "failure"]


@dataclass(frozen=True)
class TierOutcome:
    """Tagged result of loading a single tier."""

    tier: str
    status: OutcomeStatus
    products: list[Product] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_products(cls, tier: str, products: Sequence[Product]) -> TierOutcome:
        if not products:
            return cls(tier=tier, status="empty")
        return cls(tier=tier, status="success", products=list(products))

    @classmethod
    def failed(cls, tier: str, error: BaseException | str) -> TierOutcome:
        return cls(tier=tier, status="failure", error=str(error) or repr(error))

    @property
    def usable(self) -> bool:
        return self.status == "success"


def select_outcome(outcomes: Sequence[TierOutcome]) -> TierOutcome | None:
    """Pick the first usable outcome, honoring the given priority order."""

    for outcome in outcomes:
        if outcome.usable:
            return outcome
    return None


class CatalogTier(ABC):
    """A source of catalog products. ``load`` never raises."""

    name: str

    @abstractmethod
    async def load(self) -> TierOutcome:
        """Load the tier and describe the result."""


class RemoteCatalogTier(CatalogTier):
    """Primary tier: the remote catalog service."""

    def __init__(
        self,
        client: CatalogServiceClient | None,
        *,
        timeout: float,
        name: str = "remote",
    ) -> None:
        self.name = name
        self._client = client
        self._timeout = timeout

    async def load(self) -> TierOutcome:
        if self._client is None:
            return TierOutcome.failed(self.name, "catalog service not configured")
        try:
            products = await asyncio.wait_for(
                self._client.fetch_published_products(),
                timeout=self._timeout,
            )
        except TimeoutError:
            logger.warning(
                "Catalog tier %s timed out after %.1fs", self.name, self._timeout
            )
            return TierOutcome.failed(self.name, "timeout")
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Catalog tier %s failed: %s", self.name, exc)
            return TierOutcome.failed(self.name, exc)
        return TierOutcome.from_products(self.name, products)


class StaticCatalogTier(CatalogTier):
    """Tier backed by a dataset bundled with the service."""

    def __init__(self, name: str, loader: Callable[[], Sequence[Product]]) -> None:
        self.name = name
        self._loader = loader

    async def load(self) -> TierOutcome:
        try:
            products = self._loader()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Catalog tier %s failed: %s", self.name, exc)
            return TierOutcome.failed(self.name, exc)
        return TierOutcome.from_products(self.name, products)
