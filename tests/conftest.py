"""Pytest configuration and fixtures for the storefront catalog service."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
import pytest_asyncio
from fakeredis import aioredis as fakeredis
from httpx import ASGITransport, AsyncClient

from src.models.product import Product
from src.services.catalog.cache import CatalogCache
from src.services.catalog.resolver import CatalogResolver, get_catalog_resolver
from src.services.catalog.seed_data import load_emergency_catalog, load_seed_catalog
from src.services.catalog.tiers import CatalogTier, StaticCatalogTier, TierOutcome
from src.services.selection.store import SelectionStore, get_selection_store


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


def make_product(product_id: str, **overrides) -> Product:
    """Build a product with sensible defaults for tests."""

    data = {
        "id": product_id,
        "title": f"Product {product_id}",
        "category": "parts",
        "condition": "new",
        "price": 100,
        "stock_quantity": 5,
        "created_at": datetime(2024, 1, 1, tzinfo=UTC),
    }
    data.update(overrides)
    return Product.model_validate(data)


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingTier(CatalogTier):
    """Tier that always reports a failure, counting its calls."""

    def __init__(self, name: str = "remote") -> None:
        self.name = name
        self.calls = 0

    async def load(self) -> TierOutcome:
        self.calls += 1
        return TierOutcome.failed(self.name, "boom")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def product_factory():
    """Factory fixture building products with test defaults."""

    return make_product


@pytest.fixture()
def resolver(clock) -> CatalogResolver:
    """Resolver with a failing remote tier backed by the seed dataset."""

    return CatalogResolver(
        CatalogCache(300, clock=clock),
        [FailingTier(), StaticCatalogTier("seed", load_seed_catalog)],
        StaticCatalogTier("emergency", load_emergency_catalog),
    )


@pytest.fixture(autouse=True)
def resolver_override(resolver):
    """Keep API tests away from the configured remote catalog service."""
    from src.main import app

    app.dependency_overrides[get_catalog_resolver] = lambda: resolver
    yield resolver
    app.dependency_overrides.pop(get_catalog_resolver, None)


@pytest_asyncio.fixture()
async def redis_client():
    """Provide a fake Redis client for each test."""
    from src.main import app

    client = fakeredis.FakeRedis()
    app.dependency_overrides[get_selection_store] = lambda: SelectionStore(client)
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()
        app.dependency_overrides.pop(get_selection_store, None)


@pytest_asyncio.fixture()
async def client(redis_client):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from src.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
