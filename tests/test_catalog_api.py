"""Tests for the catalog listing, suggestion and refresh endpoints."""

import asyncio
import threading

import pytest
from fastapi.testclient import TestClient

from src.config import settings
from src.main import app
from src.services.catalog.cache import CatalogCache
from src.services.catalog.resolver import CatalogResolver, get_catalog_resolver
from src.services.catalog.seed_data import load_seed_catalog
from src.services.catalog.tiers import CatalogTier, StaticCatalogTier, TierOutcome


@pytest.mark.asyncio
async def test_root_and_health(client):
    root = await client.get("/")
    await client.get("/catalog/products")
    health = await client.get("/health")

    assert root.status_code == 200
    assert health.status_code == 200
    data = health.json()
    assert data["status"] == "healthy"
    assert data["catalog_cache"]["state"] == "valid"
    assert data["catalog_source"] == "seed"


@pytest.mark.asyncio
async def test_list_products_falls_back_to_seed(client):
    response = await client.get("/catalog/products", params={"page_size": 100})

    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "seed"
    assert data["total"] == len(load_seed_catalog())
    views = [item["views"] for item in data["items"]]
    assert views == sorted(views, reverse=True)


@pytest.mark.asyncio
async def test_list_products_applies_criteria(client):
    response = await client.get(
        "/catalog/products",
        params={
            "category": "tires",
            "in_stock_only": "true",
            "sort_by": "price-asc",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [item["id"] for item in data["items"]] == [
        "seed-tire-michelin-205",
        "seed-tire-used-set",
    ]
    assert all(item["in_stock"] for item in data["items"])
    assert data["criteria"]["category"] == "tires"


@pytest.mark.asyncio
async def test_list_products_paginates(client):
    response = await client.get("/catalog/products", params={"page": 2, "page_size": 4})

    data = response.json()
    assert data["page"] == 2
    assert data["page_size"] == 4
    assert len(data["items"]) == 4
    assert data["pages"] == 3


@pytest.mark.asyncio
async def test_inverted_price_range_returns_empty_page(client):
    response = await client.get(
        "/catalog/products", params={"min_price": 5000, "max_price": 100}
    )

    assert response.status_code == 200
    assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_invalid_sort_key_is_rejected(client):
    response = await client.get("/catalog/products", params={"sort_by": "cheapest"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_single_product(client):
    found = await client.get("/catalog/products/seed-acc-dashcam")
    missing = await client.get("/catalog/products/nope")

    assert found.status_code == 200
    assert found.json()["category"] == "accessories"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_refresh_forces_resolution(client, resolver_override):
    first = await client.post("/catalog/refresh")
    second = await client.post("/catalog/refresh")

    assert first.status_code == 200
    assert first.json()["source"] == "seed"
    assert second.json()["count"] == len(load_seed_catalog())
    assert resolver_override._tiers[0].calls == 2


@pytest.mark.asyncio
async def test_exhausted_catalog_returns_503(client, clock):
    empty = CatalogResolver(
        CatalogCache(300, clock=clock),
        [StaticCatalogTier("seed", lambda: [])],
        StaticCatalogTier("emergency", lambda: []),
    )
    app.dependency_overrides[get_catalog_resolver] = lambda: empty

    response = await client.get("/catalog/products")

    assert response.status_code == 503
    assert response.json()["detail"] == "No products available"


@pytest.mark.asyncio
async def test_suggestions_endpoint(client):
    short = await client.get("/catalog/suggestions", params={"q": "a"})
    full = await client.get("/catalog/suggestions", params={"q": "brake"})

    assert short.json()["suggestions"] == []
    assert len(full.json()["suggestions"]) == 6
    assert full.json()["suggestions"][0] == "brake used"


def test_live_search_debounces_keystrokes(monkeypatch):
    monkeypatch.setattr(settings, "SUGGESTION_DEBOUNCE_MS", 200)
    test_client = TestClient(app)

    with test_client.websocket_connect("/catalog/live") as websocket:
        for partial in ["m", "mi", "mic", "mich", "michelin"]:
            websocket.send_json({"type": "query", "value": partial})
        message = websocket.receive_json()

    assert message["type"] == "suggestions"
    assert message["query"] == "michelin"
    assert message["suggestions"][0] == "michelin used"


def test_live_search_runs_latest_criteria(monkeypatch):
    monkeypatch.setattr(settings, "SUGGESTION_DEBOUNCE_MS", 200)
    test_client = TestClient(app)

    with test_client.websocket_connect("/catalog/live") as websocket:
        websocket.send_json({"type": "criteria", "criteria": {"category": "cars"}})
        websocket.send_json(
            {"type": "criteria", "criteria": {"category": "tools"}, "page_size": 5}
        )
        message = websocket.receive_json()

    assert message["type"] == "results"
    assert [item["id"] for item in message["items"]] == ["seed-tool-torque-wrench"]
    assert message["page_size"] == 5


def test_live_search_reports_invalid_messages():
    test_client = TestClient(app)

    with test_client.websocket_connect("/catalog/live") as websocket:
        websocket.send_json({"type": "shout", "value": "hi"})
        message = websocket.receive_json()

    assert message["type"] == "error"


def test_live_search_reports_non_json_frames():
    test_client = TestClient(app)

    with test_client.websocket_connect("/catalog/live") as websocket:
        websocket.send_text("not json")
        message = websocket.receive_json()

        assert message["type"] == "error"

        websocket.send_json({"type": "query", "value": "tires"})
        follow_up = websocket.receive_json()

    assert follow_up["type"] == "suggestions"
    assert follow_up["query"] == "tires"


class SlowTier(CatalogTier):
    """Tier that blocks until cancelled, flagging both events across threads."""

    name = "remote"

    def __init__(self) -> None:
        self.started = threading.Event()
        self.cancelled = threading.Event()

    async def load(self) -> TierOutcome:
        self.started.set()
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            self.cancelled.set()
            raise
        return TierOutcome.failed(self.name, "unreachable")


def test_disconnect_cancels_running_search(monkeypatch, clock):
    monkeypatch.setattr(settings, "SUGGESTION_DEBOUNCE_MS", 10)
    tier = SlowTier()
    slow = CatalogResolver(CatalogCache(300, clock=clock), [tier])
    app.dependency_overrides[get_catalog_resolver] = lambda: slow
    test_client = TestClient(app)

    with test_client.websocket_connect("/catalog/live") as websocket:
        websocket.send_json({"type": "criteria", "criteria": {"category": "cars"}})
        assert tier.started.wait(timeout=5)

    assert tier.cancelled.wait(timeout=5)
