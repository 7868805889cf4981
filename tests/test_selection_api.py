"""Tests for the cart and favorites endpoints."""

import pytest

from src.config import settings

OWNER = "shopper-42"
TIRES = "seed-tire-used-set"  # stock 2
PADS = "seed-part-brake-pads"  # stock 40, price 1850


@pytest.mark.asyncio
async def test_empty_selection(client):
    response = await client.get(f"/selection/{OWNER}")

    assert response.status_code == 200
    data = response.json()
    assert data["cart"] == []
    assert data["total_count"] == 0


@pytest.mark.asyncio
async def test_add_to_cart_twice_increments(client):
    await client.post(f"/selection/{OWNER}/cart/{PADS}")
    response = await client.post(f"/selection/{OWNER}/cart/{PADS}", json={"delta": 1})

    assert response.status_code == 200
    data = response.json()
    assert data["outcome"]["accepted"] is True
    assert data["outcome"]["quantity"] == 2
    assert data["selection"]["total_count"] == 2
    assert data["selection"]["total_value"] == 3700


@pytest.mark.asyncio
async def test_set_quantity_above_stock_is_rejected(client):
    await client.put(f"/selection/{OWNER}/cart/{TIRES}", json={"quantity": 2})

    rejected = await client.put(f"/selection/{OWNER}/cart/{TIRES}", json={"quantity": 3})

    assert rejected.status_code == 200
    outcome = rejected.json()["outcome"]
    assert outcome["accepted"] is False
    assert outcome["quantity"] == 2
    assert outcome["notification"] == "Only 2 in stock"

    current = await client.get(f"/selection/{OWNER}")
    assert current.json()["cart"][0]["quantity"] == 2


@pytest.mark.asyncio
async def test_selection_survives_between_requests(client, redis_client):
    await client.post(f"/selection/{OWNER}/cart/{PADS}", json={"delta": 3})
    await client.post(f"/selection/{OWNER}/favorites/{TIRES}")

    stored = await redis_client.get(f"{settings.SELECTION_KEY_PREFIX}{OWNER}")
    response = await client.get(f"/selection/{OWNER}")

    assert stored is not None
    data = response.json()
    assert data["cart"][0]["product_id"] == PADS
    assert data["cart"][0]["quantity"] == 3
    assert data["favorites"] == [TIRES]


@pytest.mark.asyncio
async def test_toggle_favorite_twice(client):
    first = await client.post(f"/selection/{OWNER}/favorites/{PADS}")
    second = await client.post(f"/selection/{OWNER}/favorites/{PADS}")

    assert first.json()["outcome"]["favorite"] is True
    assert second.json()["outcome"]["favorite"] is False
    assert second.json()["selection"]["favorites"] == []


@pytest.mark.asyncio
async def test_remove_from_cart(client):
    await client.post(f"/selection/{OWNER}/cart/{PADS}")

    response = await client.delete(f"/selection/{OWNER}/cart/{PADS}")

    assert response.json()["selection"]["cart"] == []


@pytest.mark.asyncio
async def test_clear_requires_confirmation(client):
    await client.post(f"/selection/{OWNER}/cart/{PADS}")

    refused = await client.delete(f"/selection/{OWNER}")
    cleared = await client.delete(f"/selection/{OWNER}", params={"confirm": "true"})
    after = await client.get(f"/selection/{OWNER}")

    assert refused.status_code == 400
    assert cleared.status_code == 200
    assert after.json()["total_count"] == 0


@pytest.mark.asyncio
async def test_unknown_product_is_rejected(client):
    response = await client.post(f"/selection/{OWNER}/cart/not-a-product")

    assert response.json()["outcome"]["accepted"] is False
    assert response.json()["selection"]["cart"] == []
