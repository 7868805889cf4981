"""Routes managing a shopper's cart quantities and favorites."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.models.selection import (
    IncrementRequest,
    LedgerOutcome,
    LedgerOutcomeResponse,
    QuantityRequest,
    SelectionView,
)
from src.services.catalog.resolver import (
    CatalogResolver,
    CatalogUnavailableError,
    get_catalog_resolver,
)
from src.services.selection.ledger import SelectionLedger, lookup_from_catalog
from src.services.selection.store import SelectionStore, get_selection_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/selection", tags=["selection"])

ResolverDependency = Annotated[CatalogResolver, Depends(get_catalog_resolver)]
StoreDependency = Annotated[SelectionStore, Depends(get_selection_store)]


async def _load_ledger(
    owner_id: str,
    resolver: CatalogResolver,
    store: SelectionStore,
) -> SelectionLedger:
    try:
        catalog = await resolver.resolve()
    except CatalogUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No products available",
        ) from exc
    state = await store.load(owner_id)
    return SelectionLedger.from_state(state, lookup_from_catalog(catalog))


async def _mutate(
    owner_id: str,
    resolver: CatalogResolver,
    store: SelectionStore,
    operation: Callable[[SelectionLedger], LedgerOutcome],
) -> LedgerOutcomeResponse:
    ledger = await _load_ledger(owner_id, resolver, store)
    outcome = operation(ledger)
    if outcome.accepted:
        await store.save(owner_id, ledger.to_state())
    return LedgerOutcomeResponse(outcome=outcome, selection=ledger.view(owner_id))


@router.get(
    "/{owner_id}",
    response_model=SelectionView,
    summary="Show the cart and favorites of a shopper",
)
async def get_selection(
    owner_id: str,
    resolver: ResolverDependency,
    store: StoreDependency,
) -> SelectionView:
    ledger = await _load_ledger(owner_id, resolver, store)
    return ledger.view(owner_id)


@router.post(
    "/{owner_id}/cart/{product_id}",
    response_model=LedgerOutcomeResponse,
    summary="Add a product to the cart or increase its quantity",
)
async def add_to_cart(
    owner_id: str,
    product_id: str,
    resolver: ResolverDependency,
    store: StoreDependency,
    payload: IncrementRequest | None = None,
) -> LedgerOutcomeResponse:
    delta = payload.delta if payload is not None else 1
    return await _mutate(
        owner_id,
        resolver,
        store,
        lambda ledger: ledger.add_or_increment(product_id, delta),
    )


@router.put(
    "/{owner_id}/cart/{product_id}",
    response_model=LedgerOutcomeResponse,
    summary="Set the cart quantity of a product",
)
async def set_cart_quantity(
    owner_id: str,
    product_id: str,
    payload: QuantityRequest,
    resolver: ResolverDependency,
    store: StoreDependency,
) -> LedgerOutcomeResponse:
    return await _mutate(
        owner_id,
        resolver,
        store,
        lambda ledger: ledger.set_quantity(product_id, payload.quantity),
    )


@router.delete(
    "/{owner_id}/cart/{product_id}",
    response_model=LedgerOutcomeResponse,
    summary="Remove a product from the cart",
)
async def remove_from_cart(
    owner_id: str,
    product_id: str,
    resolver: ResolverDependency,
    store: StoreDependency,
) -> LedgerOutcomeResponse:
    return await _mutate(
        owner_id,
        resolver,
        store,
        lambda ledger: ledger.remove(product_id),
    )


@router.post(
    "/{owner_id}/favorites/{product_id}",
    response_model=LedgerOutcomeResponse,
    summary="Toggle a product in the favorites list",
)
async def toggle_favorite(
    owner_id: str,
    product_id: str,
    resolver: ResolverDependency,
    store: StoreDependency,
) -> LedgerOutcomeResponse:
    return await _mutate(
        owner_id,
        resolver,
        store,
        lambda ledger: ledger.toggle_favorite(product_id),
    )


@router.delete(
    "/{owner_id}",
    response_model=LedgerOutcomeResponse,
    summary="Clear the whole cart and favorites list",
)
async def clear_selection(
    owner_id: str,
    resolver: ResolverDependency,
    store: StoreDependency,
    confirm: Annotated[bool, Query(description="Must be true to clear")] = False,
) -> LedgerOutcomeResponse:
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Clearing the selection requires confirm=true",
        )
    ledger = await _load_ledger(owner_id, resolver, store)
    outcome = ledger.clear_all()
    await store.clear(owner_id)
    logger.info("Cleared selection for %s", owner_id, extra={"owner_id": owner_id})
    return LedgerOutcomeResponse(outcome=outcome, selection=ledger.view(owner_id))
