"""Routes serving the marketplace listing, search suggestions and live search."""

from __future__ import annotations

import json
import logging
from typing import Annotated

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from pydantic import TypeAdapter, ValidationError

from src.config import settings
from src.models.product import Product, ProductCategory, ProductCondition
from src.models.search import (
    CatalogPageResponse,
    LiveCriteriaMessage,
    LiveMessage,
    LiveQueryMessage,
    RefreshResponse,
    SearchFilterCriteria,
    SortKey,
    SuggestionResponse,
)
from src.services.catalog.resolver import (
    CatalogResolver,
    CatalogUnavailableError,
    get_catalog_resolver,
)
from src.services.search.debounce import Debouncer
from src.services.search.filter_engine import apply, paginate
from src.services.search.suggestions import SuggestionService, generate_suggestions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])

ResolverDependency = Annotated[CatalogResolver, Depends(get_catalog_resolver)]

_live_message_adapter: TypeAdapter[LiveMessage] = TypeAdapter(LiveMessage)

NO_PRODUCTS_DETAIL = "No products available"


def _criteria_from_query(
    q: Annotated[str | None, Query(description="Free-text query")] = None,
    category: ProductCategory | None = None,
    condition: ProductCondition | None = None,
    min_price: Annotated[float | None, Query(ge=0)] = None,
    max_price: Annotated[float | None, Query(ge=0)] = None,
    max_mileage: Annotated[int | None, Query(ge=0)] = None,
    min_year: int | None = None,
    max_year: int | None = None,
    make: Annotated[str | None, Query(description="Exact vehicle make")] = None,
    location: str | None = None,
    in_stock_only: bool = False,
    sort_by: SortKey = "most-popular",
) -> SearchFilterCriteria:
    return SearchFilterCriteria(
        query=q,
        category=category,
        condition=condition,
        min_price=min_price,
        max_price=max_price,
        max_mileage=max_mileage,
        min_year=min_year,
        max_year=max_year,
        make=make,
        location=location,
        in_stock_only=in_stock_only,
        sort_by=sort_by,
    )


CriteriaDependency = Annotated[SearchFilterCriteria, Depends(_criteria_from_query)]


async def _resolve_or_503(
    resolver: CatalogResolver, *, force_refresh: bool = False
) -> list[Product]:
    try:
        return await resolver.resolve(force_refresh=force_refresh)
    except CatalogUnavailableError as exc:
        logger.error("Catalog unavailable: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=NO_PRODUCTS_DETAIL,
        ) from exc


def _page_size(page_size: int | None) -> int:
    return min(page_size or settings.CATALOG_PAGE_SIZE, settings.CATALOG_MAX_PAGE_SIZE)


def _build_page(
    catalog: list[Product],
    criteria: SearchFilterCriteria,
    *,
    page: int,
    page_size: int | None,
    source: str | None,
) -> CatalogPageResponse:
    results = apply(catalog, criteria)
    listing = paginate(results, page, _page_size(page_size))
    return CatalogPageResponse(
        **listing.model_dump(exclude={"items"}),
        items=listing.items,
        criteria=criteria,
        source=source,
    )


@router.get(
    "/products",
    response_model=CatalogPageResponse,
    summary="List catalog products matching the given criteria",
)
async def list_products(
    criteria: CriteriaDependency,
    resolver: ResolverDependency,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int | None, Query(ge=1)] = None,
) -> CatalogPageResponse:
    catalog = await _resolve_or_503(resolver)
    return _build_page(
        catalog,
        criteria,
        page=page,
        page_size=page_size,
        source=resolver.last_source,
    )


@router.get(
    "/products/{product_id}",
    response_model=Product,
    summary="Fetch a single catalog product",
)
async def get_product(product_id: str, resolver: ResolverDependency) -> Product:
    catalog = await _resolve_or_503(resolver)
    for product in catalog:
        if product.id == product_id:
            return product
    raise HTTPException(status_code=404, detail="Unknown product id")


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    summary="Bypass the cache and re-resolve the catalog",
)
async def refresh_catalog(resolver: ResolverDependency) -> RefreshResponse:
    catalog = await _resolve_or_503(resolver, force_refresh=True)
    return RefreshResponse(count=len(catalog), source=resolver.last_source)


@router.get(
    "/suggestions",
    response_model=SuggestionResponse,
    summary="Suggest completions for a partial query",
)
async def suggest(q: str = "") -> SuggestionResponse:
    return SuggestionResponse(query=q, suggestions=generate_suggestions(q))


@router.websocket("/live")
async def live_search(websocket: WebSocket, resolver: ResolverDependency) -> None:
    """Debounced suggestions and auto-search for an open search panel.

    ``query`` messages are keystrokes and ``criteria`` messages are filter
    control changes. Only the latest message of each kind within the debounce
    window is answered.
    """

    await websocket.accept()
    wait = settings.suggestion_debounce_seconds

    async def send_suggestions(result: tuple[str, list[str]]) -> None:
        query, items = result
        await websocket.send_json(
            {"type": "suggestions", "query": query, "suggestions": items}
        )

    async def run_search(message: LiveCriteriaMessage) -> None:
        try:
            catalog = await resolver.resolve()
        except CatalogUnavailableError:
            await websocket.send_json({"type": "error", "detail": NO_PRODUCTS_DETAIL})
            return
        listing = _build_page(
            catalog,
            message.criteria,
            page=message.page,
            page_size=message.page_size,
            source=resolver.last_source,
        )
        await websocket.send_json(
            {"type": "results", **listing.model_dump(mode="json")}
        )

    suggestions = SuggestionService(wait_seconds=wait, on_result=send_suggestions)
    searches: Debouncer[LiveCriteriaMessage, None] = Debouncer(run_search, wait)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = _live_message_adapter.validate_json(raw)
            except ValidationError as exc:
                await websocket.send_json(
                    {"type": "error", "detail": json.loads(exc.json(include_url=False))}
                )
                continue

            if isinstance(message, LiveQueryMessage):
                suggestions.schedule(message.value)
            else:
                searches.submit(message)
    except WebSocketDisconnect:
        logger.debug("Live search client disconnected")
    finally:
        await suggestions.close()
        await searches.close()
