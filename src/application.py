"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import include_api_routes
from src.config import settings
from src.services.catalog.resolver import CatalogUnavailableError, get_catalog_resolver
from src.services.clients.redis_client import get_redis_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    if settings.CATALOG_WARM_ON_STARTUP:
        try:
            products = await get_catalog_resolver().resolve()
            logger.info("Warmed catalog cache with %d products", len(products))
        except CatalogUnavailableError:
            logger.exception("Catalog warm-up failed, serving on demand")
    else:
        logger.info("Skipping catalog warm-up; first request resolves the catalog")

    yield

    try:
        await get_redis_client().aclose()
    except Exception:
        logger.debug("Redis client already closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Storefront Catalog",
        description="Catalog retrieval, search and selection service for the marketplace",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
