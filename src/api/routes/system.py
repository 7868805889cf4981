"""System-level routes such as health checks."""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import APIRouter, Depends

from src.config import settings
from src.services.catalog.resolver import CatalogResolver, get_catalog_resolver

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Landing endpoint used by smoke tests."""

    return {"message": "Storefront catalog service is running"}


@router.get("/health")
async def health_check(
    resolver: Annotated[CatalogResolver, Depends(get_catalog_resolver)],
) -> dict:
    """Health check with catalog cache state and remote service connectivity."""

    if settings.remote_catalog_enabled:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    settings.CATALOG_SERVICE_URL,
                    timeout=settings.CATALOG_FETCH_TIMEOUT_SECONDS,
                )
                remote_status = (
                    "connected" if response.status_code < 500 else "disconnected"
                )
        except Exception:
            remote_status = "disconnected"
    else:
        remote_status = "disabled"

    return {
        "status": "healthy",
        "catalog_service": remote_status,
        "catalog_cache": resolver.cache_status().model_dump(),
        "catalog_source": resolver.last_source,
        "environment": settings.ENVIRONMENT,
    }
