"""Remote catalog service client abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from src.config import settings
from src.models.product import Product

logger = logging.getLogger(__name__)


class CatalogServiceClient(ABC):
    """Abstract interface of the remote catalog backend."""

    @abstractmethod
    async def fetch_published_products(self) -> list[Product]:
        """Return every published product. Safe to call repeatedly."""


class HttpCatalogServiceClient(CatalogServiceClient):
    """Catalog client backed by the storefront backend's REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: str | None = None,
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("Catalog service URL is required to initialize client")
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._http_client = http_client

    async def fetch_published_products(self) -> list[Product]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        url = f"{self._base_url}/products"
        params = {"status": "published"}
        if self._http_client is not None:
            response = await self._http_client.get(
                url, params=params, headers=headers, timeout=self._timeout
            )
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params, headers=headers)
        response.raise_for_status()

        return parse_products(response.json())


def parse_products(payload: Any) -> list[Product]:
    """Validate a catalog payload, skipping records that fail validation."""

    if isinstance(payload, dict):
        records = payload.get("items")
        if records is None:
            records = payload.get("products")
    else:
        records = payload
    if not isinstance(records, list):
        raise ValueError("Catalog payload does not contain a product list")

    products: list[Product] = []
    for record in records:
        try:
            products.append(Product.model_validate(record))
        except ValidationError as exc:
            record_id = record.get("id") if isinstance(record, dict) else None
            logger.warning(
                "Skipping malformed catalog record %s: %s",
                record_id,
                exc.errors(include_url=False),
            )
    return products


def _initialize_catalog_client() -> CatalogServiceClient | None:
    if not settings.remote_catalog_enabled:
        return None
    return HttpCatalogServiceClient(
        base_url=settings.CATALOG_SERVICE_URL,
        token=settings.CATALOG_SERVICE_TOKEN,
        timeout=settings.CATALOG_FETCH_TIMEOUT_SECONDS,
    )


_catalog_client = _initialize_catalog_client()


def get_catalog_service_client() -> CatalogServiceClient | None:
    """Return the configured catalog client, or None when it is disabled."""

    return _catalog_client

