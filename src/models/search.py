"""Schemas for catalog search criteria and listing responses."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.product import Product, ProductCategory, ProductCondition

SortKey = Literal[
    "newest",
    "price-asc",
    "price-desc",
    "most-popular",
    "distance",
    "year-desc",
    "year-asc",
    "mileage-asc",
]


class SearchFilterCriteria(BaseModel):
    """Declarative filter + sort request applied to a catalog snapshot.

    Criteria carry no hidden state: together with a snapshot they fully
    determine the engine output. Inverted ranges (min above max) are accepted
    and simply match nothing.
    """

    model_config = ConfigDict(frozen=True)

    query: str | None = None
    category: ProductCategory | None = None
    condition: ProductCondition | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    max_mileage: int | None = Field(None, ge=0)
    min_year: int | None = None
    max_year: int | None = None
    make: str | None = None
    location: str | None = None
    in_stock_only: bool = False
    sort_by: SortKey = "most-popular"

    @field_validator("query", "make", "location")
    @classmethod
    def _blank_as_absent(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class CatalogPage(BaseModel):
    """One page of an ordered result list."""

    items: list[Product] = Field(default_factory=list)
    total: int = Field(0, ge=0)
    page: int = Field(1, ge=1)
    page_size: int = Field(..., ge=1)
    pages: int = Field(0, ge=0)


class CatalogPageResponse(CatalogPage):
    """Response body for GET /catalog/products."""

    criteria: SearchFilterCriteria
    source: str | None = Field(
        None,
        description="Name of the fallback tier that produced the snapshot",
    )


class SuggestionResponse(BaseModel):
    """Response body for GET /catalog/suggestions."""

    query: str
    suggestions: list[str] = Field(default_factory=list)


class RefreshResponse(BaseModel):
    """Acknowledgement returned after a forced catalog refresh."""

    status: Literal["refreshed"] = "refreshed"
    count: int = Field(..., ge=0)
    source: str | None = None


class LiveQueryMessage(BaseModel):
    """Keystroke message sent over the live search websocket."""

    type: Literal["query"]
    value: str = ""


class LiveCriteriaMessage(BaseModel):
    """Filter-control change sent over the live search websocket."""

    type: Literal["criteria"]
    criteria: SearchFilterCriteria = Field(default_factory=SearchFilterCriteria)
    page: int = Field(1, ge=1)
    page_size: int | None = Field(None, ge=1)


LiveMessage = Annotated[
    LiveQueryMessage | LiveCriteriaMessage, Field(discriminator="type")
]
