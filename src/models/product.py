"""Product domain models shared by the catalog pipeline."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import (
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

ProductCategory = Literal["cars", "parts", "accessories", "services", "tools", "tires"]
ProductCondition = Literal["new", "used", "refurbished"]


class Product(BaseModel):
    """A single sellable listing.

    Records are frozen: the filter engine and the selection ledger only ever
    read them. The remote catalog service speaks camelCase, so both
    ``stock_quantity`` and ``stockQuantity`` are accepted on input.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=AliasGenerator(validation_alias=to_camel),
    )

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    title: str
    description: str = ""
    tags: frozenset[str] = Field(default_factory=frozenset)
    category: ProductCategory
    condition: ProductCondition

    price: float = Field(..., ge=0)
    original_price: float | None = Field(
        None,
        description="Pre-discount price; dropped when lower than price",
    )
    stock_quantity: int = Field(0, ge=0)

    views: int = Field(0, ge=0)
    rating: float = Field(0.0, ge=0.0, le=5.0)
    review_count: int = Field(0, ge=0)

    created_at: datetime

    # Vehicle listing details, absent for most parts/services
    make: str | None = None
    model: str | None = None
    year: int | None = None
    mileage: int | None = Field(None, ge=0)
    location: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: str | None) -> str:
        return value or ""

    @field_validator("original_price")
    @classmethod
    def _drop_invalid_original_price(
        cls, value: float | None, info: ValidationInfo
    ) -> float | None:
        price = info.data.get("price")
        if value is None or price is None:
            return value
        if value < price:
            return None
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def discount_percent(self) -> float | None:
        if not self.original_price or self.original_price <= self.price:
            return None
        return round((1 - self.price / self.original_price) * 100, 2)


class CatalogStatus(BaseModel):
    """Snapshot of the catalog cache reported by the health endpoint."""

    state: Literal["empty", "valid", "stale"]
    size: int = Field(0, ge=0)
    age_seconds: float | None = None
    ttl_seconds: float
    source: str | None = None
