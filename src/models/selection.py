"""Schemas for the cart and favorites selection ledger."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class SelectionState(BaseModel):
    """Persisted ledger layout: flat cart mapping plus favorite ids."""

    cart: dict[str, int] = Field(default_factory=dict)
    favorites: list[str] = Field(default_factory=list)

    @field_validator("cart")
    @classmethod
    def _positive_quantities(cls, values: dict[str, int]) -> dict[str, int]:
        for product_id, quantity in values.items():
            if quantity < 1:
                raise ValueError(f"Quantity for {product_id} must be >= 1")
        return values


class LedgerOutcome(BaseModel):
    """Result of a single ledger mutation."""

    accepted: bool
    product_id: str | None = None
    quantity: int | None = Field(
        None,
        description="Quantity after the operation; None when the line is absent",
    )
    favorite: bool | None = None
    notification: str | None = Field(
        None,
        description="Non-fatal message to surface to the user",
    )


class CartLine(BaseModel):
    """Cart entry enriched with the referenced product data."""

    product_id: str
    quantity: int = Field(..., ge=1)
    title: str | None = None
    unit_price: float | None = None
    line_total: float | None = None
    available: bool = Field(
        True,
        description="False when the product is missing from the current catalog",
    )


class SelectionView(BaseModel):
    """Ledger contents rendered for the cart/favorites UI."""

    owner_id: str
    cart: list[CartLine] = Field(default_factory=list)
    favorites: list[str] = Field(default_factory=list)
    total_count: int = Field(0, ge=0)
    total_value: float = Field(0.0, ge=0)


class LedgerOutcomeResponse(BaseModel):
    """Response body returned by every ledger mutation endpoint."""

    outcome: LedgerOutcome
    selection: SelectionView


class IncrementRequest(BaseModel):
    delta: int = 1


class QuantityRequest(BaseModel):
    quantity: int
