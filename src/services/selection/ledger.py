"""Cart quantities and favorites bookkeeping against the catalog."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from src.models.product import Product
from src.models.selection import CartLine, LedgerOutcome, SelectionState, SelectionView

logger = logging.getLogger(__name__)

ProductLookup = Callable[[str], Product | None]


def lookup_from_catalog(catalog: list[Product]) -> ProductLookup:
    """Build an id lookup over a catalog snapshot."""

    index: Mapping[str, Product] = {product.id: product for product in catalog}
    return index.get


class SelectionLedger:
    """Per-owner cart and favorites.

    Cart quantities stay within ``[1, stock_quantity]`` of the referenced
    product as seen through ``lookup`` at the time of the call. Requests that
    would break the bound are rejected without mutating anything. Each call
    is atomic on its own; sequences of calls are not.
    """

    def __init__(
        self,
        lookup: ProductLookup,
        *,
        cart: Mapping[str, int] | None = None,
        favorites: set[str] | None = None,
    ) -> None:
        self._lookup = lookup
        self._cart: dict[str, int] = dict(cart or {})
        self._favorites: set[str] = set(favorites or ())

    @classmethod
    def from_state(cls, state: SelectionState, lookup: ProductLookup) -> SelectionLedger:
        return cls(lookup, cart=state.cart, favorites=set(state.favorites))

    def to_state(self) -> SelectionState:
        return SelectionState(cart=dict(self._cart), favorites=sorted(self._favorites))

    def quantity_of(self, product_id: str) -> int:
        return self._cart.get(product_id, 0)

    def is_favorite(self, product_id: str) -> bool:
        return product_id in self._favorites

    def add_or_increment(self, product_id: str, delta: int = 1) -> LedgerOutcome:
        current = self._cart.get(product_id)
        if current is None:
            if delta < 1:
                return self._reject(product_id, "Quantity must be at least 1")
            current = 0
        return self._apply_quantity(product_id, current + delta)

    def set_quantity(self, product_id: str, quantity: int) -> LedgerOutcome:
        return self._apply_quantity(product_id, quantity)

    def remove(self, product_id: str) -> LedgerOutcome:
        removed = self._cart.pop(product_id, None)
        if removed is None:
            return LedgerOutcome(
                accepted=True,
                product_id=product_id,
                notification="Item was not in the cart",
            )
        return LedgerOutcome(accepted=True, product_id=product_id)

    def toggle_favorite(self, product_id: str) -> LedgerOutcome:
        if product_id in self._favorites:
            self._favorites.discard(product_id)
            return LedgerOutcome(
                accepted=True,
                product_id=product_id,
                favorite=False,
                notification="Removed from favorites",
            )
        self._favorites.add(product_id)
        return LedgerOutcome(
            accepted=True,
            product_id=product_id,
            favorite=True,
            notification="Added to favorites",
        )

    def clear_all(self) -> LedgerOutcome:
        """Drop every cart line and favorite. Irreversible."""

        self._cart.clear()
        self._favorites.clear()
        return LedgerOutcome(accepted=True, notification="Selection cleared")

    def total_count(self) -> int:
        return sum(self._cart.values())

    def total_value(self) -> float:
        total = 0.0
        for product_id, quantity in self._cart.items():
            product = self._lookup(product_id)
            if product is not None:
                total += product.price * quantity
        return total

    def view(self, owner_id: str) -> SelectionView:
        lines: list[CartLine] = []
        for product_id, quantity in self._cart.items():
            product = self._lookup(product_id)
            if product is None:
                lines.append(
                    CartLine(product_id=product_id, quantity=quantity, available=False)
                )
                continue
            lines.append(
                CartLine(
                    product_id=product_id,
                    quantity=quantity,
                    title=product.title,
                    unit_price=product.price,
                    line_total=product.price * quantity,
                )
            )
        return SelectionView(
            owner_id=owner_id,
            cart=lines,
            favorites=sorted(self._favorites),
            total_count=self.total_count(),
            total_value=self.total_value(),
        )

    def _apply_quantity(self, product_id: str, quantity: int) -> LedgerOutcome:
        if quantity < 1:
            return self.remove(product_id)

        product = self._lookup(product_id)
        if product is None:
            return self._reject(product_id, "Product is no longer available")
        if quantity > product.stock_quantity:
            return self._reject(
                product_id,
                f"Only {product.stock_quantity} in stock",
            )

        self._cart[product_id] = quantity
        return LedgerOutcome(accepted=True, product_id=product_id, quantity=quantity)

    def _reject(self, product_id: str, reason: str) -> LedgerOutcome:
        logger.info(
            "Rejected quantity change for %s: %s",
            product_id,
            reason,
            extra={"product_id": product_id},
        )
        return LedgerOutcome(
            accepted=False,
            product_id=product_id,
            quantity=self._cart.get(product_id),
            notification=reason,
        )
