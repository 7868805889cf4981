"""Pure filtering and ordering of catalog snapshots."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence

from src.models.product import Product
from src.models.search import CatalogPage, SearchFilterCriteria

Predicate = Callable[[Product], bool]
DistanceKey = Callable[[Product], float]


def _text_predicate(query: str) -> Predicate:
    needle = query.lower()

    def match(product: Product) -> bool:
        haystack = [product.title, product.description, product.make, product.model]
        if any(text and needle in text.lower() for text in haystack):
            return True
        return any(needle in tag.lower() for tag in product.tags)

    return match


def build_predicates(criteria: SearchFilterCriteria) -> list[Predicate]:
    """Translate criteria into independent predicates (AND semantics)."""

    predicates: list[Predicate] = []

    if criteria.query:
        predicates.append(_text_predicate(criteria.query))
    if criteria.category is not None:
        predicates.append(lambda p: p.category == criteria.category)
    if criteria.condition is not None:
        predicates.append(lambda p: p.condition == criteria.condition)
    if criteria.min_price is not None:
        predicates.append(lambda p: p.price >= criteria.min_price)
    if criteria.max_price is not None:
        predicates.append(lambda p: p.price <= criteria.max_price)
    if criteria.in_stock_only:
        predicates.append(lambda p: p.in_stock)

    # Numeric vehicle bounds only constrain records that carry the value
    if criteria.max_mileage is not None:
        predicates.append(
            lambda p: p.mileage is None or p.mileage <= criteria.max_mileage
        )
    if criteria.min_year is not None:
        predicates.append(lambda p: p.year is None or p.year >= criteria.min_year)
    if criteria.max_year is not None:
        predicates.append(lambda p: p.year is None or p.year <= criteria.max_year)

    if criteria.make:
        make = criteria.make.lower()
        predicates.append(lambda p: p.make is not None and p.make.lower() == make)

    if criteria.location:
        location = criteria.location.lower()
        predicates.append(
            lambda p: bool(p.location) and location in p.location.lower()
        )

    return predicates


def sort_products(
    products: list[Product],
    sort_by: str,
    *,
    distance_key: DistanceKey | None = None,
) -> list[Product]:
    """Order products by ``sort_by``. Python's sort is stable, ties keep input order."""

    if sort_by == "newest":
        return sorted(products, key=lambda p: p.created_at, reverse=True)
    if sort_by == "price-asc":
        return sorted(products, key=lambda p: p.price)
    if sort_by == "price-desc":
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort_by == "most-popular":
        return sorted(products, key=lambda p: p.views, reverse=True)
    if sort_by == "year-desc":
        return sorted(
            products,
            key=lambda p: (p.year is None, -(p.year or 0)),
        )
    if sort_by == "year-asc":
        return sorted(
            products,
            key=lambda p: p.year if p.year is not None else math.inf,
        )
    if sort_by == "mileage-asc":
        return sorted(
            products,
            key=lambda p: p.mileage if p.mileage is not None else math.inf,
        )
    if sort_by == "distance" and distance_key is not None:
        return sorted(products, key=distance_key)
    return list(products)


def apply(
    catalog: Iterable[Product],
    criteria: SearchFilterCriteria,
    *,
    distance_key: DistanceKey | None = None,
) -> list[Product]:
    """Filter ``catalog`` by ``criteria`` and return the ordered result.

    The catalog is never mutated and the output depends only on the inputs.
    ``distance_key`` is the external geo comparator used by the ``distance``
    sort; without one that sort keeps catalog order.
    """

    predicates = build_predicates(criteria)
    matched = [
        product
        for product in catalog
        if all(predicate(product) for predicate in predicates)
    ]
    return sort_products(matched, criteria.sort_by, distance_key=distance_key)


def paginate(items: Sequence[Product], page: int, page_size: int) -> CatalogPage:
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    total = len(items)
    start = (page - 1) * page_size
    return CatalogPage(
        items=list(items[start : start + page_size]),
        total=total,
        page=page,
        page_size=page_size,
        pages=math.ceil(total / page_size),
    )
