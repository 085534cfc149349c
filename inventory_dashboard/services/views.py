"""Pure derivations over a product snapshot: filtering and pagination."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date

from inventory_dashboard.models.inventory import FilterState, PaginationState
from inventory_dashboard.models.product import Product


def filter_products(
    products: Sequence[Product],
    filters: FilterState,
) -> tuple[Product, ...]:
    """Return the products matching the search term and date range.

    The title match is a case-insensitive substring test. Date bounds are
    inclusive whole days compared against each product's own calendar date.
    The result keeps the order of ``products``.
    """

    date_range = filters.date_range
    if date_range.is_inverted:
        return ()

    needle = filters.search_term.lower()
    return tuple(
        product
        for product in products
        if needle in product.title.lower()
        and _within(product.creation_at.date(), date_range.start, date_range.end)
    )


def _within(created: date, start: date | None, end: date | None) -> bool:
    if start is not None and created < start:
        return False
    if end is not None and created > end:
        return False
    return True


def paginate(
    products: Sequence[Product],
    pagination: PaginationState,
) -> tuple[Product, ...]:
    """Slice one page; a page past the end is empty."""

    offset = pagination.page * pagination.page_size
    return tuple(products[offset : offset + pagination.page_size])


def total_pages(count: int, page_size: int) -> int:
    return math.ceil(count / page_size)
