"""Dashboard metrics derived from a product collection."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from inventory_dashboard.models.metrics import (
    CategoryCount,
    ExpensiveProduct,
    MetricsSnapshot,
)
from inventory_dashboard.models.product import Product

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
TOP_N = 5
TITLE_MAX_LENGTH = 30
_CENTS = Decimal("0.01")


def compute_metrics(products: Sequence[Product]) -> MetricsSnapshot:
    """Return aggregate statistics for ``products``.

    Pure: the input is never reordered or mutated. Sorting is stable, so ties
    keep the collection's order.
    """

    if not products:
        return MetricsSnapshot()

    total_value = sum((product.price for product in products), Decimal(0))

    counts: dict[str, int] = {}
    for product in products:
        name = product.category.name if product.category else UNCATEGORIZED
        counts[name] = counts.get(name, 0) + 1

    top_category = CategoryCount(name="N/A", count=0)
    for name, count in counts.items():
        # Strict comparison keeps the first category to reach the maximum
        if count > top_category.count:
            top_category = CategoryCount(name=name, count=count)

    by_price = sorted(products, key=lambda p: p.price, reverse=True)
    by_recency = sorted(products, key=lambda p: _timestamp(p.creation_at), reverse=True)

    return MetricsSnapshot(
        total_products=len(products),
        total_inventory_value=str(total_value.quantize(_CENTS, rounding=ROUND_HALF_UP)),
        top_category=top_category,
        category_distribution=tuple(
            CategoryCount(name=name, count=count) for name, count in counts.items()
        ),
        top_expensive_products=tuple(
            ExpensiveProduct(title=truncate_title(p.title), price=p.price)
            for p in by_price[:TOP_N]
        ),
        recent_products=tuple(by_recency[:TOP_N]),
    )


def truncate_title(title: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    if len(title) <= max_length:
        return title
    return f"{title[:max_length]}..."


def _timestamp(value: datetime) -> datetime:
    # Naive timestamps are read as UTC so they sort against aware ones
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class MetricsCache:
    """Memoizes ``compute_metrics`` on the identity of the input collection."""

    def __init__(self) -> None:
        self._source: Sequence[Product] | None = None
        self._snapshot: MetricsSnapshot | None = None

    def get(self, products: Sequence[Product]) -> MetricsSnapshot:
        if self._snapshot is not None and products is self._source:
            return self._snapshot

        logger.debug("Recomputing metrics for %d products", len(products))
        self._snapshot = compute_metrics(products)
        self._source = products
        return self._snapshot
