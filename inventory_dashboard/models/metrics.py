"""Schemas describing the dashboard metrics snapshot."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from inventory_dashboard.models.product import Product


class CategoryCount(BaseModel):
    """Number of products sharing a category name."""

    model_config = ConfigDict(frozen=True)

    name: str
    count: int = Field(..., ge=0)


class ExpensiveProduct(BaseModel):
    """Entry of the most-expensive list, with a display-length title."""

    model_config = ConfigDict(frozen=True)

    title: str
    price: Decimal


class MetricsSnapshot(BaseModel):
    """Aggregate statistics derived from a product collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_products: int = Field(default=0, alias="totalProducts")
    total_inventory_value: str = Field(default="0.00", alias="totalInventoryValue")
    top_category: CategoryCount = Field(
        default_factory=lambda: CategoryCount(name="N/A", count=0),
        alias="topCategory",
    )
    category_distribution: tuple[CategoryCount, ...] = Field(
        default=(),
        alias="categoryDistribution",
    )
    top_expensive_products: tuple[ExpensiveProduct, ...] = Field(
        default=(),
        alias="topExpensiveProducts",
    )
    recent_products: tuple[Product, ...] = Field(default=(), alias="recentProducts")
