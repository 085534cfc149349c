"""Filter, pagination and view-state schemas for the inventory listing."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from inventory_dashboard.config import settings
from inventory_dashboard.models.product import Product


class LoadStatus(str, Enum):
    """Lifecycle of the product collection."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class DateRange(BaseModel):
    """Inclusive creation-date bounds; either side may be open."""

    model_config = ConfigDict(frozen=True)

    start: date | None = None
    end: date | None = None

    @property
    def is_inverted(self) -> bool:
        return self.start is not None and self.end is not None and self.start > self.end


class FilterState(BaseModel):
    """Search term and date range applied to the authoritative set."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    search_term: str = Field(default="", alias="searchTerm")
    date_range: DateRange = Field(default_factory=DateRange, alias="dateRange")


class PaginationState(BaseModel):
    """Zero-based page window over the filtered view."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: int = Field(default=0, ge=0)
    page_size: int = Field(
        default_factory=lambda: settings.DEFAULT_PAGE_SIZE,
        gt=0,
        alias="pageSize",
    )


class FilterUpdate(BaseModel):
    """Request body for PUT /inventory/filters."""

    model_config = ConfigDict(populate_by_name=True)

    search_term: str | None = Field(default=None, alias="searchTerm")
    date_range: DateRange | None = Field(default=None, alias="dateRange")


class PaginationUpdate(BaseModel):
    """Request body for PUT /inventory/pagination."""

    model_config = ConfigDict(populate_by_name=True)

    page: int | None = Field(default=None, ge=0)
    page_size: int | None = Field(default=None, gt=0, alias="pageSize")


class InventorySnapshot(BaseModel):
    """Read-only state exposed to presentation layers."""

    model_config = ConfigDict(populate_by_name=True)

    status: LoadStatus
    loading: bool
    error: str | None = None
    filters: FilterState
    pagination: PaginationState
    total_products: int = Field(..., alias="totalProducts")
    filtered_count: int = Field(..., alias="filteredCount")
    total_pages: int = Field(..., alias="totalPages")
    items: list[Product] = Field(default_factory=list)
