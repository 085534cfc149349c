"""Dashboard metrics routes."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from inventory_dashboard.models.metrics import MetricsSnapshot
from inventory_dashboard.services.product_collection import (
    ProductCollectionManager,
    get_collection_manager,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

ManagerDependency = Annotated[ProductCollectionManager, Depends(get_collection_manager)]


@router.get(
    "/metrics",
    response_model=MetricsSnapshot,
    summary="Aggregate statistics over the product collection",
)
async def read_metrics(
    manager: ManagerDependency,
    scope: Literal["all", "filtered"] = Query("all"),
) -> MetricsSnapshot:
    """Metrics of every loaded product, or only of those matching the filters."""

    if scope == "filtered":
        return manager.filtered_metrics()
    return manager.metrics()
