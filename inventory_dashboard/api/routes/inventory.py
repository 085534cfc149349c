"""Routes exposing the inventory listing state and its mutators."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from inventory_dashboard.models.inventory import (
    FilterUpdate,
    InventorySnapshot,
    PaginationUpdate,
)
from inventory_dashboard.models.product import Product
from inventory_dashboard.services.product_collection import (
    ProductCollectionManager,
    get_collection_manager,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["inventory"])

ManagerDependency = Annotated[ProductCollectionManager, Depends(get_collection_manager)]


@router.get(
    "",
    response_model=InventorySnapshot,
    summary="Current inventory state and page of products",
)
async def read_inventory(manager: ManagerDependency) -> InventorySnapshot:
    return manager.snapshot()


@router.get(
    "/filtered",
    response_model=list[Product],
    summary="Every product matching the current filters",
)
async def read_filtered(manager: ManagerDependency) -> list[Product]:
    return list(manager.filtered_view())


@router.put(
    "/filters",
    response_model=InventorySnapshot,
    summary="Update the search term and/or date range",
)
async def update_filters(
    payload: FilterUpdate,
    manager: ManagerDependency,
) -> InventorySnapshot:
    """Apply filter changes; the page is reset to the first one."""

    fields = payload.model_fields_set
    if "search_term" in fields:
        manager.set_search_term(payload.search_term or "")
    if "date_range" in fields:
        manager.set_date_range(payload.date_range)
    return manager.snapshot()


@router.put(
    "/pagination",
    response_model=InventorySnapshot,
    summary="Change the current page and/or page size",
)
async def update_pagination(
    payload: PaginationUpdate,
    manager: ManagerDependency,
) -> InventorySnapshot:
    """A page size change resets to the first page before ``page`` is applied."""

    if payload.page_size is not None:
        manager.set_page_size(payload.page_size)
    if payload.page is not None:
        manager.set_page(payload.page)
    return manager.snapshot()


@router.post(
    "/refresh",
    response_model=InventorySnapshot,
    summary="Reload products from the catalog",
)
async def refresh_inventory(manager: ManagerDependency) -> InventorySnapshot:
    await manager.refresh()
    return manager.snapshot()


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product from the catalog and the listing",
)
async def delete_product(product_id: int, manager: ManagerDependency) -> Response:
    removed = await manager.remove(product_id)
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to delete product",
        )
    logger.info("Product %s deleted", product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
