"""Routes for creating, editing and reading single products."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from inventory_dashboard.models.product import (
    Category,
    Product,
    ProductCreate,
    ProductUpdate,
)
from inventory_dashboard.services.clients.catalog_client import CatalogDependency
from inventory_dashboard.services.clients.errors import (
    CatalogError,
    NotFoundError,
    ValidationError,
)
from inventory_dashboard.services.product_collection import (
    ProductCollectionManager,
    get_collection_manager,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

ManagerDependency = Annotated[ProductCollectionManager, Depends(get_collection_manager)]


def _to_http_error(exc: CatalogError, action: str) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.detail or str(exc),
        )
    logger.warning("Catalog unavailable while trying to %s: %s", action, exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Failed to {action}",
    )


@router.get(
    "/categories",
    response_model=list[Category],
    summary="List catalog categories",
)
async def list_categories(catalog: CatalogDependency) -> list[Category]:
    try:
        return await catalog.fetch_categories()
    except CatalogError as exc:
        raise _to_http_error(exc, "load categories")


@router.get(
    "/{product_id}",
    response_model=Product,
    summary="Fetch a single product from the catalog",
)
async def read_product(product_id: int, catalog: CatalogDependency) -> Product:
    try:
        return await catalog.fetch_by_id(product_id)
    except CatalogError as exc:
        raise _to_http_error(exc, "load product")


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product and refresh the inventory",
)
async def create_product(
    payload: ProductCreate,
    catalog: CatalogDependency,
    manager: ManagerDependency,
) -> Product:
    """Create the product in the catalog, then resync the listing."""

    try:
        created = await catalog.create(payload)
    except CatalogError as exc:
        raise _to_http_error(exc, "create product")

    logger.info("Product %s created, refreshing inventory", created.id)
    await manager.refresh()
    return created


@router.put(
    "/{product_id}",
    response_model=Product,
    summary="Update a product and refresh the inventory",
)
async def update_product(
    product_id: int,
    payload: ProductUpdate,
    catalog: CatalogDependency,
    manager: ManagerDependency,
) -> Product:
    """Apply a partial update in the catalog, then resync the listing."""

    try:
        updated = await catalog.update(product_id, payload)
    except CatalogError as exc:
        raise _to_http_error(exc, "update product")

    logger.info("Product %s updated, refreshing inventory", product_id)
    await manager.refresh()
    return updated
