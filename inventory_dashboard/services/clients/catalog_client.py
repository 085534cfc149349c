"""Catalog client abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Annotated, Any

import httpx
from fastapi import Depends

from inventory_dashboard.config import settings
from inventory_dashboard.models.product import (
    Category,
    Product,
    ProductCreate,
    ProductUpdate,
)
from inventory_dashboard.services.clients.errors import (
    NotFoundError,
    TransportError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class CatalogClient(ABC):
    """Abstract interface to the remote product catalog."""

    @abstractmethod
    async def fetch_all(self) -> list[Product]:
        """Return every product known to the catalog."""

    @abstractmethod
    async def fetch_page(self, offset: int, limit: int) -> list[Product]:
        """Return a window of products starting at ``offset``."""

    @abstractmethod
    async def fetch_by_id(self, product_id: int) -> Product:
        """Return one product or raise ``NotFoundError``."""

    @abstractmethod
    async def create(self, data: ProductCreate) -> Product:
        """Create a product and return the stored record."""

    @abstractmethod
    async def update(self, product_id: int, data: ProductUpdate) -> Product:
        """Apply a partial update and return the stored record."""

    @abstractmethod
    async def delete(self, product_id: int) -> None:
        """Delete a product."""

    @abstractmethod
    async def fetch_categories(self) -> list[Category]:
        """Return the catalog's categories."""

    async def aclose(self) -> None:
        """Release any underlying resources."""


class HttpCatalogClient(CatalogClient):
    """Catalog implementation backed by the catalog's REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("Catalog base URL is required to initialize catalog client")

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def fetch_all(self) -> list[Product]:
        data = await self._request("GET", "/products")
        return [Product.model_validate(item) for item in _expect_list(data, "/products")]

    async def fetch_page(self, offset: int, limit: int) -> list[Product]:
        data = await self._request(
            "GET",
            "/products",
            params={"offset": offset, "limit": limit},
        )
        return [Product.model_validate(item) for item in _expect_list(data, "/products")]

    async def fetch_by_id(self, product_id: int) -> Product:
        path = f"/products/{product_id}"
        data = await self._request("GET", path)
        return Product.model_validate(_expect_object(data, path))

    async def create(self, data: ProductCreate) -> Product:
        created = _expect_object(
            await self._request("POST", "/products", json=data.to_catalog_payload()),
            "/products",
        )
        logger.info("Created catalog product %s", created.get("id"))
        return Product.model_validate(created)

    async def update(self, product_id: int, data: ProductUpdate) -> Product:
        path = f"/products/{product_id}"
        updated = _expect_object(
            await self._request("PUT", path, json=data.to_catalog_payload()),
            path,
        )
        logger.info("Updated catalog product %s", product_id)
        return Product.model_validate(updated)

    async def delete(self, product_id: int) -> None:
        await self._request("DELETE", f"/products/{product_id}")
        logger.info("Deleted catalog product %s", product_id)

    async def fetch_categories(self) -> list[Category]:
        data = await self._request("GET", "/categories")
        return [
            Category.model_validate(item) for item in _expect_list(data, "/categories")
        ]

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Catalog %s %s failed: %s", method, path, exc)
            raise TransportError(f"Catalog request failed: {exc}") from exc

        if response.status_code == 404:
            raise NotFoundError(f"Catalog entity not found: {path}")
        if response.status_code in (400, 422):
            detail = _safe_json(response)
            logger.debug("Catalog rejected %s %s: %s", method, path, detail)
            raise ValidationError(
                f"Catalog rejected payload for {path}",
                detail=detail,
            )
        if response.is_error:
            raise TransportError(
                f"Catalog responded with status {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            # Prices must never pass through binary floats
            return response.json(parse_float=Decimal)
        except ValueError as exc:
            logger.warning("Catalog %s %s returned a non-JSON body", method, path)
            raise TransportError(
                f"Catalog returned an unreadable body for {path}",
                status_code=response.status_code,
            ) from exc


def _expect_list(data: Any, path: str) -> list[Any]:
    if not isinstance(data, list):
        raise TransportError(f"Catalog returned no list for {path}")
    return data


def _expect_object(data: Any, path: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TransportError(f"Catalog returned no record for {path}")
    return data


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


_catalog_client: CatalogClient | None = None


def _initialize_catalog() -> CatalogClient:
    return HttpCatalogClient(
        base_url=settings.catalog_base_url,
        timeout=settings.CATALOG_TIMEOUT_SECONDS,
    )


def get_catalog_client() -> CatalogClient:
    """FastAPI dependency returning the configured catalog client."""

    global _catalog_client
    if _catalog_client is None:
        _catalog_client = _initialize_catalog()
    return _catalog_client


CatalogDependency = Annotated[CatalogClient, Depends(get_catalog_client)]


async def close_catalog_client() -> None:
    """Close the shared catalog client; the next lookup builds a fresh one."""

    global _catalog_client
    if _catalog_client is not None:
        await _catalog_client.aclose()
        _catalog_client = None
