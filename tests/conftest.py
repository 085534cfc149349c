"""Pytest configuration and fixtures for the inventory dashboard."""

import asyncio
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from inventory_dashboard.models.product import (
    Category,
    Product,
    ProductCreate,
    ProductUpdate,
)
from inventory_dashboard.services.clients.catalog_client import (
    CatalogClient,
    get_catalog_client,
)
from inventory_dashboard.services.clients.errors import NotFoundError, TransportError
from inventory_dashboard.services.product_collection import (
    ProductCollectionManager,
    get_collection_manager,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


def make_product(
    product_id: int,
    title: str = "Product",
    price="10.00",
    created: str = "2024-01-15T10:00:00.000Z",
    category: str | None = "Clothes",
) -> Product:
    return Product.model_validate(
        {
            "id": product_id,
            "title": title,
            "price": price,
            "description": f"Description of {title}",
            "creationAt": created,
            "images": [f"https://img.example.com/{product_id}.jpg"],
            "category": {"id": 1, "name": category} if category else None,
        }
    )


class StubCatalog(CatalogClient):
    """In-memory catalog so tests never reach the network."""

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products: list[Product] = list(products or [])
        self.categories = [Category(id=1, name="Clothes"), Category(id=2, name="Shoes")]
        self.fail_fetch = False
        self.fail_delete = False
        self.fetch_calls = 0
        self.deleted: list[int] = []
        self.closed = False

    async def fetch_all(self) -> list[Product]:
        await asyncio.sleep(0)
        self.fetch_calls += 1
        if self.fail_fetch:
            raise TransportError("catalog offline")
        return list(self.products)

    async def fetch_page(self, offset: int, limit: int) -> list[Product]:
        await asyncio.sleep(0)
        return self.products[offset : offset + limit]

    async def fetch_by_id(self, product_id: int) -> Product:
        await asyncio.sleep(0)
        for product in self.products:
            if product.id == product_id:
                return product
        raise NotFoundError(f"Catalog entity not found: /products/{product_id}")

    async def create(self, data: ProductCreate) -> Product:
        await asyncio.sleep(0)
        product = Product(
            id=max((p.id for p in self.products), default=0) + 1,
            title=data.title,
            price=data.price,
            description=data.description,
            creation_at=datetime.now(UTC),
            images=(data.image_url,),
            category=next(
                (c for c in self.categories if c.id == data.category_id), None
            ),
        )
        self.products.append(product)
        return product

    async def update(self, product_id: int, data: ProductUpdate) -> Product:
        current = await self.fetch_by_id(product_id)
        changes = data.model_dump(exclude_unset=True, exclude={"image_url", "category_id"})
        if data.image_url:
            changes["images"] = (data.image_url,)
        updated = current.model_copy(update=changes)
        self.products = [updated if p.id == product_id else p for p in self.products]
        return updated

    async def delete(self, product_id: int) -> None:
        await asyncio.sleep(0)
        if self.fail_delete:
            raise TransportError("catalog offline")
        self.deleted.append(product_id)
        self.products = [p for p in self.products if p.id != product_id]

    async def fetch_categories(self) -> list[Category]:
        await asyncio.sleep(0)
        return list(self.categories)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture()
def product_factory():
    """Build catalog products with sensible defaults."""
    return make_product


@pytest.fixture()
def catalog(product_factory):
    """A stub catalog seeded with a dozen products."""
    return StubCatalog(
        [
            product_factory(i, title=f"Product {i}", created=f"2024-01-{i:02d}T12:00:00Z")
            for i in range(1, 13)
        ]
    )


@pytest.fixture()
def manager(catalog):
    return ProductCollectionManager(catalog, page_size=10)


@pytest_asyncio.fixture()
async def client(catalog, manager):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from inventory_dashboard.main import app

    app.dependency_overrides[get_catalog_client] = lambda: catalog
    app.dependency_overrides[get_collection_manager] = lambda: manager
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://testserver",
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_catalog_client, None)
        app.dependency_overrides.pop(get_collection_manager, None)
