"""Tests for application startup and shutdown."""

from unittest.mock import AsyncMock

import pytest

from inventory_dashboard.application import create_app, lifespan
from inventory_dashboard.config import settings
from inventory_dashboard.models.inventory import LoadStatus
from inventory_dashboard.services import product_collection as product_collection_module
from inventory_dashboard.services.clients import catalog_client as catalog_client_module
from inventory_dashboard.services.clients.catalog_client import (
    CatalogClient,
    get_catalog_client,
)
from inventory_dashboard.services.product_collection import get_collection_manager


@pytest.fixture()
def overridden_app(catalog, manager):
    app = create_app()
    app.dependency_overrides[get_catalog_client] = lambda: catalog
    app.dependency_overrides[get_collection_manager] = lambda: manager
    return app


@pytest.mark.asyncio
async def test_lifespan_loads_products_and_closes_catalog(
    overridden_app, catalog, manager, monkeypatch
):
    monkeypatch.setattr(settings, "LOAD_ON_STARTUP", True)

    async with lifespan(overridden_app):
        assert manager.status is LoadStatus.READY
        assert len(manager.products) == 12

    assert catalog.closed is True


@pytest.mark.asyncio
async def test_lifespan_survives_failed_initial_load(
    overridden_app, catalog, manager, monkeypatch
):
    monkeypatch.setattr(settings, "LOAD_ON_STARTUP", True)
    catalog.fail_fetch = True

    async with lifespan(overridden_app):
        assert manager.status is LoadStatus.ERROR
        assert manager.error == settings.LOAD_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_lifespan_can_skip_initial_load(
    overridden_app, catalog, manager, monkeypatch
):
    monkeypatch.setattr(settings, "LOAD_ON_STARTUP", False)

    async with lifespan(overridden_app):
        assert manager.status is LoadStatus.IDLE
        assert catalog.fetch_calls == 0


@pytest.mark.asyncio
async def test_each_lifespan_gets_a_fresh_catalog_client(monkeypatch):
    built: list[AsyncMock] = []

    def _build() -> AsyncMock:
        built.append(AsyncMock(spec=CatalogClient))
        return built[-1]

    monkeypatch.setattr(settings, "LOAD_ON_STARTUP", False)
    monkeypatch.setattr(catalog_client_module, "_initialize_catalog", _build)
    monkeypatch.setattr(catalog_client_module, "_catalog_client", None)
    monkeypatch.setattr(product_collection_module, "_manager", None)
    app = create_app()

    async with lifespan(app):
        first = get_catalog_client()
        first_manager = get_collection_manager()

    first.aclose.assert_awaited_once()

    async with lifespan(app):
        second = get_catalog_client()
        second_manager = get_collection_manager()

    assert second is not first
    assert second_manager is not first_manager
    assert second_manager._catalog is second
    second.aclose.assert_awaited_once()
