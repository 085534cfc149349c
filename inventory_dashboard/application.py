"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_dashboard.api.routes import include_api_routes
from inventory_dashboard.config import settings
from inventory_dashboard.services.clients.catalog_client import (
    close_catalog_client,
    get_catalog_client,
)
from inventory_dashboard.services.product_collection import (
    get_collection_manager,
    reset_collection_manager,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the product collection on startup and close the catalog on shutdown."""

    if settings.LOAD_ON_STARTUP:
        manager = app.dependency_overrides.get(
            get_collection_manager, get_collection_manager
        )()
        await manager.load()
        if manager.error:
            logger.warning("Initial product load failed: %s", manager.error)
    else:
        logger.info("Skipping initial product load")

    yield

    override = app.dependency_overrides.get(get_catalog_client)
    if override is not None:
        await override().aclose()
    else:
        await close_catalog_client()
        reset_collection_manager()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Inventory Dashboard",
        description="Product inventory listing, management and metrics",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
