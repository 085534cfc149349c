"""System-level routes such as health checks."""

from __future__ import annotations

import httpx
from fastapi import APIRouter

from inventory_dashboard.config import settings

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Hello World endpoint used by smoke tests."""

    return {"message": "Hello World"}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint with catalog connectivity check."""

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{settings.catalog_base_url}/categories",
                params={"limit": 1},
                timeout=5.0,
            )
            catalog_status = (
                "connected" if response.status_code == 200 else "disconnected"
            )
    except httpx.HTTPError:
        catalog_status = "disconnected"

    return {
        "status": "healthy",
        "catalog": catalog_status,
        "environment": settings.ENVIRONMENT,
    }
