"""API route registration."""

from fastapi import FastAPI

from inventory_dashboard.api.routes import dashboard, inventory, products, system


def include_api_routes(app: FastAPI) -> None:
    """Attach all API routers to the application."""

    app.include_router(system.router)
    app.include_router(inventory.router)
    app.include_router(products.router)
    app.include_router(dashboard.router)
