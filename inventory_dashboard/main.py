"""FastAPI application entry point."""

from inventory_dashboard.application import create_app

app = create_app()

__all__ = ["app"]
