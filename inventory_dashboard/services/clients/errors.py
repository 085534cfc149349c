"""Errors raised by catalog client implementations."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for expected catalog failures."""


class TransportError(CatalogError):
    """Catalog unreachable, timed out, or answered with a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(CatalogError):
    """Requested entity does not exist in the catalog."""


class ValidationError(CatalogError):
    """Catalog rejected a create/update payload."""

    def __init__(self, message: str, *, detail: object | None = None) -> None:
        super().__init__(message)
        self.detail = detail
