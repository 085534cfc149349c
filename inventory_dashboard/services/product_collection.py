"""Authoritative in-memory product collection with filtered and paged views."""

from __future__ import annotations

import logging

from inventory_dashboard.config import settings
from inventory_dashboard.models.inventory import (
    DateRange,
    FilterState,
    InventorySnapshot,
    LoadStatus,
    PaginationState,
)
from inventory_dashboard.models.metrics import MetricsSnapshot
from inventory_dashboard.models.product import Product
from inventory_dashboard.services.clients.catalog_client import (
    CatalogClient,
    get_catalog_client,
)
from inventory_dashboard.services.clients.errors import CatalogError
from inventory_dashboard.services.metrics import MetricsCache
from inventory_dashboard.services.views import filter_products, paginate, total_pages

logger = logging.getLogger(__name__)


class ProductCollectionManager:
    """Owns the product set pulled from the catalog and the views derived from it.

    The product set is an immutable tuple that is only ever replaced: by
    ``load`` with the catalog's response, or by ``remove`` with a copy missing
    one record. Derived views are recomputed when the set or their parameters
    change and reused otherwise.
    """

    def __init__(self, catalog: CatalogClient, *, page_size: int | None = None) -> None:
        self._catalog = catalog
        self._products: tuple[Product, ...] = ()
        self._status = LoadStatus.IDLE
        self._loading = False
        self._error: str | None = None
        self._request_seq = 0
        # product id -> request sequence current when it was deleted mid-load
        self._removed_in_flight: dict[int, int] = {}

        self._filters = FilterState()
        self._pagination = (
            PaginationState(page_size=page_size) if page_size else PaginationState()
        )

        self._filtered_source: tuple[Product, ...] | None = None
        self._filtered_params: FilterState | None = None
        self._filtered: tuple[Product, ...] = ()

        self._metrics = MetricsCache()
        self._filtered_metrics = MetricsCache()

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def pagination(self) -> PaginationState:
        return self._pagination

    async def load(self) -> None:
        """Replace the product set with a fresh catalog fetch.

        Catalog failures keep the previous set and surface ``error``. When a
        newer ``load`` has started meanwhile, this call's outcome is dropped.
        Products removed while the fetch was in flight stay removed.
        """

        self._request_seq += 1
        request_id = self._request_seq
        self._loading = True
        self._status = LoadStatus.LOADING
        self._error = None

        try:
            products = await self._catalog.fetch_all()
        except CatalogError:
            if self._is_stale(request_id):
                logger.debug("Discarding failed product load #%d", request_id)
                return
            logger.exception("Error fetching products")
            self._error = settings.LOAD_ERROR_MESSAGE
            self._status = LoadStatus.ERROR
        else:
            if self._is_stale(request_id):
                logger.debug(
                    "Discarding stale product load #%d (latest is #%d)",
                    request_id,
                    self._request_seq,
                )
                return
            removed = {
                product_id
                for product_id, seq in self._removed_in_flight.items()
                if seq >= request_id
            }
            self._products = tuple(p for p in products if p.id not in removed)
            self._status = LoadStatus.READY
            logger.info("Loaded %d products from catalog", len(self._products))
        finally:
            if not self._is_stale(request_id):
                self._loading = False
                self._removed_in_flight.clear()
                if self._status is LoadStatus.LOADING:
                    # Unexpected exception on its way out
                    self._status = LoadStatus.ERROR

    async def refresh(self) -> None:
        """Resync with the catalog, e.g. after a create or update."""

        await self.load()

    def _is_stale(self, request_id: int) -> bool:
        return request_id != self._request_seq

    def set_search_term(self, term: str) -> None:
        self._filters = FilterState(search_term=term, date_range=self._filters.date_range)
        self._reset_page()

    def set_date_range(self, date_range: DateRange | None = None) -> None:
        self._filters = FilterState(
            search_term=self._filters.search_term,
            date_range=date_range or DateRange(),
        )
        self._reset_page()

    def set_page(self, page: int) -> None:
        self._pagination = PaginationState(
            page=page,
            page_size=self._pagination.page_size,
        )

    def set_page_size(self, page_size: int) -> None:
        self._pagination = PaginationState(page=0, page_size=page_size)

    def _reset_page(self) -> None:
        self.set_page(0)

    def filtered_view(self) -> tuple[Product, ...]:
        if (
            self._filtered_source is not self._products
            or self._filtered_params != self._filters
        ):
            self._filtered = filter_products(self._products, self._filters)
            self._filtered_source = self._products
            self._filtered_params = self._filters
        return self._filtered

    def paginated_view(self) -> tuple[Product, ...]:
        return paginate(self.filtered_view(), self._pagination)

    def total_pages(self) -> int:
        return total_pages(len(self.filtered_view()), self._pagination.page_size)

    def metrics(self) -> MetricsSnapshot:
        return self._metrics.get(self._products)

    def filtered_metrics(self) -> MetricsSnapshot:
        return self._filtered_metrics.get(self.filtered_view())

    def snapshot(self) -> InventorySnapshot:
        filtered = self.filtered_view()
        return InventorySnapshot(
            status=self._status,
            loading=self._loading,
            error=self._error,
            filters=self._filters,
            pagination=self._pagination,
            total_products=len(self._products),
            filtered_count=len(filtered),
            total_pages=self.total_pages(),
            items=list(self.paginated_view()),
        )

    async def remove(self, product_id: int) -> bool:
        """Delete a product in the catalog, then drop it locally.

        Returns ``False`` and leaves the set untouched when the catalog call
        fails. Removing an id that is not held locally is a successful no-op.
        """

        try:
            await self._catalog.delete(product_id)
        except CatalogError:
            logger.exception("Error deleting product %s", product_id)
            return False

        if self._loading:
            self._removed_in_flight[product_id] = self._request_seq

        remaining = tuple(p for p in self._products if p.id != product_id)
        if len(remaining) != len(self._products):
            self._products = remaining
            logger.info("Removed product %s from collection", product_id)
        return True


_manager: ProductCollectionManager | None = None


def get_collection_manager() -> ProductCollectionManager:
    """FastAPI dependency factory."""

    global _manager
    if _manager is None:
        _manager = ProductCollectionManager(get_catalog_client())
    return _manager


def reset_collection_manager() -> None:
    """Drop the shared manager so it is rebuilt around the current catalog client."""

    global _manager
    _manager = None
