"""Business rules for the product catalog."""

from __future__ import annotations

import logging
from typing import Protocol

from app.api.schemas.product import (
    ProductCreate,
    ProductFilters,
    ProductListResponse,
    ProductPagination,
    ProductRead,
    ProductUpdate,
)
from app.core.errors import (
    ProductConflictError,
    ProductNotFoundError,
    ProductValidationError,
)

logger = logging.getLogger(__name__)


class ProductStore(Protocol):
    """Persistence operations the service relies on."""

    def create(self, data: ProductCreate) -> None: ...

    def find_by_id(self, product_id: int) -> ProductRead: ...

    def find_by_sku(self, sku: str) -> ProductRead: ...

    def find_all(
        self, filters: ProductFilters, pagination: ProductPagination
    ) -> ProductListResponse: ...

    def update(self, product_id: int, data: ProductUpdate) -> None: ...

    def delete(self, product_id: int) -> None: ...


class ProductService:
    """Enforce SKU uniqueness and existence checks around the repository.

    Every write re-reads the stored row so callers see store-assigned
    fields (id, timestamps, rounded price) rather than their own input.
    Checks run in a fixed order: existence, then SKU uniqueness, then the
    write itself.
    """

    def __init__(self, repository: ProductStore) -> None:
        self.repository = repository

    def create_product(self, data: ProductCreate) -> ProductRead:
        try:
            self._ensure_sku_available(data.sku)
            self.repository.create(data)
            return self.repository.find_by_sku(data.sku)
        except ProductConflictError:
            raise
        except Exception as e:
            logger.error(f"Failed to create product with SKU {data.sku}: {e}", exc_info=True)
            raise ProductValidationError("Failed to create product") from e

    def get_product(self, product_id: int) -> ProductRead:
        return self.repository.find_by_id(product_id)

    def get_products(
        self, filters: ProductFilters, pagination: ProductPagination
    ) -> ProductListResponse:
        return self.repository.find_all(filters, pagination)

    def update_product(self, product_id: int, data: ProductUpdate) -> ProductRead:
        self.get_product(product_id)

        if data.sku is not None:
            self._ensure_sku_available(data.sku, product_id=product_id)

        try:
            self.repository.update(product_id, data)
            return self.repository.find_by_id(product_id)
        except ProductConflictError:
            raise
        except Exception as e:
            logger.error(f"Failed to update product {product_id}: {e}", exc_info=True)
            raise ProductValidationError("Failed to update product") from e

    def delete_product(self, product_id: int) -> None:
        self.get_product(product_id)

        try:
            self.repository.delete(product_id)
        except Exception as e:
            logger.error(f"Failed to delete product {product_id}: {e}", exc_info=True)
            raise ProductValidationError("Failed to delete product") from e

    def _ensure_sku_available(self, sku: str, product_id: int | None = None) -> None:
        """Raise a conflict when ``sku`` belongs to a product other than ``product_id``."""
        try:
            existing = self.repository.find_by_sku(sku)
        except ProductNotFoundError:
            return
        if existing.id != product_id:
            raise ProductConflictError(f"Product with SKU '{sku}' already exists")
