"""SQLAlchemy-backed persistence for products."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.schemas.product import (
    PagingMeta,
    ProductCreate,
    ProductFilters,
    ProductListResponse,
    ProductPagination,
    ProductRead,
    ProductSort,
    ProductUpdate,
    SortOrder,
    to_price,
)
from app.core.errors import ProductConflictError, ProductNotFoundError
from app.db.models.product import Product

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"

SORT_COLUMNS = {
    ProductSort.NAME: Product.name,
    ProductSort.PRICE: Product.price,
    ProductSort.CREATED_AT: Product.created_at,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _next_timestamp(previous: datetime | None) -> datetime:
    """Return now, nudged forward so it is strictly after ``previous``."""
    now = _utcnow()
    if previous is not None:
        previous = _as_utc(previous)
        if now <= previous:
            now = previous + timedelta(microseconds=1)
    return now


def _is_unique_violation(error: IntegrityError) -> bool:
    # psycopg exposes the SQLSTATE; sqlite3 only has the message text.
    sqlstate = getattr(error.orig, "sqlstate", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    return str(error.orig).startswith("UNIQUE constraint failed")


class ProductRepository:
    """Single-table CRUD plus filtered listing over ``products``.

    Lookups never return ``None``: a missing row raises
    ``ProductNotFoundError``. Duplicate SKUs rejected by the unique index
    surface as ``ProductConflictError``.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, data: ProductCreate) -> None:
        now = _utcnow()
        product = Product(
            name=data.name,
            description=data.description,
            price=to_price(data.price),
            sku=data.sku,
            category=data.category.value,
            is_active=data.is_active,
            created_at=now,
            updated_at=now,
        )
        self.db.add(product)
        self._flush(f"Product with SKU '{data.sku}' already exists")
        logger.info(f"Created product {product.id} with SKU {data.sku}")

    def find_by_id(self, product_id: int) -> ProductRead:
        product = self.db.get(Product, product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")
        return self.to_product_read(product)

    def find_by_sku(self, sku: str) -> ProductRead:
        product = self.db.scalar(select(Product).where(Product.sku == sku))
        if product is None:
            raise ProductNotFoundError(f"Product with SKU '{sku}' not found")
        return self.to_product_read(product)

    def find_all(
        self, filters: ProductFilters, pagination: ProductPagination
    ) -> ProductListResponse:
        conditions = []
        if filters.category is not None:
            conditions.append(Product.category == filters.category.value)
        if filters.is_active is not None:
            conditions.append(Product.is_active == filters.is_active)
        if filters.search:
            term = filters.search
            conditions.append(
                or_(
                    Product.name.icontains(term, autoescape=True),
                    Product.description.icontains(term, autoescape=True),
                    Product.sku.icontains(term, autoescape=True),
                )
            )
        if filters.price_min is not None:
            conditions.append(Product.price >= Decimal(str(filters.price_min)))
        if filters.price_max is not None:
            conditions.append(Product.price <= Decimal(str(filters.price_max)))

        total = self.db.scalar(select(func.count(Product.id)).where(*conditions)) or 0

        sort_column = SORT_COLUMNS[pagination.sort]
        if pagination.order == SortOrder.ASC:
            ordering = (sort_column.asc(), Product.id.asc())
        else:
            ordering = (sort_column.desc(), Product.id.desc())

        query = (
            select(Product)
            .where(*conditions)
            .order_by(*ordering)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        products = self.db.scalars(query).all()

        return ProductListResponse(
            data=[self.to_product_read(p) for p in products],
            paging=PagingMeta.build(total, pagination.page, pagination.limit),
        )

    def update(self, product_id: int, data: ProductUpdate) -> None:
        product = self.db.get(Product, product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        changes = data.model_dump(exclude_unset=True, mode="json")
        if "price" in changes:
            changes["price"] = to_price(changes["price"])
        for field, value in changes.items():
            setattr(product, field, value)
        product.updated_at = _next_timestamp(product.updated_at)

        self._flush(f"Product with SKU '{data.sku}' already exists")
        logger.info(f"Updated product {product_id}")

    def delete(self, product_id: int) -> None:
        product = self.db.get(Product, product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")
        self.db.delete(product)
        self.db.flush()
        logger.info(f"Deleted product {product_id}")

    def _flush(self, conflict_message: str) -> None:
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            if _is_unique_violation(e):
                logger.warning(f"Unique constraint rejected write: {e.orig}")
                raise ProductConflictError(conflict_message) from e
            raise

    @staticmethod
    def to_product_read(product: Product) -> ProductRead:
        """Map a row to the domain record, re-validating its shape."""
        return ProductRead.model_validate(
            {
                "id": product.id,
                "name": product.name,
                "description": product.description,
                "price": float(product.price),
                "sku": product.sku,
                "category": product.category,
                "is_active": product.is_active,
                "created_at": _as_utc(product.created_at),
                "updated_at": _as_utc(product.updated_at),
            }
        )
