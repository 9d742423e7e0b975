"""Pydantic models describing Product payloads and list queries."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from math import ceil

from pydantic import BaseModel, Field, field_validator

PRICE_QUANTUM = Decimal("0.01")


def to_price(value: float) -> Decimal:
    """Convert a float price to a two-decimal fixed-point value (half-up)."""
    return Decimal(str(value)).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def _rounded_price(value: float) -> float:
    rounded = to_price(value)
    if rounded <= 0:
        raise ValueError("price must be at least 0.01 once rounded to two decimals")
    return float(rounded)


class ProductCategory(str, Enum):
    ELECTRONICS = "electronics"
    CLOTHING = "clothing"
    BOOKS = "books"
    HOME = "home"
    SPORTS = "sports"


class ProductSort(str, Enum):
    NAME = "name"
    PRICE = "price"
    CREATED_AT = "created_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(..., gt=0, description="Unit price, stored with two decimals")
    sku: str = Field(..., min_length=1, max_length=100, description="Unique SKU")
    category: ProductCategory

    @field_validator("price")
    @classmethod
    def round_price(cls, v: float) -> float:
        return _rounded_price(v)


class ProductCreate(ProductBase):
    """Schema for new product payloads."""

    is_active: bool = True


class ProductUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, gt=0)
    sku: str | None = Field(None, min_length=1, max_length=100)
    category: ProductCategory | None = None
    is_active: bool | None = None

    @field_validator("name", "price", "sku", "category", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v):
        # Only description may be cleared; omit a field to leave it unchanged.
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    @field_validator("price")
    @classmethod
    def round_price(cls, v: float) -> float:
        return _rounded_price(v)


class ProductRead(ProductBase):
    id: int = Field(..., gt=0)
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductFilters(BaseModel):
    category: ProductCategory | None = Field(None, description="Filter by category")
    is_active: bool | None = Field(None, description="Filter by active status")
    search: str | None = Field(
        None, description="Case-insensitive match on name, description or SKU"
    )
    price_min: float | None = Field(None, ge=0, description="Minimum price (inclusive)")
    price_max: float | None = Field(None, ge=0, description="Maximum price (inclusive)")


class ProductPagination(BaseModel):
    page: int = Field(1, ge=1, description="Page number (1-indexed)")
    limit: int = Field(10, ge=1, le=100, description="Items per page")
    sort: ProductSort = Field(ProductSort.CREATED_AT, description="Sort field")
    order: SortOrder = Field(SortOrder.DESC, description="Sort order")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class ProductListQuery(ProductFilters, ProductPagination):
    """Query string of the list endpoint: filters and paging in one model."""

    def filters(self) -> ProductFilters:
        return ProductFilters.model_validate(
            self.model_dump(include=set(ProductFilters.model_fields))
        )

    def pagination(self) -> ProductPagination:
        return ProductPagination.model_validate(
            self.model_dump(include=set(ProductPagination.model_fields))
        )


class PagingMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PagingMeta":
        """Derive the page count from the filtered total."""
        pages = ceil(total / limit) if total else 0
        return cls(total=total, page=page, limit=limit, pages=pages)


class ProductListResponse(BaseModel):
    data: list[ProductRead]
    paging: PagingMeta


class DeleteResponse(BaseModel):
    success: bool = True
