"""CRUD + filtering endpoints for the product catalog."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies.products import get_product_service
from app.api.schemas.product import (
    DeleteResponse,
    ProductCreate,
    ProductListQuery,
    ProductListResponse,
    ProductRead,
    ProductUpdate,
)
from app.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    summary="Create a product",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductRead,
)
def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Persist a new product. The SKU must not already exist."""
    return service.create_product(payload)


@router.get(
    "",
    summary="List products with filters and pagination",
    response_model=ProductListResponse,
)
def list_products(
    query: Annotated[ProductListQuery, Query()],
    service: ProductService = Depends(get_product_service),
) -> ProductListResponse:
    """Return one page of products. Filters are combined with AND logic."""
    return service.get_products(query.filters(), query.pagination())


@router.get(
    "/{product_id}",
    summary="Get a product by ID",
    response_model=ProductRead,
)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    return service.get_product(product_id)


@router.patch(
    "/{product_id}",
    summary="Update a product",
    response_model=ProductRead,
)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Apply a partial update. Omitted fields keep their stored values."""
    return service.update_product(product_id, payload)


@router.delete(
    "/{product_id}",
    summary="Delete a product",
    response_model=DeleteResponse,
)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> DeleteResponse:
    """Hard delete a single product."""
    service.delete_product(product_id)
    return DeleteResponse(success=True)
