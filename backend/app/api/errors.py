"""Translate domain errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.errors import (
    ProductConflictError,
    ProductError,
    ProductNotFoundError,
    ProductValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[ProductError], int] = {
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
    ProductConflictError: status.HTTP_409_CONFLICT,
    ProductValidationError: status.HTTP_400_BAD_REQUEST,
}


def status_for(error: ProductError) -> int:
    """Resolve the status for an error, walking its class hierarchy."""
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def product_error_handler(request: Request, exc: ProductError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        f"{request.method} {request.url.path} -> {status_code}: {exc.message}"
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductError, product_error_handler)
