"""Explicit wiring of repository -> service for request handlers."""

from app.api.dependencies.db import DbSession
from app.db.repositories.product import ProductRepository
from app.services.product_service import ProductService


def get_product_service(db: DbSession) -> ProductService:
    """Build a request-scoped service bound to the request's session."""
    return ProductService(ProductRepository(db))
