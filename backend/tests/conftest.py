"""Pytest configuration and fixtures for the product catalog."""

import os

# Must be set before app modules read settings.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.dependencies.db import get_session
from app.api.schemas.product import ProductCategory, ProductCreate, ProductRead
from app.db.repositories.product import ProductRepository
from app.db.session import init_db
from app.services.product_service import ProductService


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


@pytest.fixture()
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def repository(session):
    return ProductRepository(session)


@pytest.fixture()
def service(repository):
    return ProductService(repository)


@pytest.fixture()
def product_data():
    """Factory for valid create payloads; keyword overrides replace defaults."""

    def _build(**overrides) -> ProductCreate:
        values = {
            "name": "Test Product",
            "description": "A test product",
            "price": 99.99,
            "sku": "TEST-001",
            "category": ProductCategory.ELECTRONICS,
            "is_active": True,
        }
        values.update(overrides)
        return ProductCreate(**values)

    return _build


@pytest.fixture()
def stored_product():
    """A product record as the repository would return it."""
    timestamp = datetime(2023, 1, 1, tzinfo=timezone.utc)
    return ProductRead(
        id=1,
        name="Test Product",
        description="A test product",
        price=99.99,
        sku="TEST-001",
        category=ProductCategory.ELECTRONICS,
        is_active=True,
        created_at=timestamp,
        updated_at=timestamp,
    )


@pytest.fixture()
def client(session_factory):
    """Return a TestClient whose requests share the per-test database."""
    from app.main import app

    def _get_session():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_session] = _get_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_session, None)
