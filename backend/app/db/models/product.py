"""SQLAlchemy model for product records."""

from sqlalchemy import Boolean, Column, Integer, Numeric, String, Text
from sqlalchemy.types import DateTime

from app.db.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    sku = Column(String(100), nullable=False, unique=True, index=True)
    category = Column(String(32), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    # Assigned by the repository so create/update can control ordering exactly.
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)
