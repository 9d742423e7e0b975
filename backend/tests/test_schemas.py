"""Tests for request/response model validation."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.api.schemas.product import (
    ProductCategory,
    ProductCreate,
    ProductListQuery,
    ProductSort,
    ProductUpdate,
    SortOrder,
    to_price,
)

pytestmark = pytest.mark.unit


def _create(**overrides):
    values = {
        "name": "Desk Lamp",
        "price": 30.0,
        "sku": "HOM-LMP",
        "category": ProductCategory.HOME,
    }
    values.update(overrides)
    return ProductCreate(**values)


@pytest.mark.parametrize(
    "raw, expected",
    [(123.456, Decimal("123.46")), (10.005, Decimal("10.01")), (0.004, Decimal("0.00"))],
)
def test_to_price_rounds_half_up(raw, expected):
    assert to_price(raw) == expected


class TestPrice:
    def test_create_price_is_rounded(self):
        assert _create(price=123.456).price == 123.46

    def test_update_price_is_rounded(self):
        assert ProductUpdate(price=10.005).price == 10.01

    @pytest.mark.parametrize("price", [0.004, 0.001])
    def test_price_rounding_to_zero_is_rejected(self, price):
        with pytest.raises(ValidationError, match="at least 0.01"):
            _create(price=price)

        with pytest.raises(ValidationError, match="at least 0.01"):
            ProductUpdate(price=price)

    def test_smallest_price_survives(self):
        assert _create(price=0.005).price == 0.01


class TestUpdateNulls:
    @pytest.mark.parametrize("field", ["name", "price", "sku", "category", "is_active"])
    def test_explicit_null_rejected(self, field):
        with pytest.raises(ValidationError, match="may be omitted but not null"):
            ProductUpdate(**{field: None})

    def test_description_may_be_null(self):
        payload = ProductUpdate(description=None)
        assert payload.model_dump(exclude_unset=True) == {"description": None}

    def test_omitted_fields_are_unset(self):
        assert ProductUpdate().model_dump(exclude_unset=True) == {}


class TestListQuery:
    def test_splits_into_filters_and_pagination(self):
        query = ProductListQuery(
            category="books", search="py", price_max=50, page=2, limit=5, sort="price", order="asc"
        )

        filters = query.filters()
        pagination = query.pagination()

        assert filters.category == ProductCategory.BOOKS
        assert filters.search == "py"
        assert filters.price_max == 50
        assert pagination.page == 2
        assert pagination.offset == 5
        assert pagination.sort == ProductSort.PRICE
        assert pagination.order == SortOrder.ASC

    def test_defaults(self):
        pagination = ProductListQuery().pagination()

        assert (pagination.page, pagination.limit) == (1, 10)
        assert pagination.sort == ProductSort.CREATED_AT
        assert pagination.order == SortOrder.DESC
