"""Tests for product payload schemas."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from inventory_dashboard.models.inventory import DateRange, FilterState, PaginationState
from inventory_dashboard.models.product import Product, ProductCreate, ProductUpdate


def test_product_price_from_float_is_exact(product_factory):
    assert product_factory(1, price=10.005).price == Decimal("10.005")


def test_product_rejects_negative_price(product_factory):
    with pytest.raises(ValidationError):
        product_factory(1, price="-0.01")


def test_product_requires_title():
    with pytest.raises(ValidationError):
        Product.model_validate(
            {"id": 1, "price": 1, "creationAt": "2024-01-01T00:00:00Z"}
        )


def test_product_is_immutable(product_factory):
    product = product_factory(1)

    with pytest.raises(ValidationError):
        product.title = "changed"


def test_product_without_category_or_images():
    product = Product.model_validate(
        {"id": 5, "title": "Bare", "price": 0, "creationAt": "2024-01-01T00:00:00Z"}
    )

    assert product.category is None
    assert product.images == ()
    assert product.description == ""


def test_create_payload_wraps_single_image():
    payload = ProductCreate(
        title="Lamp",
        price="12.50",
        description="Desk lamp",
        category_id=3,
        image_url="https://img.example.com/lamp.jpg",
    ).to_catalog_payload()

    assert payload == {
        "title": "Lamp",
        "price": 12.5,
        "description": "Desk lamp",
        "categoryId": 3,
        "images": ["https://img.example.com/lamp.jpg"],
    }


def test_create_payload_requires_positive_price():
    with pytest.raises(ValidationError):
        ProductCreate(
            title="Lamp",
            price=0,
            description="Desk lamp",
            category_id=3,
            image_url="https://img.example.com/lamp.jpg",
        )


def test_update_payload_ignores_empty_image_url():
    payload = ProductUpdate(price=5, imageUrl="").to_catalog_payload()

    assert payload == {"price": 5.0}


def test_filter_state_accepts_camel_case():
    state = FilterState.model_validate(
        {"searchTerm": "hat", "dateRange": {"start": "2024-01-01", "end": None}}
    )

    assert state.search_term == "hat"
    assert state.date_range.start.isoformat() == "2024-01-01"
    assert state.date_range.end is None


def test_date_range_inversion():
    assert DateRange(start="2024-02-01", end="2024-01-01").is_inverted
    assert not DateRange(start="2024-01-01", end="2024-01-01").is_inverted
    assert not DateRange(start="2024-01-01").is_inverted


def test_pagination_defaults_to_configured_page_size():
    from inventory_dashboard.config import settings

    assert PaginationState().page_size == settings.DEFAULT_PAGE_SIZE


def test_update_payload_drops_explicit_nulls():
    update = ProductUpdate.model_validate(
        {"title": None, "price": None, "description": "Refreshed copy"}
    )

    assert update.to_catalog_payload() == {"description": "Refreshed copy"}
