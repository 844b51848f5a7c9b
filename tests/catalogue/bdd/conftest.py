"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.product.events import (
    DefaultVariantChanged,
    ProductCreated,
    ProductDeactivated,
    VariantAdded,
    VariantDeactivated,
)
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

_PRODUCT_EVENT_CLASSES = {
    "ProductCreated": ProductCreated,
    "ProductDeactivated": ProductDeactivated,
    "VariantAdded": VariantAdded,
    "VariantDeactivated": VariantDeactivated,
    "DefaultVariantChanged": DefaultVariantChanged,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def variants():
    """Variants added during a scenario, keyed by their SKU."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a product with base price {base_price:d}"), target_fixture="product")
def product_with_base_price(base_price):
    product = Product.create(
        name="Hydrating Serum",
        slug="hydrating-serum",
        base_price=base_price,
        category_id="cat-001",
    )
    product._events.clear()
    return product


# ---------------------------------------------------------------------------
# When steps (shared)
# ---------------------------------------------------------------------------
@when(parsers.cfparse('a variant "{sku}" priced {price:d} is added'))
def add_variant(product, variants, sku, price):
    variants[sku] = product.add_variant(name=sku, sku=sku, price=price, stock=1)


@given(parsers.cfparse('"{sku}" is deactivated'))
@when(parsers.cfparse('"{sku}" is deactivated'))
def deactivate_variant(product, variants, sku):
    product.deactivate_variant(variants[sku].id)


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} product event is raised"))
def product_event_raised(product, event_type):
    event_cls = _PRODUCT_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in product._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in product._events]}"


@then(parsers.cfparse("the effective price is {price:d}"))
def effective_price_is(product, price):
    assert product.effective_price == price
