"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given("a pending order", target_fixture="order")
def pending_order():
    order = Order.place(
        order_number="ORD-261019-0042",
        items_data=[
            {"product_id": "prod-001", "product_name": "Hydrating Serum", "price": 250000, "quantity": 2},
        ],
        total=500000,
        customer_name="Sara Ahmadi",
        customer_phone="09120000000",
        shipping_address="No. 12, Example St.",
    )
    order._events.clear()
    return order


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status
