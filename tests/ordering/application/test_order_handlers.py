"""Application tests for placing, administering and querying orders."""

import json

import pytest
from ordering.order import queries
from ordering.order.management import DeleteOrder, UpdateOrder
from ordering.order.order import Order, OrderItem
from ordering.order.placement import PlaceOrder
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from shared.identifiers import ORDER_NUMBER_PATTERN


def _lines(**overrides):
    line = {
        "product_id": "prod-001",
        "product_name": "Hydrating Serum",
        "variant_id": "var-001",
        "variant_name": "30ml",
        "sku": "SERUM-30",
        "price": 250000,
        "quantity": 2,
    }
    line.update(overrides)
    return [line]


def _place_order(**overrides):
    defaults = {
        "items": json.dumps(_lines()),
        "total": 500000,
        "customer_name": "Sara Ahmadi",
        "customer_phone": "09120000000",
        "shipping_address": "No. 12, Example St.",
    }
    defaults.update(overrides)
    return current_domain.process(PlaceOrder(**defaults), asynchronous=False)


def _get(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestPlaceOrder:
    def test_assigns_order_number(self):
        order = _get(_place_order())

        assert ORDER_NUMBER_PATTERN.match(order.order_number)
        assert order.status == "pending"
        assert order.subtotal == 500000

    def test_order_numbers_are_unique(self):
        numbers = {_get(_place_order()).order_number for _ in range(5)}
        assert len(numbers) == 5

    def test_inputs_are_trimmed(self):
        order = _get(_place_order(customer_name="  Sara  ", customer_email="   "))

        assert order.customer_name == "Sara"
        assert order.customer_email is None

    @pytest.mark.parametrize(
        "items",
        [
            "not json",
            "[]",
            json.dumps([{"product_id": "p1", "price": 10, "quantity": 1}]),
            json.dumps(_lines(quantity=0)),
            json.dumps(_lines(price=-5)),
        ],
    )
    def test_invalid_lines_are_rejected(self, items):
        with pytest.raises(ValidationError) as exc:
            _place_order(items=items)

        assert "items" in exc.value.messages
        assert current_domain.repository_for(Order)._dao.query.all().total == 0

    def test_blank_customer_name_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place_order(customer_name="   ")

        assert "customer_name" in exc.value.messages

    def test_items_persisted_with_the_order(self):
        order_id = _place_order(items=json.dumps(_lines() + _lines(sku="SERUM-50", price=1000, quantity=3)))

        items = current_domain.repository_for(OrderItem)._dao.query.filter(order_id=order_id).all().items

        assert sorted(item.total for item in items) == [3000, 500000]


class TestUpdateOrder:
    def test_status_and_notes(self):
        order_id = _place_order()

        current_domain.process(
            UpdateOrder(order_id=order_id, status="shipped", notes="Courier #42"),
            asynchronous=False,
        )

        order = _get(order_id)
        assert order.status == "shipped"
        assert order.notes == "Courier #42"

    def test_backward_transition_is_rejected(self):
        order_id = _place_order()
        current_domain.process(UpdateOrder(order_id=order_id, status="delivered"), asynchronous=False)

        with pytest.raises(ValidationError):
            current_domain.process(UpdateOrder(order_id=order_id, status="processing"), asynchronous=False)

        assert _get(order_id).status == "delivered"

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateOrder(order_id="missing", notes="x"), asynchronous=False)


class TestDeleteOrder:
    def test_removes_order_and_lines(self):
        order_id = _place_order()

        current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            _get(order_id)
        assert current_domain.repository_for(OrderItem)._dao.query.filter(order_id=order_id).all().total == 0


class TestOrderQueries:
    def test_get_by_number_or_id(self):
        order_id = _place_order()
        number = _get(order_id).order_number

        assert queries.get_order(number)["id"] == order_id
        assert queries.get_order(order_id)["order_number"] == number

    def test_view_carries_snapshot_lines(self):
        view = queries.get_order(_place_order())

        assert view["items"] == [
            {
                "id": view["items"][0]["id"],
                "line_number": 1,
                "product_id": "prod-001",
                "product_name": "Hydrating Serum",
                "variant_id": "var-001",
                "variant_name": "30ml",
                "sku": "SERUM-30",
                "price": 250000,
                "quantity": 2,
                "total": 500000,
                "image": None,
            }
        ]

    def test_unknown_order_is_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            queries.get_order("ORD-000000-0000")

    def test_list_filters_by_status_and_paginates(self):
        shipped = _place_order()
        _place_order()
        _place_order()
        current_domain.process(UpdateOrder(order_id=shipped, status="shipped"), asynchronous=False)

        assert [o["id"] for o in queries.list_orders(status="shipped")["items"]] == [shipped]

        page = queries.list_orders(page=1, limit=2)
        assert len(page["items"]) == 2
        assert page["pagination"]["total"] == 3
        assert page["pagination"]["total_pages"] == 2

    def test_limit_is_capped(self):
        assert queries.list_orders(limit=500)["pagination"]["limit"] == queries.MAX_PAGE_SIZE

    def test_unknown_status_filter_is_rejected(self):
        with pytest.raises(ValidationError):
            queries.list_orders(status="lost")
