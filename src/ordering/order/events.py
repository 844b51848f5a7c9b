"""Domain events for the Order aggregate.

All events are versioned, immutable facts representing state changes.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer submitted a cart and an order number was assigned."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_name = String(required=True)
    item_count = Integer(required=True)
    subtotal = Integer(required=True)
    total = Integer(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """The order moved forward in fulfilment."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderNotesUpdated:
    """An administrator replaced the order's notes."""

    __version__ = 1

    order_id = Identifier(required=True)
    notes = Text()


@ordering.event(part_of="Order")
class OrderDeleted:
    """An administrator hard deleted the order and its line items."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    deleted_at = DateTime(required=True)
