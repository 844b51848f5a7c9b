"""Order placement — command and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from shared.identifiers import next_order_number

logger = structlog.get_logger(__name__)

_REQUIRED_LINE_FIELDS = ("product_id", "product_name", "price", "quantity")


@ordering.command(part_of="Order")
class PlaceOrder:
    items = Text(required=True)  # JSON: list of cart line dicts
    subtotal = Integer(min_value=0)
    shipping_cost = Integer(default=0, min_value=0)
    discount = Integer(default=0, min_value=0)
    total = Integer(required=True, min_value=0)
    customer_name = String(required=True, max_length=255)
    customer_phone = String(required=True, max_length=30)
    customer_email = String(max_length=255)
    shipping_address = Text(required=True)
    notes = Text()


def parse_items(raw):
    """Decode and check the submitted cart lines."""
    try:
        lines = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        raise ValidationError({"items": ["Items must be valid JSON"]}) from None

    if not isinstance(lines, list) or not lines:
        raise ValidationError({"items": ["Order must contain at least one item"]})

    for position, line in enumerate(lines, start=1):
        if not isinstance(line, dict):
            raise ValidationError({"items": [f"Line {position} must be an object"]})
        missing = [field for field in _REQUIRED_LINE_FIELDS if line.get(field) in (None, "")]
        if missing:
            raise ValidationError({"items": [f"Line {position} is missing {', '.join(missing)}"]})
        if not isinstance(line["price"], int) or isinstance(line["price"], bool) or line["price"] < 0:
            raise ValidationError({"items": [f"Line {position} price must be a non-negative integer"]})
        if not isinstance(line["quantity"], int) or isinstance(line["quantity"], bool) or line["quantity"] < 1:
            raise ValidationError({"items": [f"Line {position} quantity must be at least 1"]})
    return lines


def _require_text(value, field, label):
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError({field: [f"{label} is required"]})
    return cleaned


def order_number_taken(number):
    return bool(current_domain.repository_for(Order)._dao.query.filter(order_number=number).all().total)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = parse_items(command.items)

        order = Order.place(
            order_number=next_order_number(order_number_taken),
            items_data=lines,
            subtotal=command.subtotal,
            shipping_cost=command.shipping_cost,
            discount=command.discount,
            total=command.total,
            customer_name=_require_text(command.customer_name, "customer_name", "Customer name"),
            customer_phone=_require_text(command.customer_phone, "customer_phone", "Customer phone"),
            customer_email=(command.customer_email or "").strip() or None,
            shipping_address=_require_text(command.shipping_address, "shipping_address", "Shipping address"),
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)
        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            item_count=len(lines),
            total=order.total,
        )
        return str(order.id)
