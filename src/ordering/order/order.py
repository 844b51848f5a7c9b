"""Order aggregate — a ledger entry for one checkout.

State Machine (forward only, skipping ahead allowed):
    PENDING → PROCESSING → SHIPPED → DELIVERED

Line items are snapshots: product and variant names, SKU, price and image
are copied from the submitted cart and never re-derived from the catalogue,
so later catalogue edits or deactivations leave past orders untouched.
"""

from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from ordering.domain import ordering


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.DELIVERED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A snapshot of one cart line at the time the order was placed.

    ``product_id`` and ``variant_id`` are weak references: the catalogue
    entries may later be deactivated without affecting this record.
    """

    line_number = Integer(required=True, min_value=1)
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    variant_id = Identifier()
    variant_name = String(max_length=100)
    sku = String(max_length=50)
    price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    total = Integer(required=True, min_value=0)
    image = String(max_length=500)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=20, unique=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    items = HasMany(OrderItem)
    subtotal = Integer(required=True, min_value=0)
    shipping_cost = Integer(default=0, min_value=0)
    discount = Integer(default=0, min_value=0)
    total = Integer(required=True, min_value=0)
    customer_name = String(required=True, max_length=255)
    customer_phone = String(required=True, max_length=30)
    customer_email = String(max_length=255)
    shipping_address = Text(required=True)
    notes = Text()
    created_at = DateTime(default=datetime.now)
    updated_at = DateTime(default=datetime.now)

    @invariant.post
    def item_totals_must_match_price_and_quantity(self):
        for item in self.items:
            if item.total != item.price * item.quantity:
                raise ValidationError(
                    {"items": [f"Line {item.line_number} total must equal price times quantity"]}
                )

    @property
    def ordered_items(self):
        return sorted(self.items, key=lambda item: item.line_number)

    @property
    def items_total(self) -> int:
        return sum(item.total for item in self.items)

    @classmethod
    def place(
        cls,
        order_number,
        items_data,
        total,
        customer_name,
        customer_phone,
        shipping_address,
        subtotal=None,
        shipping_cost=0,
        discount=0,
        customer_email=None,
        notes=None,
    ):
        """Create an order from cart lines.

        ``items_data`` is a list of dicts already checked at the command
        boundary. When ``subtotal`` is omitted it is computed from the lines;
        a supplied subtotal must agree with them.
        """
        from ordering.order.events import OrderPlaced

        if not items_data:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        items = [
            OrderItem(
                line_number=position,
                product_id=line["product_id"],
                product_name=line["product_name"],
                variant_id=line.get("variant_id"),
                variant_name=line.get("variant_name"),
                sku=line.get("sku"),
                price=line["price"],
                quantity=line["quantity"],
                total=line["price"] * line["quantity"],
                image=line.get("image"),
            )
            for position, line in enumerate(items_data, start=1)
        ]
        items_total = sum(item.total for item in items)

        if subtotal is None:
            subtotal = items_total
        elif subtotal != items_total:
            raise ValidationError(
                {"subtotal": [f"Subtotal {subtotal} does not match the sum of line items ({items_total})"]}
            )

        now = datetime.now()
        order = cls(
            order_number=order_number,
            items=items,
            subtotal=subtotal,
            shipping_cost=shipping_cost or 0,
            discount=discount or 0,
            total=total,
            customer_name=customer_name,
            customer_phone=customer_phone,
            customer_email=customer_email,
            shipping_address=shipping_address,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                order_number=order_number,
                customer_name=customer_name,
                item_count=len(items),
                subtotal=subtotal,
                total=total,
                placed_at=now,
            )
        )
        return order

    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def change_status(self, status):
        from ordering.order.events import OrderStatusChanged

        try:
            target = OrderStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError({"status": [f"Unknown status '{status}'; expected one of {allowed}"]}) from None

        # Re-submitting the current status is accepted and changes nothing
        if target.value == self.status:
            return

        self._assert_can_transition(target)

        previous_status = self.status
        self.status = target.value
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                previous_status=previous_status,
                new_status=target.value,
                changed_at=now,
            )
        )

    def update_notes(self, notes):
        from ordering.order.events import OrderNotesUpdated

        self.notes = notes or None
        self.updated_at = datetime.now()

        self.raise_(
            OrderNotesUpdated(
                order_id=self.id,
                notes=self.notes,
            )
        )

    def discard(self):
        """Detach every line item ahead of a hard delete."""
        from ordering.order.events import OrderDeleted

        for item in list(self.items):
            self.remove_items(item)

        self.raise_(
            OrderDeleted(
                order_id=self.id,
                order_number=self.order_number,
                deleted_at=datetime.now(),
            )
        )
