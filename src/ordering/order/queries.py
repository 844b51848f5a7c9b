"""Order read paths."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderStatus
from shared.queries import fetch_all, paginate

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50


def _item_view(item):
    return {
        "id": str(item.id),
        "line_number": item.line_number,
        "product_id": str(item.product_id),
        "product_name": item.product_name,
        "variant_id": str(item.variant_id) if item.variant_id else None,
        "variant_name": item.variant_name,
        "sku": item.sku,
        "price": item.price,
        "quantity": item.quantity,
        "total": item.total,
        "image": item.image,
    }


def order_view(order):
    return {
        "id": str(order.id),
        "order_number": order.order_number,
        "status": order.status,
        "subtotal": order.subtotal,
        "shipping_cost": order.shipping_cost,
        "discount": order.discount,
        "total": order.total,
        "customer_name": order.customer_name,
        "customer_phone": order.customer_phone,
        "customer_email": order.customer_email,
        "shipping_address": order.shipping_address,
        "notes": order.notes,
        "items": [_item_view(item) for item in order.ordered_items],
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def list_orders(status=None, page=1, limit=DEFAULT_PAGE_SIZE):
    """Orders newest first, optionally narrowed to one status."""
    limit = min(max(limit or DEFAULT_PAGE_SIZE, 1), MAX_PAGE_SIZE)

    query = current_domain.repository_for(Order)._dao.query
    if status:
        if status not in {s.value for s in OrderStatus}:
            raise ValidationError({"status": [f"Unknown status '{status}'"]})
        query = query.filter(status=status)

    orders = fetch_all(query.order_by("-created_at"))
    result = paginate(orders, page or 1, limit)
    result["items"] = [order_view(order) for order in result["items"]]
    return result


def get_order(identifier):
    """Resolve an order by order number or by id."""
    repo = current_domain.repository_for(Order)
    matches = repo._dao.query.filter(order_number=identifier).all().items
    if matches:
        return order_view(matches[0])

    try:
        return order_view(repo.get(identifier))
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"_entity": f"Order {identifier} not found"}) from None
