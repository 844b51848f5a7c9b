"""FastAPI routes for the Ordering domain.

Placing an order is public; reading, updating and deleting orders are
administrative.
"""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from ordering.api.schemas import OrderPlacedResponse, PlaceOrderRequest, StatusResponse, UpdateOrderRequest
from ordering.order import queries as order_queries
from ordering.order.management import DeleteOrder, UpdateOrder
from ordering.order.placement import PlaceOrder
from shared.auth import require_admin
from shared.identifiers import retry_on_collision

admin_only = [Depends(require_admin)]

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderPlacedResponse)
async def place_order(body: PlaceOrderRequest) -> OrderPlacedResponse:
    command = PlaceOrder(
        items=json.dumps([item.model_dump() for item in body.items], ensure_ascii=False),
        subtotal=body.subtotal,
        shipping_cost=body.shipping_cost,
        discount=body.discount,
        total=body.total,
        customer_name=body.customer_name,
        customer_phone=body.customer_phone,
        customer_email=body.customer_email,
        shipping_address=body.shipping_address,
        notes=body.notes,
    )
    order_id = retry_on_collision(
        lambda: current_domain.process(command, asynchronous=False),
        field="order_number",
    )
    order = order_queries.get_order(order_id)
    return OrderPlacedResponse(order_id=order_id, order_number=order["order_number"])


@order_router.get("", dependencies=admin_only)
async def list_orders(
    status: str | None = None,
    page: int = 1,
    limit: int = order_queries.DEFAULT_PAGE_SIZE,
) -> dict:
    return order_queries.list_orders(status=status, page=page, limit=limit)


@order_router.get("/{identifier}", dependencies=admin_only)
async def get_order(identifier: str) -> dict:
    return order_queries.get_order(identifier)


@order_router.put("/{order_id}", response_model=StatusResponse, dependencies=admin_only)
async def update_order(order_id: str, body: UpdateOrderRequest) -> StatusResponse:
    command = UpdateOrder(
        order_id=order_id,
        status=body.status,
        notes=body.notes,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.delete("/{order_id}", response_model=StatusResponse, dependencies=admin_only)
async def delete_order(order_id: str) -> StatusResponse:
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()
