"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    product_id: str
    product_name: str = Field(max_length=255)
    variant_id: str | None = None
    variant_name: str | None = Field(None, max_length=100)
    sku: str | None = Field(None, max_length=50)
    price: int = Field(ge=0)
    quantity: int = Field(ge=1)
    image: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    items: list[OrderItemSchema] = Field(min_length=1)
    subtotal: int | None = Field(None, ge=0)
    shipping_cost: int = Field(0, ge=0)
    discount: int = Field(0, ge=0)
    total: int = Field(ge=0)
    customer_name: str = Field(max_length=255)
    customer_phone: str = Field(max_length=30)
    customer_email: str | None = Field(None, max_length=255)
    shipping_address: str
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "product_id": "b2c3d4e5-f6a7-8901-bcde-f12345678901",
                            "product_name": "Hydrating Serum",
                            "variant_id": "d4e5f6a7-b8c9-0123-def0-234567890123",
                            "variant_name": "30ml",
                            "sku": "SERUM-30",
                            "price": 250000,
                            "quantity": 2,
                        }
                    ],
                    "total": 500000,
                    "customer_name": "Sara Ahmadi",
                    "customer_phone": "09120000000",
                    "shipping_address": "No. 12, Example St., Tehran",
                }
            ]
        }
    }


class UpdateOrderRequest(BaseModel):
    status: str | None = None
    notes: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"status": "processing"}]}}


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderPlacedResponse(BaseModel):
    order_id: str
    order_number: str


class StatusResponse(BaseModel):
    status: str = "ok"
