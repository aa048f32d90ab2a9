"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept separate from the internal Protean
commands.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    # The cart is validated by the checkout itself so that a missing or
    # malformed cart reads "Cart is required" rather than a schema error.
    nonce: str | None = None
    cart: Any = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "nonce": "fake-valid-nonce",
                    "cart": [
                        {"product_id": "4c1f7a43-5b3e-4e76-a8a8-1f5c0b1e9d2a", "quantity": 2, "price": 19.99},
                        {"_id": "9b0d7e2c-7d4f-4a55-8a55-0f3c2b6f8e11", "name": "USB-C Cable", "price": 9.5},
                    ],
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., max_length=20)

    model_config = {"json_schema_extra": {"examples": [{"status": "Shipped"}]}}


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    success: bool = True
    message: str | None = None


class ClientTokenResponse(StatusResponse):
    client_token: str


class CheckoutResponse(StatusResponse):
    ok: bool = True
    order_id: str
    transaction_id: str
    amount: float


class OrderItemSchema(BaseModel):
    product_id: str
    name: str | None = None
    unit_price: float
    quantity: int


class OrderSchema(BaseModel):
    id: str
    buyer_id: str
    products: list[str]
    items: list[OrderItemSchema]
    payment: dict[str, Any]
    amount: float
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderEnvelope(StatusResponse):
    order: OrderSchema


class OrderListResponse(StatusResponse):
    orders: list[OrderSchema]
