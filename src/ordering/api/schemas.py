"""Pydantic request/response schemas for the Order API.

These are external contracts, separate from the internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ShippingAddressSchema(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)


class OrderLineSchema(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class OrderRequest(BaseModel):
    user_id: str | None = None
    expected_revision: int | None = Field(None, ge=0)


class PlaceOrderRequest(BaseModel):
    user_id: str | None = None
    items: list[OrderLineSchema] = Field(default_factory=list)
    shipping_address: ShippingAddressSchema
    payment_method: str = Field(..., min_length=1, max_length=50)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "prod-001", "quantity": 2}],
                    "shipping_address": {
                        "full_name": "Jane Doe",
                        "street": "123 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "postal_code": "62701",
                        "country": "US",
                    },
                    "payment_method": "Credit Card",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(OrderRequest):
    order_status: str = Field(..., max_length=20)

    model_config = {"json_schema_extra": {"examples": [{"order_status": "Shipped"}]}}


class UpdatePaymentStatusRequest(OrderRequest):
    payment_status: str = Field(..., max_length=20)

    model_config = {"json_schema_extra": {"examples": [{"payment_status": "Paid"}]}}


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    name: str
    price: float
    image: str | None = None
    quantity: int


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    shipping_address: ShippingAddressSchema
    payment_method: str
    total_amount: float
    order_status: str
    payment_status: str
    revision: int
    created_at: str | None = None
    updated_at: str | None = None
