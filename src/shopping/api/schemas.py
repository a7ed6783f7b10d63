"""Pydantic request/response schemas for the Cart API.

``user_id`` is accepted on every request for older clients; the caller is
always taken from the bearer token and a different ``user_id`` is refused.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CartRequest(BaseModel):
    user_id: str | None = None
    expected_revision: int | None = Field(None, ge=0)


class AddToCartRequest(CartRequest):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2}]}}

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(CartRequest):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 3, "expected_revision": 4}]}}

    quantity: int = Field(..., ge=1)


# --- Response Schemas ---


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    name: str
    price: float
    image: str | None = None
    quantity: int


class CartResponse(BaseModel):
    id: str
    user_id: str
    items: list[CartItemResponse]
    item_count: int
    total: float
    revision: int
    created_at: str | None = None
    updated_at: str | None = None


class ClearCartResponse(BaseModel):
    message: str
    cart: CartResponse
