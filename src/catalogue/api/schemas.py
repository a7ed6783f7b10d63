"""Pydantic request/response schemas for the Product API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Classic Black T-Shirt",
                    "description": "Premium cotton crew-neck tee in black.",
                    "price": 24.99,
                    "image": "https://cdn.example.com/img/tshirt-black.jpg",
                    "category": "Apparel",
                    "stock": 120,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: float = Field(..., gt=0)
    image: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=100)
    stock: int = Field(0, ge=0)


class UpdateProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 19.99, "stock": 80}]}}

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: float | None = Field(None, gt=0)
    image: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=100)
    stock: int | None = Field(None, ge=0)


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    image: str | None = None
    category: str | None = None
    stock: int = 0
    status: str
    created_at: str | None = None
    updated_at: str | None = None


class ProductPageResponse(BaseModel):
    products: list[ProductResponse]
    page: int
    limit: int
    total: int
    pages: int


class StatusResponse(BaseModel):
    status: str = "ok"
    message: str | None = None
