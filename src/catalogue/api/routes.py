"""FastAPI endpoints for the Product service.

Browsing is public; changing the catalogue requires an admin bearer token.
"""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    CreateProductRequest,
    ProductPageResponse,
    ProductResponse,
    StatusResponse,
    UpdateProductRequest,
)
from catalogue.product.creation import AddProduct
from catalogue.product.details import UpdateProductDetails
from catalogue.product.lifecycle import DiscontinueProduct
from catalogue.product.product import Product
from shared.auth import require_admin
from shared.clients import Caller

router = APIRouter(prefix="/api/products", tags=["products"])


def _load(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get_active(product_id)
    return ProductResponse(**product.as_response())


@router.get("", response_model=ProductPageResponse)
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: str | None = None,
    sort: str | None = None,
) -> ProductPageResponse:
    products, total, pages = current_domain.repository_for(Product).list_active(
        page=page, limit=limit, category=category, sort=sort
    )
    return ProductPageResponse(
        products=[ProductResponse(**p.as_response()) for p in products],
        page=page,
        limit=limit,
        total=total,
        pages=pages,
    )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _load(product_id)


@router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, caller: Caller = Depends(require_admin)) -> ProductResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        image=body.image,
        category=body.category,
        stock=body.stock,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _load(product_id)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, caller: Caller = Depends(require_admin)
) -> ProductResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        image=body.image,
        category=body.category,
        stock=body.stock,
    )
    current_domain.process(command, asynchronous=False)
    return _load(product_id)


@router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, caller: Caller = Depends(require_admin)) -> StatusResponse:
    """Withdraw a product from sale. Existing orders keep their snapshot."""
    current_domain.process(DiscontinueProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(message="Product removed")
