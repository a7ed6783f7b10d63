"""FastAPI endpoints for the Cart service."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from starlette.concurrency import run_in_threadpool

from shared.auth import current_caller, resolve_user_id
from shared.clients import Caller, ProductCatalogue
from shared.discovery import ServiceDirectory
from shared.service import get_directory
from shopping.api.schemas import (
    AddToCartRequest,
    CartRequest,
    CartResponse,
    ClearCartResponse,
    UpdateCartItemRequest,
)
from shopping.cart.cart import Cart
from shopping.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from shopping.cart.management import ClearCart, OpenCart

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _cart_of(user_id: str) -> CartResponse:
    cart = current_domain.repository_for(Cart).get_for_user(user_id)
    return CartResponse(**cart.as_response())


@router.post("/get", response_model=CartResponse)
async def get_cart(body: CartRequest | None = None, caller: Caller = Depends(current_caller)) -> CartResponse:
    """The caller's cart, created empty on first access."""
    user_id = resolve_user_id(caller, body.user_id if body else None)
    current_domain.process(OpenCart(user_id=user_id), asynchronous=False)
    return _cart_of(user_id)


@router.post("/items", status_code=201, response_model=CartResponse)
async def add_to_cart(
    body: AddToCartRequest,
    caller: Caller = Depends(current_caller),
    directory: ServiceDirectory = Depends(get_directory),
) -> CartResponse:
    user_id = resolve_user_id(caller, body.user_id)

    product = await run_in_threadpool(ProductCatalogue(directory).get_product, body.product_id)
    if product is None:
        raise ObjectNotFoundError(f"Product {body.product_id} not found")

    command = AddToCart(
        user_id=user_id,
        product_id=body.product_id,
        name=product["name"],
        price=product["price"],
        image=product.get("image"),
        quantity=body.quantity,
        expected_revision=body.expected_revision,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_of(user_id)


@router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, caller: Caller = Depends(current_caller)
) -> CartResponse:
    user_id = resolve_user_id(caller, body.user_id)
    command = UpdateCartItem(
        user_id=user_id,
        item_id=item_id,
        quantity=body.quantity,
        expected_revision=body.expected_revision,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_of(user_id)


@router.post("/items/{item_id}/remove", response_model=CartResponse)
async def remove_cart_item(
    item_id: str, body: CartRequest | None = None, caller: Caller = Depends(current_caller)
) -> CartResponse:
    body = body or CartRequest()
    user_id = resolve_user_id(caller, body.user_id)
    command = RemoveFromCart(user_id=user_id, item_id=item_id, expected_revision=body.expected_revision)
    current_domain.process(command, asynchronous=False)
    return _cart_of(user_id)


@router.post("/clear", response_model=ClearCartResponse)
async def clear_cart(body: CartRequest | None = None, caller: Caller = Depends(current_caller)) -> ClearCartResponse:
    body = body or CartRequest()
    user_id = resolve_user_id(caller, body.user_id)
    current_domain.process(ClearCart(user_id=user_id, expected_revision=body.expected_revision), asynchronous=False)
    return ClearCartResponse(message="Cart cleared", cart=_cart_of(user_id))
