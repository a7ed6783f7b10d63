"""FastAPI routes for the Order service.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). Every route acts for the caller
identified by the bearer token.
"""

import json

import structlog
from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from starlette.concurrency import run_in_threadpool

from ordering.api.schemas import (
    OrderRequest,
    OrderResponse,
    PlaceOrderRequest,
    UpdateOrderStatusRequest,
    UpdatePaymentStatusRequest,
)
from ordering.order.cancellation import CancelOrder
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order
from ordering.order.status import UpdateOrderStatus, UpdatePaymentStatus
from shared.auth import bearer_token, current_caller, resolve_user_id
from shared.clients import Caller, CartClient, ProductCatalogue
from shared.discovery import ServiceDirectory
from shared.errors import ServiceUnavailableError
from shared.service import get_directory

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _order_of(order_id: str, user_id: str) -> OrderResponse:
    order = current_domain.repository_for(Order).get_for_user(order_id, user_id)
    return OrderResponse(**order.as_response())


def _verified_lines(catalogue: ProductCatalogue, lines) -> list[dict]:
    """Snapshot each requested line with the product service's current details."""
    verified = []
    for line in lines:
        product = catalogue.get_product(line.product_id)
        if product is None:
            raise ValidationError({"items": [f"Invalid product: {line.product_id}"]})
        verified.append(
            {
                "product_id": line.product_id,
                "name": product["name"],
                "price": product["price"],
                "image": product.get("image"),
                "quantity": line.quantity,
            }
        )
    return verified


def _clear_cart_quietly(carts: CartClient, token: str, order_id: str) -> None:
    try:
        carts.clear(token)
    except ServiceUnavailableError as exc:
        logger.warning("Failed to clear cart after order creation", order_id=order_id, error=exc.message)


@router.get("", response_model=list[OrderResponse])
async def list_orders(caller: Caller = Depends(current_caller)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).for_user(caller.user_id)
    return [OrderResponse(**o.as_response()) for o in orders]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, caller: Caller = Depends(current_caller)) -> OrderResponse:
    return _order_of(order_id, caller.user_id)


@router.post("", status_code=201, response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    caller: Caller = Depends(current_caller),
    token: str = Depends(bearer_token),
    directory: ServiceDirectory = Depends(get_directory),
) -> OrderResponse:
    """Place an order from the given lines, then empty the caller's cart."""
    user_id = resolve_user_id(caller, body.user_id)
    if not body.items:
        raise ValidationError({"items": ["Order must contain items"]})

    lines = await run_in_threadpool(_verified_lines, ProductCatalogue(directory), body.items)

    command = PlaceOrder(
        user_id=user_id,
        items=json.dumps(lines),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)

    await run_in_threadpool(_clear_cart_quietly, CartClient(directory), token, order_id)
    return _order_of(order_id, user_id)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, caller: Caller = Depends(current_caller)
) -> OrderResponse:
    user_id = resolve_user_id(caller, body.user_id)
    command = UpdateOrderStatus(
        order_id=order_id,
        user_id=user_id,
        order_status=body.order_status,
        expected_revision=body.expected_revision,
    )
    current_domain.process(command, asynchronous=False)
    return _order_of(order_id, user_id)


@router.patch("/{order_id}/payment", response_model=OrderResponse)
async def update_payment_status(
    order_id: str, body: UpdatePaymentStatusRequest, caller: Caller = Depends(current_caller)
) -> OrderResponse:
    user_id = resolve_user_id(caller, body.user_id)
    command = UpdatePaymentStatus(
        order_id=order_id,
        user_id=user_id,
        payment_status=body.payment_status,
        expected_revision=body.expected_revision,
    )
    current_domain.process(command, asynchronous=False)
    return _order_of(order_id, user_id)


@router.patch("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: str, body: OrderRequest | None = None, caller: Caller = Depends(current_caller)
) -> OrderResponse:
    body = body or OrderRequest()
    user_id = resolve_user_id(caller, body.user_id)
    command = CancelOrder(order_id=order_id, user_id=user_id, expected_revision=body.expected_revision)
    current_domain.process(command, asynchronous=False)
    return _order_of(order_id, user_id)
