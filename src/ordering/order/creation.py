"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON array of verified line items
    shipping_address = Text(required=True)  # JSON object
    payment_method = String(required=True, max_length=50)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = Order.place(
            user_id=command.user_id,
            items=json.loads(command.items),
            shipping_address=json.loads(command.shipping_address),
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total_amount=order.total_amount,
        )
        return str(order.id)
