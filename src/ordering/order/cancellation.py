"""Order cancellation: command and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    expected_revision = Integer(min_value=0)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_user(command.order_id, command.user_id)
        order.ensure_revision(command.expected_revision)
        order.cancel()
        repo.add(order)
        logger.info("Order cancelled", order_id=str(order.id))
