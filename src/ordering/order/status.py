"""Order and payment status updates: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_status = String(required=True, max_length=20)
    expected_revision = Integer(min_value=0)


@ordering.command(part_of="Order")
class UpdatePaymentStatus:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    payment_status = String(required=True, max_length=20)
    expected_revision = Integer(min_value=0)


@ordering.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_user(command.order_id, command.user_id)
        order.ensure_revision(command.expected_revision)
        order.update_status(command.order_status)
        repo.add(order)

    @handle(UpdatePaymentStatus)
    def update_payment_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_user(command.order_id, command.user_id)
        order.ensure_revision(command.expected_revision)
        order.update_payment_status(command.payment_status)
        repo.add(order)
