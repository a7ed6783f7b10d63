"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A user placed an order; items and prices are frozen from here on."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    item_count: Integer(required=True)
    total_amount: Float(required=True)
    payment_method: String(required=True)
    placed_at: DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """An order still being processed was called off."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    cancelled_at: DateTime(required=True)
