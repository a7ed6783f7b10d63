"""Order aggregate: what a user bought, where it goes and how far it got.

Status tags (no enforced sequence between the open states):
    Processing, Shipped  -> any status
    Delivered, Cancelled -> final, no further status changes
Cancellation is only possible while the order is still Processing.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentStatusChanged,
)
from shared.errors import StaleRevisionError

PAGE_SIZE = 100


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"
    REFUNDED = "Refunded"


_FINAL_STATES = {OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value}


def _require_member(enum_cls, value, field_name):
    if value not in {member.value for member in enum_cls}:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError({field_name: [f"Unknown status {value!r}; expected one of {allowed}"]})


# ---------------------------------------------------------------------------
# Value Objects & Entities
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    full_name = String(required=True, max_length=200)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@ordering.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)

    def as_response(self):
        return {
            "id": str(self.id),
            "product_id": str(self.product_id),
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "quantity": self.quantity,
        }


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress, required=True)
    payment_method = String(required=True, max_length=50)
    total_amount = Float(min_value=0.0, default=0.0)
    order_status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    revision = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, user_id, items, shipping_address, payment_method):
        """Place an order from already-verified line items.

        ``items`` are dicts with product_id, name, price, image and quantity.
        """
        if not items:
            raise ValidationError({"items": ["Order must contain items"]})

        now = datetime.now(UTC)
        address = shipping_address if isinstance(shipping_address, ShippingAddress) else ShippingAddress(**shipping_address)
        lines = [
            OrderItem(
                product_id=item["product_id"],
                name=item["name"],
                price=item["price"],
                image=item.get("image"),
                quantity=item["quantity"],
            )
            for item in items
        ]
        total = round(sum(line.price * line.quantity for line in lines), 2)

        order = cls(
            user_id=user_id,
            shipping_address=address,
            payment_method=payment_method,
            total_amount=total,
            revision=0,
            created_at=now,
            updated_at=now,
        )
        order.add_items(lines)
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=sum(line.quantity for line in lines),
                total_amount=total,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Concurrency
    # -------------------------------------------------------------------
    def ensure_revision(self, expected_revision):
        """Fail unless the caller saw the current revision. None skips the check.

        The comparison is against the loaded document and is not repeated by the
        write, so it only holds with a single writer process per service.
        """
        if expected_revision is not None and expected_revision != self.revision:
            raise StaleRevisionError(expected=expected_revision, actual=self.revision)

    def _touch(self):
        self.revision = (self.revision or 0) + 1
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def update_status(self, new_status):
        _require_member(OrderStatus, new_status, "order_status")

        if new_status == OrderStatus.CANCELLED.value:
            self.cancel()
            return

        if self.order_status in _FINAL_STATES:
            raise ValidationError({"order_status": [f"Order is already {self.order_status} and cannot change"]})

        previous = self.order_status
        self.order_status = new_status
        self._touch()
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status,
                changed_at=self.updated_at,
            )
        )

    def update_payment_status(self, new_status):
        _require_member(PaymentStatus, new_status, "payment_status")

        previous = self.payment_status
        self.payment_status = new_status
        self._touch()
        self.raise_(
            PaymentStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status,
                changed_at=self.updated_at,
            )
        )

    def cancel(self):
        if self.order_status == OrderStatus.CANCELLED.value:
            raise ValidationError({"order_status": ["Order is already cancelled"]})
        if self.order_status != OrderStatus.PROCESSING.value:
            raise ValidationError({"order_status": ["Cannot cancel order that has been shipped or delivered"]})

        self.order_status = OrderStatus.CANCELLED.value
        self._touch()
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                cancelled_at=self.updated_at,
            )
        )

    # -------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------
    def as_response(self):
        address = self.shipping_address
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "items": [i.as_response() for i in self.items],
            "shipping_address": {
                "full_name": address.full_name,
                "street": address.street,
                "city": address.city,
                "state": address.state,
                "postal_code": address.postal_code,
                "country": address.country,
            },
            "payment_method": self.payment_method,
            "total_amount": self.total_amount,
            "order_status": self.order_status,
            "payment_status": self.payment_status,
            "revision": self.revision,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@ordering.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id: str) -> list[Order]:
        """Every one of the user's orders, newest first.

        Read page by page so the query's default limit never truncates the list.
        """
        query = self._dao.query.filter(user_id=str(user_id)).order_by("-created_at")
        orders: list[Order] = []
        while True:
            page = query.offset(len(orders)).limit(PAGE_SIZE).all()
            orders.extend(page.items)
            if not page.items or len(orders) >= page.total:
                return orders

    def get_for_user(self, order_id: str, user_id: str) -> Order:
        """Load an order only if it belongs to ``user_id``; others' orders count as missing."""
        try:
            order = self.get(order_id)
        except ObjectNotFoundError:
            order = None
        if order is None or str(order.user_id) != str(user_id):
            raise ObjectNotFoundError("Order not found")
        return order
