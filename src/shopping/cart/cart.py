"""Cart aggregate: the products a user intends to buy.

Every mutation bumps ``revision``. Writers that pass the revision they last
saw get a StaleRevisionError instead of overwriting a newer cart.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from shared.errors import StaleRevisionError
from shopping.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    CartOpened,
)
from shopping.domain import shopping


@shopping.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    def as_response(self):
        return {
            "id": str(self.id),
            "product_id": str(self.product_id),
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "quantity": self.quantity,
        }


@shopping.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    revision = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        cart = cls(user_id=user_id, revision=0, created_at=now, updated_at=now)
        cart.raise_(CartOpened(cart_id=str(cart.id), user_id=str(user_id)))
        return cart

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
    # Item management
    # -------------------------------------------------------------------
    def _find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError(f"Item {item_id} not found in cart")
        return item

    def add_item(self, product_id, name, price, quantity=1, image=None):
        """Add a product, merging into an existing line for the same product."""
        existing = next((i for i in self.items if str(i.product_id) == str(product_id)), None)

        if existing:
            existing.quantity += quantity
            # Refresh the cached details with what the product service just said
            existing.name = name
            existing.price = price
            existing.image = image
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                name=name,
                price=price,
                image=image,
                quantity=quantity,
                added_at=datetime.now(UTC),
            )
            self.add_items(item)

        self._touch()
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
                price=price,
            )
        )
        return item

    def update_item_quantity(self, item_id, quantity):
        item = self._find_item(item_id)
        previous_quantity = item.quantity
        item.quantity = quantity

        self._touch()
        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        item = self._find_item(item_id)
        self.remove_items(item)

        self._touch()
        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id), product_id=str(item.product_id)))

    def clear(self):
        removed = list(self.items)
        for item in removed:
            self.remove_items(item)

        self._touch()
        self.raise_(CartCleared(cart_id=str(self.id), items_removed=len(removed)))

    # -------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------
    def total(self):
        return round(sum(i.price * i.quantity for i in self.items), 2)

    def as_response(self):
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "items": [i.as_response() for i in self.items],
            "item_count": sum(i.quantity for i in self.items),
            "total": self.total(),
            "revision": self.revision,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@shopping.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id: str) -> Cart | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def get_for_user(self, user_id: str) -> Cart:
        cart = self.for_user(user_id)
        if cart is None:
            raise ObjectNotFoundError("Cart not found")
        return cart
