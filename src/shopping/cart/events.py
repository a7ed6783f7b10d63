"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer

from shopping.domain import shopping


@shopping.event(part_of="Cart")
class CartOpened:
    """A user's first cart was created."""

    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)


@shopping.event(part_of="Cart")
class CartItemAdded:
    """A product was put in the cart, either as a new line or onto an existing one."""

    __version__ = 1

    cart_id: Identifier(required=True)
    item_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    price: Float(required=True)


@shopping.event(part_of="Cart")
class CartItemQuantityUpdated:
    __version__ = 1

    cart_id: Identifier(required=True)
    item_id: Identifier(required=True)
    previous_quantity: Integer(required=True)
    new_quantity: Integer(required=True)


@shopping.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id: Identifier(required=True)
    item_id: Identifier(required=True)
    product_id: Identifier(required=True)


@shopping.event(part_of="Cart")
class CartCleared:
    """Every line was removed, typically after the cart became an order."""

    __version__ = 1

    cart_id: Identifier(required=True)
    items_removed: Integer(required=True)
