"""Cart item management: commands and handler.

Product details arrive on the command already resolved against the product
service; the handler only applies cart rules.
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from shopping.cart.cart import Cart
from shopping.domain import shopping


@shopping.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    expected_revision = Integer(min_value=0)


@shopping.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    expected_revision = Integer(min_value=0)


@shopping.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    expected_revision = Integer(min_value=0)


@shopping.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id) or Cart.create(user_id=command.user_id)
        cart.ensure_revision(command.expected_revision)
        cart.add_item(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            image=command.image,
            quantity=command.quantity,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_for_user(command.user_id)
        cart.ensure_revision(command.expected_revision)
        cart.update_item_quantity(item_id=command.item_id, quantity=command.quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_for_user(command.user_id)
        cart.ensure_revision(command.expected_revision)
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)
        return str(cart.id)
