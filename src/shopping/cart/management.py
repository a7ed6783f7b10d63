"""Cart lifecycle: opening and clearing carts."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from shopping.cart.cart import Cart
from shopping.domain import logger, shopping


@shopping.command(part_of="Cart")
class OpenCart:
    """Get-or-create the user's cart."""

    user_id = Identifier(required=True)


@shopping.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)
    expected_revision = Integer(min_value=0)


@shopping.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id)
            repo.add(cart)
            logger.info("Cart opened", user_id=str(command.user_id), cart_id=str(cart.id))
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_for_user(command.user_id)
        cart.ensure_revision(command.expected_revision)
        cart.clear()
        repo.add(cart)
        return str(cart.id)
