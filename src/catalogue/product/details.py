"""Product details management: command and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: Text()
    price: Float()
    image: String(max_length=500)
    category: String(max_length=100)
    stock: Integer(min_value=0)


@catalogue.command_handler(part_of=Product)
class ManageProductDetailsHandler:
    @handle(UpdateProductDetails)
    def update_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            image=command.image,
            category=command.category,
            stock=command.stock,
        )
        repo.add(product)
