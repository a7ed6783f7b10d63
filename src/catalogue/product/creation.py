"""Product creation: command and handler."""

from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=200)
    description: Text()
    price: Float(required=True)
    image: String(max_length=500)
    category: String(max_length=100)
    stock: Integer(min_value=0, default=0)


@catalogue.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
            image=command.image,
            category=command.category,
            stock=command.stock,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), name=product.name)
        return str(product.id)
