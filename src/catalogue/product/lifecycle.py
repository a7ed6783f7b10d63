"""Product lifecycle management: command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class DiscontinueProduct:
    product_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageLifecycleHandler:
    @handle(DiscontinueProduct)
    def discontinue_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)
        product.discontinue()
        repo.add(product)
        logger.info("Product discontinued", product_id=str(product.id))
