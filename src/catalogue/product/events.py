"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue and is on sale."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    category: String()
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive or commercial details of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    category: String()
    updated_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDiscontinued:
    """A product was withdrawn from sale."""

    __version__ = 1

    product_id: Identifier(required=True)
    discontinued_at: DateTime(required=True)
