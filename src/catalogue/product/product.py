"""Product aggregate root.

Products are never physically removed. Discontinuing a product hides it from
listings and lookups while orders that reference it keep their snapshot.
"""

import math
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue


class ProductStatus(Enum):
    ACTIVE = "Active"
    DISCONTINUED = "Discontinued"


# Accepted values of the listing ``sort`` parameter
SORT_FIELDS = {
    "price": "price",
    "-price": "-price",
    "name": "name",
    "-name": "-name",
    "created_at": "created_at",
    "-created_at": "-created_at",
}
DEFAULT_SORT = "-created_at"


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=200)
    description: Text()
    price: Float(required=True)
    image: String(max_length=500)
    category: String(max_length=100)
    stock: Integer(min_value=0, default=0)
    status: String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})

    @classmethod
    def create(cls, name, price, description=None, image=None, category=None, stock=0):
        from catalogue.product.events import ProductAdded

        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            description=description,
            image=image,
            category=category,
            stock=stock or 0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                price=price,
                category=category,
                created_at=now,
            )
        )
        return product

    @property
    def is_active(self):
        return self.status == ProductStatus.ACTIVE.value

    def update_details(self, name=None, description=None, price=None, image=None, category=None, stock=None):
        from catalogue.product.events import ProductDetailsUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if image is not None:
            self.image = image
        if category is not None:
            self.category = category
        if stock is not None:
            self.stock = stock

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                category=self.category,
                updated_at=now,
            )
        )

    def discontinue(self):
        from catalogue.product.events import ProductDiscontinued

        if not self.is_active:
            raise ValidationError({"status": ["Only active products can be discontinued"]})

        self.status = ProductStatus.DISCONTINUED.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(ProductDiscontinued(product_id=self.id, discontinued_at=now))

    def as_response(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image": self.image,
            "category": self.category,
            "stock": self.stock,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@catalogue.repository(part_of=Product)
class ProductRepository:
    def get_active(self, product_id: str) -> Product:
        """Load a product that is still on sale; discontinued ones count as missing."""
        product = self.get(product_id)
        if not product.is_active:
            raise ObjectNotFoundError(f"Product {product_id} not found")
        return product

    def list_active(self, page: int = 1, limit: int = 10, category: str | None = None, sort: str | None = None):
        """One page of active products plus the number of pages available."""
        if sort and sort not in SORT_FIELDS:
            raise ValidationError({"sort": [f"Unknown sort order {sort!r}"]})

        filters = {"status": ProductStatus.ACTIVE.value}
        if category:
            filters["category"] = category

        result = (
            self._dao.query.filter(**filters)
            .order_by(SORT_FIELDS[sort or DEFAULT_SORT])
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        pages = math.ceil(result.total / limit) if result.total else 0
        return result.items, result.total, pages
