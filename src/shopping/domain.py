"""Shopping bounded context: one shopping cart per storefront user.

Cart lines cache the product name, price and image fetched from the product
service when the line is added, so rendering a cart needs no further lookups.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

shopping = Domain(name="shopping")

logger = structlog.get_logger(__name__)
