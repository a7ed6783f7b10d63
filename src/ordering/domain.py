"""Ordering bounded context: orders placed from a user's cart.

An order keeps an immutable snapshot of the products bought, priced from the
product service at the moment the order was placed.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
