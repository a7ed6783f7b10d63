"""Identity bounded context: storefront user accounts and bearer tokens."""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

# Configure logging for the application
configure_logging()

# Domain Composition Root
identity = Domain(name="identity")

logger = structlog.get_logger(__name__)
