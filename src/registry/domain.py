"""Service Registry bounded context.

Keeps the directory of storefront services: which name answers at which base
URL and which named endpoints it exposes. Other services register here at
start-up and resolve their peers through it.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

registry = Domain(name="registry")

logger = structlog.get_logger(__name__)
