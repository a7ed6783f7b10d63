"""Runs one storefront service as its own HTTP process.

Usage:
    python src/server.py registry
    python src/server.py auth --port 5101
    PROTEAN_ENV=production DOCUMENT_STORE_URL=http://localhost:9200 python src/server.py product
"""

import argparse

import uvicorn

from shared.config import DEFAULT_PORTS, configure_document_store, load_settings
from shared.logging import get_logger

logger = get_logger(__name__)


def _build(service, settings):
    """Import, configure and initialize the service's domain, then build its app."""
    if service == "registry":
        from registry.api.app import create_app
        from registry.domain import registry as domain
    elif service == "auth":
        from identity.api.app import create_app
        from identity.domain import identity as domain
    elif service == "product":
        from catalogue.api.app import create_app
        from catalogue.domain import catalogue as domain
    elif service == "cart":
        from shopping.api.app import create_app
        from shopping.domain import shopping as domain
    elif service == "order":
        from ordering.api.app import create_app
        from ordering.domain import ordering as domain
    else:
        raise ValueError(f"Unknown service: {service}")

    configure_document_store(domain, settings)
    domain.init()
    return create_app(settings)


def main():
    parser = argparse.ArgumentParser(description="Storefront service runner")
    parser.add_argument("service", choices=sorted(DEFAULT_PORTS))
    parser.add_argument("--host", help="Interface to bind (default: 0.0.0.0)", default="0.0.0.0")
    parser.add_argument("--port", type=int, help="Port to bind (default: from environment)")
    args = parser.parse_args()

    settings = load_settings(args.service)
    port = args.port or settings.port

    app = _build(args.service, settings)
    logger.info("Starting service", service=args.service, port=port, directory=settings.directory)
    uvicorn.run(app, host=args.host, port=port)


if __name__ == "__main__":
    main()
