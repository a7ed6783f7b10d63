import os

import pytest


@pytest.fixture(scope="session")
def _catalogue_domain(request):
    """Initialize the catalogue domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _catalogue_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def add_product():
    """Add a product through the command handler and return its id."""
    from catalogue.product.creation import AddProduct
    from protean import current_domain

    def _add(name="Classic Tee", price=24.99, category="Apparel", **extra):
        return current_domain.process(
            AddProduct(name=name, price=price, category=category, **extra),
            asynchronous=False,
        )

    return _add
