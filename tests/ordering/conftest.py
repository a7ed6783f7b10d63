import os

import pytest


@pytest.fixture(scope="session")
def _ordering_domain(request):
    """Initialize the ordering domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from ordering.domain import ordering

    ordering.init()
    return ordering


@pytest.fixture(autouse=True)
def run_around_tests(_ordering_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _ordering_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


SHIPPING_ADDRESS = {
    "full_name": "Jane Doe",
    "street": "123 Main St",
    "city": "Springfield",
    "state": "IL",
    "postal_code": "62701",
    "country": "US",
}


@pytest.fixture()
def shipping_address():
    return dict(SHIPPING_ADDRESS)


@pytest.fixture()
def lines():
    return [
        {"product_id": "prod-1", "name": "Classic Tee", "price": 24.99, "image": "tee.jpg", "quantity": 2},
        {"product_id": "prod-2", "name": "Mug", "price": 8.5, "quantity": 1},
    ]


@pytest.fixture()
def place_order(lines, shipping_address):
    """Place an order through the command handler and return its id."""
    import json

    from ordering.order.creation import PlaceOrder
    from protean import current_domain

    def _place(user_id="user-1", items=None):
        return current_domain.process(
            PlaceOrder(
                user_id=user_id,
                items=json.dumps(items if items is not None else lines),
                shipping_address=json.dumps(shipping_address),
                payment_method="Credit Card",
            ),
            asynchronous=False,
        )

    return _place
