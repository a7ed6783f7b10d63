"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.product.events import ProductAdded, ProductDetailsUpdated, ProductDiscontinued
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup
_PRODUCT_EVENT_CLASSES = {
    "ProductAdded": ProductAdded,
    "ProductDetailsUpdated": ProductDetailsUpdated,
    "ProductDiscontinued": ProductDiscontinued,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given(parsers.cfparse('a product "{name}" on sale'), target_fixture="product")
def product_on_sale(name):
    product = Product.create(name=name, price=10.0)
    product._events.clear()
    return product


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} event is raised"))
def product_event_raised(product, event_type):
    event_cls = _PRODUCT_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in product._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in product._events]}"
