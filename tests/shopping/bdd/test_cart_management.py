"""BDD tests for cart line management."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when
from shared.errors import StaleRevisionError
from shopping.cart.cart import Cart
from shopping.cart.items import AddToCart, RemoveFromCart
from shopping.cart.management import ClearCart, OpenCart

scenarios("features/cart_management.feature")


@pytest.fixture()
def error():
    return {"exc": None}


def _cart(user_id):
    return current_domain.repository_for(Cart).get_for_user(user_id)


def _add(user_id, product_id, quantity=1):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=product_id, name=product_id, price=5.0, quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('an empty cart for "{user_id}"'), target_fixture="user_id")
def empty_cart(user_id):
    current_domain.process(OpenCart(user_id=user_id), asynchronous=False)
    return user_id


@given(parsers.cfparse('the cart holds "{first}", "{second}" and "{third}"'))
def cart_holds(user_id, first, second, third):
    for product_id in (first, second, third):
        _add(user_id, product_id)


@when(parsers.cfparse('the shopper adds {quantity:d} of "{product_id}"'))
def shopper_adds(user_id, quantity, product_id):
    _add(user_id, product_id, quantity)


@when(parsers.cfparse('the shopper removes the line for "{product_id}"'))
def shopper_removes(user_id, product_id):
    item = next(i for i in _cart(user_id).items if str(i.product_id) == product_id)
    current_domain.process(RemoveFromCart(user_id=user_id, item_id=item.id), asynchronous=False)


@when(parsers.cfparse("the shopper clears the cart expecting revision {revision:d}"))
def shopper_clears(user_id, revision, error):
    try:
        current_domain.process(ClearCart(user_id=user_id, expected_revision=revision), asynchronous=False)
    except StaleRevisionError as exc:
        error["exc"] = exc


@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(user_id, count):
    assert len(_cart(user_id).items) == count


@then(parsers.cfparse('the line for "{product_id}" has quantity {quantity:d}'))
def line_quantity(user_id, product_id, quantity):
    item = next(i for i in _cart(user_id).items if str(i.product_id) == product_id)
    assert item.quantity == quantity


@then(parsers.cfparse('the cart holds lines for "{first}" and "{second}"'))
def cart_holds_lines(user_id, first, second):
    assert sorted(str(i.product_id) for i in _cart(user_id).items) == sorted([first, second])


@then("the write is refused as stale")
def refused_as_stale(error):
    assert isinstance(error["exc"], StaleRevisionError)
