"""BDD tests for adding and discontinuing products."""

from catalogue.product.product import Product
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/product_lifecycle.feature")


@when(parsers.cfparse('a product "{name}" is added at {price:g}'), target_fixture="product")
def add_product(name, price, error):
    try:
        return Product.create(name=name, price=price)
    except ValidationError as exc:
        error["exc"] = exc
        return None


@given("the product is discontinued")
@when("the product is discontinued")
def discontinue(product):
    product.discontinue()


@when("the product is discontinued again")
def discontinue_again(product, error):
    try:
        product.discontinue()
    except ValidationError as exc:
        error["exc"] = exc


@then("the product is active")
def product_active(product):
    assert product.is_active


@then("the product is not active")
def product_not_active(product):
    assert not product.is_active
