import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.errors import StaleRevisionError
from shopping.cart.cart import Cart
from shopping.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    CartOpened,
)


@pytest.fixture()
def cart():
    cart = Cart.create(user_id="user-1")
    cart._events.clear()
    return cart


def _add_tee(cart, quantity=1, price=20.0):
    return cart.add_item(product_id="prod-1", name="Tee", price=price, quantity=quantity, image="tee.jpg")


class TestCartCreation:
    def test_new_cart_is_empty(self):
        cart = Cart.create(user_id="user-1")

        assert len(cart.items) == 0
        assert cart.revision == 0
        assert cart.total() == 0
        assert any(isinstance(e, CartOpened) for e in cart._events)


class TestAddItem:
    def test_add_new_line(self, cart):
        item = _add_tee(cart, quantity=2)

        assert len(cart.items) == 1
        assert item.quantity == 2
        assert cart.revision == 1
        assert any(isinstance(e, CartItemAdded) for e in cart._events)

    def test_same_product_merges_quantity(self, cart):
        _add_tee(cart, quantity=1)
        _add_tee(cart, quantity=2)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3
        assert cart.revision == 2

    def test_merge_refreshes_cached_price(self, cart):
        _add_tee(cart, price=20.0)
        _add_tee(cart, price=18.0)

        assert cart.items[0].price == 18.0

    def test_different_products_get_separate_lines(self, cart):
        _add_tee(cart)
        cart.add_item(product_id="prod-2", name="Mug", price=8.0)

        assert len(cart.items) == 2

    def test_zero_quantity_rejected(self, cart):
        with pytest.raises(ValidationError):
            _add_tee(cart, quantity=0)


class TestUpdateQuantity:
    def test_set_quantity(self, cart):
        item = _add_tee(cart)
        cart._events.clear()

        cart.update_item_quantity(item.id, 5)

        assert cart.items[0].quantity == 5
        event = next(e for e in cart._events if isinstance(e, CartItemQuantityUpdated))
        assert event.previous_quantity == 1
        assert event.new_quantity == 5

    def test_unknown_item(self, cart):
        with pytest.raises(ObjectNotFoundError):
            cart.update_item_quantity("missing", 2)


class TestRemoveItem:
    def test_remove_leaves_other_lines_untouched(self, cart):
        tee = _add_tee(cart, quantity=2)
        mug = cart.add_item(product_id="prod-2", name="Mug", price=8.0, quantity=3)
        hat = cart.add_item(product_id="prod-3", name="Hat", price=15.0)

        cart.remove_item(mug.id)

        assert [str(i.id) for i in cart.items] == [str(tee.id), str(hat.id)]
        assert cart.items[0].quantity == 2
        assert any(isinstance(e, CartItemRemoved) for e in cart._events)

    def test_remove_unknown_item(self, cart):
        _add_tee(cart)

        with pytest.raises(ObjectNotFoundError):
            cart.remove_item("missing")
        assert len(cart.items) == 1


class TestClear:
    def test_clear_empties_cart(self, cart):
        _add_tee(cart)
        cart.add_item(product_id="prod-2", name="Mug", price=8.0)

        cart.clear()

        assert len(cart.items) == 0
        event = next(e for e in cart._events if isinstance(e, CartCleared))
        assert event.items_removed == 2


class TestRevision:
    def test_every_mutation_bumps_revision(self, cart):
        item = _add_tee(cart)
        cart.update_item_quantity(item.id, 2)
        cart.remove_item(item.id)
        cart.clear()

        assert cart.revision == 4

    def test_matching_revision_passes(self, cart):
        cart.ensure_revision(0)
        cart.ensure_revision(None)

    def test_stale_revision_rejected(self, cart):
        _add_tee(cart)

        with pytest.raises(StaleRevisionError) as exc:
            cart.ensure_revision(0)
        assert exc.value.expected == 0
        assert exc.value.actual == 1


def test_as_response_totals(cart):
    _add_tee(cart, quantity=2, price=19.99)
    cart.add_item(product_id="prod-2", name="Mug", price=5.5)

    response = cart.as_response()

    assert response["item_count"] == 3
    assert response["total"] == 45.48
    assert response["revision"] == 2
    assert response["items"][0]["image"] == "tee.jpg"
