import pytest

from budget_game.catalog import CATALOG, find_item, items_in, recurring_items
from budget_game.domain import NEED, WANT
from budget_game.functional import EMPTY_CART, INSUFFICIENT_FUNDS, UNKNOWN_ITEM, error_code
from budget_game.shopping import Cart, resolve_cart


def test_resolve_cart_splits_needs_and_wants():
    result = resolve_cart({"dining": 1, "rent": 2}, CATALOG, 10000)

    assert result.is_right()
    resolution = result.get()
    assert resolution.summary.spent_needs == 6000
    assert resolution.summary.spent_wants == 700
    assert resolution.summary.leftover == 3300
    assert [l.item.id for l in resolution.lines] == ["rent", "dining"]
    assert resolution.lines[0].cost == 6000


def test_resolve_cart_allows_spending_everything():
    result = resolve_cart({"rent": 1}, CATALOG, 3000)
    assert result.get().summary.leftover == 0


def test_resolve_cart_reports_deficit():
    result = resolve_cart({"rent": 1}, CATALOG, 500)
    error = result.get_error()
    assert error["error"] == INSUFFICIENT_FUNDS
    assert error["required"] == 3000
    assert error["available"] == 500
    assert error["deficit"] == 2500


def test_resolve_cart_drops_zero_rows():
    result = resolve_cart({"rent": 1, "movie": 0}, CATALOG, 10000)
    assert [l.item.id for l in result.get().lines] == ["rent"]
    assert error_code(resolve_cart({"movie": 0}, CATALOG, 10000)) == EMPTY_CART


def test_resolve_cart_unknown_item():
    assert error_code(resolve_cart({"yacht": 1}, CATALOG, 10 ** 9)) == UNKNOWN_ITEM


def test_cart_quantities():
    cart = Cart()
    cart.add("rent")
    cart.add("movie", 2)
    cart.remove("movie")
    assert cart.as_dict() == {"rent": 1, "movie": 1}

    cart.remove("movie", 5)
    assert cart.quantity("movie") == 0
    assert len(cart) == 1

    with pytest.raises(ValueError):
        cart.set_quantity("rent", -1)

    cart.clear()
    assert cart.is_empty()


def test_cart_prefill_keeps_existing_quantities():
    cart = Cart({"rent": 2})
    cart.prefill_recurring(CATALOG)
    assert cart.quantity("rent") == 2
    assert set(cart.as_dict()) == {i.id for i in recurring_items(CATALOG)}


def test_catalog_lookup_and_filters():
    assert find_item(CATALOG, "rent").price == 3000
    assert find_item(CATALOG, "yacht") is None
    assert all(i.category == NEED for i in items_in(CATALOG, NEED))
    assert len(items_in(CATALOG, NEED)) + len(items_in(CATALOG, WANT)) == len(CATALOG)
    assert len({i.id for i in CATALOG}) == len(CATALOG)
    assert all(i.price > 0 for i in CATALOG)
