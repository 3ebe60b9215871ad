"""BDD tests for the shopping cart."""

import pytest
from ordering.cart.store import CartStore
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/cart.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the quantity of product "{product_id}" is set to {qty:d}'))
def set_quantity(store, product_id, qty):
    store.update_quantity(product_id, {}, qty)


@when("the cart is reloaded from storage", target_fixture="store")
def reload_cart(storage):
    return CartStore(storage)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_one_line(store, count):
    assert len(store.items) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(store, count):
    assert len(store.items) == count


@then(parsers.cfparse('the line for product "{product_id}" with options "{options}" has quantity {qty:d}'))
def line_quantity(store, parse_selection, product_id, options, qty):
    assert store.cart.find_item(product_id, parse_selection(options)).quantity == qty


@then(parsers.cfparse("the cart total is {total:f}"))
def cart_total(store, total):
    assert store.get_total() == pytest.approx(total)


@then(parsers.cfparse('the cart rejects it with "{message}"'))
def cart_rejects(error, message):
    assert error["exc"] is not None
    assert message in error["exc"].messages["selection"]
