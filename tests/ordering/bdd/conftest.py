"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when


def _selection(options):
    """Parse ``"size=M,color=Preto"`` keeping the order written."""
    selection = {}
    for pair in filter(None, (p.strip() for p in options.split(","))):
        axis, _, option = pair.partition("=")
        selection[axis.strip()] = option.strip()
    return selection


@pytest.fixture()
def parse_selection():
    return _selection


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart")
def empty_cart(store):
    assert store.is_empty


@given(parsers.cfparse('the cart holds {qty:d} of product "{product_id}" with options "{options}"'))
def cart_holds(store, snapshot, qty, product_id, options):
    store.add_item(snapshot.get_product(product_id), qty, _selection(options))


@given(parsers.cfparse('the cart holds {qty:d} of product "{product_id:w}"'))
def cart_holds_plain(store, snapshot, qty, product_id):
    store.add_item(snapshot.get_product(product_id), qty)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{qty:d} of product "{product_id}" with options "{options}" are added'))
def add_with_options(store, snapshot, qty, product_id, options, error):
    try:
        store.add_item(snapshot.get_product(product_id), qty, _selection(options))
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('{qty:d} of product "{product_id:w}" is added'))
def add_without_options(store, snapshot, qty, product_id, error):
    try:
        store.add_item(snapshot.get_product(product_id), qty)
    except ValidationError as exc:
        error["exc"] = exc


@when("the cart is emptied")
def cart_emptied(store):
    store.clear_cart()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the cart is empty")
def cart_is_empty(store):
    assert store.is_empty


@then(parsers.cfparse("the cart has {count:d} item"))
def cart_has_n_items_singular(store, count):
    assert store.get_item_count() == count


@then(parsers.cfparse("the cart has {count:d} items"))
def cart_has_n_items(store, count):
    assert store.get_item_count() == count
