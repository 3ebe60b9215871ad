"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.accessor.hosted import HostedSource
from catalogue.product.management import CreateProduct
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def storefront(snapshot):
    """What shoppers see when the catalogue is served from the catalogue tables."""
    return HostedSource(fallback=snapshot)


@pytest.fixture()
def error():
    return {"exc": None}


@given(
    parsers.cfparse('the admin created product "{name}" with slug "{slug}" priced {price:f}'),
    target_fixture="product_id",
)
def product_created(name, slug, price):
    return current_domain.process(CreateProduct(name=name, slug=slug, price=price, stock=10), asynchronous=False)


@then(parsers.cfparse('the storefront lists "{name}"'))
def storefront_lists(storefront, name):
    assert name in [p.name for p in storefront.get_products()]


@then(parsers.cfparse('the storefront does not list "{name}"'))
def storefront_does_not_list(storefront, name):
    assert name not in [p.name for p in storefront.get_products()]
