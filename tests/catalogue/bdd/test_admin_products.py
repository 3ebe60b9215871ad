"""BDD tests for admin product management."""

import pytest
from catalogue.product.management import DeleteProduct, ToggleProductActive, UpdateProduct
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/admin_products.feature")


@when(parsers.cfparse("the admin sets the discount price to {price:f}"))
def set_discount(product_id, price, error):
    try:
        current_domain.process(UpdateProduct(product_id=product_id, discount_price=price), asynchronous=False)
    except ValidationError as exc:
        error["exc"] = exc


@when("the admin toggles the product off")
def toggle_off(product_id):
    current_domain.process(ToggleProductActive(product_id=product_id), asynchronous=False)


@when("the admin deletes the product")
def delete(product_id):
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)


@then(parsers.cfparse('the storefront price of "{slug}" is {price:f}'))
def storefront_price(storefront, slug, price):
    assert storefront.get_product_by_slug(slug).effective_price == pytest.approx(price)


@then(parsers.cfparse('the change is refused for "{field}"'))
def change_refused(error, field):
    assert field in error["exc"].messages
