"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    price: Float(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    """A product's details were edited from the admin console."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    price: Float(required=True)
    discount_price: Float()


@catalogue.event(part_of="Product")
class ProductActivationToggled:
    """A product was shown or hidden on the storefront."""

    __version__ = 1

    product_id: Identifier(required=True)
    active: Boolean(required=True)
