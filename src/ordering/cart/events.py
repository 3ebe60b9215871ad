"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, Text

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, as a new line or merged into an existing one."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    selection = Text()  # JSON: {axis: option}
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a line item was replaced."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    selection = Text()
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    """A line item was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    selection = Text()


@ordering.event(part_of="Cart")
class CartCleared:
    """Every line item was removed at once."""

    __version__ = 1

    cart_id = Identifier(required=True)
    items_removed = Integer(required=True)
