"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A checkout was turned into an order awaiting payment."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    items = Text(required=True)
    shipping_option_id = String(required=True)
    amount = Float(required=True)
    placed_at = DateTime(required=True)
