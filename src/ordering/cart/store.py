"""Cart Store: the single owner of the customer's cart.

Whoever needs the cart receives the store instance; there is no global cart.
Every mutation persists the whole cart through the injected `CartStorage`
and then notifies subscribers with the domain events it produced, so
dependent state (shipping quotes, checkout gates) is recomputed explicitly.
"""

import structlog
from protean.exceptions import ValidationError

from ordering.cart.cart import Cart, LineItem, ProductSnapshot, selection_json
from ordering.cart.storage import CartStorage

logger = structlog.get_logger(__name__)


def serialize_items(cart: Cart) -> list[dict]:
    return [
        {
            "product": item.product.to_feed(),
            "quantity": item.quantity,
            "selectedVariations": item.selected_variations,
        }
        for item in cart.items
    ]


def deserialize_items(rows: list[dict], key_order_sensitive=False) -> Cart:
    """Rebuild a cart from stored rows, skipping rows that no longer parse.

    Rows repeating a (product, selection) pair are folded into one line.
    """
    cart = Cart(key_order_sensitive=key_order_sensitive)
    for row in rows:
        try:
            product = ProductSnapshot.from_feed(row["product"])
            quantity = int(row["quantity"])
            if quantity < 1:
                raise ValueError(f"quantity {quantity} is not positive")
            selection = selection_json(row.get("selectedVariations"))

            existing = cart.find_item(product.product_id, selection)
            if existing:
                existing.quantity += quantity
            else:
                cart.add_items(LineItem(product=product, quantity=quantity, selection=selection))
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            logger.warning("cart.row_discarded", row=row, error=str(exc))
    return cart


class CartStore:
    def __init__(self, storage: CartStorage, key_order_sensitive: bool = False) -> None:
        self.storage = storage
        self._cart = deserialize_items(storage.load(), key_order_sensitive=key_order_sensitive)
        self._listeners = []

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def items(self) -> list[LineItem]:
        return list(self._cart.items)

    @property
    def is_empty(self) -> bool:
        return not self._cart.items

    def get_total(self) -> float:
        return self._cart.total

    def get_item_count(self) -> int:
        return self._cart.item_count

    def contains_product(self, product_id) -> bool:
        return any(str(item.product.product_id) == str(product_id) for item in self._cart.items)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product, quantity: int, selection=None) -> None:
        """Add a product (a `ProductSnapshot` or a catalogue `ProductRecord`)."""
        if not isinstance(product, ProductSnapshot):
            product = ProductSnapshot.from_record(product)
        self._cart.add_item(product, quantity, selection)
        self._commit()

    def remove_item(self, product_id, selection) -> None:
        self._cart.remove_item(product_id, selection)
        self._commit()

    def update_quantity(self, product_id, selection, new_quantity: int) -> None:
        self._cart.update_quantity(product_id, selection, new_quantity)
        self._commit()

    def clear_cart(self) -> None:
        self._cart.clear()
        self._commit()

    # -------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------
    def subscribe(self, listener) -> None:
        """Register ``listener(store, events)``, called after every mutation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _commit(self) -> None:
        events = list(self._cart._events)
        self._cart._events.clear()

        try:
            self.storage.save(serialize_items(self._cart))
        except OSError as exc:
            # Best effort: the in-memory cart stays authoritative for this session
            logger.warning("cart.persist_failed", error=str(exc))

        for event in events:
            logger.debug("cart.changed", change=event.__class__.__name__, cart_id=event.cart_id)

        for listener in list(self._listeners):
            listener(self, events)


def clamp_quantity(quantity: int, stock: int) -> int:
    """Keep a product page quantity picker within ``[1, stock]``."""
    upper = max(1, stock or 0)
    return max(1, min(int(quantity), upper))
