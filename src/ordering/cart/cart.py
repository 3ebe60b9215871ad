"""Cart aggregate: the customer's line items, owned and persisted client side.

A line item is identified by its product and its variation selection. Adding
a product with a selection already in the cart increases that line's
quantity; it never creates a second line.

Selections are stored as JSON in the order the customer picked the options.
By default two selections match when they hold the same axis/option pairs,
whatever the key order. A cart built with ``key_order_sensitive=True``
compares the stored JSON text instead, which treats ``{"size": "M",
"color": "Blue"}`` and ``{"color": "Blue", "size": "M"}`` as different lines.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering


def selection_json(selection) -> str:
    """Serialize a selection, keeping the customer's key order."""
    return json.dumps(dict(selection or {}), ensure_ascii=False)


def selection_key(selection, key_order_sensitive=False) -> str:
    """Comparison key for a selection (a dict or its stored JSON)."""
    if isinstance(selection, str):
        selection = json.loads(selection) if selection else {}
    return json.dumps(dict(selection or {}), sort_keys=not key_order_sensitive, ensure_ascii=False)


def validate_selection(product_name, axes, selection, field="selection"):
    """Require exactly one listed option per variation axis.

    `axes` maps each axis type to its options; an axis without options accepts any value.
    """
    missing = [axis for axis in axes if axis not in selection]
    unknown = [axis for axis in selection if axis not in axes]
    if missing or unknown:
        messages = [f"Choose an option for '{axis}'" for axis in missing]
        messages += [f"'{axis}' is not a variation of {product_name}" for axis in unknown]
        raise ValidationError({field: messages})

    invalid = [axis for axis, option in selection.items() if axes[axis] and option not in axes[axis]]
    if invalid:
        raise ValidationError({field: [f"'{selection[axis]}' is not an option for '{axis}'" for axis in invalid]})


@ordering.value_object(part_of="Cart")
class ProductSnapshot:
    """A copy of the catalogue product taken when it was put in the cart.

    Later catalogue price changes do not reach items already in a cart.
    """

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    slug = String(max_length=200)
    price = Float(required=True, min_value=0.0)
    discount_price = Float(min_value=0.0)
    main_image = String(max_length=500)
    variations = Text()  # JSON array of {type, name, options}
    stock = Integer(default=0)

    @classmethod
    def from_record(cls, record):
        """Snapshot a catalogue `ProductRecord`."""
        return cls(
            product_id=record.id,
            name=record.name,
            slug=record.slug,
            price=record.price,
            discount_price=record.discount_price or None,
            main_image=record.main_image,
            variations=json.dumps([axis.to_feed() for axis in record.variations], ensure_ascii=False),
            stock=record.stock,
        )

    @classmethod
    def from_feed(cls, data):
        """Rebuild from the persisted (camelCase) product document."""
        return cls(
            product_id=str(data["id"]),
            name=data["name"],
            slug=data.get("slug"),
            price=float(data["price"]),
            discount_price=data.get("discountPrice") or None,
            main_image=data.get("mainImage"),
            variations=json.dumps(data.get("variations") or [], ensure_ascii=False),
            stock=data.get("stock") or 0,
        )

    def to_feed(self):
        return {
            "id": str(self.product_id),
            "name": self.name,
            "slug": self.slug,
            "price": self.price,
            "discountPrice": self.discount_price,
            "mainImage": self.main_image,
            "variations": self.variation_axes,
            "stock": self.stock,
        }

    @property
    def variation_axes(self):
        return json.loads(self.variations) if self.variations else []

    @property
    def unit_price(self):
        """Discounted price when there is one, list price otherwise."""
        return self.discount_price or self.price


@ordering.entity(part_of="Cart")
class LineItem:
    product = ValueObject(ProductSnapshot, required=True)
    quantity = Integer(required=True, min_value=1)
    selection = Text()  # JSON: {axis: option}, in the order picked

    @property
    def selected_variations(self):
        return json.loads(self.selection) if self.selection else {}

    @property
    def subtotal(self):
        return self.product.unit_price * self.quantity


@ordering.aggregate
class Cart:
    items = HasMany(LineItem)
    key_order_sensitive = Boolean(default=False)
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, product_id, selection):
        key = selection_key(selection, self.key_order_sensitive)
        return next(
            (
                item
                for item in self.items
                if str(item.product.product_id) == str(product_id)
                and selection_key(item.selection, self.key_order_sensitive) == key
            ),
            None,
        )

    @property
    def total(self):
        """Sum of unit price times quantity over every line, to the cent."""
        return round(sum(item.subtotal for item in self.items), 2)

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product, quantity, selection=None):
        """Add `quantity` of `product` with `selection`, merging into a matching line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        selection = dict(selection or {})
        self._validate_selection(product, selection)

        existing = self.find_item(product.product_id, selection)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(
                LineItem(
                    product=product,
                    quantity=quantity,
                    selection=selection_json(selection),
                )
            )
            line_quantity = quantity

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.product_id),
                selection=selection_json(selection),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def update_quantity(self, product_id, selection, new_quantity):
        """Replace a line's quantity. Zero or less removes the line; an unknown line is ignored."""
        if new_quantity <= 0:
            self.remove_item(product_id, selection)
            return

        item = self.find_item(product_id, selection)
        if item is None:
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                selection=item.selection,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id, selection):
        """Remove a line. An unknown line is ignored."""
        item = self.find_item(product_id, selection)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
                selection=item.selection,
            )
        )

    def clear(self):
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), items_removed=removed))

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @staticmethod
    def _validate_selection(product, selection):
        axes = {axis["type"]: axis.get("options") or [] for axis in product.variation_axes}
        validate_selection(product.name, axes, selection)
