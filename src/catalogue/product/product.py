"""Product aggregate: a sellable catalogue item with variation axes.

Variation axes and image galleries are stored as JSON text, the same way the
hosted table stores them. Storefront code never holds a Product directly: it
reads `ProductRecord` copies through the catalogue accessor.
"""

import json
import re
from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue

_SLUG = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _dump_json(value):
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    slug: String(required=True, max_length=200)
    price: Float(required=True, min_value=0.0)
    discount_price: Float(min_value=0.0)
    category: String(max_length=100)
    subcategory: String(max_length=100)
    main_image: String(max_length=500)
    images: Text()  # JSON array of URLs
    description: Text()
    variations: Text()  # JSON array of {type, name, options}
    stock: Integer(default=0, min_value=0)
    rating: Float(default=0.0)
    review_count: Integer(default=0)
    active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not _SLUG.match(self.slug):
            raise ValidationError({"slug": ["Slug must contain only lowercase alphanumeric characters and hyphens"]})

    @invariant.post
    def discount_must_be_below_price(self):
        if self.discount_price and self.discount_price >= self.price:
            raise ValidationError({"discount_price": ["Discount price must be lower than the price"]})

    @invariant.post
    def variations_must_be_well_formed(self):
        if not self.variations:
            return

        try:
            axes = json.loads(self.variations)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"variations": ["Variations must be valid JSON"]}) from None

        if not isinstance(axes, list):
            raise ValidationError({"variations": ["Variations must be a JSON array"]})

        seen = set()
        for axis in axes:
            if not isinstance(axis, dict) or not axis.get("type"):
                raise ValidationError({"variations": ["Every variation needs a type"]})
            if not axis.get("options"):
                raise ValidationError({"variations": [f"Variation '{axis['type']}' has no options"]})
            if axis["type"] in seen:
                raise ValidationError({"variations": [f"Variation '{axis['type']}' is defined twice"]})
            seen.add(axis["type"])

    @classmethod
    def create(
        cls,
        name,
        slug,
        price,
        discount_price=None,
        category=None,
        subcategory=None,
        main_image=None,
        images=None,
        description=None,
        variations=None,
        stock=0,
        active=True,
    ):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            slug=slug,
            price=price,
            discount_price=discount_price or None,
            category=category,
            subcategory=subcategory,
            main_image=main_image,
            images=_dump_json(images),
            description=description,
            variations=_dump_json(variations),
            stock=stock,
            active=active,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                slug=slug,
                price=price,
                created_at=now,
            )
        )
        return product

    def update(self, **changes):
        """Apply the admin form's changes. ``None`` means "leave as is"."""
        from catalogue.product.events import ProductUpdated

        for field in ("images", "variations"):
            if changes.get(field) is not None:
                changes[field] = _dump_json(changes[field])

        # A zero discount clears it
        if changes.get("discount_price") == 0:
            self.discount_price = None
            changes.pop("discount_price")

        for field, value in changes.items():
            if value is not None:
                setattr(self, field, value)

        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                slug=self.slug,
                price=self.price,
                discount_price=self.discount_price,
            )
        )

    def toggle_active(self):
        from catalogue.product.events import ProductActivationToggled

        self.active = not self.active
        self.updated_at = datetime.now()

        self.raise_(
            ProductActivationToggled(
                product_id=self.id,
                active=self.active,
            )
        )

    @property
    def variation_axes(self):
        return json.loads(self.variations) if self.variations else []

    @property
    def image_urls(self):
        return json.loads(self.images) if self.images else []
