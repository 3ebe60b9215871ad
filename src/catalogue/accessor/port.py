"""Catalogue accessor port: read access to everything the storefront shows.

Two sources implement it: a static JSON snapshot and the hosted catalogue
tables. Storefront and checkout code only ever see the immutable records
defined here, so a product copied into a cart is a value, not a live row.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from shared.errors import NotFoundError


@dataclass(frozen=True)
class VariationAxis:
    """A configurable product dimension, e.g. size or colour."""

    type: str
    name: str
    options: tuple[str, ...]

    @classmethod
    def from_feed(cls, data: dict) -> "VariationAxis":
        return cls(
            type=data["type"],
            name=data.get("name") or data["type"],
            options=tuple(data.get("options") or ()),
        )

    def to_feed(self) -> dict:
        return {"type": self.type, "name": self.name, "options": list(self.options)}


@dataclass(frozen=True)
class ProductRecord:
    id: str
    name: str
    slug: str
    price: float
    discount_price: float | None = None
    category: str = ""
    subcategory: str = ""
    main_image: str = ""
    images: tuple[str, ...] = ()
    description: str = ""
    variations: tuple[VariationAxis, ...] = ()
    stock: int = 0
    rating: float = 0.0
    review_count: int = 0

    @property
    def effective_price(self) -> float:
        """Discounted price when one is set, list price otherwise."""
        return self.discount_price or self.price

    def default_selection(self) -> dict[str, str]:
        """First option of every variation axis."""
        return {axis.type: axis.options[0] for axis in self.variations if axis.options}

    @classmethod
    def from_feed(cls, data: dict) -> "ProductRecord":
        """Build from a feed row. Accepts the snapshot's camelCase and the table's snake_case."""

        def pick(camel, snake, default=None):
            value = data.get(camel, data.get(snake))
            return default if value is None else value

        return cls(
            id=str(data["id"]),
            name=data["name"],
            slug=data["slug"],
            price=float(data["price"]),
            discount_price=float(pick("discountPrice", "discount_price", 0)) or None,
            category=data.get("category") or "",
            subcategory=data.get("subcategory") or "",
            main_image=pick("mainImage", "main_image", ""),
            images=tuple(data.get("images") or ()),
            description=data.get("description") or "",
            variations=tuple(VariationAxis.from_feed(v) for v in data.get("variations") or ()),
            stock=int(data.get("stock") or 0),
            rating=float(data.get("rating") or 0),
            review_count=int(pick("reviewCount", "review_count", 0)),
        )

    def to_feed(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "price": self.price,
            "discountPrice": self.discount_price,
            "category": self.category,
            "subcategory": self.subcategory,
            "mainImage": self.main_image,
            "images": list(self.images),
            "description": self.description,
            "variations": [axis.to_feed() for axis in self.variations],
            "stock": self.stock,
            "rating": self.rating,
            "reviewCount": self.review_count,
        }


@dataclass(frozen=True)
class BannerRecord:
    id: str
    image: str
    title: str = ""
    subtitle: str = ""
    link: str = ""


@dataclass(frozen=True)
class ReviewRecord:
    id: str
    product_id: str
    user_name: str
    rating: int
    comment: str
    date: str
    location: str | None = None
    images: tuple[str, ...] = ()
    verified: bool = False


@dataclass(frozen=True)
class ShippingOption:
    id: str
    name: str
    delivery_time: str
    price: float
    min_purchase: float | None = None

    def is_available_for(self, cart_total: float) -> bool:
        """An unset or zero minimum is always met."""
        if self.min_purchase:
            return cart_total >= self.min_purchase
        return True


@dataclass(frozen=True)
class CheckoutConfig:
    mode: str = "steps"
    enabled_fields: dict = field(default_factory=dict)
    order_bumps_enabled: bool = False
    order_bumps_position: str = "step1"


@dataclass(frozen=True)
class SiteConfigRecord:
    site_name: str
    logo: str = ""
    favicon: str = ""
    tagline: str = ""
    description: str = ""
    colors: dict = field(default_factory=dict)
    contact: dict = field(default_factory=dict)
    social: dict = field(default_factory=dict)


@dataclass(frozen=True)
class StoreInfo:
    """Store-wide reputation shown on the storefront's reviews panel."""

    name: str
    logo: str = ""
    rating: float = 0.0
    total_reviews: int = 0
    reviews: tuple[ReviewRecord, ...] = ()


def filter_shipping_options(options, cart_total: float) -> list[ShippingOption]:
    """Keep the options whose minimum purchase the cart total meets, in source order."""
    return [option for option in options if option.is_available_for(cart_total)]


class CatalogueSource(ABC):
    """Abstract catalogue accessor.

    Every operation either returns the requested data or raises `FetchError`
    (feed unreachable or unreadable) or `NotFoundError`. Nothing is retried
    here; callers decide.
    """

    @abstractmethod
    def get_products(self) -> list[ProductRecord]:
        """Active products, newest first."""
        ...

    @abstractmethod
    def get_banners(self) -> list[BannerRecord]:
        """Active banners ordered by position."""
        ...

    @abstractmethod
    def get_reviews(self, product_id: str) -> list[ReviewRecord]: ...

    @abstractmethod
    def related_product_ids(self, product_id: str) -> list[str]: ...

    @abstractmethod
    def get_shipping_options(self) -> list[ShippingOption]:
        """The full shipping catalogue, unfiltered."""
        ...

    @abstractmethod
    def get_checkout_config(self) -> CheckoutConfig: ...

    @abstractmethod
    def get_site_config(self) -> SiteConfigRecord: ...

    @abstractmethod
    def get_store_info(self) -> StoreInfo: ...

    @abstractmethod
    def get_offers_config(self) -> dict:
        """Layout document for the offers page, passed through as published."""
        ...

    @abstractmethod
    def get_about_config(self) -> dict:
        """Content document for the about page, passed through as published."""
        ...

    # Derived reads, shared by every source

    def get_product(self, product_id: str) -> ProductRecord:
        product = next((p for p in self.get_products() if p.id == str(product_id)), None)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found", product_id=product_id)
        return product

    def get_product_by_slug(self, slug: str) -> ProductRecord:
        product = next((p for p in self.get_products() if p.slug == slug), None)
        if product is None:
            raise NotFoundError(f"Product '{slug}' not found", slug=slug)
        return product

    def get_related_products(self, product_id: str) -> list[ProductRecord]:
        ids = set(self.related_product_ids(product_id))
        if not ids:
            return []
        return [p for p in self.get_products() if p.id in ids]

    def calculate_shipping(self, postal_code: str, cart_total: float) -> list[ShippingOption]:  # noqa: ARG002
        """Shipping options available for a cart total. Pricing does not vary by postal code yet."""
        return filter_shipping_options(self.get_shipping_options(), cart_total)

    def search_products(self, query: str) -> list[ProductRecord]:
        needle = query.lower()
        return [
            p
            for p in self.get_products()
            if needle in p.name.lower()
            or needle in p.category.lower()
            or needle in p.subcategory.lower()
            or needle in p.description.lower()
        ]

    def get_categories(self) -> list[str]:
        return sorted({p.category for p in self.get_products()})

    def get_subcategories(self, category: str | None = None) -> list[str]:
        products = self.get_products()
        if category:
            products = [p for p in products if p.category == category]
        return sorted({p.subcategory for p in products})
