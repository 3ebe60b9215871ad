"""Hosted source: products, banners and site configuration from the catalogue tables.

Reviews, related products, shipping, checkout configuration and the store
info, offers and about pages are only published as feeds, so those reads go
to the snapshot source.
"""

from catalogue.accessor.port import BannerRecord, CatalogueSource, ProductRecord, SiteConfigRecord, VariationAxis
from catalogue.domain import catalogue


def product_record(product) -> ProductRecord:
    """Copy a Product aggregate into an immutable record."""
    return ProductRecord(
        id=str(product.id),
        name=product.name,
        slug=product.slug,
        price=product.price,
        discount_price=product.discount_price or None,
        category=product.category or "",
        subcategory=product.subcategory or "",
        main_image=product.main_image or "",
        images=tuple(product.image_urls),
        description=product.description or "",
        variations=tuple(VariationAxis.from_feed(axis) for axis in product.variation_axes),
        stock=product.stock or 0,
        rating=product.rating or 0.0,
        review_count=product.review_count or 0,
    )


class HostedSource(CatalogueSource):
    def __init__(self, fallback: CatalogueSource) -> None:
        self.fallback = fallback

    def get_products(self) -> list[ProductRecord]:
        from catalogue.product.product import Product

        with catalogue.domain_context():
            rows = catalogue.repository_for(Product)._dao.query.filter(active=True).all().items
            rows = sorted(rows, key=lambda p: p.created_at, reverse=True)
            return [product_record(p) for p in rows]

    def get_banners(self) -> list[BannerRecord]:
        from catalogue.banner.banner import Banner

        with catalogue.domain_context():
            rows = catalogue.repository_for(Banner)._dao.query.filter(active=True).all().items
            return [
                BannerRecord(
                    id=str(b.id),
                    image=b.image,
                    title=b.title or "",
                    subtitle=b.subtitle or "",
                    link=b.link or "",
                )
                for b in sorted(rows, key=lambda b: b.position)
            ]

    def get_reviews(self, product_id):
        return self.fallback.get_reviews(product_id)

    def related_product_ids(self, product_id):
        return self.fallback.related_product_ids(product_id)

    def get_shipping_options(self):
        return self.fallback.get_shipping_options()

    def get_checkout_config(self):
        return self.fallback.get_checkout_config()

    def get_store_info(self):
        return self.fallback.get_store_info()

    def get_offers_config(self):
        return self.fallback.get_offers_config()

    def get_about_config(self):
        return self.fallback.get_about_config()

    def get_site_config(self) -> SiteConfigRecord:
        from catalogue.site.management import current_site_config

        with catalogue.domain_context():
            config = current_site_config()
        if config is None:
            return self.fallback.get_site_config()

        return SiteConfigRecord(
            site_name=config.site_name,
            logo=config.logo or "",
            favicon=config.favicon or "",
            tagline=config.tagline or "",
            description=config.description or "",
            colors={
                "primary": config.primary_color,
                "secondary": config.secondary_color,
                "accent": config.accent_color,
            },
            contact={
                "email": config.contact_email,
                "phone": config.contact_phone,
                "whatsapp": config.contact_whatsapp,
            },
            social={
                "instagram": config.social_instagram,
                "facebook": config.social_facebook,
                "twitter": config.social_twitter,
            },
        )

