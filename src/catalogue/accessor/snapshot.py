"""Static snapshot source: the catalogue served from a directory of JSON feeds."""

import json
from pathlib import Path

import structlog

from catalogue.accessor.port import (
    BannerRecord,
    CatalogueSource,
    CheckoutConfig,
    ProductRecord,
    ReviewRecord,
    ShippingOption,
    SiteConfigRecord,
    StoreInfo,
)
from shared.errors import FetchError

logger = structlog.get_logger(__name__)


def _review(row: dict, product_id: str = "") -> ReviewRecord:
    return ReviewRecord(
        id=str(row["id"]),
        product_id=str(row.get("productId", product_id)),
        user_name=row["userName"],
        rating=int(row["rating"]),
        comment=row.get("comment") or "",
        date=row.get("date") or "",
        location=row.get("location"),
        images=tuple(row.get("images") or ()),
        verified=bool(row.get("verified")),
    )


class StaticSnapshotSource(CatalogueSource):
    """Reads ``products.json``, ``banners.json`` and friends from `directory`.

    Files are re-read on every call so an edited snapshot shows up without a
    restart.
    """

    def __init__(self, directory) -> None:
        self.directory = Path(directory)

    def _read(self, name: str):
        path = self.directory / name
        try:
            with path.open(encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("catalogue.feed_unreadable", feed=name, error=str(exc))
            raise FetchError(f"Feed {name} is unavailable", feed=name) from exc

    def get_products(self) -> list[ProductRecord]:
        return [ProductRecord.from_feed(row) for row in self._read("products.json") if row.get("active", True)]

    def get_banners(self) -> list[BannerRecord]:
        return [
            BannerRecord(
                id=str(row["id"]),
                image=row["image"],
                title=row.get("title") or "",
                subtitle=row.get("subtitle") or "",
                link=row.get("link") or "",
            )
            for row in sorted(self._read("banners.json"), key=lambda r: r.get("position") or 0)
            if row.get("active", True)
        ]

    def get_reviews(self, product_id: str) -> list[ReviewRecord]:
        rows = self._read("reviews.json").get(str(product_id), [])
        return [_review(row, product_id) for row in rows]

    def related_product_ids(self, product_id: str) -> list[str]:
        return [str(i) for i in self._read("related-products.json").get(str(product_id), [])]

    def get_shipping_options(self) -> list[ShippingOption]:
        return [
            ShippingOption(
                id=str(row["id"]),
                name=row["name"],
                delivery_time=row.get("deliveryTime") or "",
                price=float(row["price"]),
                min_purchase=row.get("minPurchase"),
            )
            for row in self._read("shipping.json")["options"]
        ]

    def get_checkout_config(self) -> CheckoutConfig:
        data = self._read("checkout-config.json")
        bumps = data.get("orderBumps") or {}
        return CheckoutConfig(
            mode=data.get("mode", "steps"),
            enabled_fields=data.get("enabledFields") or {},
            order_bumps_enabled=bool(bumps.get("enabled")),
            order_bumps_position=bumps.get("position", "step1"),
        )

    def get_site_config(self) -> SiteConfigRecord:
        data = self._read("site-config.json")
        return SiteConfigRecord(
            site_name=data["siteName"],
            logo=data.get("logo") or "",
            favicon=data.get("favicon") or "",
            tagline=data.get("tagline") or "",
            description=data.get("description") or "",
            colors=data.get("colors") or {},
            contact=data.get("contact") or {},
            social=data.get("social") or {},
        )

    def get_store_info(self) -> StoreInfo:
        data = self._read("store-info.json")
        return StoreInfo(
            name=data["name"],
            logo=data.get("logo") or "",
            rating=float(data.get("rating") or 0.0),
            total_reviews=int(data.get("totalReviews") or 0),
            reviews=tuple(_review(row) for row in data.get("reviews") or ()),
        )

    def get_offers_config(self) -> dict:
        return self._read("offers-config.json")

    def get_about_config(self) -> dict:
        return self._read("about-config.json")
