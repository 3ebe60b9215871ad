"""FastAPI endpoints for the Catalogue domain.

``/store`` serves what the storefront reads, through the configured catalogue
source. ``/admin`` is the back-office console: it processes catalogue
commands against the hosted tables.
"""

from dataclasses import asdict

from fastapi import APIRouter
from protean.utils.globals import current_domain

from catalogue.accessor import get_catalogue
from catalogue.api.schemas import (
    BannerIdResponse,
    BannerResponse,
    CreateBannerRequest,
    CreateProductRequest,
    ProductIdResponse,
    ProductResponse,
    ReviewResponse,
    ShippingOptionResponse,
    ShippingQuoteRequest,
    SiteConfigIdResponse,
    StatusResponse,
    StoreInfoResponse,
    UpdateBannerRequest,
    UpdateProductRequest,
    UpdateSiteConfigRequest,
)
from catalogue.banner.management import CreateBanner, DeleteBanner, ToggleBannerActive, UpdateBanner
from catalogue.product.management import CreateProduct, DeleteProduct, ToggleProductActive, UpdateProduct
from catalogue.site.management import UpdateSiteConfig

store_router = APIRouter(prefix="/store", tags=["storefront"])
admin_router = APIRouter(prefix="/admin", tags=["admin"])


def _shipping_option(option) -> ShippingOptionResponse:
    return ShippingOptionResponse(
        id=option.id,
        name=option.name,
        deliveryTime=option.delivery_time,
        price=option.price,
        minPurchase=option.min_purchase,
    )


def _review(review) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        productId=review.product_id,
        userName=review.user_name,
        rating=review.rating,
        comment=review.comment,
        date=review.date,
        location=review.location,
        images=list(review.images),
        verified=review.verified,
    )


# --- Storefront endpoints ---


@store_router.get("/products", response_model=list[ProductResponse])
async def list_products(q: str | None = None) -> list[ProductResponse]:
    catalogue = get_catalogue()
    products = catalogue.search_products(q) if q else catalogue.get_products()
    return [ProductResponse(**p.to_feed()) for p in products]


@store_router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse(**get_catalogue().get_product(product_id).to_feed())


@store_router.get("/products/slug/{slug}", response_model=ProductResponse)
async def get_product_by_slug(slug: str) -> ProductResponse:
    return ProductResponse(**get_catalogue().get_product_by_slug(slug).to_feed())


@store_router.get("/products/{product_id}/related", response_model=list[ProductResponse])
async def get_related_products(product_id: str) -> list[ProductResponse]:
    return [ProductResponse(**p.to_feed()) for p in get_catalogue().get_related_products(product_id)]


@store_router.get("/products/{product_id}/reviews", response_model=list[ReviewResponse])
async def get_reviews(product_id: str) -> list[ReviewResponse]:
    return [_review(r) for r in get_catalogue().get_reviews(product_id)]


@store_router.get("/categories", response_model=list[str])
async def list_categories() -> list[str]:
    return get_catalogue().get_categories()


@store_router.get("/subcategories", response_model=list[str])
async def list_subcategories(category: str | None = None) -> list[str]:
    return get_catalogue().get_subcategories(category)


@store_router.get("/banners", response_model=list[BannerResponse])
async def list_banners() -> list[BannerResponse]:
    return [BannerResponse(**asdict(b), position=index) for index, b in enumerate(get_catalogue().get_banners())]


@store_router.post("/shipping/quote", response_model=list[ShippingOptionResponse])
async def quote_shipping(body: ShippingQuoteRequest) -> list[ShippingOptionResponse]:
    return [_shipping_option(o) for o in get_catalogue().calculate_shipping(body.zip_code, body.cart_total)]


@store_router.get("/checkout-config")
async def get_checkout_config() -> dict:
    config = get_catalogue().get_checkout_config()
    return {
        "mode": config.mode,
        "enabledFields": config.enabled_fields,
        "orderBumps": {"enabled": config.order_bumps_enabled, "position": config.order_bumps_position},
    }


@store_router.get("/site-config")
async def get_site_config() -> dict:
    return asdict(get_catalogue().get_site_config())


@store_router.get("/store-info", response_model=StoreInfoResponse)
async def get_store_info() -> StoreInfoResponse:
    info = get_catalogue().get_store_info()
    return StoreInfoResponse(
        name=info.name,
        logo=info.logo,
        rating=info.rating,
        totalReviews=info.total_reviews,
        reviews=[_review(r) for r in info.reviews],
    )


@store_router.get("/offers-config")
async def get_offers_config() -> dict:
    return get_catalogue().get_offers_config()


@store_router.get("/about-config")
async def get_about_config() -> dict:
    return get_catalogue().get_about_config()


# --- Admin: products ---


@admin_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    result = current_domain.process(CreateProduct(**body.model_dump()), asynchronous=False)
    return ProductIdResponse(product_id=result)


@admin_router.put("/products/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(product_id=product_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.post("/products/{product_id}/toggle-active", response_model=StatusResponse)
async def toggle_product_active(product_id: str) -> StatusResponse:
    current_domain.process(ToggleProductActive(product_id=product_id), asynchronous=False)
    return StatusResponse()


@admin_router.delete("/products/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Admin: banners ---


@admin_router.post("/banners", status_code=201, response_model=BannerIdResponse)
async def create_banner(body: CreateBannerRequest) -> BannerIdResponse:
    result = current_domain.process(CreateBanner(**body.model_dump()), asynchronous=False)
    return BannerIdResponse(banner_id=result)


@admin_router.put("/banners/{banner_id}", response_model=StatusResponse)
async def update_banner(banner_id: str, body: UpdateBannerRequest) -> StatusResponse:
    command = UpdateBanner(banner_id=banner_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.post("/banners/{banner_id}/toggle-active", response_model=StatusResponse)
async def toggle_banner_active(banner_id: str) -> StatusResponse:
    current_domain.process(ToggleBannerActive(banner_id=banner_id), asynchronous=False)
    return StatusResponse()


@admin_router.delete("/banners/{banner_id}", response_model=StatusResponse)
async def delete_banner(banner_id: str) -> StatusResponse:
    current_domain.process(DeleteBanner(banner_id=banner_id), asynchronous=False)
    return StatusResponse()


# --- Admin: site configuration ---


@admin_router.put("/site-config", response_model=SiteConfigIdResponse)
async def update_site_config(body: UpdateSiteConfigRequest) -> SiteConfigIdResponse:
    result = current_domain.process(UpdateSiteConfig(**body.model_dump()), asynchronous=False)
    return SiteConfigIdResponse(site_config_id=result)
