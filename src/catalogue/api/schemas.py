"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Storefront Response Schemas ---


class VariationAxisResponse(BaseModel):
    type: str
    name: str
    options: list[str]


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    price: float
    discountPrice: float | None = None
    category: str | None = None
    subcategory: str | None = None
    mainImage: str | None = None
    images: list[str] = []
    description: str | None = None
    variations: list[VariationAxisResponse] = []
    stock: int = 0
    rating: float | None = None
    reviewCount: int = 0


class BannerResponse(BaseModel):
    id: str
    image: str
    title: str | None = None
    subtitle: str | None = None
    link: str | None = None
    position: int = 0


class ReviewResponse(BaseModel):
    id: str
    productId: str
    userName: str
    rating: int
    comment: str
    date: str
    location: str | None = None
    images: list[str] = []
    verified: bool = False


class StoreInfoResponse(BaseModel):
    name: str
    logo: str = ""
    rating: float = 0.0
    totalReviews: int = 0
    reviews: list[ReviewResponse] = []


class ShippingOptionResponse(BaseModel):
    id: str
    name: str
    deliveryTime: str
    price: float
    minPurchase: float | None = None


class ShippingQuoteRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"zip_code": "01310-100", "cart_total": 159.8}]}}

    zip_code: str = Field("", max_length=9)
    cart_total: float = Field(..., ge=0)


# --- Admin Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Camiseta Básica",
                    "slug": "camiseta-basica",
                    "price": 79.9,
                    "discount_price": 49.9,
                    "category": "Roupas",
                    "subcategory": "Camisetas",
                    "main_image": "https://images.example.com/camiseta.jpg",
                    "variations": '[{"type": "size", "name": "Tamanho", "options": ["P", "M", "G"]}]',
                    "stock": 25,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    slug: str = Field(..., max_length=200)
    price: float = Field(..., ge=0)
    discount_price: float | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    subcategory: str | None = Field(None, max_length=100)
    main_image: str | None = Field(None, max_length=500)
    images: str | None = None
    description: str | None = None
    variations: str | None = None
    stock: int = Field(0, ge=0)
    active: bool = True


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    slug: str | None = Field(None, max_length=200)
    price: float | None = Field(None, ge=0)
    discount_price: float | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    subcategory: str | None = Field(None, max_length=100)
    main_image: str | None = Field(None, max_length=500)
    images: str | None = None
    description: str | None = None
    variations: str | None = None
    stock: int | None = Field(None, ge=0)


class CreateBannerRequest(BaseModel):
    image: str = Field(..., max_length=500)
    title: str | None = Field(None, max_length=255)
    subtitle: str | None = Field(None, max_length=255)
    link: str | None = Field(None, max_length=500)
    position: int = 0
    active: bool = True


class UpdateBannerRequest(BaseModel):
    image: str | None = Field(None, max_length=500)
    title: str | None = Field(None, max_length=255)
    subtitle: str | None = Field(None, max_length=255)
    link: str | None = Field(None, max_length=500)
    position: int | None = None


class UpdateSiteConfigRequest(BaseModel):
    site_name: str | None = Field(None, max_length=100)
    logo: str | None = Field(None, max_length=500)
    favicon: str | None = Field(None, max_length=500)
    tagline: str | None = Field(None, max_length=255)
    description: str | None = None
    primary_color: str | None = Field(None, max_length=7)
    secondary_color: str | None = Field(None, max_length=7)
    accent_color: str | None = Field(None, max_length=7)
    contact_email: str | None = Field(None, max_length=255)
    contact_phone: str | None = Field(None, max_length=30)
    contact_whatsapp: str | None = Field(None, max_length=30)
    social_instagram: str | None = Field(None, max_length=500)
    social_facebook: str | None = Field(None, max_length=500)
    social_twitter: str | None = Field(None, max_length=500)


# --- Admin Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class BannerIdResponse(BaseModel):
    banner_id: str


class SiteConfigIdResponse(BaseModel):
    site_config_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
