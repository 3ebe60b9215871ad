"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class OrderItemSchema(BaseModel):
    productId: str
    quantity: int = Field(..., ge=1)
    selectedVariations: dict[str, str] = Field(default_factory=dict)


class CustomerSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=30)
    cpf: str = Field(..., min_length=1, max_length=20)


class ShippingAddressSchema(BaseModel):
    zipCode: str = Field(..., min_length=1, max_length=9)
    street: str = Field(..., min_length=1, max_length=255)
    number: str = Field(..., min_length=1, max_length=20)
    complement: str | None = Field(None, max_length=255)
    neighborhood: str = Field(..., min_length=1, max_length=100)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=2, max_length=2)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"productId": "1", "quantity": 2, "selectedVariations": {"size": "M", "color": "Preto"}}],
                    "customer": {
                        "name": "Maria Silva",
                        "email": "maria@example.com",
                        "phone": "(11) 98765-4321",
                        "cpf": "123.456.789-09",
                    },
                    "shipping": {
                        "zipCode": "01310-100",
                        "street": "Avenida Paulista",
                        "number": "1000",
                        "neighborhood": "Bela Vista",
                        "city": "São Paulo",
                        "state": "SP",
                    },
                    "shippingOption": "pac",
                }
            ]
        }
    }

    items: list[OrderItemSchema] = Field(..., min_length=1)
    customer: CustomerSchema
    shipping: ShippingAddressSchema
    shippingOption: str = Field(..., min_length=1, max_length=50)


# --- Response Schemas ---


class PaymentResponse(BaseModel):
    orderId: str
    pixCode: str
    pixQrCode: str
    amount: float
    expiresAt: str


class AddressResponse(BaseModel):
    zipCode: str
    street: str
    neighborhood: str
    city: str
    state: str
    complement: str = ""
