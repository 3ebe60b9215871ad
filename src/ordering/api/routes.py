"""FastAPI routes for the Ordering domain: order placement and address lookup."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from ordering.address import get_address_lookup
from ordering.api.schemas import AddressResponse, PaymentResponse, PlaceOrderRequest
from ordering.order.placement import PlaceOrder

order_router = APIRouter(prefix="/orders", tags=["orders"])
address_router = APIRouter(prefix="/addresses", tags=["addresses"])


@order_router.post("", status_code=201, response_model=PaymentResponse)
async def place_order(body: PlaceOrderRequest) -> PaymentResponse:
    command = PlaceOrder(
        items=json.dumps([item.model_dump() for item in body.items]),
        customer=json.dumps(body.customer.model_dump()),
        shipping=json.dumps(body.shipping.model_dump()),
        shipping_option=body.shippingOption,
    )
    result = current_domain.process(command, asynchronous=False)
    return PaymentResponse(**result)


@address_router.get("/{postal_code}", response_model=AddressResponse)
async def lookup_address(postal_code: str) -> AddressResponse:
    address = get_address_lookup().lookup(postal_code)
    return AddressResponse(
        zipCode=address.postal_code,
        street=address.street,
        neighborhood=address.neighborhood,
        city=address.city,
        state=address.state,
        complement=address.complement,
    )
