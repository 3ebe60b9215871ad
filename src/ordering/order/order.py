"""Order aggregate: an order placed from the storefront checkout.

The order only records what was submitted and what the customer was asked to
pay. Payment confirmation, stock and fulfillment happen elsewhere.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, String, Text, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderPlaced


class OrderStatus(Enum):
    AWAITING_PAYMENT = "Awaiting_Payment"


@ordering.value_object(part_of="Order")
class DeliveryAddress:
    """Where the order ships to, as typed at checkout."""

    postal_code = String(required=True, max_length=9)
    street = String(required=True, max_length=255)
    number = String(required=True, max_length=20)
    complement = String(max_length=255)
    neighborhood = String(required=True, max_length=100)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=2)


@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=50)
    items = Text(required=True)  # JSON: list of {productId, name, quantity, unitPrice, selectedVariations}
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=255)
    customer_phone = String(required=True, max_length=30)
    customer_tax_id = String(required=True, max_length=20)
    delivery_address = ValueObject(DeliveryAddress, required=True)
    shipping_option_id = String(required=True, max_length=50)
    subtotal = Float(required=True, min_value=0.0)
    shipping_cost = Float(default=0.0, min_value=0.0)
    amount = Float(required=True, min_value=0.0)
    payment_code = String(max_length=500)
    payment_qr_image = String(max_length=1000)
    expires_at = DateTime()
    status = String(choices=OrderStatus, default=OrderStatus.AWAITING_PAYMENT.value)
    placed_at = DateTime()

    @classmethod
    def place(
        cls,
        order_number,
        items,
        customer,
        delivery_address,
        shipping_option_id,
        subtotal,
        shipping_cost,
        payment_code,
        payment_qr_image,
        expires_at,
    ):
        now = datetime.now(UTC)
        amount = round(subtotal + shipping_cost, 2)
        order = cls(
            order_number=order_number,
            items=json.dumps(items, ensure_ascii=False),
            customer_name=customer["name"],
            customer_email=customer["email"],
            customer_phone=customer["phone"],
            customer_tax_id=customer["cpf"],
            delivery_address=delivery_address,
            shipping_option_id=shipping_option_id,
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            amount=amount,
            payment_code=payment_code,
            payment_qr_image=payment_qr_image,
            expires_at=expires_at,
            placed_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                items=order.items,
                shipping_option_id=shipping_option_id,
                amount=amount,
                placed_at=now,
            )
        )
        return order
