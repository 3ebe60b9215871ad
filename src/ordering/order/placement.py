"""Order placement: command and handler behind ``POST /orders``.

Prices the submitted items from the catalogue (never from the client), adds
the chosen shipping option and answers with PIX payment instructions that
expire after thirty minutes.
"""

import json
from datetime import UTC, datetime, timedelta
from urllib.parse import quote

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import validate_selection
from ordering.domain import logger, ordering
from ordering.order.order import DeliveryAddress, Order
from ordering.submission.port import PaymentDescriptor

PIX_PAYLOAD_PREFIX = "00020126580014br.gov.bcb.pix0136"
QR_CODE_SERVICE = "https://api.qrserver.com/v1/create-qr-code/?size=300x300&data="
PAYMENT_WINDOW = timedelta(minutes=30)


def build_payment_descriptor(order_number: str, amount: float, now: datetime | None = None) -> PaymentDescriptor:
    now = now or datetime.now(UTC)
    code = PIX_PAYLOAD_PREFIX + order_number
    return PaymentDescriptor(
        order_id=order_number,
        payment_code=code,
        payment_qr_image=QR_CODE_SERVICE + quote(code, safe=""),
        amount=round(amount, 2),
        expires_at=(now + PAYMENT_WINDOW).isoformat(),
    )


def price_items(items: list[dict], catalogue) -> tuple[list[dict], float]:
    """Resolve each requested line against the catalogue. Returns priced lines and the subtotal."""
    priced = []
    for line in items:
        quantity = int(line.get("quantity") or 0)
        if quantity < 1:
            raise ValidationError({"items": [f"Quantity for product {line.get('productId')} must be at least 1"]})

        product = catalogue.get_product(line["productId"])

        selection = line.get("selectedVariations") or {}
        if not isinstance(selection, dict):
            raise ValidationError({"items": [f"Variations for product {product.id} must be an object"]})
        axes = {axis.type: list(axis.options) for axis in product.variations}
        validate_selection(product.name, axes, selection, field="items")

        priced.append(
            {
                "productId": product.id,
                "name": product.name,
                "quantity": quantity,
                "unitPrice": product.effective_price,
                "selectedVariations": selection,
            }
        )

    subtotal = round(sum(line["unitPrice"] * line["quantity"] for line in priced), 2)
    return priced, subtotal


@ordering.command(part_of="Order")
class PlaceOrder:
    items = Text(required=True)  # JSON: list of {productId, quantity, selectedVariations}
    customer = Text(required=True)  # JSON: {name, email, phone, cpf}
    shipping = Text(required=True)  # JSON: {zipCode, street, number, complement, neighborhood, city, state}
    shipping_option = String(required=True, max_length=50)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        from catalogue.accessor import get_catalogue

        catalogue = get_catalogue()

        items = json.loads(command.items)
        if not items:
            raise ValidationError({"items": ["An order needs at least one item"]})

        priced, subtotal = price_items(items, catalogue)

        option = next(
            (o for o in catalogue.calculate_shipping("", subtotal) if o.id == command.shipping_option),
            None,
        )
        if option is None:
            raise ValidationError({"shipping_option": [f"Shipping option '{command.shipping_option}' is not available"]})

        shipping = json.loads(command.shipping)
        now = datetime.now(UTC)
        order_number = f"ORD-{int(now.timestamp() * 1000)}"
        descriptor = build_payment_descriptor(order_number, subtotal + option.price, now)

        order = Order.place(
            order_number=order_number,
            items=priced,
            customer=json.loads(command.customer),
            delivery_address=DeliveryAddress(
                postal_code=shipping["zipCode"],
                street=shipping["street"],
                number=shipping["number"],
                complement=shipping.get("complement"),
                neighborhood=shipping["neighborhood"],
                city=shipping["city"],
                state=shipping["state"],
            ),
            shipping_option_id=option.id,
            subtotal=subtotal,
            shipping_cost=option.price,
            payment_code=descriptor.payment_code,
            payment_qr_image=descriptor.payment_qr_image,
            expires_at=now + PAYMENT_WINDOW,
        )
        current_domain.repository_for(Order).add(order)

        logger.info("order.placed", order_number=order_number, amount=descriptor.amount, items=len(priced))
        return descriptor.to_payload()
