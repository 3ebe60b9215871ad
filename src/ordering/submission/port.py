"""Order submission port: sends the checkout to the order service.

Submission is one-shot and not idempotent: every call may create an order.
Adapters never retry.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    quantity: int
    selected_variations: dict = field(default_factory=dict)


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    email: str
    phone: str
    tax_id: str


@dataclass(frozen=True)
class ShippingAddress:
    postal_code: str
    street: str
    number: str
    neighborhood: str
    city: str
    state: str
    complement: str = ""


@dataclass(frozen=True)
class OrderSubmission:
    items: tuple[OrderLine, ...]
    customer: CustomerInfo
    shipping: ShippingAddress
    shipping_option_id: str

    def to_payload(self) -> dict:
        """Wire format accepted by the order service."""
        return {
            "items": [
                {
                    "productId": line.product_id,
                    "quantity": line.quantity,
                    "selectedVariations": line.selected_variations,
                }
                for line in self.items
            ],
            "customer": {
                "name": self.customer.name,
                "email": self.customer.email,
                "phone": self.customer.phone,
                "cpf": self.customer.tax_id,
            },
            "shipping": {
                "zipCode": self.shipping.postal_code,
                "street": self.shipping.street,
                "number": self.shipping.number,
                "complement": self.shipping.complement or None,
                "neighborhood": self.shipping.neighborhood,
                "city": self.shipping.city,
                "state": self.shipping.state,
            },
            "shippingOption": self.shipping_option_id,
        }


@dataclass(frozen=True)
class PaymentDescriptor:
    """What the customer needs to pay: a PIX copy-and-paste code and its QR image."""

    order_id: str
    payment_code: str
    payment_qr_image: str
    amount: float
    expires_at: str

    @classmethod
    def from_payload(cls, data: dict) -> "PaymentDescriptor":
        return cls(
            order_id=data["orderId"],
            payment_code=data["pixCode"],
            payment_qr_image=data["pixQrCode"],
            amount=float(data["amount"]),
            expires_at=data["expiresAt"],
        )

    def to_payload(self) -> dict:
        return {
            "orderId": self.order_id,
            "pixCode": self.payment_code,
            "pixQrCode": self.payment_qr_image,
            "amount": self.amount,
            "expiresAt": self.expires_at,
        }


class OrderGateway(ABC):
    """Abstract order service interface."""

    @abstractmethod
    def submit_order(self, submission: OrderSubmission) -> PaymentDescriptor:
        """Create the order. Raises `SubmissionError` when it could not be created."""
        ...
