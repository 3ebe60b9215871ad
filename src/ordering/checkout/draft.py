"""Checkout draft: what the customer has typed during one checkout attempt.

The draft lives only as long as the checkout does; it is never stored in a
repository. Phone, tax id and postal code are kept in their display (masked)
form, the same way the customer sees them.
"""

from protean.exceptions import ValidationError
from protean.fields import Float, String, ValueObject

from ordering.domain import ordering
from shared.masks import POSTAL_CODE_LENGTH, mask_phone, mask_postal_code, mask_tax_id, unmask

CUSTOMER_FIELDS = ("name", "email", "phone", "tax_id")
ADDRESS_FIELDS = ("postal_code", "street", "number", "neighborhood", "city", "state_code")
LOOKUP_FIELDS = ("street", "neighborhood", "city", "state_code")
EDITABLE_FIELDS = CUSTOMER_FIELDS + ADDRESS_FIELDS + ("dial_prefix", "complement")

# Names used by the storefront form and the order service
FIELD_ALIASES = {
    "cpf": "tax_id",
    "ddi": "dial_prefix",
    "zip_code": "postal_code",
    "zipCode": "postal_code",
    "state": "state_code",
}

# Masked fields with the most digits their format holds; extra digits are dropped
_MASKS = {
    "phone": (mask_phone, 11),
    "tax_id": (mask_tax_id, 14),
    "postal_code": (mask_postal_code, POSTAL_CODE_LENGTH),
}


def canonical_field(name: str) -> str:
    name = FIELD_ALIASES.get(name, name)
    if name not in EDITABLE_FIELDS:
        raise ValidationError({name: ["Not a checkout field"]})
    return name


@ordering.value_object(part_of="CheckoutDraft")
class PaymentInstructions:
    order_id = String(required=True, max_length=50)
    payment_code = String(required=True, max_length=500)
    payment_qr_image = String(max_length=1000)
    amount = Float(required=True, min_value=0.0)
    expires_at = String(max_length=50)


@ordering.aggregate
class CheckoutDraft:
    name = String(max_length=255)
    email = String(max_length=255)
    dial_prefix = String(max_length=5, default="+55")
    phone = String(max_length=20)
    tax_id = String(max_length=20)
    postal_code = String(max_length=9)
    street = String(max_length=255)
    number = String(max_length=20)
    complement = String(max_length=255)
    neighborhood = String(max_length=100)
    city = String(max_length=100)
    state_code = String(max_length=2)
    shipping_option_id = String(max_length=50)
    payment = ValueObject(PaymentInstructions)

    def update_field(self, name, value):
        """Set a form field, masking the ones that have a display format. Returns the stored value."""
        name = canonical_field(name)
        value = "" if value is None else str(value)
        if name in _MASKS:
            mask, max_digits = _MASKS[name]
            value = mask(unmask(value)[:max_digits])
        elif name == "state_code":
            value = value.strip().upper()
        setattr(self, name, value)
        return value

    def field_value(self, name):
        return getattr(self, canonical_field(name)) or ""

    @property
    def raw_postal_code(self):
        return unmask(self.postal_code or "")

    def missing_customer_fields(self):
        return [name for name in CUSTOMER_FIELDS if not (getattr(self, name) or "").strip()]

    def missing_address_fields(self):
        return [name for name in ADDRESS_FIELDS if not (getattr(self, name) or "").strip()]

    def apply_address(self, address):
        """Overwrite the looked-up fields; the number and complement stay as typed."""
        self.street = address.street
        self.neighborhood = address.neighborhood
        self.city = address.city
        self.state_code = address.state

    def record_payment(self, descriptor):
        self.payment = PaymentInstructions(
            order_id=descriptor.order_id,
            payment_code=descriptor.payment_code,
            payment_qr_image=descriptor.payment_qr_image,
            amount=descriptor.amount,
            expires_at=descriptor.expires_at,
        )
