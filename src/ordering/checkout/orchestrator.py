"""Checkout orchestrator: drives one checkout attempt over the customer's cart.

The orchestrator owns the draft and the current step, listens to the Cart
Store so that cart edits made during checkout are reflected (shipping is
re-derived, an emptied cart ends the checkout) and talks to the address
lookup and order services.

Those services answer asynchronously in a real storefront. Every request
therefore hands out a ticket, and an answer is only applied while its ticket
is still the latest one and the checkout is still on its forms:

    ticket = checkout.request_shipping()
    ...                                   # cart may change meanwhile
    checkout.apply_shipping_options(ticket, options)

`refresh_shipping()` and `settle_address_lookup()` run both halves in one go
for synchronous callers such as the CLI.
"""

from itertools import count

import structlog
from protean.exceptions import ValidationError

from catalogue.accessor.port import CatalogueSource, CheckoutConfig, ShippingOption, filter_shipping_options
from ordering.address.port import AddressLookup
from ordering.cart.store import CartStore
from ordering.checkout.draft import LOOKUP_FIELDS, CheckoutDraft, canonical_field
from ordering.checkout.state import CheckoutAction, CheckoutMode, CheckoutStep, transition
from ordering.submission.port import CustomerInfo, OrderGateway, OrderLine, OrderSubmission, ShippingAddress
from shared.errors import EmptyCartError, FetchError, NotFoundError, SubmissionError
from shared.masks import is_complete_postal_code

logger = structlog.get_logger(__name__)

MAX_ORDER_BUMPS = 2

_BUMP_STEPS = {
    "step1": CheckoutStep.COLLECTING_CUSTOMER_INFO,
    "step2": CheckoutStep.COLLECTING_ADDRESS,
}


class CheckoutOrchestrator:
    def __init__(
        self,
        cart_store: CartStore,
        catalogue: CatalogueSource,
        address_lookup: AddressLookup,
        order_gateway: OrderGateway,
        config: CheckoutConfig | None = None,
    ) -> None:
        if cart_store.is_empty:
            raise EmptyCartError("Cannot start a checkout with an empty cart")

        self.cart_store = cart_store
        self.catalogue = catalogue
        self.address_lookup = address_lookup
        self.order_gateway = order_gateway
        self.config = config or catalogue.get_checkout_config()
        self.mode = CheckoutMode(self.config.mode)

        self.draft = CheckoutDraft()
        self.step = CheckoutStep.COLLECTING_CUSTOMER_INFO
        self.redirect_required = False
        self.notice: str | None = None
        self.is_submitting = False

        self.shipping_options: list[ShippingOption] = []
        self.order_bumps = []

        self._tickets = count(1)
        self._shipping_ticket: int | None = None
        self._lookup_ticket: int | None = None
        self._lookup_postal_code: str | None = None

        cart_store.subscribe(self._on_cart_changed)
        logger.info("checkout.started", mode=self.mode.value, items=cart_store.get_item_count())

    @classmethod
    def begin(cls, cart_store, catalogue, address_lookup, order_gateway, config=None):
        """Start a checkout: quote shipping and offer order bumps for the current cart."""
        checkout = cls(cart_store, catalogue, address_lookup, order_gateway, config)
        checkout.refresh_shipping()
        checkout.load_order_bumps()
        return checkout

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------
    @property
    def is_open(self):
        return not self.step.is_terminal

    @property
    def is_collecting(self):
        """Still on the customer or address form; the amount is not yet promised."""
        return self.step in (CheckoutStep.COLLECTING_CUSTOMER_INFO, CheckoutStep.COLLECTING_ADDRESS)

    @property
    def subtotal(self):
        return self.cart_store.get_total()

    @property
    def selected_shipping_option(self):
        if self.draft is None:
            return None
        return next((o for o in self.shipping_options if o.id == self.draft.shipping_option_id), None)

    @property
    def shipping_price(self):
        option = self.selected_shipping_option
        return option.price if option else 0.0

    @property
    def total_with_shipping(self):
        if self.payment is not None:
            return self.payment.amount
        return round(self.subtotal + self.shipping_price, 2)

    @property
    def address_lookup_in_flight(self):
        return self._lookup_ticket is not None

    @property
    def address_fields_read_only(self):
        return self.address_lookup_in_flight

    @property
    def order_bumps_visible(self):
        if not self.order_bumps or not self.is_open:
            return False
        if self.mode == CheckoutMode.DIRECT:
            return self.step == CheckoutStep.COLLECTING_CUSTOMER_INFO
        return self.step == _BUMP_STEPS.get(self.config.order_bumps_position)

    @property
    def payment(self):
        return self.draft.payment if self.draft is not None else None

    # -------------------------------------------------------------------
    # Form input
    # -------------------------------------------------------------------
    def update_field(self, name, value):
        """Set a form field. Returns an address lookup ticket when the postal code just became complete."""
        self._assert_editable()
        name = canonical_field(name)

        if name in LOOKUP_FIELDS and self.address_fields_read_only:
            raise ValidationError({name: ["Address is being looked up"]})

        previous_postal_code = self.draft.raw_postal_code
        self.draft.update_field(name, value)

        if name == "postal_code":
            if is_complete_postal_code(self.draft.postal_code):
                if self.draft.raw_postal_code != previous_postal_code or not self.address_lookup_in_flight:
                    return self.begin_address_lookup()
            else:
                # A shorter code supersedes any lookup still running
                self._lookup_ticket = None
        return None

    def select_shipping_option(self, option_id):
        self._assert_editable()
        if not any(o.id == option_id for o in self.shipping_options):
            raise ValidationError({"shipping_option_id": [f"Shipping option '{option_id}' is not available"]})
        self.draft.shipping_option_id = option_id

    # -------------------------------------------------------------------
    # Address lookup
    # -------------------------------------------------------------------
    def begin_address_lookup(self):
        self._lookup_ticket = next(self._tickets)
        self._lookup_postal_code = self.draft.raw_postal_code
        logger.debug("checkout.address_lookup_started", postal_code=self._lookup_postal_code, ticket=self._lookup_ticket)
        return self._lookup_ticket

    def complete_address_lookup(self, ticket, result=None, error=None):
        """Apply a lookup answer. Returns False when the answer was stale and ignored."""
        if ticket != self._lookup_ticket or not self.is_collecting:
            logger.debug("checkout.address_lookup_ignored", ticket=ticket)
            return False

        self._lookup_ticket = None

        if isinstance(error, NotFoundError):
            logger.info("checkout.address_not_found", postal_code=self._lookup_postal_code)
        elif isinstance(error, FetchError):
            self.notice = "Address lookup is unavailable, please fill in the address"
            logger.warning("checkout.address_lookup_failed", postal_code=self._lookup_postal_code, error=str(error))
        elif result is not None:
            self.draft.apply_address(result)
            logger.info("checkout.address_found", postal_code=self._lookup_postal_code)
        return True

    def settle_address_lookup(self, ticket):
        """Call the lookup service for `ticket` and apply its answer."""
        if ticket != self._lookup_ticket:
            return False
        try:
            result = self.address_lookup.lookup(self._lookup_postal_code)
        except (NotFoundError, FetchError) as exc:
            return self.complete_address_lookup(ticket, error=exc)
        return self.complete_address_lookup(ticket, result=result)

    # -------------------------------------------------------------------
    # Shipping
    # -------------------------------------------------------------------
    def request_shipping(self):
        self._shipping_ticket = next(self._tickets)
        return self._shipping_ticket

    def apply_shipping_options(self, ticket, options):
        """Apply a shipping quote, re-filtered against the cart total as it is now."""
        if ticket != self._shipping_ticket or not self.is_collecting:
            logger.debug("checkout.shipping_quote_ignored", ticket=ticket)
            return False

        self._shipping_ticket = None
        self.shipping_options = filter_shipping_options(options, self.subtotal)

        offered = {o.id for o in self.shipping_options}
        if self.draft.shipping_option_id not in offered:
            self.draft.shipping_option_id = self.shipping_options[0].id if self.shipping_options else None
        return True

    def refresh_shipping(self):
        ticket = self.request_shipping()
        try:
            options = self.catalogue.calculate_shipping(self.draft.raw_postal_code, self.subtotal)
        except FetchError as exc:
            self._shipping_ticket = None
            self.notice = "Shipping options are unavailable right now"
            logger.warning("checkout.shipping_unavailable", error=str(exc))
            return False
        return self.apply_shipping_options(ticket, options)

    # -------------------------------------------------------------------
    # Order bumps
    # -------------------------------------------------------------------
    def load_order_bumps(self):
        """Offer up to two products related to the first cart line that are not in the cart yet."""
        self.order_bumps = []
        if not self.config.order_bumps_enabled or self.cart_store.is_empty:
            return self.order_bumps

        first = self.cart_store.items[0]
        try:
            related = self.catalogue.get_related_products(str(first.product.product_id))
        except (FetchError, NotFoundError) as exc:
            logger.warning("checkout.order_bumps_unavailable", error=str(exc))
            return self.order_bumps

        self.order_bumps = [p for p in related if not self.cart_store.contains_product(p.id)][:MAX_ORDER_BUMPS]
        return self.order_bumps

    def add_order_bump(self, product):
        self._assert_editable()
        self.cart_store.add_item(product, 1, product.default_selection())
        self.order_bumps = [p for p in self.order_bumps if p.id != product.id]
        logger.info("checkout.order_bump_added", product_id=product.id)

    # -------------------------------------------------------------------
    # Step changes
    # -------------------------------------------------------------------
    def advance(self):
        self._move(CheckoutAction.ADVANCE)

    def back(self):
        self._move(CheckoutAction.BACK)

    def submit(self):
        """Send the order once. On failure the checkout stays where it was, draft and cart untouched."""
        if self.is_submitting:
            raise SubmissionError("An order submission is already in progress")

        result = transition(self.step, self.draft, CheckoutAction.SUBMIT, self.mode)
        if not result.accepted:
            self._reject(result)

        submission = self.build_submission()
        self.is_submitting = True
        self.notice = None
        try:
            descriptor = self.order_gateway.submit_order(submission)
        except SubmissionError as exc:
            self.notice = "We could not place your order, please try again"
            logger.warning("checkout.submission_failed", error=str(exc))
            raise
        finally:
            self.is_submitting = False

        self.draft.record_payment(descriptor)
        self.step = result.next_step
        logger.info("checkout.submitted", order_id=descriptor.order_id, amount=descriptor.amount)
        return descriptor

    def complete(self):
        """Payment shown and acknowledged: the cart is emptied and the checkout ends."""
        result = transition(self.step, self.draft, CheckoutAction.COMPLETE, self.mode)
        if not result.accepted:
            self._reject(result)

        self.cart_store.unsubscribe(self._on_cart_changed)
        self.cart_store.clear_cart()
        self.step = result.next_step
        logger.info("checkout.completed", order_id=self.draft.payment.order_id)

    def abandon(self):
        self._exit(CheckoutAction.ABANDON)

    def build_submission(self):
        draft = self.draft
        return OrderSubmission(
            items=tuple(
                OrderLine(
                    product_id=str(item.product.product_id),
                    quantity=item.quantity,
                    selected_variations=item.selected_variations,
                )
                for item in self.cart_store.items
            ),
            customer=CustomerInfo(name=draft.name, email=draft.email, phone=draft.phone, tax_id=draft.tax_id),
            shipping=ShippingAddress(
                postal_code=draft.postal_code,
                street=draft.street,
                number=draft.number,
                complement=draft.complement or "",
                neighborhood=draft.neighborhood,
                city=draft.city,
                state=draft.state_code,
            ),
            shipping_option_id=draft.shipping_option_id,
        )

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _on_cart_changed(self, store, events):
        if not self.is_collecting:
            return
        if store.is_empty:
            self.redirect_required = True
            self._exit(CheckoutAction.CART_EMPTIED)
            return
        self.refresh_shipping()

    def _move(self, action):
        result = transition(self.step, self.draft, action, self.mode)
        if not result.accepted:
            self._reject(result)
        logger.debug("checkout.step_changed", previous=self.step.value, current=result.next_step.value)
        self.step = result.next_step

    def _exit(self, action):
        result = transition(self.step, self.draft, action, self.mode)
        if not result.accepted:
            self._reject(result)

        self.cart_store.unsubscribe(self._on_cart_changed)
        self.step = result.next_step
        self.draft = None
        self._lookup_ticket = None
        self._shipping_ticket = None
        logger.info("checkout.exited", reason=action.value)

    def _assert_editable(self):
        if self.step not in (CheckoutStep.COLLECTING_CUSTOMER_INFO, CheckoutStep.COLLECTING_ADDRESS):
            raise ValidationError({"step": [f"Checkout is {self.step.value}, the form can no longer be changed"]})

    @staticmethod
    def _reject(result):
        if result.missing_fields:
            raise ValidationError({name: ["is required"] for name in result.missing_fields})
        raise ValidationError({"step": [result.reason]})
