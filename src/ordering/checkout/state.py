"""Checkout state machine.

    CollectingCustomerInfo (1) → CollectingAddress (2) → AwaitingPayment (3) → Completed
    any open step → Exited (abandoned, or redirected because the cart emptied)

In ``direct`` mode steps 1 and 2 are one form: the customer never advances,
and submitting from step 1 checks both field groups.

`transition` is pure: it looks at the current step, the draft and the
requested action and answers whether the move is allowed. Side effects
(calling the order service, clearing the cart) belong to the orchestrator.
"""

from dataclasses import dataclass, field
from enum import Enum


class CheckoutStep(Enum):
    COLLECTING_CUSTOMER_INFO = "CollectingCustomerInfo"
    COLLECTING_ADDRESS = "CollectingAddress"
    AWAITING_PAYMENT = "AwaitingPayment"
    COMPLETED = "Completed"
    EXITED = "Exited"

    @property
    def number(self):
        """Position shown to the customer; terminal states have none."""
        return _STEP_NUMBERS.get(self)

    @property
    def is_terminal(self):
        return self in (CheckoutStep.COMPLETED, CheckoutStep.EXITED)


_STEP_NUMBERS = {
    CheckoutStep.COLLECTING_CUSTOMER_INFO: 1,
    CheckoutStep.COLLECTING_ADDRESS: 2,
    CheckoutStep.AWAITING_PAYMENT: 3,
}


class CheckoutMode(Enum):
    STEPS = "steps"
    DIRECT = "direct"


class CheckoutAction(Enum):
    ADVANCE = "advance"
    BACK = "back"
    SUBMIT = "submit"
    COMPLETE = "complete"
    ABANDON = "abandon"
    CART_EMPTIED = "cart_emptied"


_FORM_STEPS = {CheckoutStep.COLLECTING_CUSTOMER_INFO, CheckoutStep.COLLECTING_ADDRESS}
_OPEN_STEPS = _FORM_STEPS | {CheckoutStep.AWAITING_PAYMENT}

# Where each action may start from, per mode
_VALID_TRANSITIONS = {
    CheckoutMode.STEPS: {
        CheckoutAction.ADVANCE: {CheckoutStep.COLLECTING_CUSTOMER_INFO: CheckoutStep.COLLECTING_ADDRESS},
        CheckoutAction.BACK: {CheckoutStep.COLLECTING_ADDRESS: CheckoutStep.COLLECTING_CUSTOMER_INFO},
        CheckoutAction.SUBMIT: {CheckoutStep.COLLECTING_ADDRESS: CheckoutStep.AWAITING_PAYMENT},
        CheckoutAction.COMPLETE: {CheckoutStep.AWAITING_PAYMENT: CheckoutStep.COMPLETED},
    },
    CheckoutMode.DIRECT: {
        CheckoutAction.SUBMIT: {CheckoutStep.COLLECTING_CUSTOMER_INFO: CheckoutStep.AWAITING_PAYMENT},
        CheckoutAction.COMPLETE: {CheckoutStep.AWAITING_PAYMENT: CheckoutStep.COMPLETED},
    },
}


@dataclass(frozen=True)
class Transition:
    accepted: bool
    next_step: CheckoutStep
    reason: str | None = None
    missing_fields: tuple[str, ...] = field(default_factory=tuple)


def _reject(step, reason, missing=()):
    return Transition(accepted=False, next_step=step, reason=reason, missing_fields=tuple(missing))


def transition(step: CheckoutStep, draft, action: CheckoutAction, mode: CheckoutMode = CheckoutMode.STEPS) -> Transition:
    """Decide where `action` takes a checkout sitting at `step`."""
    if action == CheckoutAction.ABANDON:
        if step not in _OPEN_STEPS:
            return _reject(step, f"Checkout is already {step.value}")
        return Transition(accepted=True, next_step=CheckoutStep.EXITED)

    # Once the order is placed the cart no longer drives the checkout
    if action == CheckoutAction.CART_EMPTIED:
        if step not in _FORM_STEPS:
            return _reject(step, f"Cart changes no longer apply at {step.value}")
        return Transition(accepted=True, next_step=CheckoutStep.EXITED)

    target = _VALID_TRANSITIONS[mode].get(action, {}).get(step)
    if target is None:
        return _reject(step, f"Cannot {action.value} from {step.value} in {mode.value} mode")

    if action == CheckoutAction.ADVANCE:
        missing = draft.missing_customer_fields()
        if missing:
            return _reject(step, "Customer details are incomplete", missing)

    if action == CheckoutAction.SUBMIT:
        missing = draft.missing_address_fields()
        if mode == CheckoutMode.DIRECT:
            missing = draft.missing_customer_fields() + missing
        if not draft.shipping_option_id:
            missing = missing + ["shipping_option_id"]
        if missing:
            return _reject(step, "Order details are incomplete", missing)

    return Transition(accepted=True, next_step=target)
