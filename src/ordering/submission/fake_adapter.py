"""Configurable fake order service for development and testing.

Answers like the real order endpoint without any network call and can be
switched to fail, so the checkout's error path can be exercised on demand.
"""

from datetime import UTC, datetime

from ordering.order.placement import build_payment_descriptor
from ordering.submission.port import OrderGateway, OrderSubmission, PaymentDescriptor
from shared.errors import SubmissionError


class FakeOrderGateway(OrderGateway):
    def __init__(self, amount: float = 299.90) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Order service unavailable"
        self.amount = amount
        self.calls: list[OrderSubmission] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Order service unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def submit_order(self, submission: OrderSubmission) -> PaymentDescriptor:
        self.calls.append(submission)

        if not self.should_succeed:
            raise SubmissionError(self.failure_reason)

        now = datetime.now(UTC)
        return build_payment_descriptor(f"ORD-{int(now.timestamp() * 1000)}", self.amount, now)
