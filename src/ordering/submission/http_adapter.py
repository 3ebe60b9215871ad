"""Order service adapter over HTTP (``POST {base_url}/orders``)."""

import requests
import structlog

from ordering.submission.port import OrderGateway, OrderSubmission, PaymentDescriptor
from shared.errors import SubmissionError

logger = structlog.get_logger(__name__)


class HttpOrderGateway(OrderGateway):
    def __init__(self, base_url: str, timeout: float = 10.0, session=None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def submit_order(self, submission: OrderSubmission) -> PaymentDescriptor:
        try:
            response = self.session.post(
                f"{self.base_url}/orders",
                json=submission.to_payload(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("order.submission_failed", error=str(exc))
            raise SubmissionError("Could not reach the order service") from exc

        if not response.ok:
            logger.error("order.submission_rejected", status=response.status_code, body=response.text[:500])
            raise SubmissionError(f"Order service answered HTTP {response.status_code}", status=response.status_code)

        try:
            return PaymentDescriptor.from_payload(response.json())
        except (ValueError, KeyError, TypeError) as exc:
            raise SubmissionError("Order service returned an unreadable response") from exc
