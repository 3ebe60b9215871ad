"""Ordering bounded context: shopping cart and checkout.

Owns the client-side cart (persisted locally, never mirrored on a server),
the multi-step checkout that turns it into an order submission, and the
order placement endpoint that answers that submission with payment
instructions.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
