"""Catalogue bounded context: products, banners and site configuration.

Backs the storefront's read side and the admin console. Aggregates here are
the "hosted" catalogue source; the static JSON snapshot is the other one.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

logger = structlog.get_logger(__name__)

catalogue = Domain(name="catalogue")
