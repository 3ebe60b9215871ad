"""Ordering domain API package."""

from ordering.api.routes import address_router, order_router

__all__ = ["order_router", "address_router"]
