"""Catalogue domain API package."""

from catalogue.api.routes import admin_router, store_router

__all__ = ["store_router", "admin_router"]
