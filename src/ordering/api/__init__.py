"""Ordering domain API package."""

from ordering.api.routes import order_router, payment_router

__all__ = ["order_router", "payment_router"]
