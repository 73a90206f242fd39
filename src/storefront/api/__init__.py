"""Storefront API package."""

from storefront.api.routes import cart_router, order_router, product_router, user_router

__all__ = ["product_router", "user_router", "order_router", "cart_router"]
