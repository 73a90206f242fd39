"""Custom exceptions for the storefront.

Every error here is recoverable by the caller. Aggregates and services raise
them; the HTTP layer maps them to responses in ``storefront.api.errors``.
"""


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    pass


class EmptyCartError(StorefrontError):
    """Raised when an order is requested with no items."""

    def __init__(self):
        super().__init__("Cannot submit an order without items")


class InvalidQuantityError(StorefrontError):
    """Raised when a quantity is zero or negative."""

    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__(f"Quantity must be a positive integer, got {quantity}")


class OutOfStockError(StorefrontError):
    """Raised when a product with no stock is added to a cart."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} is out of stock")


class ProductNotFoundError(StorefrontError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class UserNotFoundError(StorefrontError):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class OrderNotFoundError(StorefrontError):
    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class CartNotFoundError(StorefrontError):
    def __init__(self, cart_id: str):
        self.cart_id = cart_id
        super().__init__(f"Cart not found: {cart_id}")


class InsufficientStockError(StorefrontError):
    """Raised when a product cannot cover the quantity an order needs."""

    def __init__(self, product_id: str, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient stock for product {product_id}: {available} available, {requested} requested")


class InvalidTransitionError(StorefrontError):
    """Raised when an order cannot move from its current status."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot {requested} an order in {current} state")


class InvalidOrderStatusError(StorefrontError):
    """Raised when a serialized order status is not one of the known values."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown order status: {value!r}")
