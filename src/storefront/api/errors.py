"""HTTP mapping for storefront errors."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import (
    CartNotFoundError,
    EmptyCartError,
    InsufficientStockError,
    InvalidOrderStatusError,
    InvalidQuantityError,
    InvalidTransitionError,
    OrderNotFoundError,
    OutOfStockError,
    ProductNotFoundError,
    StorefrontError,
    UserNotFoundError,
)

# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    ProductNotFoundError: 404,
    UserNotFoundError: 404,
    OrderNotFoundError: 404,
    CartNotFoundError: 404,
    InsufficientStockError: 409,
    InvalidTransitionError: 409,
    EmptyCartError: 400,
    InvalidQuantityError: 400,
    OutOfStockError: 400,
    InvalidOrderStatusError: 422,
}


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Map StorefrontError subclasses to appropriate HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(StorefrontError, storefront_error_handler)
