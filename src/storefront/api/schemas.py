"""Pydantic request/response schemas for the storefront API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

OrderStatusValue = Literal["PENDING", "CONFIRMED", "SHIPPED", "CANCELLED"]


# --- Catalogue ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Logitech MX Master 3S",
                    "price": 99.00,
                    "stock": 50,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    price: float = Field(..., ge=0.0)
    stock: int = Field(0, ge=0)


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    stock: int
    created_at: datetime | None = None


# --- Identity ---


class CreateUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "María García",
                    "email": "maria@example.com",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime | None = None


# --- Orders ---


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-001",
                    "items": [
                        {"product_id": "prod-001", "quantity": 2},
                        {"product_id": "prod-002", "quantity": 1},
                    ],
                }
            ]
        }
    }

    user_id: str
    items: list[OrderItemRequest]


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    subtotal: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    user_name: str | None = None
    status: OrderStatusValue
    total: float
    items: list[OrderItemResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None


# --- Carts ---


class CreateCartRequest(BaseModel):
    user_id: str | None = None


class AddCartItemRequest(BaseModel):
    product_id: str
    quantity: int = 1


class SetCartQuantityRequest(BaseModel):
    quantity: int


class CheckoutCartRequest(BaseModel):
    user_id: str | None = None


class CartLineResponse(BaseModel):
    product_id: str
    unit_price: float
    quantity: int
    subtotal: float


class CartResponse(BaseModel):
    id: str
    user_id: str | None = None
    status: str
    order_id: str | None = None
    lines: list[CartLineResponse]
    total: float
