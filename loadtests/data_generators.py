"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that match the field names expected by
the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def user_data() -> dict:
    """Generate a CreateUserRequest payload with a unique email."""
    return {
        "name": fake.name()[:255],
        "email": f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}",
    }


def product_data(stock: int | None = None) -> dict:
    """Generate a CreateProductRequest payload."""
    return {
        "name": f"{fake.word().capitalize()} {fake.word().capitalize()}"[:255],
        "price": round(random.uniform(5.0, 1500.0), 2),
        "stock": stock if stock is not None else random.randint(20, 200),
    }


def cart_item_data(product_id: str) -> dict:
    """Generate an AddCartItemRequest payload for a known product."""
    return {"product_id": product_id, "quantity": random.randint(1, 3)}


def order_data(user_id: str, product_id: str, quantity: int) -> dict:
    """Generate a CreateOrderRequest payload with a single line."""
    return {"user_id": user_id, "items": [{"product_id": product_id, "quantity": quantity}]}
