"""Immutable order request, the hand-off from a cart to the lifecycle."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestedItem:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderRequest:
    user_id: str
    items: tuple[RequestedItem, ...]
