"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, with no cross-user
sharing. State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CheckoutState:
    """Tracks one cart from creation to the order's terminal status."""

    user_id: str | None = None
    cart_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    current_status: str | None = None


@dataclass
class ContentionState:
    """Tracks the shared scarce product and the outcome counts for one user."""

    product_id: str | None = None
    confirmed: int = 0
    rejected: int = 0
