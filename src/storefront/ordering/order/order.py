"""Order aggregate and its status state machine.

State Machine:
    PENDING -> CONFIRMED -> SHIPPED
    PENDING -> CANCELLED
    CONFIRMED -> CANCELLED

SHIPPED and CANCELLED are terminal. An order holds withdrawn stock exactly
while it is CONFIRMED or SHIPPED. Stock itself is moved by the lifecycle
service, never by the aggregate.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.errors import EmptyCartError, InvalidOrderStatusError, InvalidTransitionError
from storefront.ordering.order.events import (
    OrderCancelled,
    OrderConfirmed,
    OrderPlaced,
    OrderShipped,
)


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, value):
        """Read a status from its serialized form, rejecting unknown values."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidOrderStatusError(value) from None


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Statuses in which the order's quantities are withdrawn from stock
_STOCK_HOLDING_STATES = {OrderStatus.CONFIRMED, OrderStatus.SHIPPED}


@storefront.entity(part_of="Order")
class OrderItem:
    """A line of an order, with the product name and price captured at placement."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    def subtotal(self):
        return self.unit_price * self.quantity


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    user_name = String(max_length=255)
    items = HasMany(OrderItem)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    total = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, user, lines):
        """Create a PENDING order for ``user``.

        Args:
            user: The ``User`` placing the order.
            lines: Sequence of ``(product, quantity)`` pairs. Each product's
                   current name and price are copied onto the order item.
        """
        if not lines:
            raise EmptyCartError()

        now = datetime.now(UTC)
        order = cls(
            user_id=str(user.id),
            user_name=user.name,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for product, quantity in lines:
            order.add_items(
                OrderItem(
                    product_id=str(product.id),
                    product_name=product.name,
                    quantity=quantity,
                    unit_price=product.price,
                )
            )
        order.total = round(sum(item.subtotal() for item in order.items), 2)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user.id),
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "quantity": item.quantity,
                            "unit_price": item.unit_price,
                        }
                        for item in order.items
                    ]
                ),
                total=order.total,
                placed_at=now,
            )
        )
        return order

    def current_status(self):
        return OrderStatus.parse(self.status)

    def check_transition(self, target_status, action):
        """Raise ``InvalidTransitionError`` unless ``target_status`` is reachable now."""
        current = self.current_status()
        if target_status not in _VALID_TRANSITIONS[current]:
            raise InvalidTransitionError(current.value, action)

    def holds_stock(self):
        return self.current_status() in _STOCK_HOLDING_STATES

    def confirm(self):
        self.check_transition(OrderStatus.CONFIRMED, "confirm")
        now = datetime.now(UTC)
        self.status = OrderStatus.CONFIRMED.value
        self.updated_at = now

        self.raise_(
            OrderConfirmed(
                order_id=str(self.id),
                confirmed_at=now,
            )
        )

    def ship(self):
        self.check_transition(OrderStatus.SHIPPED, "ship")
        now = datetime.now(UTC)
        self.status = OrderStatus.SHIPPED.value
        self.updated_at = now

        self.raise_(
            OrderShipped(
                order_id=str(self.id),
                shipped_at=now,
            )
        )

    def cancel(self):
        """Cancel the order. The caller restores stock first if ``holds_stock()``."""
        self.check_transition(OrderStatus.CANCELLED, "cancel")
        previous = self.current_status()
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                previous_status=previous.value,
                stock_restored=previous in _STOCK_HOLDING_STATES,
                cancelled_at=now,
            )
        )
