"""Domain events for the Order aggregate.

Each lifecycle transition raises exactly one event. Item lists are carried
as JSON so the event stays a flat record.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A user submitted a new order. No stock has moved yet."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item dicts
    total = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderConfirmed:
    """Stock for every item was withdrawn and the order is committed."""

    __version__ = 1

    order_id = Identifier(required=True)
    confirmed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderShipped:
    __version__ = 1

    order_id = Identifier(required=True)
    shipped_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled. Stock was restored if it had been withdrawn."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    stock_restored = Boolean(default=False)
    cancelled_at = DateTime(required=True)
