"""Shopping Cart aggregate (CQRS), the working set of a prospective order.

Lines are kept as immutable ``CartLine`` values serialized into the cart's
``contents``. An update replaces the affected line wholesale; nothing is
ever changed in place. A line caches the product's price at the time it was
first added, for display only: the order is priced again from the live
catalogue when it is created.
"""

import json
from dataclasses import asdict, dataclass, replace
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront
from storefront.errors import EmptyCartError, InvalidQuantityError, OutOfStockError
from storefront.ordering.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantitySet,
)
from storefront.ordering.order.request import OrderRequest, RequestedItem


class CartStatus(Enum):
    ACTIVE = "Active"
    CHECKED_OUT = "Checked_Out"


@dataclass(frozen=True)
class CartLine:
    product_id: str
    unit_price: float
    quantity: int

    def subtotal(self):
        return self.unit_price * self.quantity


@storefront.aggregate
class ShoppingCart:
    user_id = Identifier()  # Optional until checkout
    contents = Text()  # JSON array of CartLine dicts
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    order_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id=None):
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            contents=json.dumps([]),
            status=CartStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Reading lines
    # -------------------------------------------------------------------
    def lines(self) -> list[CartLine]:
        return [CartLine(**line) for line in json.loads(self.contents or "[]")]

    def line_for(self, product_id) -> CartLine | None:
        return next((line for line in self.lines() if line.product_id == str(product_id)), None)

    def total(self) -> float:
        return round(sum(line.subtotal() for line in self.lines()), 2)

    def _store(self, lines):
        self.contents = json.dumps([asdict(line) for line in lines])
        self.updated_at = datetime.now(UTC)

    def _assert_active(self):
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": ["Only an active cart can be changed"]})

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity=1):
        """Add ``quantity`` units of ``product``, merging into its existing line."""
        self._assert_active()
        if quantity is None or quantity <= 0:
            raise InvalidQuantityError(quantity)
        if product.stock <= 0:
            raise OutOfStockError(str(product.id))

        product_id = str(product.id)
        lines = self.lines()
        existing = self.line_for(product_id)

        if existing:
            updated = replace(existing, quantity=existing.quantity + quantity)
            lines = [updated if line.product_id == product_id else line for line in lines]
        else:
            updated = CartLine(product_id=product_id, unit_price=product.price, quantity=quantity)
            lines.append(updated)

        self._store(lines)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=product_id,
                quantity=quantity,
                line_quantity=updated.quantity,
                unit_price=updated.unit_price,
            )
        )

    def set_quantity(self, product_id, new_quantity):
        """Set an exact quantity. Removal goes through ``remove_item``."""
        self._assert_active()
        if new_quantity is None or new_quantity <= 0:
            raise InvalidQuantityError(new_quantity)

        product_id = str(product_id)
        existing = self.line_for(product_id)
        if existing is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})

        updated = replace(existing, quantity=new_quantity)
        self._store([updated if line.product_id == product_id else line for line in self.lines()])

        self.raise_(
            CartQuantitySet(
                cart_id=str(self.id),
                product_id=product_id,
                previous_quantity=existing.quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        """Remove the product's line. Removing an absent product does nothing."""
        self._assert_active()

        product_id = str(product_id)
        if self.line_for(product_id) is None:
            return

        self._store([line for line in self.lines() if line.product_id != product_id])
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=product_id))

    def clear(self):
        self._assert_active()
        self._store([])
        self.raise_(CartCleared(cart_id=str(self.id)))

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def to_order_request(self, user_id) -> OrderRequest:
        """Build the order submission payload. Prices are not carried over."""
        lines = self.lines()
        if not lines:
            raise EmptyCartError()
        return OrderRequest(
            user_id=str(user_id),
            items=tuple(RequestedItem(product_id=line.product_id, quantity=line.quantity) for line in lines),
        )

    def check_out(self, order_id, user_id):
        """Mark the cart as submitted. A checked-out cart accepts no further changes."""
        self._assert_active()
        now = datetime.now(UTC)
        total = self.total()
        self.user_id = str(user_id)
        self.order_id = str(order_id)
        self.status = CartStatus.CHECKED_OUT.value
        self.updated_at = now

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                order_id=str(order_id),
                user_id=str(user_id),
                total=total,
                checked_out_at=now,
            )
        )
