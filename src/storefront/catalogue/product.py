"""Product aggregate, a catalogue entry with its price and on-hand stock.

Price is the live catalogue price; orders snapshot it when they are placed.
Stock is moved only by the inventory ledger: withdrawn when an order is
confirmed and restocked when a confirmed order is cancelled.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Integer, String

from storefront.catalogue.events import ProductAdded, StockRestocked, StockWithdrawn
from storefront.domain import storefront
from storefront.errors import InsufficientStockError, InvalidQuantityError


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, price, stock=0):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            stock=stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                price=price,
                stock=stock,
                added_at=now,
            )
        )
        return product

    def withdraw(self, quantity):
        """Take ``quantity`` units out of stock. Never drives stock below zero."""
        if quantity <= 0:
            raise InvalidQuantityError(quantity)
        if self.stock < quantity:
            raise InsufficientStockError(str(self.id), quantity, self.stock)

        previous = self.stock
        now = datetime.now(UTC)
        self.stock = previous - quantity
        self.updated_at = now

        self.raise_(
            StockWithdrawn(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                withdrawn_at=now,
            )
        )

    def restock(self, quantity):
        """Put ``quantity`` units back into stock."""
        if quantity <= 0:
            raise InvalidQuantityError(quantity)

        previous = self.stock
        now = datetime.now(UTC)
        self.stock = previous + quantity
        self.updated_at = now

        self.raise_(
            StockRestocked(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                restocked_at=now,
            )
        )
