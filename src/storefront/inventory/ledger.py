"""Stock ledger, the only writer of product stock levels.

Reservation is check-then-commit: every affected product is locked, every
quantity is validated against current stock, and only then are all
withdrawals written in one unit of work. Either every product is decremented
or none is. Release restores stock the same way and cannot fail on quantity,
since it only increases stock.

``reserving`` and ``releasing`` keep the product locks and the unit of work
open while the caller's block runs, so an order status change can commit
together with the stock it depends on. An exception in the block rolls the
stock change back.
"""

from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass

import structlog
from protean import UnitOfWork
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.errors import InsufficientStockError, InvalidQuantityError, ProductNotFoundError
from storefront.inventory.locks import KeyedLocks, locks, product_key

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockLine:
    product_id: str
    quantity: int


def consolidate(lines) -> dict[str, int]:
    """Sum quantities per product so repeated products are checked as one claim."""
    totals: Counter[str] = Counter()
    for line in lines:
        if line.quantity <= 0:
            raise InvalidQuantityError(line.quantity)
        totals[str(line.product_id)] += line.quantity
    return dict(sorted(totals.items()))


class StockLedger:
    def __init__(self, lock_registry: KeyedLocks = locks):
        self._locks = lock_registry

    def reserve(self, lines) -> None:
        """Withdraw stock for every line, or raise without touching any product."""
        with self.reserving(lines):
            pass

    def release(self, lines) -> None:
        """Return stock for every line in one unit of work."""
        with self.releasing(lines):
            pass

    @contextmanager
    def reserving(self, lines):
        wanted = consolidate(lines)

        with self._locks.hold(*(product_key(pid) for pid in wanted)):
            products = self._load(wanted)

            for product_id, quantity in wanted.items():
                available = products[product_id].stock
                if available < quantity:
                    logger.info(
                        "Stock reservation rejected",
                        product_id=product_id,
                        requested=quantity,
                        available=available,
                    )
                    raise InsufficientStockError(product_id, quantity, available)

            with UnitOfWork():
                repo = current_domain.repository_for(Product)
                for product_id, quantity in wanted.items():
                    products[product_id].withdraw(quantity)
                    repo.add(products[product_id])
                yield

        logger.info("Stock reserved", lines=wanted)

    @contextmanager
    def releasing(self, lines):
        wanted = consolidate(lines)

        with self._locks.hold(*(product_key(pid) for pid in wanted)):
            products = self._load(wanted)

            with UnitOfWork():
                repo = current_domain.repository_for(Product)
                for product_id, quantity in wanted.items():
                    products[product_id].restock(quantity)
                    repo.add(products[product_id])
                yield

        logger.info("Stock released", lines=wanted)

    def _load(self, product_ids) -> dict[str, Product]:
        repo = current_domain.repository_for(Product)
        products = {}
        for product_id in product_ids:
            try:
                products[str(product_id)] = repo.get(str(product_id))
            except ObjectNotFoundError:
                raise ProductNotFoundError(str(product_id)) from None
        return products
