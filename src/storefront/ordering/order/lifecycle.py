"""Order lifecycle service: creation and status transitions with stock effects.

Transitions run under the order's lock for their whole duration, so two
transitions of the same order never interleave. Stock-moving transitions
(confirm, and cancel of a confirmed order) save the order inside the
ledger's unit of work, while the affected products are still locked. The
status change and the stock change therefore commit together or not at all.

Lock order is always the order's key first, then product keys.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.lookup import get_product
from storefront.errors import EmptyCartError, InvalidQuantityError, OrderNotFoundError
from storefront.identity.lookup import get_user
from storefront.inventory.ledger import StockLedger, StockLine
from storefront.inventory.locks import KeyedLocks, locks, order_key
from storefront.ordering.order.order import Order, OrderStatus
from storefront.ordering.order.request import OrderRequest, RequestedItem

logger = structlog.get_logger(__name__)


def _requested(item) -> RequestedItem:
    if isinstance(item, RequestedItem):
        return item
    return RequestedItem(product_id=str(item["product_id"]), quantity=item["quantity"])


def stock_lines(order) -> list[StockLine]:
    return [StockLine(product_id=str(item.product_id), quantity=item.quantity) for item in order.items]


class OrderLifecycle:
    def __init__(self, ledger: StockLedger | None = None, lock_registry: KeyedLocks = locks):
        self._locks = lock_registry
        self._ledger = ledger or StockLedger(lock_registry)

    # -------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------
    def create_order(self, user_id, items) -> Order:
        """Create a PENDING order, pricing every item from the live catalogue.

        Args:
            user_id: Id of the ordering user.
            items: Sequence of ``RequestedItem`` or dicts with ``product_id``
                   and ``quantity``.

        No stock is checked or moved here.
        """
        requested = [_requested(item) for item in items]
        if not requested:
            raise EmptyCartError()
        for item in requested:
            if item.quantity is None or item.quantity <= 0:
                raise InvalidQuantityError(item.quantity)

        user = get_user(user_id)
        lines = [(get_product(item.product_id), item.quantity) for item in requested]

        order = Order.place(user, lines)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(user.id),
            items=len(order.items),
            total=order.total,
        )
        return order

    def submit(self, request: OrderRequest) -> Order:
        return self.create_order(request.user_id, request.items)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_order(self, order_id) -> Order:
        try:
            return current_domain.repository_for(Order).get(str(order_id))
        except ObjectNotFoundError:
            raise OrderNotFoundError(str(order_id)) from None

    def list_orders(self, user_id=None) -> list[Order]:
        """All orders, newest first, optionally only those of ``user_id``."""
        query = current_domain.repository_for(Order)._dao.query
        if user_id is not None:
            query = query.filter(user_id=str(user_id))
        orders = query.all().items
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def confirm_order(self, order_id) -> Order:
        """Reserve stock for every item and move the order to CONFIRMED.

        On ``InsufficientStockError`` no product is touched and the order
        stays PENDING.
        """
        with self._locks.hold(order_key(order_id)):
            order = self.get_order(order_id)
            order.check_transition(OrderStatus.CONFIRMED, "confirm")

            with self._ledger.reserving(stock_lines(order)):
                order.confirm()
                current_domain.repository_for(Order).add(order)

        logger.info("Order confirmed", order_id=str(order.id), total=order.total)
        return order

    def ship_order(self, order_id) -> Order:
        with self._locks.hold(order_key(order_id)):
            order = self.get_order(order_id)
            order.ship()
            current_domain.repository_for(Order).add(order)

        logger.info("Order shipped", order_id=str(order.id))
        return order

    def cancel_order(self, order_id) -> Order:
        """Cancel the order, restoring its stock if it had been reserved."""
        with self._locks.hold(order_key(order_id)):
            order = self.get_order(order_id)
            order.check_transition(OrderStatus.CANCELLED, "cancel")
            restore = order.holds_stock()

            if restore:
                with self._ledger.releasing(stock_lines(order)):
                    order.cancel()
                    current_domain.repository_for(Order).add(order)
            else:
                order.cancel()
                current_domain.repository_for(Order).add(order)

        logger.info("Order cancelled", order_id=str(order.id), stock_restored=restore)
        return order
