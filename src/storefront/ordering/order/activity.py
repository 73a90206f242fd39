"""Order activity log.

Records every order and stock event as a structured log line, so that a
reader of the logs can follow each order from placement to its terminal
status together with the stock it moved.
"""

import structlog
from protean.utils.mixins import handle

from storefront.catalogue.events import StockRestocked, StockWithdrawn
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.ordering.order.events import (
    OrderCancelled,
    OrderConfirmed,
    OrderPlaced,
    OrderShipped,
)
from storefront.ordering.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Order)
class OrderActivityEventHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        logger.info(
            "order.placed",
            order_id=str(event.order_id),
            user_id=str(event.user_id),
            total=event.total,
        )

    @handle(OrderConfirmed)
    def on_order_confirmed(self, event: OrderConfirmed) -> None:
        logger.info("order.confirmed", order_id=str(event.order_id))

    @handle(OrderShipped)
    def on_order_shipped(self, event: OrderShipped) -> None:
        logger.info("order.shipped", order_id=str(event.order_id))

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        logger.info(
            "order.cancelled",
            order_id=str(event.order_id),
            previous_status=event.previous_status,
            stock_restored=event.stock_restored,
        )


@storefront.event_handler(part_of=Product)
class StockActivityEventHandler:
    @handle(StockWithdrawn)
    def on_stock_withdrawn(self, event: StockWithdrawn) -> None:
        logger.info(
            "stock.withdrawn",
            product_id=str(event.product_id),
            quantity=event.quantity,
            new_stock=event.new_stock,
        )

    @handle(StockRestocked)
    def on_stock_restocked(self, event: StockRestocked) -> None:
        logger.info(
            "stock.restocked",
            product_id=str(event.product_id),
            quantity=event.quantity,
            new_stock=event.new_stock,
        )
