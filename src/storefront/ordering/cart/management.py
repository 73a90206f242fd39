"""Cart management: creation and checkout.

Checkout hands the cart's order request to the order lifecycle, which
creates a PENDING order priced from the live catalogue. No stock moves at
checkout; it is reserved when the order is confirmed.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.cart import CartStatus, ShoppingCart
from storefront.ordering.cart.lookup import get_cart
from storefront.ordering.order.lifecycle import OrderLifecycle

logger = structlog.get_logger(__name__)


@storefront.command(part_of="ShoppingCart")
class CreateCart:
    user_id = Identifier()  # Optional until checkout


@storefront.command(part_of="ShoppingCart")
class CheckoutCart:
    """Submit the cart as an order for ``user_id`` (or the cart's own user)."""

    cart_id = Identifier(required=True)
    user_id = Identifier()


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = ShoppingCart.create(user_id=command.user_id)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(CheckoutCart)
    def checkout_cart(self, command):
        cart = get_cart(command.cart_id)
        if CartStatus(cart.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": ["Cart has already been checked out"]})

        user_id = command.user_id or cart.user_id
        if not user_id:
            raise ValidationError({"user_id": ["A user is required to check out"]})

        order = OrderLifecycle().submit(cart.to_order_request(user_id))
        cart.check_out(order_id=order.id, user_id=user_id)
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info(
            "Cart checked out",
            cart_id=str(cart.id),
            order_id=str(order.id),
            total=order.total,
        )
        return str(order.id)
