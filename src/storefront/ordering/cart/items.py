"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.lookup import get_product
from storefront.domain import storefront
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.lookup import get_cart


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@storefront.command(part_of="ShoppingCart")
class SetCartQuantity:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    cart_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        cart = get_cart(command.cart_id)
        product = get_product(command.product_id)
        cart.add_item(product, quantity=command.quantity)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(SetCartQuantity)
    def set_cart_quantity(self, command):
        cart = get_cart(command.cart_id)
        cart.set_quantity(command.product_id, command.quantity)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = get_cart(command.cart_id)
        cart.remove_item(command.product_id)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = get_cart(command.cart_id)
        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)
