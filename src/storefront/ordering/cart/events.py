"""Domain events for the ShoppingCart aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart, or its line was increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)
    unit_price = Float(required=True)


@storefront.event(part_of="ShoppingCart")
class CartQuantitySet:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="ShoppingCart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)


@storefront.event(part_of="ShoppingCart")
class CartCheckedOut:
    """The cart was submitted as an order and can no longer change."""

    __version__ = 1

    cart_id = Identifier(required=True)
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total = Float(required=True)
    checked_out_at = DateTime(required=True)
