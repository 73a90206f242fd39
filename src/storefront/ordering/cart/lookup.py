from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import CartNotFoundError
from storefront.ordering.cart.cart import ShoppingCart


def get_cart(cart_id) -> ShoppingCart:
    try:
        return current_domain.repository_for(ShoppingCart).get(str(cart_id))
    except ObjectNotFoundError:
        raise CartNotFoundError(str(cart_id)) from None
