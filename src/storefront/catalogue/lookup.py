"""Catalogue lookup used by the cart and the order lifecycle."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.errors import ProductNotFoundError


def get_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise ProductNotFoundError(str(product_id)) from None


def list_products() -> list[Product]:
    """All catalogue products, oldest first."""
    products = current_domain.repository_for(Product)._dao.query.all().items
    return sorted(products, key=lambda p: p.created_at)
