"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True)
    stock = Integer(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockWithdrawn:
    """Stock was taken out of the ledger for a confirmed order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    withdrawn_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockRestocked:
    """Stock was returned to the ledger, e.g. after a confirmed order was cancelled."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    restocked_at = DateTime(required=True)
