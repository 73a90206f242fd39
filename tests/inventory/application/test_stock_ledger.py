"""Application tests for stock reservation and release."""

import pytest
from protean import current_domain
from storefront.catalogue.product import Product
from storefront.errors import InsufficientStockError, InvalidQuantityError, ProductNotFoundError
from storefront.inventory.ledger import StockLedger, StockLine, consolidate


def _stock(product):
    return current_domain.repository_for(Product).get(str(product.id)).stock


@pytest.fixture()
def ledger():
    return StockLedger()


class TestConsolidate:
    def test_sums_repeated_products(self):
        lines = [StockLine("b", 1), StockLine("a", 2), StockLine("b", 3)]
        assert consolidate(lines) == {"a": 2, "b": 4}

    def test_rejects_non_positive_quantity(self):
        with pytest.raises(InvalidQuantityError):
            consolidate([StockLine("a", 0)])


class TestReserve:
    def test_reserve_decrements_every_product(self, ledger, make_product):
        laptop = make_product(name="Laptop", stock=15)
        mouse = make_product(name="Mouse", stock=50)

        ledger.reserve([StockLine(str(laptop.id), 2), StockLine(str(mouse.id), 5)])

        assert _stock(laptop) == 13
        assert _stock(mouse) == 45

    def test_reserve_entire_stock(self, ledger, make_product):
        product = make_product(stock=3)
        ledger.reserve([StockLine(str(product.id), 3)])
        assert _stock(product) == 0

    def test_shortfall_on_one_product_touches_none(self, ledger, make_product):
        plenty = make_product(name="Plenty", stock=10)
        scarce = make_product(name="Scarce", stock=1)

        with pytest.raises(InsufficientStockError) as exc:
            ledger.reserve([StockLine(str(plenty.id), 4), StockLine(str(scarce.id), 2)])

        assert exc.value.product_id == str(scarce.id)
        assert exc.value.requested == 2
        assert exc.value.available == 1
        assert _stock(plenty) == 10
        assert _stock(scarce) == 1

    def test_repeated_product_checked_as_one_claim(self, ledger, make_product):
        product = make_product(stock=5)

        with pytest.raises(InsufficientStockError):
            ledger.reserve([StockLine(str(product.id), 3), StockLine(str(product.id), 3)])

        assert _stock(product) == 5

    def test_unknown_product(self, ledger, make_product):
        product = make_product(stock=5)

        with pytest.raises(ProductNotFoundError):
            ledger.reserve([StockLine(str(product.id), 1), StockLine("prod-missing", 1)])

        assert _stock(product) == 5


class TestRelease:
    def test_release_restores_stock(self, ledger, make_product):
        product = make_product(stock=5)
        lines = [StockLine(str(product.id), 3)]

        ledger.reserve(lines)
        ledger.release(lines)

        assert _stock(product) == 5

    def test_release_can_exceed_original_stock(self, ledger, make_product):
        product = make_product(stock=0)
        ledger.release([StockLine(str(product.id), 4)])
        assert _stock(product) == 4


class TestRollback:
    def test_failure_inside_reservation_restores_stock(self, ledger, make_product):
        laptop = make_product(name="Laptop", stock=5)
        mouse = make_product(name="Mouse", stock=8)
        lines = [StockLine(str(laptop.id), 3), StockLine(str(mouse.id), 2)]

        with pytest.raises(RuntimeError):
            with ledger.reserving(lines):
                raise RuntimeError("order save failed")

        assert _stock(laptop) == 5
        assert _stock(mouse) == 8

    def test_failure_inside_release_keeps_stock(self, ledger, make_product):
        product = make_product(stock=2)

        with pytest.raises(RuntimeError):
            with ledger.releasing([StockLine(str(product.id), 3)]):
                raise RuntimeError("order save failed")

        assert _stock(product) == 2

    def test_reservation_succeeds_after_a_rolled_back_one(self, ledger, make_product):
        product = make_product(stock=5)
        lines = [StockLine(str(product.id), 5)]

        with pytest.raises(RuntimeError):
            with ledger.reserving(lines):
                raise RuntimeError("order save failed")

        ledger.reserve(lines)
        assert _stock(product) == 0
