"""Application tests for the demo catalogue seed."""

from storefront.catalogue.lookup import list_products
from storefront.identity.lookup import list_users
from storefront.seed import DEMO_PRODUCTS, DEMO_USERS, seed_catalogue


class TestSeedCatalogue:
    def test_seeds_empty_catalogue(self):
        assert seed_catalogue() is True

        products = {p.name: p for p in list_products()}
        assert len(products) == len(DEMO_PRODUCTS)
        assert products["Laptop Dell XPS 13"].price == 1200.0
        assert products["LG UltraFine 4K Monitor"].stock == 10
        assert {u.email for u in list_users()} == {u["email"] for u in DEMO_USERS}

    def test_second_run_does_nothing(self):
        seed_catalogue()
        assert seed_catalogue() is False
        assert len(list_products()) == len(DEMO_PRODUCTS)
        assert len(list_users()) == len(DEMO_USERS)

    def test_skips_when_products_exist(self, make_product):
        make_product(name="Existing")
        assert seed_catalogue() is False
        assert [p.name for p in list_products()] == ["Existing"]
