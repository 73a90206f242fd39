"""Integration tests for order endpoints."""

import pytest
from fastapi.testclient import TestClient
from protean import current_domain
from storefront.api.application import create_app
from storefront.catalogue.product import Product


@pytest.fixture()
def client():
    return TestClient(create_app(seed=False))


@pytest.fixture()
def user(make_user):
    return make_user(name="Juan Pérez")


def _create_order(client, user, product, quantity):
    response = client.post(
        "/orders",
        json={"user_id": str(user.id), "items": [{"product_id": str(product.id), "quantity": quantity}]},
    )
    assert response.status_code == 201
    return response.json()


def _stock(product):
    return current_domain.repository_for(Product).get(str(product.id)).stock


class TestCreateOrderEndpoint:
    def test_create_order(self, client, user, make_product):
        product = make_product(name="Laptop", price=1200.0, stock=15)

        order = _create_order(client, user, product, 2)

        assert order["status"] == "PENDING"
        assert order["total"] == 2400.0
        assert order["user_name"] == "Juan Pérez"
        assert order["items"] == [
            {
                "product_id": str(product.id),
                "product_name": "Laptop",
                "quantity": 2,
                "unit_price": 1200.0,
                "subtotal": 2400.0,
            }
        ]

    def test_empty_items_is_400(self, client, user):
        response = client.post("/orders", json={"user_id": str(user.id), "items": []})
        assert response.status_code == 400
        assert response.json()["error_type"] == "EmptyCartError"

    def test_zero_quantity_is_400(self, client, user, make_product):
        product = make_product()
        response = client.post(
            "/orders",
            json={"user_id": str(user.id), "items": [{"product_id": str(product.id), "quantity": 0}]},
        )
        assert response.status_code == 400
        assert response.json()["error_type"] == "InvalidQuantityError"

    def test_unknown_product_is_404(self, client, user):
        response = client.post(
            "/orders",
            json={"user_id": str(user.id), "items": [{"product_id": "prod-missing", "quantity": 1}]},
        )
        assert response.status_code == 404

    def test_unknown_user_is_404(self, client, make_product):
        product = make_product()
        response = client.post(
            "/orders",
            json={"user_id": "user-missing", "items": [{"product_id": str(product.id), "quantity": 1}]},
        )
        assert response.status_code == 404
        assert response.json()["error_type"] == "UserNotFoundError"


class TestTransitionEndpoints:
    def test_confirm_ship(self, client, user, make_product):
        product = make_product(stock=5)
        order = _create_order(client, user, product, 3)

        response = client.patch(f"/orders/{order['id']}/confirm")
        assert response.status_code == 200
        assert response.json()["status"] == "CONFIRMED"
        assert _stock(product) == 2

        response = client.patch(f"/orders/{order['id']}/ship")
        assert response.status_code == 200
        assert response.json()["status"] == "SHIPPED"

    def test_insufficient_stock_is_409(self, client, user, make_product):
        product = make_product(stock=2)
        order = _create_order(client, user, product, 3)

        response = client.patch(f"/orders/{order['id']}/confirm")

        assert response.status_code == 409
        assert response.json()["error_type"] == "InsufficientStockError"
        assert client.get(f"/orders/{order['id']}").json()["status"] == "PENDING"
        assert _stock(product) == 2

    def test_invalid_transition_is_409(self, client, user, make_product):
        product = make_product()
        order = _create_order(client, user, product, 1)

        response = client.patch(f"/orders/{order['id']}/ship")

        assert response.status_code == 409
        assert response.json() == {
            "detail": "Cannot ship an order in PENDING state",
            "error_type": "InvalidTransitionError",
        }

    def test_cancel_confirmed_restores_stock(self, client, user, make_product):
        product = make_product(stock=5)
        order = _create_order(client, user, product, 4)
        client.patch(f"/orders/{order['id']}/confirm")

        response = client.patch(f"/orders/{order['id']}/cancel")

        assert response.status_code == 200
        assert response.json()["status"] == "CANCELLED"
        assert _stock(product) == 5

    def test_unknown_order_is_404(self, client):
        response = client.patch("/orders/order-missing/confirm")
        assert response.status_code == 404


class TestReadEndpoints:
    def test_list_newest_first(self, client, user, make_product):
        product = make_product()
        first = _create_order(client, user, product, 1)
        second = _create_order(client, user, product, 2)

        response = client.get("/orders")

        assert [o["id"] for o in response.json()] == [second["id"], first["id"]]

    def test_filter_by_user(self, client, make_user, make_product):
        product = make_product()
        juan = make_user(name="Juan")
        maria = make_user(name="María")
        _create_order(client, juan, product, 1)
        mine = _create_order(client, maria, product, 1)

        by_query = client.get("/orders", params={"user_id": str(maria.id)}).json()
        by_path = client.get(f"/orders/user/{maria.id}").json()

        assert [o["id"] for o in by_query] == [mine["id"]]
        assert by_path == by_query

    def test_get_order(self, client, user, make_product):
        product = make_product()
        order = _create_order(client, user, product, 1)

        response = client.get(f"/orders/{order['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == order["id"]
