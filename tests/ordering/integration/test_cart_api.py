"""Integration tests for cart endpoints."""

import pytest
from fastapi.testclient import TestClient
from storefront.api.application import create_app


@pytest.fixture()
def client():
    return TestClient(create_app(seed=False))


@pytest.fixture()
def cart_id(client):
    response = client.post("/carts", json={})
    assert response.status_code == 201
    return response.json()["id"]


class TestCartEndpoints:
    def test_new_cart_is_empty(self, client, cart_id):
        response = client.get(f"/carts/{cart_id}")
        assert response.status_code == 200
        assert response.json()["lines"] == []
        assert response.json()["total"] == 0

    def test_add_twice_gives_one_line(self, client, cart_id, make_product):
        product = make_product(price=10.0)
        client.post(f"/carts/{cart_id}/items", json={"product_id": str(product.id)})
        response = client.post(f"/carts/{cart_id}/items", json={"product_id": str(product.id)})

        lines = response.json()["lines"]
        assert len(lines) == 1
        assert lines[0]["quantity"] == 2
        assert response.json()["total"] == 20.0

    def test_increment_changes_quantity_and_total(self, client, cart_id, make_product):
        five = make_product(name="Five", price=5.0)
        ten = make_product(name="Ten", price=10.0)
        client.post(f"/carts/{cart_id}/items", json={"product_id": str(five.id)})
        client.post(f"/carts/{cart_id}/items", json={"product_id": str(ten.id)})

        response = client.put(f"/carts/{cart_id}/items/{ten.id}", json={"quantity": 3})

        assert response.status_code == 200
        line = next(line for line in response.json()["lines"] if line["product_id"] == str(ten.id))
        assert line["quantity"] == 3
        assert response.json()["total"] == 35.0

    def test_zero_quantity_is_400(self, client, cart_id, make_product):
        product = make_product()
        client.post(f"/carts/{cart_id}/items", json={"product_id": str(product.id)})

        response = client.put(f"/carts/{cart_id}/items/{product.id}", json={"quantity": 0})

        assert response.status_code == 400
        assert response.json()["error_type"] == "InvalidQuantityError"

    def test_out_of_stock_is_400(self, client, cart_id, make_product):
        product = make_product(stock=0)
        response = client.post(f"/carts/{cart_id}/items", json={"product_id": str(product.id)})
        assert response.status_code == 400
        assert response.json()["error_type"] == "OutOfStockError"

    def test_remove_and_clear(self, client, cart_id, make_product):
        a = make_product(name="A")
        b = make_product(name="B")
        client.post(f"/carts/{cart_id}/items", json={"product_id": str(a.id)})
        client.post(f"/carts/{cart_id}/items", json={"product_id": str(b.id)})

        response = client.delete(f"/carts/{cart_id}/items/{a.id}")
        assert [line["product_id"] for line in response.json()["lines"]] == [str(b.id)]

        response = client.delete(f"/carts/{cart_id}/items")
        assert response.json()["lines"] == []

    def test_unknown_cart_is_404(self, client):
        response = client.get("/carts/cart-missing")
        assert response.status_code == 404


class TestCheckoutEndpoint:
    def test_checkout_then_confirm(self, client, cart_id, make_user, make_product):
        user = make_user()
        product = make_product(price=10.0, stock=5)
        client.post(f"/carts/{cart_id}/items", json={"product_id": str(product.id), "quantity": 3})

        response = client.post(f"/carts/{cart_id}/checkout", json={"user_id": str(user.id)})

        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "PENDING"
        assert order["total"] == 30.0
        assert client.get(f"/carts/{cart_id}").json()["status"] == "Checked_Out"

        response = client.patch(f"/orders/{order['id']}/confirm")
        assert response.json()["status"] == "CONFIRMED"
        assert client.get(f"/products/{product.id}").json()["stock"] == 2

    def test_empty_cart_checkout_is_400(self, client, cart_id, make_user):
        user = make_user()
        response = client.post(f"/carts/{cart_id}/checkout", json={"user_id": str(user.id)})
        assert response.status_code == 400
        assert response.json()["error_type"] == "EmptyCartError"
