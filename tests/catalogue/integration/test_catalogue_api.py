"""Integration tests for product and user endpoints."""

import pytest
from fastapi.testclient import TestClient
from protean import current_domain
from storefront.api.application import create_app
from storefront.catalogue.product import Product


@pytest.fixture()
def client():
    return TestClient(create_app(seed=False))


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestProductEndpoints:
    def test_create_product(self, client):
        response = client.post("/products", json={"name": "Sony WH-1000XM5", "price": 399.0, "stock": 30})
        assert response.status_code == 201
        data = response.json()
        assert data["stock"] == 30

        product = current_domain.repository_for(Product).get(data["id"])
        assert product.name == "Sony WH-1000XM5"

    def test_negative_price_rejected(self, client):
        response = client.post("/products", json={"name": "Broken", "price": -1.0})
        assert response.status_code == 422

    def test_list_products(self, client, make_product):
        make_product(name="First")
        make_product(name="Second")

        response = client.get("/products")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["First", "Second"]

    def test_get_product(self, client, make_product):
        product = make_product(name="Monitor", price=699.0, stock=10)

        response = client.get(f"/products/{product.id}")

        assert response.status_code == 200
        assert response.json()["price"] == 699.0

    def test_unknown_product_is_404(self, client):
        response = client.get("/products/prod-missing")
        assert response.status_code == 404
        assert response.json()["error_type"] == "ProductNotFoundError"


class TestUserEndpoints:
    def test_create_and_get_user(self, client):
        response = client.post("/users", json={"name": "María García", "email": "maria@example.com"})
        assert response.status_code == 201
        user_id = response.json()["id"]

        response = client.get(f"/users/{user_id}")
        assert response.status_code == 200
        assert response.json()["email"] == "maria@example.com"

    def test_list_users(self, client, make_user):
        make_user(name="Juan")
        response = client.get("/users")
        assert [u["name"] for u in response.json()] == ["Juan"]

    def test_duplicate_email_is_400(self, client):
        client.post("/users", json={"name": "Juan", "email": "juan@example.com"})
        response = client.post("/users", json={"name": "Juan Again", "email": "juan@example.com"})
        assert response.status_code == 400

    def test_unknown_user_is_404(self, client):
        response = client.get("/users/user-missing")
        assert response.status_code == 404
