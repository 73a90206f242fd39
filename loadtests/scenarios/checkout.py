"""Cart-to-order journey.

Registers a user, stocks a few products, builds a cart, checks it out and
drives the resulting order to a terminal status: shipped most of the time,
cancelled after confirmation otherwise.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, product_data, user_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState


class CheckoutJourney(SequentialTaskSet):
    """Create User + Products -> Cart -> Add Items -> Checkout -> Confirm -> Ship or Cancel."""

    def on_start(self):
        self.state = CheckoutState()

    @task
    def register_user(self):
        with self.client.post("/users", json=user_data(), catch_response=True, name="POST /users") as resp:
            if resp.status_code == 201:
                self.state.user_id = resp.json()["id"]
            else:
                resp.failure(f"Register user failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_products(self):
        for _ in range(random.randint(1, 3)):
            with self.client.post(
                "/products", json=product_data(), catch_response=True, name="POST /products"
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["id"])
                else:
                    resp.failure(f"Add product failed: {resp.status_code} {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def create_cart(self):
        with self.client.post(
            "/carts", json={"user_id": self.state.user_id}, catch_response=True, name="POST /carts"
        ) as resp:
            if resp.status_code == 201:
                self.state.cart_id = resp.json()["id"]
            else:
                resp.failure(f"Create cart failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def fill_cart(self):
        for product_id in self.state.product_ids:
            self.client.post(
                f"/carts/{self.state.cart_id}/items",
                json=cart_item_data(product_id),
                name="POST /carts/{id}/items",
            )

    @task
    def checkout(self):
        with self.client.post(
            f"/carts/{self.state.cart_id}/checkout",
            json={},
            catch_response=True,
            name="POST /carts/{id}/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
                self.state.current_status = "PENDING"
            else:
                resp.failure(f"Checkout failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def confirm(self):
        with self.client.patch(
            f"/orders/{self.state.order_id}/confirm",
            catch_response=True,
            name="PATCH /orders/{id}/confirm",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "CONFIRMED"
            else:
                resp.failure(f"Confirm failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def finish(self):
        action = "ship" if random.random() < 0.8 else "cancel"
        with self.client.patch(
            f"/orders/{self.state.order_id}/{action}",
            catch_response=True,
            name=f"PATCH /orders/{{id}}/{action}",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = resp.json()["status"]
            else:
                resp.failure(f"{action} failed: {resp.status_code} {extract_error_detail(resp)}")
        self.interrupt()


class CheckoutUser(HttpUser):
    tasks = [CheckoutJourney]
    wait_time = between(0.5, 2)
