"""Stock contention scenario.

Every simulated user places and confirms orders against one scarce product
created at test start. Confirmations beyond the available stock must come
back as 409 InsufficientStockError; the product's stock must never go below
zero. Cancelling some confirmed orders returns stock to the pool.
"""

import random

from locust import HttpUser, between, events, task

from loadtests.data_generators import order_data, product_data, user_data
from loadtests.helpers.response import error_type, extract_error_detail
from loadtests.helpers.state import ContentionState

_shared = ContentionState()


@events.test_start.add_listener
def create_scarce_product(environment, **_kwargs):
    import requests

    if not environment.host:
        return
    resp = requests.post(f"{environment.host}/products", json=product_data(stock=25), timeout=5)
    resp.raise_for_status()
    _shared.product_id = resp.json()["id"]


class StockContentionUser(HttpUser):
    wait_time = between(0.1, 0.5)

    def on_start(self):
        resp = self.client.post("/users", json=user_data(), name="POST /users")
        self.user_id = resp.json()["id"]

    @task(4)
    def place_and_confirm(self):
        resp = self.client.post(
            "/orders",
            json=order_data(self.user_id, _shared.product_id, random.randint(1, 3)),
            name="POST /orders",
        )
        if resp.status_code != 201:
            return
        order_id = resp.json()["id"]

        with self.client.patch(
            f"/orders/{order_id}/confirm",
            catch_response=True,
            name="PATCH /orders/{id}/confirm",
        ) as confirm:
            if confirm.status_code == 200:
                _shared.confirmed += 1
            elif confirm.status_code == 409 and error_type(confirm) == "InsufficientStockError":
                _shared.rejected += 1
                confirm.success()
            else:
                confirm.failure(f"Confirm failed: {confirm.status_code} {extract_error_detail(confirm)}")
                return

        if confirm.status_code == 200 and random.random() < 0.3:
            self.client.patch(f"/orders/{order_id}/cancel", name="PATCH /orders/{id}/cancel")

    @task(1)
    def check_stock(self):
        with self.client.get(
            f"/products/{_shared.product_id}",
            catch_response=True,
            name="GET /products/{id}",
        ) as resp:
            if resp.status_code == 200 and resp.json()["stock"] < 0:
                resp.failure(f"Stock went negative: {resp.json()['stock']}")
