"""Storefront load test scenarios.

Stateful SequentialTaskSet journeys: a merchandiser stocking the catalogue and
a shopper going from sign-up to a placed (and sometimes cancelled) order.
Steps execute in order; each depends on the previous step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    payment_method,
    product_data,
    product_update_data,
    registration_data,
    shipping_address,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import MerchandiserState, ShopperState


class MerchandiserJourney(SequentialTaskSet):
    """Register as admin -> add products -> reprice one -> discontinue one."""

    def on_start(self):
        self.state = MerchandiserState()

    @task
    def register(self):
        with self.client.post(
            "/api/auth/register",
            json=registration_data(role="admin"),
            catch_response=True,
            name="POST /api/auth/register (admin)",
        ) as resp:
            if resp.status_code == 201:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Admin registration failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_products(self):
        for _ in range(3):
            with self.client.post(
                "/api/products",
                json=product_data(),
                headers=self.state.headers,
                catch_response=True,
                name="POST /api/products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["id"])
                else:
                    resp.failure(f"Add product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def reprice(self):
        if not self.state.product_ids:
            self.interrupt()
        with self.client.put(
            f"/api/products/{random.choice(self.state.product_ids)}",
            json=product_update_data(),
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Reprice failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def discontinue(self):
        # Keep most of the catalogue on sale for shoppers
        if len(self.state.product_ids) < 3 or random.random() > 0.2:
            self.interrupt()
        product_id = self.state.product_ids.pop()
        with self.client.delete(
            f"/api/products/{product_id}",
            headers=self.state.headers,
            catch_response=True,
            name="DELETE /api/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Discontinue failed: {resp.status_code} - {extract_error_detail(resp)}")
        self.interrupt()


class ShopperJourney(SequentialTaskSet):
    """Register -> Login -> Browse -> Fill cart -> Order -> Review -> maybe Cancel."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        payload = registration_data()
        self.state.email = payload["email"]
        self.state.password = payload["password"]
        with self.client.post(
            "/api/auth/register",
            json=payload,
            catch_response=True,
            name="POST /api/auth/register",
        ) as resp:
            if resp.status_code == 201:
                self.state.user_id = resp.json()["user"]["id"]
            else:
                resp.failure(f"Registration failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def login(self):
        with self.client.post(
            "/api/auth/login",
            json={"email": self.state.email, "password": self.state.password},
            catch_response=True,
            name="POST /api/auth/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Login failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get(
            "/api/products",
            params={"limit": 20, "sort": random.choice(["price", "-price", "name", "-created_at"])},
            catch_response=True,
            name="GET /api/products",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
            self.state.product_ids = [p["id"] for p in resp.json()["products"]]

        if not self.state.product_ids:
            # Nothing on sale yet; start over once merchandisers caught up
            self.interrupt()

        self.client.get(
            f"/api/products/{random.choice(self.state.product_ids)}",
            name="GET /api/products/{id}",
        )

    @task
    def fill_cart(self):
        for product_id in random.sample(self.state.product_ids, k=min(3, len(self.state.product_ids))):
            with self.client.post(
                "/api/cart/items",
                json={"product_id": product_id, "quantity": random.randint(1, 3)},
                headers=self.state.headers,
                catch_response=True,
                name="POST /api/cart/items",
            ) as resp:
                if resp.status_code == 201:
                    cart = resp.json()
                    self.state.cart_item_ids = [i["id"] for i in cart["items"]]
                    self.state.cart_revision = cart["revision"]
                elif resp.status_code == 404:
                    # Discontinued between browse and add
                    resp.success()
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def adjust_cart(self):
        if not self.state.cart_item_ids:
            self.interrupt()
        with self.client.put(
            f"/api/cart/items/{self.state.cart_item_ids[0]}",
            json={"quantity": random.randint(1, 5), "expected_revision": self.state.cart_revision},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/cart/items/{id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.cart_revision = resp.json()["revision"]
            else:
                resp.failure(f"Update cart item failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def place_order(self):
        with self.client.post("/api/cart/get", headers=self.state.headers, name="POST /api/cart/get") as resp:
            lines = [{"product_id": i["product_id"], "quantity": i["quantity"]} for i in resp.json()["items"]]

        with self.client.post(
            "/api/orders",
            json={"items": lines, "shipping_address": shipping_address(), "payment_method": payment_method()},
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def review_orders(self):
        self.client.get("/api/orders", headers=self.state.headers, name="GET /api/orders")
        self.client.get(f"/api/orders/{self.state.order_id}", headers=self.state.headers, name="GET /api/orders/{id}")

    @task
    def maybe_cancel(self):
        if random.random() < 0.3:
            with self.client.patch(
                f"/api/orders/{self.state.order_id}/cancel",
                headers=self.state.headers,
                catch_response=True,
                name="PATCH /api/orders/{id}/cancel",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Cancel failed: {resp.status_code} - {extract_error_detail(resp)}")
        self.interrupt()


class MerchandiserUser(HttpUser):
    """Keeps the catalogue stocked. Run a few of these alongside shoppers."""

    tasks = [MerchandiserJourney]
    wait_time = between(2, 5)
    weight = 1


class ShopperUser(HttpUser):
    """Simulates a shopper placing orders."""

    tasks = [ShopperJourney]
    wait_time = between(1, 3)
    weight = 5
