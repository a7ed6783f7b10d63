"""Service registry load test scenarios.

Lookups are on the hot path of every cross-service call (token validation,
product lookups, cart clearing), so they get their own user class.
"""

from locust import HttpUser, between, tag, task

from loadtests.helpers.response import extract_error_detail

SERVICES = ["auth", "product", "cart", "order"]


class RegistryUser(HttpUser):
    """Looks services up and browses through the proxy."""

    wait_time = between(0.2, 1)
    weight = 2

    @tag("registry")
    @task(5)
    def lookup(self):
        for service in SERVICES:
            with self.client.get(
                f"/service/{service}",
                catch_response=True,
                name="GET /service/{name}",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Lookup of {service} failed: {resp.status_code} - {extract_error_detail(resp)}")

    @tag("registry")
    @task(1)
    def list_services(self):
        self.client.get("/services", name="GET /services")

    @tag("registry", "proxy")
    @task(2)
    def proxied_browse(self):
        with self.client.post(
            "/proxy/product/list",
            json={"method": "GET", "data": {"limit": 10}},
            catch_response=True,
            name="POST /proxy/product/list",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Proxied browse failed: {resp.status_code} - {extract_error_detail(resp)}")
