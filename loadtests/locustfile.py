"""Storefront Load Testing: Locust entry point.

Discovers all user classes from the scenarios package. Point ``--host`` at the
all-in-one app (``uvicorn app:app --app-dir src --port 5000``), which serves the
registry and every service on one port.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py --host http://localhost:5000

    # Shoppers only:
    locust -f loadtests/locustfile.py ShopperUser MerchandiserUser

    # Registry hot path only:
    locust -f loadtests/locustfile.py --tags registry

    # Headless (CI mode):
    locust -f loadtests/locustfile.py --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.registry import RegistryUser  # noqa: F401
from loadtests.scenarios.storefront import MerchandiserUser, ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Fires globally for all scenarios, no per-task wiring needed. Extracts the
    API error body so you see "Invalid credentials" instead of just "400".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker and the registered services when the load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    try:
        resp = requests.get(f"{environment.host}/services", timeout=5)
        names = [s["name"] for s in resp.json().get("services", [])]
        print(f"[LOADTEST] Registered services: {', '.join(names) or '(none)'}")
    except (requests.RequestException, ValueError) as e:
        print(f"[LOADTEST] Could not reach the service registry: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(**_kwargs):
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}\n")
