"""Storefront load testing: Locust entry point.

Run specific scenarios with Locust's class selection.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Checkout journeys only:
    locust -f loadtests/locustfile.py CheckoutUser

    # Stock contention, headless (CI mode):
    locust -f loadtests/locustfile.py StockContentionUser --headless \
           -u 50 -r 10 -t 120s --csv=results/loadtest
"""

import logging
import time

from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.checkout import CheckoutUser  # noqa: F401
from loadtests.scenarios.contention import StockContentionUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Expected rejections (409 on a contended confirm) are reported by the
    scenario itself and skipped here.
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400 and response.status_code != 409:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Check that no product was oversold once the run is over."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if not environment.host:
        return

    import requests

    try:
        products = requests.get(f"{environment.host}/products", timeout=5).json()
    except requests.RequestException as e:
        print(f"[LOADTEST] Could not fetch products: {e}\n")
        return

    oversold = [p for p in products if p["stock"] < 0]
    print(f"[LOADTEST] Products checked: {len(products)}, oversold: {len(oversold)}\n")
