"""Shared fixtures: a WooCommerceClient wired to an in-memory httpx transport."""

import httpx
import pytest

from integrations.woocommerce import WooCommerceClient

HOST = "https://shop.example.com"
CONSUMER_KEY = "ck_test"
CONSUMER_SECRET = "cs_test"


@pytest.fixture
def calls():
    """Every request seen by the mock transport, in order"""
    return []


@pytest.fixture
def make_client(calls):
    """Build a client whose requests are answered by `handler(request)`"""
    created = []

    def _make(handler):
        def _record(request):
            calls.append(request)
            return handler(request)

        client = WooCommerceClient(
            host=HOST,
            consumer_key=CONSUMER_KEY,
            consumer_secret=CONSUMER_SECRET,
            transport=httpx.MockTransport(_record),
        )
        created.append(client)
        return client

    yield _make

    for client in created:
        client.close()
