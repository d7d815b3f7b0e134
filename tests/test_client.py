"""Tests for WooCommerceClient transport behaviour.

All tests answer requests from an httpx.MockTransport, so no real HTTP
calls are made. Covers construction, authentication, error envelopes,
decode failures and the request counter.
"""

import base64
import json

import httpx
import pytest

from integrations.woocommerce import (
    Order,
    WooCommerceAPIError,
    WooCommerceAuthError,
    WooCommerceClient,
    WooCommerceConfig,
    WooCommerceConfigError,
    WooCommerceDecodeError,
    WooCommerceNotFoundError,
)


def _ok(body):
    return lambda request: httpx.Response(200, json=body)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"host": "", "consumer_key": "ck", "consumer_secret": "cs"}, "Host not provided"),
        ({"host": "https://shop", "consumer_key": "", "consumer_secret": "cs"}, "ConsumerKey not provided"),
        ({"host": "https://shop", "consumer_key": "ck", "consumer_secret": ""}, "ConsumerSecret not provided"),
    ],
)
def test_missing_parameters_fail_fast(kwargs, message):
    with pytest.raises(WooCommerceConfigError, match=message):
        WooCommerceClient(**kwargs)


def test_from_config():
    config = WooCommerceConfig(
        host="https://shop.example.com/",
        consumer_key="ck",
        consumer_secret="cs",
        api_path="wp-json/wc/v3",
        timeout=5,
    )
    client = WooCommerceClient.from_config(config)
    assert client.base_url == "https://shop.example.com/wp-json/wc/v3"
    assert client.timeout == 5


def test_from_empty_config_fails():
    with pytest.raises(WooCommerceConfigError):
        WooCommerceClient.from_config(WooCommerceConfig())
    with pytest.raises(WooCommerceConfigError):
        WooCommerceClient.from_config(None)


def test_context_manager_closes_http_client(make_client):
    client = make_client(_ok({"id": 1}))
    with client:
        client.get_order(1)
        assert client._client is not None
    assert client._client is None


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

def test_basic_auth_header_and_url(make_client, calls):
    client = make_client(_ok({"id": 5, "number": "5"}))

    order = client.get_order(5)

    assert order.id == 5
    request = calls[0]
    expected = base64.b64encode(b"ck_test:cs_test").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.method == "GET"
    assert str(request.url) == "https://shop.example.com/wp-json/wc/v2/orders/5"
    assert client.api_key == expected
    assert client.api_name == "WooCommerce"


def test_create_sends_body_without_unset_fields(make_client, calls):
    client = make_client(_ok({"id": 99, "status": "pending", "total": "10.00"}))

    created = client.create_order(Order(status="pending", customer_id=3, set_paid=False))

    assert created.id == 99
    assert created.total == 10.0
    assert calls[0].method == "POST"
    assert calls[0].url.path == "/wp-json/wc/v2/orders"
    assert json.loads(calls[0].content) == {"status": "pending", "customer_id": 3, "set_paid": False}


# ---------------------------------------------------------------------------
# Error envelopes
# ---------------------------------------------------------------------------

def test_error_envelope_message_is_promoted(make_client):
    envelope = {
        "code": "woocommerce_rest_shop_order_invalid_id",
        "message": "Invalid ID.",
        "data": {"status": 400, "params": {"id": "Invalid"}},
    }
    client = make_client(lambda request: httpx.Response(400, json=envelope))

    with pytest.raises(WooCommerceAPIError) as exc_info:
        client.get_order(1)

    error = exc_info.value
    assert str(error) == "Invalid ID."
    assert error.status_code == 400
    assert error.code == "woocommerce_rest_shop_order_invalid_id"
    assert error.response_body == envelope


def test_not_found_maps_to_typed_error(make_client):
    envelope = {"code": "rest_no_route", "message": "No route was found", "data": {"status": 404}}
    client = make_client(lambda request: httpx.Response(404, json=envelope))

    with pytest.raises(WooCommerceNotFoundError, match="No route was found"):
        client.get_product(1)


@pytest.mark.parametrize("status_code", [401, 403])
def test_auth_failures_map_to_auth_error(make_client, status_code):
    envelope = {"code": "woocommerce_rest_cannot_view", "message": "Sorry, you cannot list resources.", "data": {"status": status_code}}
    client = make_client(lambda request: httpx.Response(status_code, json=envelope))

    with pytest.raises(WooCommerceAuthError) as exc_info:
        client.get_order(1)
    assert exc_info.value.status_code == status_code


def test_error_without_envelope_gets_generic_message(make_client):
    client = make_client(lambda request: httpx.Response(500, text="<html>fatal</html>"))

    with pytest.raises(WooCommerceAPIError) as exc_info:
        client.get_order(1)

    assert str(exc_info.value) == "API error: 500 Internal Server Error"
    assert exc_info.value.response_body == "<html>fatal</html>"


def test_server_errors_are_not_retried(make_client, calls):
    client = make_client(lambda request: httpx.Response(503, json={"message": "Busy"}))

    with pytest.raises(WooCommerceAPIError, match="Busy"):
        client.get_order(1)
    assert len(calls) == 1


def test_transport_failure_is_wrapped(make_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)

    with pytest.raises(WooCommerceAPIError, match="Request error"):
        client.get_order(1)


def test_timeout_is_wrapped(make_client):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)

    with pytest.raises(WooCommerceAPIError, match="Request timeout"):
        client.get_order(1)


# ---------------------------------------------------------------------------
# Decode failures
# ---------------------------------------------------------------------------

def test_invalid_field_raises_decode_error_with_field_name(make_client):
    client = make_client(_ok({"id": 1, "price": "n/a"}))

    with pytest.raises(WooCommerceDecodeError) as exc_info:
        client.get_product(1)

    error = exc_info.value
    assert error.resource == "Product"
    assert error.fields == ["price"]
    assert "Product" in str(error)


def test_non_json_body_raises_decode_error(make_client):
    client = make_client(lambda request: httpx.Response(200, text="not json"))

    with pytest.raises(WooCommerceDecodeError, match="not valid JSON"):
        client.get_order(1)


# ---------------------------------------------------------------------------
# Request counter
# ---------------------------------------------------------------------------

def test_call_count_and_reset(make_client):
    responses = iter([
        httpx.Response(200, json={"id": 1}),
        httpx.Response(500, json={"message": "boom"}),
        httpx.Response(200, json={"id": 2}),
    ])
    client = make_client(lambda request: next(responses))

    assert client.api_call_count == 0
    client.get_order(1)
    with pytest.raises(WooCommerceAPIError):
        client.get_order(2)
    client.get_order(3)
    assert client.api_call_count == 3

    client.api_reset()
    assert client.api_call_count == 0


def test_clients_are_independent(make_client):
    first = make_client(_ok({"id": 1}))
    second = make_client(_ok({"id": 2}))

    first.get_order(1)
    first.get_order(1)
    second.get_order(2)

    assert first.api_call_count == 2
    assert second.api_call_count == 1
