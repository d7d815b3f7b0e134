"""Tests for the scalar codec: meta values, numeric strings and timestamps.

Values are fed through the pydantic models the way response bodies are,
so these cover both the codec functions and their wiring into models.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from integrations.woocommerce.codec import WIRE_CONTEXT, Float64String, Int64String, decode_meta_value
from integrations.woocommerce.models import MetaData, Order, Product, ProductVariation


# ---------------------------------------------------------------------------
# Meta-data values
# ---------------------------------------------------------------------------

def test_meta_value_string_loses_quotes():
    assert decode_meta_value("hello") == "hello"


def test_meta_value_number_is_rendered_as_text():
    assert decode_meta_value(42) == "42"


def test_meta_value_object_is_rendered_as_compact_json():
    assert decode_meta_value({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'


def test_meta_value_null_and_bool():
    assert decode_meta_value(None) == "null"
    assert decode_meta_value(True) == "true"


def test_meta_value_keeps_escaped_quotes():
    # Only the outer quotes are trimmed; the body is not unescaped
    assert decode_meta_value('say "hi"') == 'say \\"hi\\"'


def test_meta_data_entry_decodes_value():
    entry = MetaData.model_validate({"id": 7, "key": "_color", "value": "red"})
    assert entry.id == 7
    assert entry.key == "_color"
    assert entry.value == "red"

    entry = MetaData.model_validate({"id": 8, "key": "_count", "value": 42})
    assert entry.value == "42"


def test_meta_value_renders_parsed_text_not_raw_bytes():
    # The body was already parsed, so JSON escapes and number spellings are gone
    assert decode_meta_value("\u00e9") == "\u00e9"
    assert decode_meta_value("a/b") == "a/b"
    assert decode_meta_value(1e5) == "100000.0"


def test_meta_value_built_in_code_is_kept_verbatim():
    value = 'say "hi"\nC:\\tmp'

    entry = MetaData(key="note", value=value)

    assert entry.value == value
    assert entry.model_dump(mode="json")["value"] == value


def test_meta_value_from_response_is_trimmed():
    entry = MetaData.model_validate(
        {"key": "note", "value": 'say "hi"'},
        context={WIRE_CONTEXT: True},
    )
    assert entry.value == 'say \\"hi\\"'


def test_nested_meta_data_on_order_line_items():
    order = Order.model_validate({
        "id": 1,
        "line_items": [{"id": 10, "meta_data": [{"id": 1, "key": "size", "value": "M"}]}],
    })
    assert order.line_items[0].meta_data[0].value == "M"


# ---------------------------------------------------------------------------
# Numeric strings
# ---------------------------------------------------------------------------

def test_float_string_round_trip_keeps_text():
    value = Float64String.decode("12.50")
    assert value == 12.5
    assert Float64String.encode(value) == "12.50"


def test_price_round_trips_through_model():
    product = Product.model_validate({"id": 1, "price": "12.50"})
    assert product.price == 12.5
    assert product.model_dump(mode="json", exclude_none=True) == {"id": 1, "price": "12.50"}


def test_bare_number_is_accepted():
    product = Product.model_validate({"regular_price": 19.99, "weight": 2})
    assert product.regular_price == 19.99
    assert product.weight == 2.0
    dumped = product.model_dump(mode="json", exclude_none=True)
    assert dumped["regular_price"] == "19.99"
    assert dumped["weight"] == "2"


def test_blank_numeric_string_is_none():
    product = Product.model_validate({"sale_price": ""})
    assert product.sale_price is None


def test_non_numeric_string_fails():
    with pytest.raises(ValidationError) as exc_info:
        Product.model_validate({"price": "twelve"})
    assert exc_info.value.errors()[0]["loc"] == ("price",)


def test_assigned_plain_float_still_encodes():
    assert Float64String.encode(9.5) == "9.5"


def test_int_string_accepts_quoted_and_bare():
    assert Int64String.decode("7") == 7
    assert Int64String.decode(7) == 7
    assert Int64String.decode("") is None

    variation = ProductVariation.model_validate({"stock_quantity": "15"})
    assert variation.stock_quantity == 15
    assert variation.model_dump(mode="json", exclude_none=True) == {"stock_quantity": 15}


def test_int_string_rejects_fractions_and_text():
    with pytest.raises(ValidationError):
        ProductVariation.model_validate({"stock_quantity": "1.5"})
    with pytest.raises(ValidationError):
        ProductVariation.model_validate({"stock_quantity": "many"})


def test_bool_is_not_a_number():
    with pytest.raises(ValidationError):
        Product.model_validate({"price": True})


# ---------------------------------------------------------------------------
# Timestamps and mixed-type fields
# ---------------------------------------------------------------------------

def test_datetime_string_decodes_and_encodes():
    order = Order.model_validate({"date_created": "2017-03-22T16:28:02", "date_paid": ""})
    assert order.date_created == datetime(2017, 3, 22, 16, 28, 2)
    assert order.date_paid is None
    assert order.model_dump(mode="json", exclude_none=True) == {"date_created": "2017-03-22T16:28:02"}


def test_datetime_string_with_zulu_suffix():
    order = Order.model_validate({"date_created_gmt": "2017-03-22T16:28:02Z"})
    assert order.date_created_gmt.year == 2017
    assert order.model_dump(mode="json", exclude_none=True) == {"date_created_gmt": "2017-03-22T16:28:02"}


def test_variation_manage_stock_accepts_parent():
    assert ProductVariation.model_validate({"manage_stock": "parent"}).manage_stock == "parent"
    assert ProductVariation.model_validate({"manage_stock": True}).manage_stock is True


def test_order_totals_decode():
    order = Order.model_validate({"total": "29.35", "total_tax": "1.35", "prices_include_tax": False})
    assert order.total == 29.35
    assert order.total_tax == 1.35
