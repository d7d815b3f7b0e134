"""
WooCommerce Scalar Codec
Normalizes fields whose JSON encoding is unstable across WooCommerce versions.

WooCommerce sends prices and totals as quoted strings ("12.50"), stock
quantities as bare or quoted integers, blank strings where a value is
missing, and meta-data values of any JSON type. These pydantic-aware types
decode every accepted wire shape into one in-memory representation and
encode back to the shape the API expects.
"""

import json
import math
from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator, PlainSerializer, ValidationInfo
from pydantic_core import core_schema

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Validation context key set while decoding response bodies
WIRE_CONTEXT = "wire"


def _format_number(value: Any) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


def decode_meta_value(value: Any) -> str:
    """
    Render a meta-data value of any JSON type as a plain string.

    JSON strings lose exactly one leading and one trailing quote; escape
    sequences inside the string are left as they are. Any other token is
    rendered as its compact JSON text, so 42 becomes "42".

    The text is rendered from the already parsed value, not taken from the
    response bytes, so escapes such as "\\u00e9" or "\\/" come out as the
    characters they stand for and 1e5 comes out as "100000.0".
    """
    raw = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    if isinstance(value, str):
        return raw[1:-1]
    return raw


class Float64String(float):
    """
    Float decoded from a quoted or bare JSON number.

    Keeps the text it was decoded from so that "12.50" encodes back
    as "12.50" rather than "12.5".
    """

    def __new__(cls, value: float, text: str = None):
        obj = super().__new__(cls, value)
        obj.text = text if text is not None else _format_number(value)
        return obj

    @classmethod
    def decode(cls, value: Any) -> Optional["Float64String"]:
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"expected a numeric string, got {value!r}")
        if isinstance(value, (int, float)):
            return cls(value)
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                number = float(text)
            except ValueError:
                raise ValueError(f"{value!r} is not a numeric string")
            if not math.isfinite(number):
                raise ValueError(f"{value!r} is not a numeric string")
            return cls(number, text)
        raise ValueError(f"expected a numeric string, got {type(value).__name__}")

    @staticmethod
    def encode(value: float) -> str:
        return getattr(value, "text", None) or _format_number(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return core_schema.no_info_plain_validator_function(
            cls.decode,
            serialization=core_schema.plain_serializer_function_ser_schema(cls.encode, info_arg=False),
        )


class Int64String(int):
    """Integer decoded from a quoted or bare JSON number; encodes as a JSON integer."""

    @classmethod
    def decode(cls, value: Any) -> Optional["Int64String"]:
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"expected an integer string, got {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"{value!r} is not an integer")
            return cls(int(value))
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                return cls(int(text))
            except ValueError:
                raise ValueError(f"{value!r} is not an integer string")
        raise ValueError(f"expected an integer string, got {type(value).__name__}")

    @staticmethod
    def encode(value: int) -> int:
        return int(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return core_schema.no_info_plain_validator_function(
            cls.decode,
            serialization=core_schema.plain_serializer_function_ser_schema(cls.encode, info_arg=False),
        )


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def format_datetime(value: datetime) -> str:
    """Render a datetime in the fixed format the API expects"""
    return value.strftime(DATE_FORMAT)


# "2017-03-22T16:28:02" or "2017-03-22T16:28:02Z"; blank strings become None
DateTimeString = Annotated[
    Optional[datetime],
    BeforeValidator(_blank_to_none),
    PlainSerializer(format_datetime, return_type=str, when_used="unless-none"),
]

def _meta_value(value: Any, info: ValidationInfo) -> str:
    # Strings built in code are sent as they are
    if isinstance(value, str) and not (info.context or {}).get(WIRE_CONTEXT):
        return value
    return decode_meta_value(value)


MetaValue = Annotated[str, BeforeValidator(_meta_value)]
