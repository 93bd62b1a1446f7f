"""Type inspection and coercion of JSON values to Python scalars."""

from __future__ import annotations

import math
import re
from typing import Optional

from jsonvalue.serialize import Flag
from jsonvalue.value import JsonType, JsonValue, to_json_string

__all__ = [
    "type_of",
    "is_type",
    "get_boolean",
    "get_int",
    "get_int64",
    "get_double",
    "get_string",
    "get_string_len",
]

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_DECIMAL = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
)
_SPECIAL = re.compile(r"\s*[+-]?(?:inf(?:inity)?|nan)", re.IGNORECASE)
_HEX = re.compile(
    r"\s*[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
)


def _clamp(number: int, low: int, high: int) -> int:
    return max(low, min(high, number))


def _parse_int64(text: str) -> Optional[int]:
    """Parse a leading decimal integer, clamped to the 64-bit range."""
    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    return _clamp(int(match.group(1)), _INT64_MIN, _INT64_MAX)


def _truncate(number: float, low: int, high: int) -> int:
    if math.isnan(number):
        return 0
    if math.isinf(number):
        return high if number > 0 else low
    return _clamp(int(number), low, high)


def _parse_double(text: str) -> float:
    """Parse the whole string as a number; anything else, or an overflow, gives 0.0."""
    if _SPECIAL.fullmatch(text):
        return float(text.strip())
    if _HEX.fullmatch(text):
        result = float.fromhex(text.strip())
    elif _DECIMAL.fullmatch(text):
        result = float(text.strip())
    else:
        return 0.0
    if math.isinf(result):
        return 0.0
    return result


def type_of(value: Optional[JsonValue]) -> JsonType:
    """Return the kind of a value; None is ``JsonType.NULL``."""
    if value is None:
        return JsonType.NULL
    return value.json_type


def is_type(value: Optional[JsonValue], json_type: JsonType) -> bool:
    """Tell whether a value is of the given kind."""
    return type_of(value) == json_type


def get_boolean(value: Optional[JsonValue]) -> bool:
    """Coerce to a boolean: non-zero numbers and non-empty strings are true."""
    kind = type_of(value)
    if kind in (JsonType.BOOLEAN, JsonType.INT, JsonType.DOUBLE):
        return value.payload != 0
    if kind is JsonType.STRING:
        return len(value.payload) != 0
    return False


def get_int(value: Optional[JsonValue]) -> int:
    """Coerce to a 32-bit integer, saturating values outside its range."""
    kind = type_of(value)
    if kind is JsonType.STRING:
        parsed = _parse_int64(value.payload)
        if parsed is None:
            return 0
        return _clamp(parsed, _INT32_MIN, _INT32_MAX)
    if kind is JsonType.INT:
        return _clamp(value.payload, _INT32_MIN, _INT32_MAX)
    if kind is JsonType.DOUBLE:
        return _truncate(value.payload, _INT32_MIN, _INT32_MAX)
    if kind is JsonType.BOOLEAN:
        return int(value.payload)
    return 0


def get_int64(value: Optional[JsonValue]) -> int:
    """Coerce to a 64-bit integer."""
    kind = type_of(value)
    if kind is JsonType.INT:
        return value.payload
    if kind is JsonType.DOUBLE:
        return _truncate(value.payload, _INT64_MIN, _INT64_MAX)
    if kind is JsonType.BOOLEAN:
        return int(value.payload)
    if kind is JsonType.STRING:
        parsed = _parse_int64(value.payload)
        return 0 if parsed is None else parsed
    return 0


def get_double(value: Optional[JsonValue]) -> float:
    """Coerce to a float; strings must be wholly numeric, otherwise 0.0."""
    kind = type_of(value)
    if kind is JsonType.DOUBLE:
        return value.payload
    if kind in (JsonType.INT, JsonType.BOOLEAN):
        return float(value.payload)
    if kind is JsonType.STRING:
        return _parse_double(value.payload)
    return 0.0


def get_string(value: Optional[JsonValue]) -> Optional[str]:
    """Return a string's text, or the JSON text of any other value; None for null."""
    if value is None:
        return None
    if value.json_type is JsonType.STRING:
        return value.payload
    return to_json_string(value, Flag.SPACED)


def get_string_len(value: Optional[JsonValue]) -> int:
    """Length of a string value; 0 for anything else."""
    if type_of(value) is JsonType.STRING:
        return len(value.payload)
    return 0