"""JSON values: construction, containers and serialization."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator
from typing import Any, Optional

from jsonvalue.serialize import Flag, escape_string, format_double, indent

__all__ = [
    "JsonType",
    "JsonValue",
    "Serializer",
    "ReleaseHook",
    "new_object",
    "new_array",
    "new_boolean",
    "new_int",
    "new_int64",
    "new_double",
    "new_double_s",
    "new_string",
    "new_string_len",
    "to_json_string",
    "userdata_to_json_string",
]

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

Serializer = Callable[["JsonValue", int, Flag], str]
ReleaseHook = Callable[["JsonValue", Any], None]


class JsonType(enum.IntEnum):
    """Kinds of JSON value. ``NULL`` stands for ``None``."""

    NULL = 0
    BOOLEAN = 1
    DOUBLE = 2
    INT = 3
    OBJECT = 4
    ARRAY = 5
    STRING = 6


def _render(value: Optional["JsonValue"], level: int, flags: Flag) -> str:
    if value is None:
        return "null"
    return value._serializer(value, level, flags)


def _container_to_json(
    entries: Iterator[str], opening: str, closing: str, level: int, flags: Flag
) -> str:
    parts = [opening]
    if flags & Flag.PRETTY:
        parts.append("\n")
    had_children = False
    for entry in entries:
        if had_children:
            parts.append(",")
            if flags & Flag.PRETTY:
                parts.append("\n")
        had_children = True
        if flags & Flag.SPACED:
            parts.append(" ")
        parts.append(indent(level + 1, flags))
        parts.append(entry)
    if flags & Flag.PRETTY:
        if had_children:
            parts.append("\n")
        parts.append(indent(level, flags))
    parts.append(" " + closing if flags & Flag.SPACED else closing)
    return "".join(parts)


def _object_to_json(value: "JsonValue", level: int, flags: Flag) -> str:
    separator = '": ' if flags & Flag.SPACED else '":'
    entries = (
        '"' + escape_string(key) + separator + _render(child, level + 1, flags)
        for key, child in value._data.items()
    )
    return _container_to_json(entries, "{", "}", level, flags)


def _array_to_json(value: "JsonValue", level: int, flags: Flag) -> str:
    entries = (_render(child, level + 1, flags) for child in value._data)
    return _container_to_json(entries, "[", "]", level, flags)


def _boolean_to_json(value: "JsonValue", level: int, flags: Flag) -> str:
    return "true" if value._data else "false"


def _int_to_json(value: "JsonValue", level: int, flags: Flag) -> str:
    return str(value._data)


def _double_to_json(value: "JsonValue", level: int, flags: Flag) -> str:
    return format_double(value._data, flags)


def _string_to_json(value: "JsonValue", level: int, flags: Flag) -> str:
    return '"' + escape_string(value._data) + '"'


_DEFAULT_SERIALIZERS: dict[JsonType, Serializer] = {
    JsonType.OBJECT: _object_to_json,
    JsonType.ARRAY: _array_to_json,
    JsonType.BOOLEAN: _boolean_to_json,
    JsonType.INT: _int_to_json,
    JsonType.DOUBLE: _double_to_json,
    JsonType.STRING: _string_to_json,
}


def userdata_to_json_string(value: "JsonValue", level: int = 0, flags: int = Flag.PLAIN) -> str:
    """Serializer that writes the value's userdata text as-is."""
    return str(value.userdata)


class JsonValue:
    """A JSON value of any type other than null (which is ``None``)."""

    __slots__ = ("_type", "_data", "_serializer", "_userdata", "_on_release")

    def __init__(self, json_type: JsonType, data: Any) -> None:
        if json_type is JsonType.NULL:
            raise ValueError("null is represented by None, not a JsonValue")
        self._type = JsonType(json_type)
        self._data = data
        self._serializer: Serializer = _DEFAULT_SERIALIZERS[self._type]
        self._userdata: Any = None
        self._on_release: Optional[ReleaseHook] = None

    def __repr__(self) -> str:
        return f"JsonValue({self._type.name}, {self.to_json_string(Flag.PLAIN)})"

    @property
    def json_type(self) -> JsonType:
        """The kind of this value."""
        return self._type

    @property
    def payload(self) -> Any:
        """The underlying Python data: bool, int, float, str, dict or list."""
        return self._data

    @property
    def userdata(self) -> Any:
        """Data attached by :meth:`set_serializer`."""
        return self._userdata

    def _require(self, json_type: JsonType, operation: str) -> None:
        if self._type is not json_type:
            raise TypeError(
                f"{operation} needs a JSON {json_type.name.lower()}, "
                f"not {self._type.name.lower()}"
            )

    # serialization

    def set_serializer(
        self,
        func: Optional[Serializer] = None,
        userdata: Any = None,
        on_release: Optional[ReleaseHook] = None,
    ) -> None:
        """Install a custom serializer, or restore the default when ``func`` is None.

        Any release hook already set is called with the old userdata first.
        """
        if self._on_release is not None:
            self._on_release(self, self._userdata)
        self._userdata = None
        self._on_release = None
        if func is None:
            self._serializer = _DEFAULT_SERIALIZERS[self._type]
            return
        self._serializer = func
        self._userdata = userdata
        self._on_release = on_release

    def to_json_string(self, flags: int = Flag.SPACED) -> str:
        """Render this value as JSON text using the given formatting flags."""
        return self._serializer(self, 0, Flag(flags))

    def release(self) -> None:
        """Run the release hook (at most once), then release all children."""
        hook, self._on_release = self._on_release, None
        if hook is not None:
            hook(self, self._userdata)
        if self._type is JsonType.OBJECT:
            children = list(self._data.values())
        elif self._type is JsonType.ARRAY:
            children = list(self._data)
        else:
            return
        for child in children:
            if child is not None:
                child.release()

    # objects

    def object_add(self, key: str, value: Optional["JsonValue"]) -> None:
        """Set a field; a replaced value is released and the key keeps its place."""
        self._require(JsonType.OBJECT, "object_add")
        existing = self._data.get(key)
        self._data[key] = value
        if existing is not None and existing is not value:
            existing.release()

    def object_get(self, key: str) -> Optional["JsonValue"]:
        """Return a field's value, or None if it is missing or this is not an object."""
        if self._type is not JsonType.OBJECT:
            return None
        return self._data.get(key)

    def has_key(self, key: str) -> bool:
        """Tell whether the field exists; False when this is not an object."""
        return self._type is JsonType.OBJECT and key in self._data

    def object_del(self, key: str) -> None:
        """Remove a field, releasing its value; missing keys are ignored."""
        self._require(JsonType.OBJECT, "object_del")
        removed = self._data.pop(key, None)
        if removed is not None:
            removed.release()

    def object_length(self) -> int:
        """Number of fields in the object."""
        self._require(JsonType.OBJECT, "object_length")
        return len(self._data)

    def items(self) -> Iterator[tuple[str, Optional["JsonValue"]]]:
        """Yield (key, value) pairs in insertion order.

        Deleting or replacing fields while iterating is allowed.
        """
        self._require(JsonType.OBJECT, "items")
        for key in list(self._data):
            if key in self._data:
                yield key, self._data[key]

    # arrays

    def array_add(self, value: Optional["JsonValue"]) -> None:
        """Append an element."""
        self._require(JsonType.ARRAY, "array_add")
        self._data.append(value)

    def array_put_idx(self, index: int, value: Optional["JsonValue"]) -> None:
        """Store at an index, growing the array with nulls and releasing a replaced element."""
        self._require(JsonType.ARRAY, "array_put_idx")
        if index < 0:
            raise IndexError("array index must not be negative")
        items = self._data
        if index >= len(items):
            items.extend([None] * (index + 1 - len(items)))
        existing = items[index]
        items[index] = value
        if existing is not None and existing is not value:
            existing.release()

    def array_get_idx(self, index: int) -> Optional["JsonValue"]:
        """Return the element at an index, or None past the end."""
        self._require(JsonType.ARRAY, "array_get_idx")
        if index < 0:
            raise IndexError("array index must not be negative")
        if index >= len(self._data):
            return None
        return self._data[index]

    def array_length(self) -> int:
        """Number of elements in the array."""
        self._require(JsonType.ARRAY, "array_length")
        return len(self._data)

    def array_sort(self, key: Callable[[Optional["JsonValue"]], Any]) -> None:
        """Sort the elements in place by the given key function."""
        self._require(JsonType.ARRAY, "array_sort")
        self._data.sort(key=key)


def new_object() -> JsonValue:
    """Create an empty JSON object."""
    return JsonValue(JsonType.OBJECT, {})


def new_array() -> JsonValue:
    """Create an empty JSON array."""
    return JsonValue(JsonType.ARRAY, [])


def new_boolean(value: Any) -> JsonValue:
    """Create a JSON boolean."""
    return JsonValue(JsonType.BOOLEAN, bool(value))


def _checked_int(value: int, low: int, high: int, width: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an int, got {type(value).__name__}")
    if not low <= value <= high:
        raise OverflowError(f"{value} does not fit in a {width} integer")
    return value


def new_int(value: int) -> JsonValue:
    """Create a JSON integer from a 32-bit value."""
    return JsonValue(JsonType.INT, _checked_int(value, _INT32_MIN, _INT32_MAX, "32-bit"))


def new_int64(value: int) -> JsonValue:
    """Create a JSON integer from a 64-bit value."""
    return JsonValue(JsonType.INT, _checked_int(value, _INT64_MIN, _INT64_MAX, "64-bit"))


def new_double(value: float) -> JsonValue:
    """Create a JSON floating point number."""
    return JsonValue(JsonType.DOUBLE, float(value))


def new_double_s(value: float, text: str) -> JsonValue:
    """Create a JSON number that serializes as exactly ``text``."""
    result = new_double(value)
    result.set_serializer(userdata_to_json_string, str(text))
    return result


def new_string(text: str) -> JsonValue:
    """Create a JSON string."""
    if not isinstance(text, str):
        raise TypeError(f"expected a str, got {type(text).__name__}")
    return JsonValue(JsonType.STRING, text)


def new_string_len(text: str, length: int) -> JsonValue:
    """Create a JSON string from the first ``length`` characters of ``text``."""
    if not isinstance(text, str):
        raise TypeError(f"expected a str, got {type(text).__name__}")
    if length < 0 or length > len(text):
        raise ValueError(f"length {length} is outside 0..{len(text)}")
    return JsonValue(JsonType.STRING, text[:length])


def to_json_string(value: Optional[JsonValue], flags: int = Flag.SPACED) -> str:
    """Render a value (or None, as ``null``) as JSON text."""
    if value is None:
        return "null"
    return value.to_json_string(flags)