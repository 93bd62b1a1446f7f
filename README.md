# jsonvalue

`jsonvalue` builds JSON documents one value at a time and writes them out
as text. Objects keep their keys in the order they were added. Each value
can carry its own serializer. Accessor functions convert any value to a
boolean, integer, double or string by fixed rules.

The package has four modules:

- `jsonvalue.serialize` contains the formatting flags and the low-level text helpers.
- `jsonvalue.value` contains `JsonType`, `JsonValue` and the constructors.
- `jsonvalue.convert` contains type inspection and coercion.
- `jsonvalue.iterator` contains an explicit iterator over the pairs of an object.

## Installation

```
pip install jsonvalue
```

To run the tests:

```
pip install "jsonvalue[test]"
pytest
```

## Building values

```python
from jsonvalue.value import (
    new_object, new_array, new_string, new_int, new_double, new_boolean,
    to_json_string,
)
from jsonvalue.serialize import Flag

doc = new_object()
doc.object_add("name", new_string("sunfish"))
doc.object_add("count", new_int(3))
doc.object_add("ratio", new_double(0.5))
doc.object_add("missing", None)          # JSON null

items = new_array()
items.array_add(new_boolean(True))
items.array_put_idx(3, new_int(7))       # the array grows; the gaps hold null
doc.object_add("items", items)

print(doc.to_json_string(Flag.PLAIN))
# {"name":"sunfish","count":3,"ratio":0.5,"missing":null,"items":[true,null,null,7]}

print(to_json_string(doc, Flag.PRETTY))
```

JSON null is represented by `None`. `JsonValue` is never of type null, and `to_json_string(None)` returns `"null"`.

### Constructors

- `new_object()` and `new_array()` create empty containers.
- `new_boolean(value)` creates a boolean.
- `new_int(value)` accepts values in the signed 32-bit range.
- `new_int64(value)` accepts values in the signed 64-bit range.
- Both integer constructors raise `OverflowError` when the value is out of range. They raise `TypeError` when the value is not an `int`, and a `bool` counts as not an `int`.
- `new_double(value)` creates a double.
- `new_double_s(value, text)` creates a double that is always written as exactly `text`.
- `new_string(text)` creates a string.
- `new_string_len(text, length)` keeps the first `length` characters of `text`. It raises `ValueError` when `length` is outside `0..len(text)`.

### Objects and arrays

Object methods:

- `object_add` adds or replaces a field. A replaced field keeps its position.
- `object_get(key)` returns `None` when the key is missing.
- `has_key(key)` reports whether the key is present.
- `object_del(key)` removes a field. A missing key is ignored.
- `object_length()` returns the number of fields.
- `items()` yields `(key, value)` pairs in order. You may delete or replace fields while you iterate.

Array methods:

- `array_add` appends an element.
- `array_put_idx(index, value)` sets an element and grows the array with nulls when needed.
- `array_get_idx(index)` returns `None` past the end.
- `array_length()` returns the number of elements.
- `array_sort(key)` sorts in place with a key function.

Errors:

- An object method called on a value that is not an object raises `TypeError`, and the same holds for array methods on a non-array. `object_get` and `has_key` are the exceptions: on a non-object they return `None` and `False`.
- A negative array index raises `IndexError`.

`value.json_type` gives the kind of a value. `value.payload` gives the underlying Python data.

### Serialization flags

`to_json_string(flags)` takes these flags from `jsonvalue.serialize.Flag`:

- `Flag.PLAIN` produces output with no extra whitespace.
- `Flag.SPACED` adds single spaces inside brackets and after colons. This is the default.
- `Flag.PRETTY` puts each member on its own line and indents two spaces per level.
- `Flag.NOZERO` drops trailing zeros after the decimal point of doubles. At least one digit is always kept.

Doubles are written with 17 significant digits. NaN and the infinities are written as `NaN`, `Infinity` and `-Infinity`.

Strings are escaped for JSON, and `/` is also written as `\/`. Control characters without a short escape become `\u00XX`.

You can call `escape_string(text)`, `format_double(value, flags)` and `indent(level, flags)` on their own.

## Custom serializers and release hooks

```python
from jsonvalue.value import new_int, userdata_to_json_string

v = new_int(42)
v.set_serializer(userdata_to_json_string, "forty-two", None)
v.to_json_string()                   # 'forty-two'
v.set_serializer(None, None, None)   # back to the standard form
```

A serializer is a callable `(value, level, flags) -> str`.

The optional `on_release` hook is called with the value and its userdata in two cases:

- when the serializer is replaced;
- when `value.release()` is called.

`release()` runs the hook at most once and then releases every child of an object or array. Values that are replaced or deleted in a container are released too.

## Reading and converting

```python
from jsonvalue.convert import get_int, get_double, get_boolean, get_string, type_of, is_type
from jsonvalue.value import JsonType, new_string, new_int64

get_int(new_string("123"))        # 123
get_int(new_int64(2**40))         # 2147483647, clamped to the 32-bit range
get_double(new_string("12abc"))   # 0.0: trailing garbage is rejected
get_boolean(new_string(""))       # False
type_of(None)                     # JsonType.NULL
is_type(None, JsonType.NULL)      # True
```

Conversion rules:

- `get_string` returns the text of a string value. For any other value it returns the spaced JSON text, and for `None` it returns `None`.
- `get_string_len` returns 0 for anything that is not a string.
- Strings are parsed by `get_int` and `get_int64` from a leading decimal integer.
- `get_double` accepts only a string that is a number as a whole. It returns 0.0 for anything else and for overflow.

## Iterating over objects

```python
for key, value in doc.items():
    ...
```

The explicit iterator:

```python
from jsonvalue.iterator import iter_begin, iter_end

it, end = iter_begin(doc), iter_end(doc)
while it != end:
    print(it.peek_name(), it.peek_value())
    it.next()
```

Iterators compare equal when they refer to the same pair, or when both are at the end. Fields deleted during iteration are skipped.

`iter_begin` and `iter_end` raise `TypeError` for anything that is not an object. Advancing or peeking an iterator that is at the end raises `IndexError`. This includes the iterator from `iter_init_default()`.

## What this package does not do

There is no parser: JSON text cannot be read back into values. The package has no file input or output and no command-line tool. It builds values in memory and turns them into strings.