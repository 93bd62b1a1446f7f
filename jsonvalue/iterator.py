"""Iterators over the name/value pairs of a JSON object."""

from __future__ import annotations

from typing import Optional

from jsonvalue.value import JsonType, JsonValue

__all__ = ["ObjectIterator", "iter_begin", "iter_end", "iter_init_default"]


class ObjectIterator:
    """A position within a JSON object's pairs, or the "end" position.

    Two iterators compare equal when they refer to the same pair of the same
    object, or when both are at the end. Deleting or replacing fields while
    iterating is allowed; deleted fields are skipped when advancing.
    """

    __slots__ = ("_obj", "_keys", "_pos")

    def __init__(
        self,
        obj: Optional[JsonValue] = None,
        keys: tuple[str, ...] = (),
        pos: int = 0,
    ) -> None:
        self._obj = obj
        self._keys = keys
        self._pos = pos

    def _at_end(self) -> bool:
        return self._obj is None or self._pos >= len(self._keys)

    def _current_key(self) -> Optional[str]:
        if self._at_end():
            return None
        return self._keys[self._pos]

    def _require_valid(self, operation: str) -> str:
        key = self._current_key()
        if key is None:
            raise IndexError(f"{operation} needs an iterator that refers to a pair")
        return key

    def next(self) -> None:
        """Advance to the next pair, or to the end after the last one."""
        self._require_valid("next")
        assert self._obj is not None
        self._pos += 1
        while not self._at_end() and not self._obj.has_key(self._keys[self._pos]):
            self._pos += 1

    def peek_name(self) -> str:
        """Return the name of the pair this iterator refers to."""
        return self._require_valid("peek_name")

    def peek_value(self) -> Optional[JsonValue]:
        """Return the value of the pair this iterator refers to (None for null)."""
        key = self._require_valid("peek_value")
        assert self._obj is not None
        if not self._obj.has_key(key):
            raise KeyError(key)
        return self._obj.object_get(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectIterator):
            return NotImplemented
        if self._at_end() or other._at_end():
            return self._at_end() and other._at_end()
        return self._obj is other._obj and self._current_key() == other._current_key()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        key = self._current_key()
        return "ObjectIterator(end)" if key is None else f"ObjectIterator({key!r})"


def _require_object(obj: Optional[JsonValue], operation: str) -> JsonValue:
    if obj is None or obj.json_type is not JsonType.OBJECT:
        raise TypeError(f"{operation} needs a JSON object")
    return obj


def iter_begin(obj: Optional[JsonValue]) -> ObjectIterator:
    """Return an iterator at the first pair of an object (the end if it is empty)."""
    target = _require_object(obj, "iter_begin")
    keys = tuple(key for key, _ in target.items())
    return ObjectIterator(target, keys, 0)


def iter_end(obj: Optional[JsonValue]) -> ObjectIterator:
    """Return the iterator that lies beyond the last pair of an object."""
    target = _require_object(obj, "iter_end")
    keys = tuple(key for key, _ in target.items())
    return ObjectIterator(target, keys, len(keys))


def iter_init_default() -> ObjectIterator:
    """Return an iterator that refers to no pair; it must not be advanced or peeked."""
    return ObjectIterator()