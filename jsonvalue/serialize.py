"""Low-level helpers for turning JSON values into text."""

from __future__ import annotations

import enum
import math

__all__ = ["Flag", "escape_string", "format_double", "indent"]

_HEX_DIGITS = "0123456789abcdef"

_SIMPLE_ESCAPES = {
    "\b": "\\b",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\f": "\\f",
    '"': '\\"',
    "\\": "\\\\",
    "/": "\\/",
}


class Flag(enum.IntFlag):
    """Formatting options for JSON output."""

    PLAIN = 0
    SPACED = 1 << 0
    PRETTY = 1 << 1
    NOZERO = 1 << 2


def _escape_char(char: str) -> str:
    simple = _SIMPLE_ESCAPES.get(char)
    if simple is not None:
        return simple
    code = ord(char)
    if code < 0x20:
        return "\\u00" + _HEX_DIGITS[code >> 4] + _HEX_DIGITS[code & 0xF]
    return char


def escape_string(text: str) -> str:
    """Escape a string for use between double quotes in JSON output.

    Quotes, backslashes and forward slashes are escaped, the usual control
    characters get their short escapes and the remaining characters below
    U+0020 are written as ``\\u00XX`` with lower-case hex digits.
    """
    return "".join(_escape_char(char) for char in text)


def _drop_trailing_zeros(text: str) -> str:
    dot = text.find(".")
    if dot < 0:
        return text
    # Keep everything up to the last character after the dot that is not
    # a zero, always leaving at least one digit after the dot.
    keep = dot + 1
    for pos in range(dot + 1, len(text)):
        if text[pos] != "0":
            keep = pos
    return text[: keep + 1]


def format_double(value: float, flags: int = Flag.PLAIN) -> str:
    """Render a floating point number the way JSON output writes it.

    NaN and the infinities become ``NaN``, ``Infinity`` and ``-Infinity``;
    other values use 17 significant digits. With ``Flag.NOZERO`` trailing
    zeros after the decimal point are dropped, keeping at least one digit.
    """
    if math.isnan(value):
        text = "NaN"
    elif math.isinf(value):
        text = "Infinity" if value > 0 else "-Infinity"
    else:
        text = "%.17g" % value
    if "," in text:
        text = text.replace(",", ".", 1)
    if Flag(flags) & Flag.NOZERO:
        text = _drop_trailing_zeros(text)
    return text


def indent(level: int, flags: int = Flag.PLAIN) -> str:
    """Return the indentation for a nesting level: two spaces per level when pretty."""
    if Flag(flags) & Flag.PRETTY:
        return " " * (level * 2)
    return ""