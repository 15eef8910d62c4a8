"""Primitive value encoding, quoting and escaping."""

import re
from decimal import Decimal
from typing import List, Optional

from .constants import (
    BACKSLASH,
    CARRIAGE_RETURN,
    CLOSE_BRACE,
    CLOSE_BRACKET,
    COLON,
    COMMA,
    DOUBLE_QUOTE,
    FALSE_LITERAL,
    NEWLINE,
    NULL_LITERAL,
    OPEN_BRACE,
    OPEN_BRACKET,
    RESERVED_LITERALS,
    TAB,
    TRUE_LITERAL,
)
from .types import JsonPrimitive

NUMERIC_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
INTEGER_RE = re.compile(r"^[+-]?\d+$")
SAFE_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")

STRUCTURAL_CHARS = frozenset((COMMA, COLON, OPEN_BRACKET, CLOSE_BRACKET, OPEN_BRACE, CLOSE_BRACE))

_ESCAPES = {
    BACKSLASH: "\\\\",
    DOUBLE_QUOTE: '\\"',
    NEWLINE: "\\n",
    CARRIAGE_RETURN: "\\r",
    TAB: "\\t",
}
_UNESCAPES = {"\\": BACKSLASH, '"': DOUBLE_QUOTE, "n": NEWLINE, "r": CARRIAGE_RETURN, "t": TAB}


def is_numeric_like(value: str) -> bool:
    """Check whether a string would be read back as a number."""
    return NUMERIC_RE.match(value) is not None


def is_reserved_literal(value: str) -> bool:
    return value.lower() in RESERVED_LITERALS


def escape_string(value: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def unescape_string(value: str) -> str:
    """Reverse escape_string. Unknown escapes are kept verbatim."""
    if BACKSLASH not in value:
        return value
    out: List[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == BACKSLASH and i + 1 < len(value):
            nxt = value[i + 1]
            out.append(_UNESCAPES.get(nxt, ch + nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def quote_string(value: str) -> str:
    return f"{DOUBLE_QUOTE}{escape_string(value)}{DOUBLE_QUOTE}"


def _needs_quotes_in_any_context(value: str, delimiter: str) -> bool:
    return (
        not value
        or value != value.strip()
        or is_reserved_literal(value)
        or is_numeric_like(value)
        or COLON in value
        or delimiter in value
        or NEWLINE in value
        or CARRIAGE_RETURN in value
        or BACKSLASH in value
        or DOUBLE_QUOTE in value
    )


def needs_quotes(value: str, delimiter: str = COMMA) -> bool:
    """Check whether a string must be quoted as a standalone scalar.

    Args:
        value: String to check
        delimiter: Active tabular delimiter

    Returns:
        True if the string has to be wrapped in double quotes
    """
    if _needs_quotes_in_any_context(value, delimiter):
        return True
    return any(ch in STRUCTURAL_CHARS for ch in value)


def needs_tabular_quotes(value: str, delimiter: str) -> bool:
    """Check whether a string must be quoted inside a tabular row.

    Brackets, braces and commas are harmless in a row unless the comma is
    the delimiter, so only the row separator and the scalar ambiguities count.
    """
    return _needs_quotes_in_any_context(value, delimiter)


def format_number(value: float) -> str:
    """Render a number as canonical decimal text without exponent."""
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def encode_primitive(value: JsonPrimitive, delimiter: str = COMMA) -> str:
    """Encode a primitive value.

    Args:
        value: Primitive value
        delimiter: Active tabular delimiter

    Returns:
        Encoded string
    """
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    if isinstance(value, (int, float)):
        return format_number(value)
    if needs_quotes(value, delimiter):
        return quote_string(value)
    return value


def encode_tabular_value(value: JsonPrimitive, delimiter: str) -> str:
    """Encode a primitive value for a tabular row cell."""
    if isinstance(value, str):
        return quote_string(value) if needs_tabular_quotes(value, delimiter) else value
    return encode_primitive(value, delimiter)


def encode_key(key: str) -> str:
    """Encode an object key, quoting it unless it is a plain identifier."""
    if SAFE_KEY_RE.match(key):
        return key
    return quote_string(key)


def join_encoded_values(values: List[str], delimiter: str) -> str:
    return delimiter.join(values)


def format_header(key: Optional[str], length: int, fields: Optional[List[str]], delimiter: str) -> str:
    """Format an array header.

    Args:
        key: Optional key name
        length: Array length
        fields: Optional field names for tabular arrays
        delimiter: Delimiter placed between field names

    Returns:
        Header such as ``key[2]{a,b}:``
    """
    header = encode_key(key) if key is not None else ""
    header += f"{OPEN_BRACKET}{length}{CLOSE_BRACKET}"
    if fields:
        header += OPEN_BRACE + join_encoded_values([encode_key(f) for f in fields], delimiter) + CLOSE_BRACE
    return header + COLON
