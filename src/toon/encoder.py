"""Core TOON encoding functionality."""

from typing import Any, Optional

from .constants import DEFAULT_DELIMITER, DEFAULT_INDENT, DELIMITERS
from .encoders import encode_value
from .normalize import normalize_value
from .types import EncodeOptions, ResolvedEncodeOptions
from .writer import LineWriter


def encode(value: Any, options: Optional[EncodeOptions] = None) -> str:
    """Encode a value into TOON format.

    Args:
        value: The value to encode (must be JSON-serializable)
        options: Optional encoding options

    Returns:
        TOON-formatted string

    Raises:
        UnsupportedValueError: If the value contains a kind TOON cannot represent
        ValueError: If the options are invalid
    """
    resolved_options = resolve_options(options)
    normalized = normalize_value(value)
    writer = LineWriter(resolved_options.indent)
    encode_value(normalized, resolved_options, writer, 0)
    return writer.to_string()


def resolve_options(options: Optional[EncodeOptions]) -> ResolvedEncodeOptions:
    """Resolve encoding options with defaults.

    Args:
        options: Optional user-provided options

    Returns:
        Resolved options with defaults applied
    """
    if options is None:
        return ResolvedEncodeOptions()

    indent = options.get("indent", DEFAULT_INDENT)
    delimiter = options.get("delimiter", DEFAULT_DELIMITER)

    # Resolve delimiter if it's a key
    if delimiter in DELIMITERS:
        delimiter = DELIMITERS[delimiter]

    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 1:
        raise ValueError(f"indent must be a positive integer, got {indent!r}")
    if delimiter not in DELIMITERS.values():
        raise ValueError(f"delimiter must be one of ',', '\\t', '|', got {delimiter!r}")

    return ResolvedEncodeOptions(indent=indent, delimiter=delimiter)
