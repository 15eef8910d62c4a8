"""
pytoon - Token-Oriented Object Notation for Python

A compact data format optimized for transmitting structured information to LLMs
with 30-60% fewer tokens than JSON.
"""

from .decoder import decode, ToonDecodeError
from .encoder import encode
from .errors import (
    FieldCountMismatchError,
    IndentationMismatchError,
    MalformedArrayHeaderError,
    MissingListMarkerError,
    RowCountMismatchError,
    ToonEncodeError,
    UnexpectedLineError,
    UnsupportedValueError,
)
from .types import Delimiter, DelimiterKey, DecodeOptions, EncodeOptions

__version__ = "0.2.0"
__all__ = [
    "encode",
    "decode",
    "ToonDecodeError",
    "MalformedArrayHeaderError",
    "RowCountMismatchError",
    "FieldCountMismatchError",
    "IndentationMismatchError",
    "MissingListMarkerError",
    "UnexpectedLineError",
    "ToonEncodeError",
    "UnsupportedValueError",
    "Delimiter",
    "DelimiterKey",
    "EncodeOptions",
    "DecodeOptions",
]
