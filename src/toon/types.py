"""Type definitions for pytoon."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Literal, Optional, TypedDict, Union

# JSON-compatible types
JsonPrimitive = Union[str, int, float, bool, None]
JsonObject = Dict[str, Any]
JsonArray = List[Any]
JsonValue = Union[JsonPrimitive, JsonArray, JsonObject]

# Delimiter type
Delimiter = str
DelimiterKey = Literal["comma", "tab", "pipe"]


class EncodeOptions(TypedDict, total=False):
    """Options for TOON encoding.

    Attributes:
        indent: Number of spaces per indentation level (default: 2)
        delimiter: Delimiter for tabular headers and rows, either the
            character itself or a DelimiterKey (default: comma)
    """

    indent: int
    delimiter: Union[Delimiter, DelimiterKey]


class DecodeOptions(TypedDict, total=False):
    """Options for TOON decoding.

    Attributes:
        indent: Number of spaces per indentation level (default: 2)
        strict: Raise on structural mismatches instead of recovering (default: True)
    """

    indent: int
    strict: bool


class ResolvedEncodeOptions:
    """Resolved encoding options with defaults applied."""

    def __init__(self, indent: int = 2, delimiter: str = ",") -> None:
        self.indent = indent
        self.delimiter = delimiter


class ResolvedDecodeOptions:
    """Resolved decoding options with defaults applied."""

    def __init__(self, indent: int = 2, strict: bool = True) -> None:
        self.indent = indent
        self.strict = strict


class ArrayKind(Enum):
    EMPTY = auto()
    TABULAR = auto()
    PRIMITIVE_LIST = auto()
    GENERAL_LIST = auto()


@dataclass(frozen=True)
class ArrayShape:
    """Result of classifying an array once before rendering it."""

    kind: ArrayKind
    fields: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedLine:
    """A non-blank input line with its indentation measured."""

    raw: str
    content: str
    indent: int
    line_number: int


@dataclass(frozen=True)
class ArrayHeaderInfo:
    """Parsed ``[N]{fields}:`` array header."""

    length: int
    delimiter: Delimiter = ","
    fields: Optional[List[str]] = None
    inline: str = ""
    line_number: int = 0


# Depth type for tracking indentation level
Depth = int
