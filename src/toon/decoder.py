"""Core TOON decoding functionality.

Every parsing function takes the list of parsed lines and a cursor position
and returns the decoded value together with the position of the first line
it did not consume.
"""

import logging
import re
from typing import List, Optional, Tuple

from .constants import (
    BACKSLASH,
    CLOSE_BRACE,
    COLON,
    COMMA,
    DEFAULT_INDENT,
    DOUBLE_QUOTE,
    FALSE_LITERAL,
    INLINE_ARRAY_SEPARATOR,
    LIST_ITEM_MARKER,
    LIST_ITEM_PREFIX,
    NULL_LITERAL,
    OPEN_BRACE,
    OPEN_BRACKET,
    PIPE,
    TAB,
    TRUE_LITERAL,
)
from .errors import (
    FieldCountMismatchError,
    IndentationMismatchError,
    MalformedArrayHeaderError,
    MissingListMarkerError,
    RowCountMismatchError,
    ToonDecodeError,
    UnexpectedLineError,
)
from .primitives import INTEGER_RE, NUMERIC_RE, unescape_string
from .types import (
    ArrayHeaderInfo,
    DecodeOptions,
    Depth,
    JsonArray,
    JsonObject,
    JsonPrimitive,
    JsonValue,
    ParsedLine,
    ResolvedDecodeOptions,
)

logger = logging.getLogger(__name__)

HEADER_LENGTH_RE = re.compile(r"^\[(\d+)\]")
KEY_END_RE = re.compile(r"[:\[]")


def decode(input: str, options: Optional[DecodeOptions] = None) -> JsonValue:
    """Decode TOON text into a Python value.

    Args:
        input: TOON-formatted string
        options: Optional decoding options

    Returns:
        Decoded value; empty input gives an empty dict

    Raises:
        ToonDecodeError: In strict mode, on the first structural mismatch
        ValueError: If the options are invalid
    """
    resolved_options = resolve_options(options)
    lines = to_parsed_lines(input)
    if not lines:
        return {}

    first = lines[0]
    if first.content.startswith(OPEN_BRACKET):
        return parse_root_array(lines, resolved_options)

    if len(lines) == 1 and split_key(first.content) is None:
        return parse_primitive(first.content)

    value, _ = parse_object(lines, 0, 0, resolved_options)
    return value


def resolve_options(options: Optional[DecodeOptions]) -> ResolvedDecodeOptions:
    """Resolve decoding options with defaults.

    Args:
        options: Optional user-provided options

    Returns:
        Resolved options with defaults applied
    """
    if options is None:
        return ResolvedDecodeOptions()

    indent = options.get("indent", DEFAULT_INDENT)
    strict = options.get("strict", True)

    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 1:
        raise ValueError(f"indent must be a positive integer, got {indent!r}")

    return ResolvedDecodeOptions(indent=indent, strict=bool(strict))


def to_parsed_lines(text: str) -> List[ParsedLine]:
    """Split text into right-trimmed, non-blank lines with measured indentation."""
    parsed: List[ParsedLine] = []
    for number, raw in enumerate(text.split("\n"), start=1):
        line = raw.rstrip()
        if not line:
            continue
        indent = len(line) - len(line.lstrip(" "))
        parsed.append(ParsedLine(raw=line, content=line.lstrip(), indent=indent, line_number=number))
    return parsed


def _recover(options: ResolvedDecodeOptions, error: ToonDecodeError) -> None:
    """Raise in strict mode, otherwise note the recovery and carry on."""
    if options.strict:
        raise error
    logger.debug("Lenient decode recovered from: %s", error)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def parse_primitive(token: str) -> JsonPrimitive:
    """Parse a scalar token.

    Quoted tokens are unescaped, ``true``/``false``/``null`` are matched
    case-insensitively and numbers follow the same grammar the encoder uses
    to decide which strings need quotes. Anything else is a bare string.
    """
    token = token.strip()
    if not token:
        return None

    if len(token) >= 2 and token.startswith(DOUBLE_QUOTE) and token.endswith(DOUBLE_QUOTE):
        return unescape_string(token[1:-1])

    lowered = token.lower()
    if lowered == TRUE_LITERAL:
        return True
    if lowered == FALSE_LITERAL:
        return False
    if lowered == NULL_LITERAL:
        return None

    if INTEGER_RE.match(token):
        return int(token)
    if NUMERIC_RE.match(token):
        return float(token)

    return token


def split_delimited(text: str, delimiter: str) -> List[str]:
    """Split on a delimiter, ignoring delimiters inside double quotes.

    A backslash escapes the character after it. Quotes and escapes are kept
    in the returned parts; parse_primitive removes them.
    """
    parts: List[str] = []
    current: List[str] = []
    in_quotes = False
    escape_next = False

    for ch in text:
        if escape_next:
            current.append(ch)
            escape_next = False
        elif ch == BACKSLASH:
            current.append(ch)
            escape_next = True
        elif ch == DOUBLE_QUOTE:
            current.append(ch)
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)

    parts.append("".join(current))
    return parts


def _unquoted_text(text: str) -> str:
    kept: List[str] = []
    in_quotes = False
    escape_next = False
    for ch in text:
        if escape_next:
            escape_next = False
        elif ch == BACKSLASH:
            escape_next = True
        elif ch == DOUBLE_QUOTE:
            in_quotes = not in_quotes
        elif not in_quotes:
            kept.append(ch)
    return "".join(kept)


def detect_delimiter(fields_text: str) -> str:
    """Detect the delimiter of a tabular header field list.

    Tab wins over pipe, pipe over comma; characters inside quoted field
    names are ignored.
    """
    unquoted = _unquoted_text(fields_text)
    if TAB in unquoted:
        return TAB
    if PIPE in unquoted:
        return PIPE
    return COMMA


def _closing_quote(text: str) -> Optional[int]:
    i = 1
    while i < len(text):
        if text[i] == BACKSLASH:
            i += 2
            continue
        if text[i] == DOUBLE_QUOTE:
            return i
        i += 1
    return None


def _closing_brace(text: str) -> Optional[int]:
    """Index of the ``}`` closing the field list that opens ``text``, skipping quoted names."""
    in_quotes = False
    escape_next = False
    for i, ch in enumerate(text):
        if escape_next:
            escape_next = False
        elif ch == BACKSLASH:
            escape_next = True
        elif ch == DOUBLE_QUOTE:
            in_quotes = not in_quotes
        elif ch == CLOSE_BRACE and not in_quotes:
            return i
    return None


def parse_key_token(token: str) -> str:
    token = token.strip()
    if len(token) >= 2 and token.startswith(DOUBLE_QUOTE) and token.endswith(DOUBLE_QUOTE):
        return unescape_string(token[1:-1])
    return token


def split_key(content: str) -> Optional[Tuple[str, str]]:
    """Split a line into its key and the rest starting at ``:`` or ``[``.

    Returns:
        ``(key, rest)`` or None if the line does not start with a key
    """
    if content.startswith(DOUBLE_QUOTE):
        end = _closing_quote(content)
        if end is None:
            return None
        key = unescape_string(content[1:end])
        rest = content[end + 1 :]
    else:
        match = KEY_END_RE.search(content)
        if match is None:
            return None
        key = content[: match.start()].strip()
        if not key:
            return None
        rest = content[match.start() :]

    if not rest.startswith((COLON, OPEN_BRACKET)):
        return None
    return key, rest


def parse_array_header(text: str, line: ParsedLine, options: ResolvedDecodeOptions) -> Optional[ArrayHeaderInfo]:
    """Parse ``[N]:``, ``[N]: inline`` or ``[N]{fields}:``.

    Returns:
        Header info, or None when the header is malformed in lenient mode
    """
    match = HEADER_LENGTH_RE.match(text)
    rest = text[match.end() :] if match else ""
    fields_text = None
    if rest.startswith(OPEN_BRACE):
        end = _closing_brace(rest)
        if end is None or end == 1:
            rest = ""
        else:
            fields_text = rest[1:end]
            rest = rest[end + 1 :]

    if match is None or not rest.startswith(COLON):
        _recover(options, MalformedArrayHeaderError(f"invalid array header {text!r}", line.line_number))
        return None

    length = int(match.group(1))
    inline = rest[len(COLON) :].strip()

    if fields_text is None:
        return ArrayHeaderInfo(length=length, inline=inline, line_number=line.line_number)

    delimiter = detect_delimiter(fields_text)
    fields = [parse_key_token(field) for field in split_delimited(fields_text, delimiter)]
    return ArrayHeaderInfo(
        length=length, delimiter=delimiter, fields=fields, inline=inline, line_number=line.line_number
    )


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------


def parse_object(
    lines: List[ParsedLine], pos: int, depth: Depth, options: ResolvedDecodeOptions
) -> Tuple[JsonObject, int]:
    """Parse key lines at ``depth`` until indentation drops below it.

    Args:
        lines: Parsed input lines
        pos: Index of the first line to read
        depth: Nesting depth of the object's keys
        options: Resolved decoding options

    Returns:
        The object and the index of the first unconsumed line
    """
    obj: JsonObject = {}
    expected = depth * options.indent

    while pos < len(lines):
        line = lines[pos]
        if line.indent < expected:
            break

        if line.indent > expected:
            _recover(
                options,
                IndentationMismatchError(
                    f"expected indentation of {expected} spaces, found {line.indent}", line.line_number
                ),
            )
            pos += 1
            continue

        entry = split_key(line.content)
        if entry is None:
            _recover(options, UnexpectedLineError(f"expected a key, found {line.content!r}", line.line_number))
            pos += 1
            continue

        key, rest = entry
        if rest.startswith(OPEN_BRACKET):
            header = parse_array_header(rest, line, options)
            if header is None:
                obj[key] = []
                pos += 1
            else:
                obj[key], pos = parse_array_body(header, lines, pos + 1, depth, options)
            continue

        value_text = rest[len(COLON) :].strip()
        if value_text:
            obj[key] = parse_primitive(value_text)
            pos += 1
        else:
            obj[key], pos = parse_nested_value(lines, pos + 1, depth, options)

    return obj, pos


def parse_nested_value(
    lines: List[ParsedLine], pos: int, depth: Depth, options: ResolvedDecodeOptions
) -> Tuple[JsonValue, int]:
    """Parse the value of a bare ``key:`` line found at ``depth``.

    A deeper next line starting with ``[`` is an array header whose rows or
    items share its indentation, any other deeper line opens a nested
    object; otherwise the value is null.
    """
    if pos >= len(lines) or lines[pos].indent <= depth * options.indent:
        return None, pos

    line = lines[pos]
    if line.content.startswith(OPEN_BRACKET):
        header = parse_array_header(line.content, line, options)
        if header is None:
            return [], pos + 1
        return parse_array_body(header, lines, pos + 1, depth, options)

    return parse_object(lines, pos, depth + 1, options)


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


def parse_root_array(lines: List[ParsedLine], options: ResolvedDecodeOptions) -> JsonArray:
    first = lines[0]
    header = parse_array_header(first.content, first, options)
    if header is None:
        value: JsonArray = []
        pos = 1
    else:
        value, pos = parse_array_body(header, lines, 1, 0, options)

    if pos < len(lines):
        _recover(
            options,
            UnexpectedLineError(f"unexpected content after root array: {lines[pos].content!r}", lines[pos].line_number),
        )
    return value


def parse_array_body(
    header: ArrayHeaderInfo, lines: List[ParsedLine], pos: int, depth: Depth, options: ResolvedDecodeOptions
) -> Tuple[JsonArray, int]:
    """Parse the entries of an array owned by a key or list item at ``depth``.

    Args:
        header: Parsed header
        lines: Parsed input lines
        pos: Index of the line after the header
        depth: Depth of the owning key line; rows and items are one deeper
        options: Resolved decoding options
    """
    if header.fields is not None:
        return parse_tabular_rows(header, lines, pos, depth + 1, options)
    if header.inline:
        return parse_inline_values(header, options), pos
    return parse_list_items(header, lines, pos, depth + 1, options)


def parse_inline_values(header: ArrayHeaderInfo, options: ResolvedDecodeOptions) -> JsonArray:
    values = [parse_primitive(token) for token in split_delimited(header.inline, INLINE_ARRAY_SEPARATOR)]
    if len(values) != header.length:
        _recover(
            options,
            RowCountMismatchError(f"expected {header.length} values, found {len(values)}", header.line_number),
        )
        del values[header.length :]
    return values


def _check_entry_line(
    header: ArrayHeaderInfo,
    lines: List[ParsedLine],
    pos: int,
    expected: int,
    index: int,
    noun: str,
    options: ResolvedDecodeOptions,
) -> bool:
    """Check that an entry line exists at the expected indentation."""
    if pos >= len(lines) or lines[pos].indent < expected:
        line_number = lines[pos].line_number if pos < len(lines) else header.line_number
        _recover(options, RowCountMismatchError(f"expected {header.length} {noun}, found {index}", line_number))
        return False

    line = lines[pos]
    if line.indent > expected:
        _recover(
            options,
            IndentationMismatchError(
                f"{noun[:-1]} {index + 1}: expected indentation of {expected} spaces, found {line.indent}",
                line.line_number,
            ),
        )
        return False
    return True


def _check_surplus(
    header: ArrayHeaderInfo, lines: List[ParsedLine], pos: int, expected: int, noun: str, options: ResolvedDecodeOptions
) -> None:
    if pos < len(lines) and lines[pos].indent == expected:
        _recover(
            options,
            RowCountMismatchError(f"expected {header.length} {noun}, found more", lines[pos].line_number),
        )


def parse_tabular_rows(
    header: ArrayHeaderInfo, lines: List[ParsedLine], pos: int, depth: Depth, options: ResolvedDecodeOptions
) -> Tuple[List[JsonObject], int]:
    """Parse the delimited rows of a tabular array.

    Short rows are padded with null and long rows truncated to the header
    fields once lenient mode lets them through.
    """
    rows: List[JsonObject] = []
    fields = header.fields or []
    expected = depth * options.indent

    for index in range(header.length):
        if not _check_entry_line(header, lines, pos, expected, index, "rows", options):
            break

        line = lines[pos]
        values = split_delimited(line.content, header.delimiter)
        if len(values) != len(fields):
            _recover(
                options,
                FieldCountMismatchError(
                    f"row {index + 1}: expected {len(fields)} values, found {len(values)}", line.line_number
                ),
            )

        row: JsonObject = {}
        for i, field in enumerate(fields):
            row[field] = parse_primitive(values[i]) if i < len(values) else None
        rows.append(row)
        pos += 1

    _check_surplus(header, lines, pos, expected, "rows", options)
    return rows, pos


def _is_list_item(content: str) -> bool:
    return content == LIST_ITEM_MARKER or content.startswith(LIST_ITEM_PREFIX)


def parse_list_items(
    header: ArrayHeaderInfo, lines: List[ParsedLine], pos: int, depth: Depth, options: ResolvedDecodeOptions
) -> Tuple[JsonArray, int]:
    """Parse the ``- `` items of a list array."""
    items: JsonArray = []
    expected = depth * options.indent

    for index in range(header.length):
        if not _check_entry_line(header, lines, pos, expected, index, "items", options):
            break

        line = lines[pos]
        if not _is_list_item(line.content):
            _recover(
                options,
                MissingListMarkerError(
                    f"item {index + 1}: expected {LIST_ITEM_PREFIX!r} marker, found {line.content!r}", line.line_number
                ),
            )
            break

        item, pos = parse_list_item(lines, pos, depth, options)
        items.append(item)

    _check_surplus(header, lines, pos, expected, "items", options)
    return items, pos


def parse_list_item(
    lines: List[ParsedLine], pos: int, depth: Depth, options: ResolvedDecodeOptions
) -> Tuple[JsonValue, int]:
    """Parse one list item starting at ``pos``.

    An object item keeps the key that follows the marker and absorbs the
    lines below it that belong to the same object: anything deeper, and
    lines at the item's own indentation that do not start a new item.
    """
    line = lines[pos]
    text = line.content[len(LIST_ITEM_MARKER) :].strip()

    if not text:
        return {}, pos + 1

    if text.startswith(OPEN_BRACKET):
        header = parse_array_header(text, line, options)
        if header is None:
            return [], pos + 1
        return parse_array_body(header, lines, pos + 1, depth, options)

    if COLON not in text or split_key(text) is None:
        return parse_primitive(text), pos + 1

    end = pos + 1
    while end < len(lines):
        following = lines[end]
        if following.indent < line.indent:
            break
        if following.indent == line.indent and _is_list_item(following.content):
            break
        end += 1

    first = ParsedLine(raw=line.raw, content=text, indent=line.indent, line_number=line.line_number)
    obj, _ = parse_object([first, *lines[pos + 1 : end]], 0, depth, options)
    return obj, end
