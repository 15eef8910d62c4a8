"""Encoders for different value types."""

from typing import List, Optional

from .constants import INLINE_ARRAY_SEPARATOR, LIST_ITEM_MARKER, LIST_ITEM_PREFIX
from .normalize import (
    is_array_of_objects,
    is_array_of_primitives,
    is_json_array,
    is_json_object,
    is_json_primitive,
)
from .primitives import encode_key, encode_primitive, encode_tabular_value, format_header, join_encoded_values
from .types import ArrayKind, ArrayShape, Depth, JsonArray, JsonObject, JsonValue, ResolvedEncodeOptions
from .writer import LineWriter


def encode_value(value: JsonValue, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth = 0) -> None:
    """Encode a value to TOON format.

    Args:
        value: Normalized JSON value
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
    """
    if is_json_primitive(value):
        writer.push(depth, encode_primitive(value, options.delimiter))
    elif is_json_array(value):
        encode_array(value, options, writer, depth, None)
    elif is_json_object(value):
        encode_object(value, options, writer, depth)


def encode_object(obj: JsonObject, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth) -> None:
    """Encode the key-value pairs of an object at the given depth."""
    for key, value in obj.items():
        encode_key_value_pair(key, value, options, writer, depth)


def encode_key_value_pair(
    key: str, value: JsonValue, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth
) -> None:
    """Encode a key-value pair.

    Args:
        key: Key name
        value: Value to encode
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
    """
    if is_json_primitive(value):
        writer.push(depth, f"{encode_key(key)}: {encode_primitive(value, options.delimiter)}")
    elif is_json_array(value):
        encode_array(value, options, writer, depth, key)
    elif is_json_object(value):
        # Empty nested objects are dropped
        if value:
            writer.push(depth, f"{encode_key(key)}:")
            encode_object(value, options, writer, depth + 1)


def detect_tabular_header(arr: JsonArray) -> Optional[List[str]]:
    """Detect if array can use tabular format and return header keys.

    Every element must be an object with the same key set as the first one
    (order does not matter) and only primitive values.

    Args:
        arr: Array to check

    Returns:
        Keys of the first object in their order if tabular, None otherwise
    """
    if not is_array_of_objects(arr):
        return None

    first_keys = list(arr[0].keys())
    if not first_keys:
        return None

    key_set = set(first_keys)
    for obj in arr:
        if len(obj) != len(first_keys) or set(obj.keys()) != key_set:
            return None
        if not all(is_json_primitive(value) for value in obj.values()):
            return None

    return first_keys


def classify_array(arr: JsonArray) -> ArrayShape:
    """Pick the representation for an array.

    Args:
        arr: Normalized array

    Returns:
        ArrayShape tagged with the kind, carrying field names for tables
    """
    if not arr:
        return ArrayShape(ArrayKind.EMPTY)
    fields = detect_tabular_header(arr)
    if fields is not None:
        return ArrayShape(ArrayKind.TABULAR, fields)
    if is_array_of_primitives(arr):
        return ArrayShape(ArrayKind.PRIMITIVE_LIST)
    return ArrayShape(ArrayKind.GENERAL_LIST)


def encode_array(
    arr: JsonArray, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth, key: Optional[str]
) -> None:
    """Encode an array to TOON format.

    The header goes on the current line, right after the key when there is
    one; any body lines go one level deeper.

    Args:
        arr: List array
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    shape = classify_array(arr)

    if shape.kind is ArrayKind.EMPTY:
        writer.push(depth, format_header(key, 0, None, options.delimiter))
    elif shape.kind is ArrayKind.TABULAR:
        encode_array_of_objects_as_tabular(arr, shape.fields, options, writer, depth, key)
    elif shape.kind is ArrayKind.PRIMITIVE_LIST:
        encode_inline_primitive_array(arr, options, writer, depth, key)
    else:
        encode_mixed_array_as_list_items(arr, options, writer, depth, key)


def encode_inline_primitive_array(
    arr: JsonArray, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth, key: Optional[str]
) -> None:
    """Encode an array of primitives inline.

    Values are always comma separated; the configured delimiter only applies
    to tabular arrays.
    """
    encoded_values = [encode_primitive(item, options.delimiter) for item in arr]
    joined = join_encoded_values(encoded_values, INLINE_ARRAY_SEPARATOR)
    header = format_header(key, len(arr), None, options.delimiter)
    writer.push(depth, f"{header} {joined}")


def encode_array_of_objects_as_tabular(
    arr: List[JsonObject],
    fields: List[str],
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
    key: Optional[str],
) -> None:
    """Encode array of uniform objects in tabular format.

    Args:
        arr: Array of uniform objects
        fields: Field names for header
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    writer.push(depth, format_header(key, len(arr), fields, options.delimiter))

    for obj in arr:
        row_values = [encode_tabular_value(obj[field], options.delimiter) for field in fields]
        writer.push(depth + 1, join_encoded_values(row_values, options.delimiter))


def encode_mixed_array_as_list_items(
    arr: JsonArray, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth, key: Optional[str]
) -> None:
    """Encode mixed array as list items.

    Args:
        arr: Mixed array
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    writer.push(depth, format_header(key, len(arr), None, options.delimiter))

    for item in arr:
        if is_json_primitive(item):
            writer.push(depth + 1, f"{LIST_ITEM_PREFIX}{encode_primitive(item, options.delimiter)}")
        elif is_json_object(item):
            encode_object_as_list_item(item, options, writer, depth + 1)
        elif is_json_array(item):
            start = len(writer)
            encode_array(item, options, writer, depth + 1, None)
            writer.prefix_line(start, LIST_ITEM_PREFIX)


def encode_object_as_list_item(obj: JsonObject, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth) -> None:
    """Encode object as a list item.

    The object is rendered at the item depth; its first line is put after
    the ``- `` marker and the remaining lines keep the object's own depth.

    Args:
        obj: Object to encode
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
    """
    start = len(writer)
    encode_object(obj, options, writer, depth)
    if len(writer) == start:
        writer.push(depth, LIST_ITEM_MARKER)
        return
    writer.prefix_line(start, LIST_ITEM_PREFIX)
