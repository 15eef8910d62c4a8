"""Normalization of host values into the JSON data model."""

import dataclasses
import math
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from .errors import UnsupportedValueError
from .types import JsonArray, JsonValue


def normalize_value(value: Any) -> JsonValue:
    """Normalize a value to the JSON data model.

    Args:
        value: Any value built from Python containers and scalars

    Returns:
        Equivalent value made only of None, bool, int, float, str, dict and list

    Raises:
        UnsupportedValueError: If the value has no TOON representation
    """
    if value is None or isinstance(value, (bool, str)):
        return value

    if isinstance(value, int):
        return int(value)

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        if value == 0:
            return 0
        return value

    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        if value == value.to_integral_value():
            return int(value)
        return float(value)

    # datetime is a subclass of date, so it goes first
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    if isinstance(value, Mapping):
        return {str(k): normalize_value(v) for k, v in value.items()}

    if isinstance(value, (list, tuple, set, frozenset)):
        return [normalize_value(item) for item in value]

    # Pydantic v2 BaseModel
    if hasattr(value, "model_dump") and hasattr(type(value), "model_fields"):
        return normalize_value(value.model_dump())

    # Pydantic v1 BaseModel
    if hasattr(value, "dict") and isinstance(getattr(type(value), "__fields__", None), dict):
        return normalize_value(value.dict())

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return normalize_value(dataclasses.asdict(value))

    raise UnsupportedValueError(f"Cannot encode value of type {type(value).__name__}")


def is_json_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def is_json_array(value: Any) -> bool:
    return isinstance(value, list)


def is_json_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_array_of_primitives(value: JsonArray) -> bool:
    return all(is_json_primitive(item) for item in value)


def is_array_of_objects(value: JsonArray) -> bool:
    return bool(value) and all(is_json_object(item) for item in value)
