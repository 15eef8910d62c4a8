"""Tests for value normalization."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType

import pytest

from toon import UnsupportedValueError, encode
from toon.normalize import (
    is_array_of_objects,
    is_array_of_primitives,
    is_json_primitive,
    normalize_value,
)


@dataclass
class Point:
    x: int
    y: int


class TestNormalizeValue:
    def test_passthrough(self):
        data = {"a": [1, "x", None, True, 1.5]}
        assert normalize_value(data) == data

    def test_tuple_and_set(self):
        assert normalize_value((1, 2)) == [1, 2]
        assert normalize_value(frozenset([3])) == [3]

    def test_mapping(self):
        assert normalize_value(MappingProxyType({"a": 1})) == {"a": 1}

    def test_non_string_keys(self):
        assert normalize_value({1: "a"}) == {"1": "a"}

    def test_floats(self):
        assert normalize_value(float("nan")) is None
        assert normalize_value(float("-inf")) is None
        assert normalize_value(-0.0) == 0

    def test_decimal(self):
        assert normalize_value(Decimal("2")) == 2
        assert isinstance(normalize_value(Decimal("2")), int)
        assert normalize_value(Decimal("1.25")) == 1.25

    def test_dates(self):
        assert normalize_value(date(2024, 1, 15)) == "2024-01-15"
        assert normalize_value(datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00"

    def test_dataclass(self):
        assert normalize_value(Point(1, 2)) == {"x": 1, "y": 2}

    def test_unsupported(self):
        with pytest.raises(UnsupportedValueError):
            normalize_value(object())
        with pytest.raises(UnsupportedValueError):
            normalize_value(Point)


def test_pydantic_model():
    pydantic = pytest.importorskip("pydantic")

    class User(pydantic.BaseModel):
        id: int
        name: str

    assert encode({"users": [User(id=1, name="Ada"), User(id=2, name="Bob")]}) == "users[2]{id,name}:\n  1,Ada\n  2,Bob"


def test_dates_encode():
    assert encode({"d": date(2024, 1, 15)}) == "d: 2024-01-15"
    assert encode({"t": datetime(2024, 1, 15, 10, 30)}) == 't: "2024-01-15T10:30:00"'


def test_predicates():
    assert is_json_primitive(None)
    assert not is_json_primitive([])
    assert is_array_of_primitives([])
    assert is_array_of_primitives([1, "a"])
    assert not is_array_of_objects([])
    assert is_array_of_objects([{}, {"a": 1}])
