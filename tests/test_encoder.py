"""Tests for the TOON encoder."""

import pytest

from toon import UnsupportedValueError, encode
from toon.encoders import classify_array, detect_tabular_header
from toon.types import ArrayKind


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------

def test_flat_object():
    assert encode({"id": 1, "name": "Alice"}) == "id: 1\nname: Alice"

def test_nested_object():
    assert encode({"user": {"id": 1, "name": "Ada"}}) == "user:\n  id: 1\n  name: Ada"

def test_nested_object_custom_indent():
    assert encode({"user": {"id": 1}}, {"indent": 4}) == "user:\n    id: 1"

def test_empty_nested_object_is_dropped():
    assert encode({"a": {}, "b": 1}) == "b: 1"

def test_empty_root_object():
    assert encode({}) == ""

def test_key_order_preserved():
    assert encode({"z": 1, "a": 2, "m": 3}) == "z: 1\na: 2\nm: 3"

def test_non_identifier_keys_are_quoted():
    assert encode({"first name": "Ada", "a-b": 1}) == '"first name": Ada\n"a-b": 1'


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "v: null"),
        (True, "v: true"),
        (False, "v: false"),
        (42, "v: 42"),
        (-7, "v: -7"),
        (1.5, "v: 1.5"),
        (2.0, "v: 2"),
        (-0.0, "v: 0"),
        (1e20, "v: 100000000000000000000"),
        (1.5e-7, "v: 0.00000015"),
        (float("nan"), "v: null"),
        (float("inf"), "v: null"),
    ],
)
def test_scalar_rendering(value, expected):
    assert encode({"v": value}) == expected

@pytest.mark.parametrize(
    "value, expected",
    [
        ("hello world", "v: hello world"),
        ("true", 'v: "true"'),
        ("NULL", 'v: "NULL"'),
        ("a:b", 'v: "a:b"'),
        ("a,b", 'v: "a,b"'),
        ("[x]", 'v: "[x]"'),
        ("{x}", 'v: "{x}"'),
        ("", 'v: ""'),
        (" padded", 'v: " padded"'),
        ("42", 'v: "42"'),
        ("-3.5", 'v: "-3.5"'),
        ("+5", 'v: "+5"'),
        (".5", 'v: ".5"'),
        ("5.", 'v: "5."'),
        ('say "hi"', 'v: "say \\"hi\\""'),
        ("line\nbreak", 'v: "line\\nbreak"'),
        ("nan", "v: nan"),
    ],
)
def test_string_quoting(value, expected):
    assert encode({"v": value}) == expected

def test_string_with_active_delimiter_is_quoted():
    assert encode({"v": "a|b"}, {"delimiter": "|"}) == 'v: "a|b"'
    assert encode({"v": "a|b"}) == "v: a|b"

def test_root_scalar():
    assert encode("hello") == "hello"
    assert encode(None) == "null"


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------

def test_tabular_array():
    data = {"items": [{"sku": "A1", "qty": 2}, {"sku": "B2", "qty": 1}]}
    assert encode(data) == "items[2]{sku,qty}:\n  A1,2\n  B2,1"

def test_tabular_array_pipe_delimiter():
    data = {"items": [{"sku": "A1", "qty": 2}]}
    assert encode(data, {"delimiter": "pipe"}) == "items[1]{sku|qty}:\n  A1|2"

def test_tabular_array_tab_delimiter():
    data = {"items": [{"sku": "A1", "qty": 2}]}
    assert encode(data, {"delimiter": "\t"}) == "items[1]{sku\tqty}:\n  A1\t2"

def test_tabular_key_order_insensitive():
    data = [{"a": 1, "b": 2}, {"b": 3, "a": 4}]
    assert encode(data) == "[2]{a,b}:\n  1,2\n  4,3"

def test_tabular_cell_quoting():
    data = {"rows": [{"a": "x,y", "b": "true", "c": "12", "d": "[x]"}]}
    assert encode(data) == 'rows[1]{a,b,c,d}:\n  "x,y","true","12",[x]'

def test_tabular_cell_quoting_follows_delimiter():
    data = {"rows": [{"a": "x,y", "b": "p|q"}]}
    assert encode(data, {"delimiter": "|"}) == 'rows[1]{a|b}:\n  x,y|"p|q"'

def test_primitive_array_inline():
    assert encode({"tags": ["a", "b", "c"]}) == "tags[3]: a,b,c"

def test_primitive_array_ignores_delimiter():
    assert encode({"tags": ["a", "b", "c"]}, {"delimiter": "|"}) == "tags[3]: a,b,c"

def test_primitive_array_mixed_scalars():
    assert encode({"v": [1, "x", True, None, "a,b"]}) == 'v[5]: 1,x,true,null,"a,b"'

def test_empty_array():
    assert encode({"x": []}) == "x[0]:"
    assert encode([]) == "[0]:"

def test_differing_keys_use_list_form():
    assert encode({"items": [{"a": 1}, {"b": 2}]}) == "items[2]:\n  - a: 1\n  - b: 2"

def test_nested_value_uses_list_form():
    data = {"items": [{"a": 1, "tags": [1, 2]}]}
    assert encode(data) == "items[1]:\n  - a: 1\n  tags[2]: 1,2"

def test_list_item_object_with_nested_object():
    data = [{"a": 1, "b": {"c": 2}}]
    assert encode(data) == "[1]:\n  - a: 1\n  b:\n    c: 2"

def test_mixed_list():
    assert encode([1, {"a": 1}, [1, 2], "x"]) == "[4]:\n  - 1\n  - a: 1\n  - [2]: 1,2\n  - x"

def test_empty_object_list_item():
    assert encode([{}, 1]) == "[2]:\n  -\n  - 1"

def test_list_item_tabular_array():
    data = {"m": [[{"a": 1}, {"a": 2}]]}
    assert encode(data) == "m[1]:\n  - [2]{a}:\n    1\n    2"


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

class TestClassifyArray:
    def test_empty(self):
        assert classify_array([]).kind is ArrayKind.EMPTY

    def test_tabular(self):
        shape = classify_array([{"a": 1, "b": "x"}, {"b": "y", "a": 2}])
        assert shape.kind is ArrayKind.TABULAR
        assert shape.fields == ["a", "b"]

    def test_primitive(self):
        assert classify_array([1, "a", None]).kind is ArrayKind.PRIMITIVE_LIST

    def test_general(self):
        assert classify_array([1, [2]]).kind is ArrayKind.GENERAL_LIST

    def test_objects_without_keys_are_not_tabular(self):
        assert classify_array([{}, {}]).kind is ArrayKind.GENERAL_LIST

    def test_detect_tabular_header_rejects_nested_values(self):
        assert detect_tabular_header([{"a": {"b": 1}}]) is None
        assert detect_tabular_header([{"a": [1]}]) is None

    def test_detect_tabular_header_rejects_extra_keys(self):
        assert detect_tabular_header([{"a": 1}, {"a": 1, "b": 2}]) is None


# ---------------------------------------------------------------------------
# Errors and options
# ---------------------------------------------------------------------------

def test_unsupported_value():
    with pytest.raises(UnsupportedValueError):
        encode({"x": object()})

@pytest.mark.parametrize("options", [{"indent": 0}, {"indent": -2}, {"indent": True}, {"delimiter": ";"}])
def test_invalid_options(options):
    with pytest.raises(ValueError):
        encode({"a": 1}, options)
