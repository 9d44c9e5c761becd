"""Tests for typed structural equality."""

import pytest

from patchx.compare import compare, equal
from patchx.errors import TestMismatch
from patchx.types import UNDEFINED, kind_of


@pytest.mark.parametrize(
    "a, b",
    [
        (None, None),
        (True, True),
        (False, False),
        (1, 1),
        (1, 1.0),
        (0.5, 0.5),
        ("abc", "abc"),
        ([1, "b", True], [1, "b", True]),
        ({"b1": 1, "b2": "b"}, {"b2": "b", "b1": 1}),
        ({"a": [{"b": None}]}, {"a": [{"b": None}]}),
        ([], []),
        ({}, {}),
    ],
)
def test_equal_values(a, b):
    assert equal(a, b)
    assert equal(b, a)


@pytest.mark.parametrize(
    "a, b",
    [
        (True, 1),
        (False, 0),
        (None, False),
        ("1", 1),
        ([1], {"0": 1}),
        ([1, 2], [2, 1]),
        ([1], [1, 1]),
        ({"a": 1}, {"a": 1, "b": 2}),
        ({"a": 1}, {"b": 1}),
        ({"a": {"b": 1}}, {"a": {"b": 2}}),
        ("é", "e"),
    ],
)
def test_unequal_values(a, b):
    assert not equal(a, b)
    assert not equal(b, a)


def test_type_mismatch_reports_kinds():
    with pytest.raises(TestMismatch) as excinfo:
        compare("1", 1)
    error = excinfo.value
    assert error.context["reason"] == "type"
    assert error.context["expected"] == "string"
    assert error.context["actual"] == "number"
    assert str(error) == "test target is a number but the value is string"


def test_type_mismatch_article():
    with pytest.raises(TestMismatch, match="test target is an array"):
        compare({}, [])


def test_array_length_mismatch():
    with pytest.raises(TestMismatch, match="arrays of differing length") as excinfo:
        compare([1, 2], [1])
    assert excinfo.value.context["expected"] == 2
    assert excinfo.value.context["actual"] == 1


def test_object_key_count_mismatch():
    with pytest.raises(TestMismatch, match="different number of keys") as excinfo:
        compare({"a": 1}, {"a": 1, "b": 2})
    assert excinfo.value.context["reason"] == "length"


def test_object_missing_key():
    with pytest.raises(TestMismatch, match="test target lacks a key: b") as excinfo:
        compare({"a": 1, "b": 2}, {"a": 1, "c": 2})
    assert excinfo.value.context["reason"] == "missing_key"
    assert excinfo.value.context["key"] == "b"


def test_value_mismatch_points_at_location():
    with pytest.raises(TestMismatch, match="^3 is not equal to 2$") as excinfo:
        compare({"a": [1, 2]}, {"a": [1, 3]})
    assert excinfo.value.context["reason"] == "value"
    assert excinfo.value.context["pointer"] == "/a/1"


def test_undefined_never_equals_a_value():
    assert not equal(None, UNDEFINED)
    assert kind_of(UNDEFINED) == "undefined"


def test_kind_of():
    assert [kind_of(v) for v in (None, True, 1, 1.5, "s", [], {})] == [
        "null",
        "boolean",
        "number",
        "number",
        "string",
        "array",
        "object",
    ]
    assert kind_of((1, 2)) == "array"
