"""Typed structural equality used by the ``test`` operation."""

import json
from typing import Any

from .errors import TestMismatch
from .jsonpointer import JsonPointer
from .types import kind_of

ROOT = JsonPointer("")


def _render(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def _compare_object(expected: Any, actual: Any, where: JsonPointer) -> None:
    if len(expected) != len(actual):
        raise TestMismatch(
            "test target has a different number of keys than the compared value",
            reason="length",
            pointer=str(where),
            expected=len(expected),
            actual=len(actual),
        )
    for key in expected:
        if key not in actual:
            raise TestMismatch(
                f"test target lacks a key: {key}",
                reason="missing_key",
                pointer=str(where),
                key=key,
            )
    for key in actual:
        if key not in expected:
            raise TestMismatch(
                f"test target has an extra key: {key}",
                reason="extra_key",
                pointer=str(where),
                key=key,
            )
    for key in expected:
        compare(expected[key], actual[key], where / key)


def _compare_array(expected: Any, actual: Any, where: JsonPointer) -> None:
    if len(expected) != len(actual):
        raise TestMismatch(
            "test target and value are arrays of differing length",
            reason="length",
            pointer=str(where),
            expected=len(expected),
            actual=len(actual),
        )
    for index, (left, right) in enumerate(zip(expected, actual)):
        compare(left, right, where / index)


def compare(expected: Any, actual: Any, where: JsonPointer = ROOT) -> None:
    """Raise :class:`TestMismatch` unless ``actual`` equals ``expected``.

    Both values must be of the same JSON kind. Numbers compare by value,
    so ``1`` equals ``1.0`` but never ``True``. Objects compare by key set,
    regardless of member order.
    """
    expected_kind, actual_kind = kind_of(expected), kind_of(actual)
    if expected_kind != actual_kind:
        raise TestMismatch(
            f"test target is {'an' if actual_kind[0] in 'aeiou' else 'a'}"
            f" {actual_kind} but the value is {expected_kind}",
            reason="type",
            pointer=str(where),
            expected=expected_kind,
            actual=actual_kind,
        )
    if expected_kind == "object":
        _compare_object(expected, actual, where)
    elif expected_kind == "array":
        _compare_array(expected, actual, where)
    elif expected != actual:
        raise TestMismatch(
            f"{_render(actual)} is not equal to {_render(expected)}",
            reason="value",
            pointer=str(where),
            expected=expected,
            actual=actual,
        )


def equal(a: Any, b: Any) -> bool:
    """Whether ``a`` and ``b`` are equal under the JSON typed-equality rules."""
    try:
        compare(a, b)
    except TestMismatch:
        return False
    return True


__all__ = ("compare", "equal")
