"""Error taxonomy for pointer resolution and patch application."""

from typing import Any


class JsonPatchError(ValueError):
    """Base class of every failure raised while applying a patch.

    The concrete subclass is the error kind callers branch on. ``context``
    carries the structured details (tokens, indices, keys) the message was
    rendered from, so callers can produce their own diagnostics.
    """

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context
        self.operation: str | None = None
        self.index: int | None = None

    @property
    def kind(self) -> str:
        """Name of the error kind, e.g. ``"NotFound"``."""
        return type(self).__name__

    def describe(self, label: str) -> "JsonPatchError":
        """Prefix the message with ``label``, keeping the error kind."""
        self.message = f"{label}: {self.message}"
        self.args = (self.message,)
        return self

    def __str__(self):
        return self.message


class InvalidPointer(JsonPatchError):
    """Malformed pointer string."""


class InvalidArrayIndex(JsonPatchError):
    """Array token that is not a canonical non-negative integer or ``-``."""


class PathNotObjectOrArray(JsonPatchError):
    """Walk reached a scalar, null or missing member with tokens remaining."""


class PointerExhausted(JsonPatchError):
    """A token was requested past the end of the pointer."""


class OutOfBounds(JsonPatchError):
    """Array index beyond the array length on insertion."""


class NotFound(JsonPatchError):
    """Pointer does not lead to an existing value."""


class TestMismatch(JsonPatchError):
    """Value at the target location differs from the expected one."""

    __test__ = False


class MissingField(JsonPatchError):
    """Operation lacks a member its definition requires."""


class UnknownOperation(JsonPatchError):
    """Operation name is not one of the six defined ones."""


class InvalidPrefixMove(JsonPatchError):
    """``move`` whose ``from`` location is a proper prefix of ``path``."""


class InvalidPatch(JsonPatchError):
    """Patch document is not a sequence of operations."""


__all__ = (
    "JsonPatchError",
    "InvalidPointer",
    "InvalidArrayIndex",
    "PathNotObjectOrArray",
    "PointerExhausted",
    "OutOfBounds",
    "NotFound",
    "TestMismatch",
    "MissingField",
    "UnknownOperation",
    "InvalidPrefixMove",
    "InvalidPatch",
)
