"""Patchx: persistent RFC 6902 JSON Patch application."""

from ._settings import settings
from .cli import app
from .compare import compare, equal
from .errors import (
    InvalidArrayIndex,
    InvalidPatch,
    InvalidPointer,
    InvalidPrefixMove,
    JsonPatchError,
    MissingField,
    NotFound,
    OutOfBounds,
    PathNotObjectOrArray,
    PointerExhausted,
    TestMismatch,
    UnknownOperation,
)
from .jsonpatch import (
    AddOperation,
    CopyOperation,
    JsonPatch,
    MoveOperation,
    PatchOperation,
    RemoveOperation,
    ReplaceOperation,
    TestOperation,
    apply_patch,
    parse_operation,
)
from .jsonpointer import JsonPointer
from .types import UNDEFINED, JsonValue
from .version import __version__

__all__ = (
    "__version__",
    "AddOperation",
    "CopyOperation",
    "InvalidArrayIndex",
    "InvalidPatch",
    "InvalidPointer",
    "InvalidPrefixMove",
    "JsonPatch",
    "JsonPatchError",
    "JsonPointer",
    "JsonValue",
    "MissingField",
    "MoveOperation",
    "NotFound",
    "OutOfBounds",
    "PatchOperation",
    "PathNotObjectOrArray",
    "PointerExhausted",
    "RemoveOperation",
    "ReplaceOperation",
    "TestMismatch",
    "TestOperation",
    "UNDEFINED",
    "UnknownOperation",
    "app",
    "apply_patch",
    "compare",
    "equal",
    "parse_operation",
    "settings",
)
