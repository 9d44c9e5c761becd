"""RFC 6902 JSON Patch implementation.

This module applies JSON Patch (RFC 6902) documents to JSON values. Every
operation rebuilds only the containers along its target path and shares all
other subtrees with the input, so the caller's document is never modified
and a failing patch leaves nothing half-applied behind.
"""

import json
import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from functools import reduce
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from .compare import compare
from .errors import (
    InvalidPatch,
    InvalidPrefixMove,
    JsonPatchError,
    MissingField,
    NotFound,
    OutOfBounds,
    UnknownOperation,
)
from .jsonpointer import JsonPointer, exists, getitem, member
from .types import UNDEFINED, is_array, is_object

logger = logging.getLogger(__name__)


def _rebuild(node: Any, index: str | int, child: Any, *, insert: bool = False):
    """Copy one container level with a single slot changed."""
    if is_object(node):
        new_object = dict(node)
        new_object[index] = child  # type: ignore[index]
        return new_object
    new_array = list(node)
    if insert:
        new_array.insert(index, child)  # type: ignore[arg-type]
    else:
        new_array[index] = child  # type: ignore[index]
    return new_array


def _add(node: Any, pointer: JsonPointer, position: int, value: Any) -> Any:
    index = pointer.read_token(position, node)
    if not pointer.is_fully_read(position + 1):
        child = _add(member(node, index), pointer, position + 1, value)
        return _rebuild(node, index, child)
    if is_array(node):
        if index > len(node):  # type: ignore[operator]
            raise OutOfBounds(
                "pointer points to an index that is out-of-bounds",
                pointer=str(pointer),
                index=index,
                length=len(node),
            )
        return _rebuild(node, index, value, insert=True)
    return _rebuild(node, index, value)


def _replace(node: Any, pointer: JsonPointer, position: int, value: Any) -> Any:
    index = pointer.read_token(position, node)
    if pointer.is_fully_read(position + 1):
        child = value
    else:
        child = _replace(member(node, index), pointer, position + 1, value)
    return _rebuild(node, index, child)


def _remove(node: Any, pointer: JsonPointer, position: int) -> Any:
    index = pointer.read_token(position, node)
    if not pointer.is_fully_read(position + 1):
        child = _remove(member(node, index), pointer, position + 1)
        return _rebuild(node, index, child)
    if member(node, index) is UNDEFINED:
        raise NotFound(
            "pointer does not lead anywhere", pointer=str(pointer), index=index
        )
    if is_object(node):
        new_object = dict(node)
        del new_object[index]  # type: ignore[arg-type]
        return new_object
    new_array = list(node)
    del new_array[index]  # type: ignore[arg-type]
    return new_array


def add_value(document: Any, pointer: JsonPointer, value: Any) -> Any:
    """Return ``document`` with ``value`` added at ``pointer``.

    Objects gain or overwrite the member; arrays get ``value`` inserted
    before the index, with ``-`` appending. The container must exist, the
    member itself need not.
    """
    if not pointer.tokens:
        return value
    return _add(document, pointer, 0, value)


def replace_value(document: Any, pointer: JsonPointer, value: Any) -> Any:
    """Return ``document`` with the existing value at ``pointer`` replaced."""
    if not exists(document, pointer):
        raise NotFound(
            "pointer points to a nonexistent location", pointer=str(pointer)
        )
    if not pointer.tokens:
        return value
    return _replace(document, pointer, 0, value)


def remove_value(document: Any, pointer: JsonPointer) -> Any:
    """Return ``document`` without the value at ``pointer``.

    Removing the root leaves :data:`~patchx.types.UNDEFINED`.
    """
    if not pointer.tokens:
        return UNDEFINED
    return _remove(document, pointer, 0)


class AddOperation(BaseModel, frozen=True):
    """Add operation - adds a value to an object or inserts into an array."""

    op: Literal["add"] = "add"
    path: JsonPointer
    value: Any

    def apply(self, obj: Any) -> Any:
        """Apply add operation."""
        return add_value(obj, self.path, self.value)


class RemoveOperation(BaseModel, frozen=True):
    """Remove operation - removes a value from an object or array."""

    op: Literal["remove"] = "remove"
    path: JsonPointer

    def apply(self, obj: Any) -> Any:
        """Apply remove operation."""
        return remove_value(obj, self.path)


class ReplaceOperation(BaseModel, frozen=True):
    """Replace operation - replaces a value."""

    op: Literal["replace"] = "replace"
    path: JsonPointer
    value: Any

    def apply(self, obj: Any) -> Any:
        """Apply replace operation."""
        return replace_value(obj, self.path, self.value)


class MoveOperation(
    BaseModel,
    frozen=True,
    validate_by_alias=True,
    validate_by_name=True,
    serialize_by_alias=True,
):
    """Move operation - removes value at 'from' location and adds it to 'path'."""

    op: Literal["move"] = "move"
    path: JsonPointer
    from_: JsonPointer = Field(alias="from")

    def to_atomic_operations(self, obj: Any) -> list["PatchOperation"]:
        """Return the equivalent atomic operations for this move.

        Moving a location onto itself only requires it to exist, and yields
        no operations.

        Raises:
            InvalidPrefixMove: If 'from' is a proper prefix of 'path'.
            NotFound: If nothing exists at 'from'.

        """
        if self.from_ == self.path:
            getitem(obj, self.from_)
            return []
        if self.from_.is_prefix_of(self.path):
            raise InvalidPrefixMove(
                "from pointer cannot be a prefix of path pointer",
                from_=str(self.from_),
                path=str(self.path),
            )
        value = getitem(obj, self.from_)
        return [
            RemoveOperation(path=self.from_),
            AddOperation(path=self.path, value=value),
        ]

    def apply(self, obj: Any) -> Any:
        """Apply move operation."""
        return reduce(lambda d, op: op.apply(d), self.to_atomic_operations(obj), obj)


class CopyOperation(
    BaseModel,
    frozen=True,
    validate_by_alias=True,
    validate_by_name=True,
    serialize_by_alias=True,
):
    """Copy operation - copies value at 'from' location to 'path'."""

    op: Literal["copy"] = "copy"
    path: JsonPointer
    from_: JsonPointer = Field(alias="from")

    def to_atomic_operations(self, obj: Any) -> list["PatchOperation"]:
        """Return the equivalent atomic operations for this copy.

        The copied subtree is shared with its source, not duplicated.
        """
        return [AddOperation(path=self.path, value=getitem(obj, self.from_))]

    def apply(self, obj: Any) -> Any:
        """Apply copy operation."""
        return reduce(lambda d, op: op.apply(d), self.to_atomic_operations(obj), obj)


class TestOperation(BaseModel, frozen=True):
    """Test operation - tests that a value at the location equals the specified value."""

    __test__ = False
    op: Literal["test"] = "test"
    path: JsonPointer
    value: Any

    def apply(self, obj: Any) -> Any:
        """Apply test operation.

        Returns:
            The unchanged object if test passes.

        Raises:
            TestMismatch: If the value at 'path' differs from 'value'.
            NotFound: If nothing exists at 'path'.

        """
        compare(self.value, getitem(obj, self.path), self.path)
        return obj


# Union type for all operations, discriminated by `op`
PatchOperation = Annotated[
    AddOperation
    | RemoveOperation
    | ReplaceOperation
    | MoveOperation
    | CopyOperation
    | TestOperation,
    Field(discriminator="op"),
]

OPERATIONS: dict[str, type[BaseModel]] = {
    "add": AddOperation,
    "remove": RemoveOperation,
    "replace": ReplaceOperation,
    "move": MoveOperation,
    "copy": CopyOperation,
    "test": TestOperation,
}

REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "add": ("path", "value"),
    "remove": ("path",),
    "replace": ("path", "value"),
    "move": ("from", "path"),
    "copy": ("from", "path"),
    "test": ("path", "value"),
}


@contextmanager
def _failing_as(op: str, index: int | None) -> Iterator[None]:
    """Label errors raised inside with the operation that caused them."""
    try:
        yield
    except JsonPatchError as e:
        e.operation = op
        e.index = index
        e.describe(f"{op} failed")
        raise


def parse_operation(data: Any, *, index: int | None = None) -> PatchOperation:
    """Build an operation from loosely typed input such as parsed JSON.

    Members not defined for the operation are ignored.

    Raises:
        UnknownOperation: If 'op' is missing or not one of the six names.
        MissingField: If a member the operation requires is absent.
        InvalidPointer: If 'path' or 'from' is not a valid pointer string.

    """
    if isinstance(data, tuple(OPERATIONS.values())):
        return data
    op = data.get("op") if is_object(data) else None
    if not isinstance(op, str) or op not in OPERATIONS:
        raise UnknownOperation(
            "illegal op: should be add/copy/move/remove/replace/test,"
            f" was {json.dumps(op, default=repr)}",
            op=op,
        )
    with _failing_as(op, index):
        fields = {}
        for field in REQUIRED_FIELDS[op]:
            if field not in data:
                raise MissingField(f"missing {field}", field=field)
            fields[field] = data[field]
        for field in ("from", "path"):
            if field in fields:
                fields[field] = JsonPointer(fields[field])
        return OPERATIONS[op].model_validate(fields)


class JsonPatch(BaseModel):
    """A JSON Patch document - a sequence of operations to apply to a JSON document."""

    patch: list[PatchOperation] = Field(default_factory=list)

    @classmethod
    def from_operations(cls, operations: Iterable[Any]) -> "JsonPatch":
        """Build a patch from operation models or loosely typed mappings.

        Raises:
            InvalidPatch: If ``operations`` is not an array of operations.

        """
        if not is_array(operations):
            raise InvalidPatch("bad patch: should be an array of operations")
        return cls(
            patch=[
                parse_operation(operation, index=index)
                for index, operation in enumerate(operations)
            ]
        )

    def apply(self, obj: Any) -> Any:
        """Apply all patch operations in sequence.

        Each operation consumes the document the previous one produced. The
        input is never modified, so when an operation fails the caller still
        holds the original document.

        Raises:
            JsonPatchError: The first failure, labelled with its operation.

        """
        result = obj
        for index, operation in enumerate(self.patch):
            try:
                with _failing_as(operation.op, index):
                    result = operation.apply(result)
            except JsonPatchError as e:
                logger.info("patch rejected at operation %d: %s", index, e)
                raise
            logger.debug("applied %s at %r", operation.op, operation.path)
        return result


def apply_patch(document: Any, patch: JsonPatch | Iterable[Any]) -> Any:
    """Apply ``patch`` to ``document`` and return the patched document.

    Args:
        document: The JSON value to patch. It is left untouched.
        patch: A :class:`JsonPatch`, or a sequence of operations given as
            operation models or mappings.

    Raises:
        JsonPatchError: If any operation is invalid or fails.

    """
    if not isinstance(patch, JsonPatch):
        patch = JsonPatch.from_operations(patch)
    return patch.apply(document)


__all__ = (
    "AddOperation",
    "CopyOperation",
    "JsonPatch",
    "MoveOperation",
    "PatchOperation",
    "RemoveOperation",
    "ReplaceOperation",
    "TestOperation",
    "add_value",
    "apply_patch",
    "parse_operation",
    "remove_value",
    "replace_value",
)
