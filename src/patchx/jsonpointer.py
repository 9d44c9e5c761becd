"""RFC6901."""

import re
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .errors import (
    InvalidArrayIndex,
    InvalidPointer,
    NotFound,
    PathNotObjectOrArray,
    PointerExhausted,
)
from .types import UNDEFINED, is_array, is_object, kind_of

ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")
END_OF_ARRAY = "-"


def escape(token: str) -> str:
    """Escape a member name for use as a reference token."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape(token: str) -> str:
    """Decode a reference token into a member name."""
    return token.replace("~1", "/").replace("~0", "~")


class JsonPointer(str):
    """A JSON Pointer that can reference parts of a JSON document.

    Tokens are kept raw: how a token decodes depends on whether it is read
    against an object or an array, which is only known while walking a
    concrete document.
    """

    __slots__ = ("tokens",)
    tokens: tuple[str, ...]

    def __new__(cls, pointer: Any):
        """Validate before new JsonPointer object."""
        if not isinstance(pointer, str):
            raise InvalidPointer(
                f"bad path: should be a string, was {kind_of(pointer)}",
                pointer=pointer,
            )
        tokens = pointer.split("/")
        if tokens.pop(0) != "":
            raise InvalidPointer(
                'bad path: should be "" or start with "/"', pointer=pointer
            )

        self = super().__new__(cls, pointer)
        self.tokens = tuple(tokens)
        return self

    def __contains__(self, key: object):
        if isinstance(key, JsonPointer):
            return key.is_prefix_of(self)
        if not isinstance(key, str):
            raise TypeError('Unsupported operand types for in ("object" and "str")')
        return super().__contains__(key)

    def __truediv__(self, reference_token: str | int):
        return JsonPointer("/".join((str(self), escape(str(reference_token)))))

    def __eq__(self, other: Any):
        if isinstance(other, JsonPointer):
            return self.tokens == other.tokens
        if isinstance(other, str):
            return str(self) == other
        return False

    def __hash__(self):
        return str.__hash__(self)

    def __repr__(self):
        return f'{self.__class__.__name__}("{self}")'

    def is_prefix_of(self, other: "JsonPointer") -> bool:
        """Whether every token of this pointer leads ``other`` in order."""
        return other.tokens[: len(self.tokens)] == self.tokens

    def is_fully_read(self, position: int) -> bool:
        """Whether a walk that consumed ``position`` tokens is at the target."""
        return position >= len(self.tokens)

    def read_token(self, position: int, context: Any) -> str | int:
        """Decode the token at ``position`` against the node it indexes.

        Objects take the unescaped member name; arrays take a canonical
        non-negative integer, or ``-`` meaning one past the last element.
        """
        if self.is_fully_read(position):
            read = "".join(f"/{token}" for token in self.tokens[:position])
            raise PointerExhausted(
                f'pointer is already fully read; valid section was "{read}"',
                pointer=str(self),
                position=position,
            )
        token = self.tokens[position]

        if is_object(context):
            return unescape(token)
        if is_array(context):
            if token == END_OF_ARRAY:
                return len(context)
            if ARRAY_INDEX.fullmatch(token) is None:
                raise InvalidArrayIndex(
                    f'pointer token is not a valid array index, was "{token}"',
                    pointer=str(self),
                    token=token,
                )
            try:
                return int(token)
            except ValueError as e:
                raise InvalidArrayIndex(
                    "pointer token is out of range for an array index,"
                    f" was {len(token)} digits long",
                    pointer=str(self),
                    token=token,
                ) from e
        raise PathNotObjectOrArray(
            "pointer leads to an element that is neither an array nor an object"
            f" but {kind_of(context)}",
            pointer=str(self),
            position=position,
            found=kind_of(context),
        )

    def resolve(self, document: Any) -> list[str | int]:
        """Decode every token against the node it is read against."""
        indices = []
        node = document
        for position in range(len(self.tokens)):
            index = self.read_token(position, node)
            indices.append(index)
            node = member(node, index)
        return indices

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Provide Pydantic validation schema for JsonPointer."""
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, return_schema=core_schema.str_schema()
            ),
        )


def member(node: Any, index: str | int) -> Any:
    """Return the child of ``node`` at a decoded index, or ``UNDEFINED``."""
    if is_object(node):
        return node.get(index, UNDEFINED)  # type: ignore[call-overload]
    if is_array(node) and isinstance(index, int) and index < len(node):
        return node[index]
    return UNDEFINED


def getitem(document: Any, pointer: JsonPointer) -> Any:
    """Retrieve the value ``pointer`` references; it must exist."""
    node = document
    for position in range(len(pointer.tokens)):
        index = pointer.read_token(position, node)
        node = member(node, index)
        if node is UNDEFINED:
            raise NotFound(
                "pointer does not lead anywhere", pointer=str(pointer), index=index
            )
    return node


def exists(document: Any, pointer: JsonPointer) -> bool:
    """Whether ``pointer`` references a value.

    A missing member anywhere along the way means False; a scalar with
    tokens left to read is still an error.
    """
    node = document
    for position in range(len(pointer.tokens)):
        node = member(node, pointer.read_token(position, node))
        if node is UNDEFINED:
            return False
    return True


__all__ = ("JsonPointer", "escape", "exists", "getitem", "member", "unescape")
