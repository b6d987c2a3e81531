"""
Typed value tree for self-describing D-Bus property values.

Each node carries the D-Bus type code it was decoded from, so consumers can
dispatch on structure without knowing the schema in advance.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class Kind(str, Enum):
    BOOLEAN = "b"
    BYTE = "y"
    INT16 = "n"
    UINT16 = "q"
    INT32 = "i"
    UINT32 = "u"
    INT64 = "x"
    UINT64 = "t"
    DOUBLE = "d"
    UNIX_FD = "h"
    STRING = "s"
    OBJECT_PATH = "o"
    SIGNATURE = "g"
    VARIANT = "v"
    ARRAY = "a"
    STRUCT = "("
    DICT_ENTRY = "{"
    INVALID = ""

    @classmethod
    def from_token(cls, token: str) -> "Kind":
        try:
            return cls(token)
        except ValueError:
            return cls.INVALID


# Kinds whose arrays are dense buffers rather than sequences of nodes.
FIXED_KINDS: frozenset[Kind] = frozenset({
    Kind.BOOLEAN,
    Kind.BYTE,
    Kind.INT16,
    Kind.UINT16,
    Kind.INT32,
    Kind.UINT32,
    Kind.INT64,
    Kind.UINT64,
    Kind.DOUBLE,
    Kind.UNIX_FD,
})

BASIC_KINDS: frozenset[Kind] = FIXED_KINDS | {Kind.STRING, Kind.OBJECT_PATH, Kind.SIGNATURE}


@dataclass(frozen=True)
class ScalarNode:
    kind: Kind
    value: Any


@dataclass(frozen=True)
class VariantNode:
    inner: "TaggedValue"


@dataclass(frozen=True)
class ArrayNode:
    """
    A homogeneous array.

    When ``element_kind`` is in ``FIXED_KINDS`` the elements are a dense buffer
    (``bytes`` for byte arrays, a tuple of numbers otherwise). Any other
    element kind holds a tuple of nodes.
    """
    element_kind: Kind
    elements: Union[bytes, tuple]

    @property
    def is_fixed(self) -> bool:
        return self.element_kind in FIXED_KINDS

    def __len__(self) -> int:
        return len(self.elements)


@dataclass(frozen=True)
class EntryNode:
    key: "TaggedValue"
    value: "TaggedValue"


@dataclass(frozen=True)
class OpaqueNode:
    """A value the tree keeps but does not interpret (structs, unknown codes)."""
    kind: Kind
    value: Any = None


TaggedValue = Union[ScalarNode, VariantNode, ArrayNode, EntryNode, OpaqueNode]

NODE_TYPES = (ScalarNode, VariantNode, ArrayNode, EntryNode, OpaqueNode)
