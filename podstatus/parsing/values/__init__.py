"""
Typed value tree for D-Bus property payloads.

This sub-package models self-describing values (scalars, variants, arrays,
dict entries), converts dbus-fast values into that model, and walks trees
looking for the status payload marker.
"""
from podstatus.parsing.values.convert import (
    as_tagged_value,
    from_dbus,
    from_signature,
    from_variant,
)
from podstatus.parsing.values.model import (
    ArrayNode,
    EntryNode,
    FIXED_KINDS,
    Kind,
    OpaqueNode,
    ScalarNode,
    TaggedValue,
    VariantNode,
)
from podstatus.parsing.values.walk import DEFAULT_MARKER, TreeWalker

__all__ = [
    "as_tagged_value",
    "from_dbus",
    "from_signature",
    "from_variant",
    "ArrayNode",
    "EntryNode",
    "FIXED_KINDS",
    "Kind",
    "OpaqueNode",
    "ScalarNode",
    "TaggedValue",
    "VariantNode",
    "DEFAULT_MARKER",
    "TreeWalker",
]
