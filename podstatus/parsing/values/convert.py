"""
Conversion from dbus-fast values to the typed value tree.

dbus-fast unmarshals ``v`` as ``Variant`` objects that keep their signature,
dicts as ``dict`` and byte arrays as ``bytes``. The signature type drives the
conversion so every node keeps the kind it was sent with.
"""
from __future__ import annotations

from typing import Any, Optional

from dbus_fast import Variant
from dbus_fast.signature import SignatureType, get_signature_tree

from podstatus.parsing.values.model import (
    ArrayNode,
    BASIC_KINDS,
    EntryNode,
    FIXED_KINDS,
    Kind,
    NODE_TYPES,
    OpaqueNode,
    ScalarNode,
    TaggedValue,
    VariantNode,
)


def from_variant(variant: Variant) -> VariantNode:
    return VariantNode(inner=from_dbus(variant.type, variant.value))


def from_signature(signature: str, value: Any) -> TaggedValue:
    """
    Convert ``value`` described by a single complete type ``signature``.

    Args:
        signature: A D-Bus signature holding exactly one complete type.
        value: The value as dbus-fast would unmarshal it.
    """
    types = get_signature_tree(signature).types
    if len(types) != 1:
        raise ValueError(f"Expected a single complete type, got {signature!r}")
    return from_dbus(types[0], value)


def from_dbus(type_: SignatureType, value: Any) -> TaggedValue:
    kind = Kind.from_token(type_.token)
    if kind is Kind.VARIANT:
        if isinstance(value, Variant):
            return from_variant(value)
        return OpaqueNode(kind=kind, value=value)
    if kind is Kind.ARRAY:
        return _array_from_dbus(type_.children[0], value)
    if kind in BASIC_KINDS:
        return ScalarNode(kind=kind, value=value)
    return OpaqueNode(kind=kind, value=value)


def _array_from_dbus(element_type: SignatureType, value: Any) -> ArrayNode:
    element_kind = Kind.from_token(element_type.token)
    if element_kind is Kind.DICT_ENTRY:
        key_type, value_type = element_type.children
        entries = tuple(
            EntryNode(key=from_dbus(key_type, k), value=from_dbus(value_type, v))
            for k, v in value.items()
        )
        return ArrayNode(element_kind=element_kind, elements=entries)
    if element_kind is Kind.BYTE:
        return ArrayNode(element_kind=element_kind, elements=bytes(value))
    if element_kind in FIXED_KINDS:
        return ArrayNode(element_kind=element_kind, elements=tuple(value))
    return ArrayNode(
        element_kind=element_kind,
        elements=tuple(from_dbus(element_type, item) for item in value),
    )


def as_tagged_value(raw: Any) -> Optional[TaggedValue]:
    """
    Normalise a property value for the walker.

    Tree nodes pass through, dbus-fast variants are converted, anything else
    carries no type information and yields ``None``.
    """
    if isinstance(raw, NODE_TYPES):
        return raw
    if isinstance(raw, Variant):
        return from_variant(raw)
    return None
