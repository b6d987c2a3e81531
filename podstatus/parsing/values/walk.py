"""
Marker search over a typed value tree.

The walker looks for a ``uint16`` scalar equal to the marker (the company ID
preceding the status payload) and hands any byte array seen after it to the
status decoder. The flag is threaded in traversal order: once the marker has
been seen, later siblings are eligible too, not only descendants.
"""
from __future__ import annotations

from typing import Optional, Protocol

from podstatus.parsing.values.model import (
    ArrayNode,
    EntryNode,
    Kind,
    ScalarNode,
    TaggedValue,
    VariantNode,
)

# Apple's Bluetooth SIG company identifier.
DEFAULT_MARKER = 0x4C


class PayloadDecoder(Protocol):
    def decode(self, data: bytes, marker_found: bool) -> object:
        ...


class TreeWalker:
    def __init__(self, decoder: PayloadDecoder, marker: int = DEFAULT_MARKER) -> None:
        self.decoder = decoder
        self.marker = marker

    def walk(self, node: Optional[TaggedValue], marker_found: bool = False) -> bool:
        """
        Traverse ``node`` and return the updated marker flag.

        Args:
            node: Root of the (sub)tree, or ``None``.
            marker_found: Whether the marker was seen earlier in the traversal.

        Returns:
            ``False`` for a ``None`` root, otherwise the flag after this node.
        """
        if node is None:
            return False
        if isinstance(node, ScalarNode):
            if node.kind is Kind.UINT16 and node.value == self.marker:
                return True
            return marker_found
        if isinstance(node, VariantNode):
            # Variants pass the flag down but never change it for the caller.
            self.walk(node.inner, marker_found)
            return marker_found
        if isinstance(node, ArrayNode):
            return self._walk_array(node, marker_found)
        if isinstance(node, EntryNode):
            marker_found = self.walk(node.key, marker_found)
            return self.walk(node.value, marker_found)
        return marker_found

    def _walk_array(self, node: ArrayNode, marker_found: bool) -> bool:
        if node.is_fixed:
            if len(node) > 0 and node.element_kind is Kind.BYTE:
                self.decoder.decode(bytes(node.elements), marker_found)
            return marker_found
        for element in node.elements:
            marker_found = self.walk(element, marker_found)
        return marker_found
