"""Tests for the marker search over typed value trees."""
import io

from podstatus.parsing.status import LatchState, StatusDecoder
from podstatus.parsing.values import (
    ArrayNode,
    EntryNode,
    Kind,
    OpaqueNode,
    ScalarNode,
    TreeWalker,
    VariantNode,
)

MARKER = ScalarNode(Kind.UINT16, 0x4C)
PAYLOAD = bytes([0x10, 0x05, 0x00, 0x00, 0x00, 0x00, 0x23, 0x05, 0x00])


def _walker():
    sink = io.StringIO()
    return TreeWalker(StatusDecoder(LatchState(), sink)), sink


def _bytes(data: bytes = PAYLOAD) -> ArrayNode:
    return ArrayNode(Kind.BYTE, data)


def _manufacturer_data(company_id: int, data: bytes = PAYLOAD) -> VariantNode:
    entry = EntryNode(ScalarNode(Kind.UINT16, company_id), VariantNode(_bytes(data)))
    return VariantNode(ArrayNode(Kind.DICT_ENTRY, (entry,)))


def test_none_root_returns_false():
    walker, sink = _walker()
    assert walker.walk(None, True) is False
    assert sink.getvalue() == ""


def test_marker_scalar_sets_flag():
    walker, _ = _walker()
    assert walker.walk(MARKER) is True
    assert walker.walk(ScalarNode(Kind.UINT16, 0x4D)) is False


def test_marker_must_be_uint16():
    walker, _ = _walker()
    assert walker.walk(ScalarNode(Kind.UINT32, 0x4C)) is False
    assert walker.walk(ScalarNode(Kind.INT16, 0x4C)) is False


def test_other_scalar_keeps_flag():
    walker, _ = _walker()
    assert walker.walk(ScalarNode(Kind.STRING, "x"), True) is True


def test_manufacturer_data_with_marker_decodes():
    walker, sink = _walker()
    walker.walk(_manufacturer_data(0x4C))
    assert sink.getvalue() == "L: 20 R: 30 C: 50\n"


def test_other_company_never_decodes():
    walker, sink = _walker()
    walker.walk(_manufacturer_data(0x0059))
    assert sink.getvalue() == ""


def test_byte_array_without_marker_ignored():
    walker, sink = _walker()
    walker.walk(ArrayNode(Kind.VARIANT, (VariantNode(_bytes()),)))
    assert sink.getvalue() == ""


def test_variant_does_not_raise_flag_for_caller():
    walker, sink = _walker()
    assert walker.walk(VariantNode(MARKER)) is False
    tree = ArrayNode(Kind.VARIANT, (VariantNode(MARKER), VariantNode(_bytes())))
    walker.walk(tree)
    assert sink.getvalue() == ""


def test_entry_threads_key_flag_into_value():
    walker, sink = _walker()
    assert walker.walk(EntryNode(MARKER, _bytes())) is True
    assert sink.getvalue() == "L: 20 R: 30 C: 50\n"


def test_sibling_after_marker_is_eligible():
    # The flag is "seen so far", not ancestor scoped: a later sibling entry
    # whose own key is not the marker still decodes.
    walker, sink = _walker()
    first = EntryNode(MARKER, VariantNode(_bytes(bytes(2))))
    second = EntryNode(ScalarNode(Kind.UINT16, 0x0006), VariantNode(_bytes()))
    walker.walk(ArrayNode(Kind.DICT_ENTRY, (first, second)))
    assert sink.getvalue() == "L: 20 R: 30 C: 50\n"


def test_sibling_before_marker_is_not_eligible():
    walker, sink = _walker()
    first = EntryNode(ScalarNode(Kind.UINT16, 0x0006), VariantNode(_bytes()))
    second = EntryNode(MARKER, VariantNode(_bytes(bytes(3))))
    walker.walk(ArrayNode(Kind.DICT_ENTRY, (first, second)))
    assert sink.getvalue() == ""


def test_empty_arrays_are_ignored():
    walker, sink = _walker()
    assert walker.walk(ArrayNode(Kind.BYTE, b""), True) is True
    assert walker.walk(ArrayNode(Kind.DICT_ENTRY, ()), False) is False
    assert sink.getvalue() == ""


def test_non_byte_fixed_arrays_are_ignored():
    walker, sink = _walker()
    for kind in (Kind.BOOLEAN, Kind.UINT16, Kind.INT16, Kind.UINT32):
        assert walker.walk(ArrayNode(kind, (0x4C, 1, 2, 3, 4, 5, 6, 7)), True) is True
    assert sink.getvalue() == ""


def test_opaque_and_invalid_nodes_are_ignored():
    walker, _ = _walker()
    assert walker.walk(OpaqueNode(Kind.STRUCT, (1, 2)), True) is True
    assert walker.walk(OpaqueNode(Kind.INVALID), False) is False


def test_deep_nesting():
    walker, sink = _walker()
    node = _bytes()
    for _ in range(6):
        node = ArrayNode(Kind.ARRAY, (VariantNode(node),))
    tree = ArrayNode(Kind.DICT_ENTRY, (EntryNode(MARKER, node),))
    walker.walk(tree)
    assert sink.getvalue() == "L: 20 R: 30 C: 50\n"


def test_custom_marker():
    sink = io.StringIO()
    walker = TreeWalker(StatusDecoder(LatchState(), sink), marker=0x0075)
    walker.walk(_manufacturer_data(0x4C))
    walker.walk(_manufacturer_data(0x0075))
    assert sink.getvalue() == "L: 20 R: 30 C: 50\n"


def test_entry_value_marker_reaches_later_siblings():
    walker, sink = _walker()
    assert walker.walk(EntryNode(ScalarNode(Kind.STRING, "k"), MARKER)) is True
    first = EntryNode(ScalarNode(Kind.STRING, "company"), MARKER)
    second = EntryNode(ScalarNode(Kind.STRING, "data"), _bytes())
    walker.walk(ArrayNode(Kind.DICT_ENTRY, (first, second)))
    assert sink.getvalue() == "L: 20 R: 30 C: 50\n"
