"""
decode(encode(tree)) == tree, and captured payloads re-encode byte for byte
"""

import pytest

from aswbxml import Document, Element, Opaque, Text, decode, encode, wbxml_to_xml, xml_to_wbxml
from aswbxml.xmltree import tree_to_xml, xml_to_tree

CAPTURED_BODIES = [
    # FolderSync request
    "00 07 56 52 03 30 00 01 01",
    # Sync with AirSyncBase body preference
    "45 5C 4F 4B 03 30 00 01 52 03 31 00 01 57 00 11 45 46 03 32 00 01 01 01 01 01 01",
    # page switch back to AirSync for a sibling
    "45 00 11 4A 46 03 32 00 01 01 00 00 4E 03 31 00 01 01",
    # Ping with heartbeat
    "00 0D 45 48 03 39 30 30 00 01 01",
    # opaque body data
    "00 11 4B C3 03 61 62 63 01",
]


@pytest.mark.parametrize("body", CAPTURED_BODIES)
def test_captured_payloads_reencode_identically(wbxml, body):
    data = wbxml(body)
    assert encode(decode(data)) == data


def test_inline_string_scenario(wbxml):
    """<Sync>S</Sync> survives decode and encode unchanged."""
    data = wbxml("45 03 53 00 01")
    doc = decode(data)
    assert doc == Document([Element("Sync", 0, [Text("S")])])
    assert encode(doc) == data


def test_empty_content_is_not_byte_preserved(wbxml):
    # 45 01 and 05 decode to the same tree
    assert decode(wbxml("45 01")) == decode(wbxml("05"))
    assert encode(decode(wbxml("45 01"))) == wbxml("05")


def test_tree_roundtrip_across_pages():
    tree = Document([
        Element("Sync", 0, [
            Element("Collections", 0, [
                Element("Collection", 0, [
                    Element("SyncKey", 0, [Text("{e0a1b2c3}1")]),
                    Element("ApplicationData", 0, [
                        Element("Subject", 2, [Text("Réunion ✓")]),
                        Element("Body", 17, [
                            Element("Type", 17, [Text("1")]),
                            Element("Data", 17, [Opaque(bytes(range(256)))]),
                        ]),
                        Element("Categories", 2),
                    ]),
                ]),
            ]),
        ]),
    ])
    assert decode(encode(tree)) == tree


def test_xml_roundtrip(wbxml, sync_request_xml):
    data = xml_to_wbxml(sync_request_xml)
    assert data == wbxml("45 5C 4F 4B 03 30 00 01 52 03 31 00 01 57 00 11 45 46 03 32 00 01 01 01 01 01 01")
    assert xml_to_wbxml(wbxml_to_xml(data)) == data


def test_xml_roundtrip_opaque_with_cdata_terminator(wbxml):
    data = wbxml("00 11 4B C3 05 61 5D 5D 3E 62 01")
    assert xml_to_wbxml(wbxml_to_xml(data)) == data


def test_xml_roundtrip_mixed_content(wbxml):
    """Text beside a child element keeps its exact value through the XML view."""
    data = wbxml("5D 03 61 00 0B 03 62 00 01")
    assert xml_to_wbxml(wbxml_to_xml(data)) == data


@pytest.mark.parametrize(
    "children",
    [
        [Text("x"), Opaque(b"y")],
        [Opaque(b"y"), Text(" x ")],
        [Text("a"), Element("Type", 17, [Text("1")]), Text("b")],
    ],
)
def test_tree_roundtrip_through_xml_mixed_content(children):
    tree = Document([Element("Sync", 0, [Element("Body", 17, children)])])
    assert xml_to_tree(tree_to_xml(tree)) == tree
    assert decode(xml_to_wbxml(wbxml_to_xml(encode(tree)))) == tree
