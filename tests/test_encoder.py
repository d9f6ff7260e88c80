"""
WBXML encoding (MS-ASWBXML §2.1.2)
"""

import pytest

from aswbxml import Document, Element, Encoder, Opaque, Text, encode
from aswbxml.exceptions import (
    ConflictingDefaultNamespace,
    InvalidCodePage,
    InvalidTextContent,
    UnencodableTag,
    UnknownNamespace,
)


def test_header_only(wbxml):
    assert encode(Document()) == wbxml()


def test_foldersync_response_status(wbxml):
    tree = Element("FolderSync", 7, [Element("Status", 7, [Text("1")])])
    assert encode(tree) == wbxml("00 07 56 4C 03 31 00 01 01")


def test_element_accepted_as_root(wbxml):
    element = Element("Sync", 0, [Text("S")])
    assert encode(element) == encode(Document([element])) == wbxml("45 03 53 00 01")


def test_childless_element_has_no_content_bit(wbxml):
    assert encode(Element("Sync", 0)) == wbxml("05")


def test_empty_text_keeps_content(wbxml):
    assert encode(Element("SyncKey", 0, [Text("")])) == wbxml("4B 03 00 01")


def test_switch_page_only_on_change(wbxml):
    tree = Element("Sync", 0, [
        Element("Body", 17, [Element("Type", 17, [Text("2")])]),
        Element("Status", 0, [Text("1")]),
    ])
    assert encode(tree) == wbxml("45 00 11 4A 46 03 32 00 01 01 00 00 4E 03 31 00 01 01")


def test_writer_page_is_per_call(wbxml):
    encoder = Encoder()
    encoder.encode(Element("Ping", 13))
    assert encoder.encode(Element("Sync", 0)) == wbxml("05"), "page state leaked between calls"


def test_opaque(wbxml):
    tree = Element("Data", 17, [Opaque(b"abc")])
    assert encode(tree) == wbxml("00 11 4B C3 03 61 62 63 01")


def test_large_opaque_length_is_multibyte(wbxml):
    payload = bytes(range(256)) * 2
    data = encode(Element("Data", 17, [Opaque(payload)]))
    assert data[:10] == wbxml("00 11 4B C3 84 00")
    assert data[10:-1] == payload
    assert data[-1] == 0x01


def test_utf8_text(wbxml):
    data = encode(Element("DisplayName", 7, [Text("Boîte")]))
    assert data == wbxml("00 07 47 03") + "Boîte".encode("utf-8") + b"\x00\x01"


def test_mixed_children_order(wbxml):
    tree = Element("ApplicationData", 0, [Text("a"), Element("SyncKey", 0), Text("b")])
    assert encode(tree) == wbxml("5D 03 61 00 0B 03 62 00 01")


def test_namespace_declarations_validated():
    tree = Element("Sync", 0, namespaces={"": "AirSync:", "airsyncbase": "AirSyncBase:"})
    encode(tree)

    with pytest.raises(UnknownNamespace) as excinfo:
        encode(Element("Sync", 0, namespaces={"x": "Bogus:"}))
    assert excinfo.value.namespace == "Bogus:"


def test_same_default_namespace_redeclared():
    tree = Element("Sync", 0, [Element("Status", 0, namespaces={"": "airsync:"})],
                   namespaces={"": "AirSync:"})
    encode(tree)


def test_conflicting_default_namespace():
    tree = Element("Sync", 0, [Element("Status", 0, namespaces={"": "Email:"})],
                   namespaces={"": "AirSync:"})
    with pytest.raises(ConflictingDefaultNamespace) as excinfo:
        encode(tree)
    assert excinfo.value.in_scope == "AirSync:"
    assert excinfo.value.declared == "Email:"


def test_prefixed_declaration_does_not_conflict():
    tree = Element("Sync", 0, [Element("Status", 0, namespaces={"email": "Email:"})],
                   namespaces={"": "AirSync:"})
    encode(tree)


def test_unknown_code_page():
    with pytest.raises(InvalidCodePage) as excinfo:
        encode(Element("Sync", 30))
    assert excinfo.value.code_page == 30


def test_tag_not_in_page():
    with pytest.raises(UnencodableTag) as excinfo:
        encode(Element("Sync", 7))
    assert (excinfo.value.tag, excinfo.value.code_page) == ("Sync", 7)


def test_placeholder_tags_are_not_encodable():
    with pytest.raises(UnencodableTag):
        encode(Element("UNKNOWN_TAG_19", 0))


@pytest.mark.parametrize("value", ["a\x00b", "\ud800"])
def test_unencodable_text(value):
    with pytest.raises(InvalidTextContent):
        encode(Element("SyncKey", 0, [Text(value)]))


def test_unknown_node_type():
    with pytest.raises(TypeError):
        encode(Element("Sync", 0, ["not a node"]))
