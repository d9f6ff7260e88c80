"""
Code page registry (MS-ASWBXML §2.1.2.1)
"""

import pytest

from aswbxml.codepage_data import MS_ASCMD_SYNC
from aswbxml.codepages import CodePage, CodePageTable
from aswbxml.exceptions import InvalidCodePage

EXPECTED_NAMESPACES = [
    "AirSync:", "Contacts:", "Email:", "AirNotify:", "Calendar:", "Move:",
    "GetItemEstimate:", "FolderHierarchy:", "MeetingResponse:", "Tasks:",
    "ResolveRecipients:", "ValidateCert:", "Contacts2:", "Ping:", "Provision:",
    "Search:", "GAL:", "AirSyncBase:", "Settings:", "DocumentLibrary:",
    "ItemOperations:", "ComposeMail:", "Email2:", "Notes:", "RightsManagement:",
    "Find:",
]


def test_twenty_six_pages_in_order(table):
    assert len(table) == 26
    assert [page.namespace for page in table] == EXPECTED_NAMESPACES
    assert [page.index for page in table] == list(range(26))


def test_default_prefixes_are_lowercase_namespace(table):
    for page in table:
        assert page.prefix == page.namespace.rstrip(":").lower()


def test_tokens_stay_in_tag_space(table):
    for page in table:
        for token, tag in page.tags.items():
            assert 0x05 <= token <= 0x3F, f"page {page.index} token 0x{token:02X} ({tag})"
            assert page.token_for(tag) == token


def test_retired_airnotify_page_is_empty(table):
    assert table[3].tags == {}
    assert table.tag_for(3, 0x05) is None


def test_tag_and_token_lookup(table):
    assert table.tag_for(0, 0x05) == "Sync"
    assert table.tag_for(7, 0x16) == "FolderSync"
    assert table.tag_for(17, 0x0A) == "Body"
    assert table.token_for(7, "SyncKey") == 0x12
    assert table.token_for(0, "SyncKey") == 0x0B
    assert table.token_for(0, "NoSuchTag") is None
    assert table.tag_for(0, 0x19) is None


def test_same_tag_name_differs_between_pages(table):
    statuses = {page.index: page.token_for("Status") for page in table if page.token_for("Status")}
    assert statuses[0] == 0x0E
    assert statuses[7] == 0x0C
    assert statuses[13] == 0x07


def test_prefix_lookup_is_case_insensitive(table):
    assert table.page_for_prefix("airsyncbase") == 17
    assert table.page_for_prefix("AirSyncBase") == 17
    assert table.page_for_prefix("nope") is None
    assert table.page_for_prefix("") is None
    assert table.page_for_prefix(None) is None


def test_namespace_lookup(table):
    assert table.page_for_namespace("FolderHierarchy:") == 7
    assert table.page_for_namespace("folderhierarchy:") == 7
    assert table.page_for_namespace("FolderHierarchy") == 7
    assert table.page_for_namespace("Unknown:") is None
    assert table.page_for_namespace(None) is None


def test_doc_refs(table):
    assert table.doc_ref_for(0, 0x05) == MS_ASCMD_SYNC
    assert table.doc_ref_for(0, 0x06) is None


@pytest.mark.parametrize("index", [-1, 26, 30, 255])
def test_out_of_range_page(table, index):
    with pytest.raises(InvalidCodePage) as excinfo:
        table.tag_for(index, 0x05)
    assert excinfo.value.code_page == index


def test_duplicate_tag_rejected():
    with pytest.raises(ValueError):
        CodePage(0, "X:", "x", {0x05: "A", 0x06: "A"})


def test_table_requires_contiguous_pages():
    with pytest.raises(ValueError):
        CodePageTable([CodePage(1, "X:", "x", {})])
