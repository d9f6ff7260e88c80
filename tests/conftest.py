import logging
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from aswbxml import get_code_page_table

HEADER_HEX = "03016a00"


@pytest.fixture(scope="session")
def table():
    return get_code_page_table()


@pytest.fixture(scope="session")
def wbxml():
    """Build a payload: standard header followed by the given body (hex, spaces allowed)."""

    def build(body_hex: str = "") -> bytes:
        return bytes.fromhex(HEADER_HEX + "".join(body_hex.split()))

    return build


@pytest.fixture
def foldersync_request() -> bytes:
    # iPhone initial FolderSync: <FolderSync xmlns="FolderHierarchy:"><SyncKey>0</SyncKey></FolderSync>
    return b"\x03\x01j\x00\x00\x07VR\x030\x00\x01\x01"


@pytest.fixture
def sync_request_xml() -> str:
    return """<?xml version="1.0" encoding="utf-8"?>
<Sync xmlns="AirSync:" xmlns:airsyncbase="AirSyncBase:">
  <Collections>
    <Collection>
      <SyncKey>0</SyncKey>
      <CollectionId>1</CollectionId>
      <Options>
        <airsyncbase:BodyPreference>
          <airsyncbase:Type>2</airsyncbase:Type>
        </airsyncbase:BodyPreference>
      </Options>
    </Collection>
  </Collections>
</Sync>
"""


@pytest.fixture
def restore_logging():
    """setup_logging() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
