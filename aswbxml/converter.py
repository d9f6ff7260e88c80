"""
WBXML Converter for ActiveSync

Converts between WBXML payloads, element trees and XML text.
"""

import logging
from typing import Dict, Optional, Union

from .config import ViewOptions
from .decoder import Decoder
from .encoder import Encoder
from .exceptions import WBXMLError
from .nodes import Document, Element
from .xmltree import tree_to_xml, xml_to_tree

logger = logging.getLogger(__name__)


class WBXMLPayload:
    """
    One ActiveSync payload, constructed from whichever form is at hand.

    Bytes are decoded lazily, once per set of view options. A payload built
    from bytes hands back those exact bytes from to_bytes(); one built from
    XML or a tree is encoded on demand.
    """

    def __init__(self, data: Optional[bytes] = None, document: Optional[Document] = None):
        if (data is None) == (document is None):
            raise ValueError("WBXMLPayload needs exactly one of data or document")
        self._data = bytes(data) if data is not None else None
        self._document = document
        self._decoded: Dict[ViewOptions, Document] = {}

    @classmethod
    def from_bytes(cls, data: bytes) -> "WBXMLPayload":
        return cls(data=data)

    @classmethod
    def from_xml(cls, xml_text: Union[str, bytes]) -> "WBXMLPayload":
        return cls(document=xml_to_tree(xml_text))

    @classmethod
    def from_tree(cls, tree: Union[Document, Element]) -> "WBXMLPayload":
        if isinstance(tree, Element):
            tree = Document([tree])
        return cls(document=tree)

    def tree(self, options: Optional[ViewOptions] = None) -> Document:
        if self._document is not None:
            return self._document

        options = options or ViewOptions()
        if options not in self._decoded:
            try:
                self._decoded[options] = Decoder(options=options).decode(self._data)
            except WBXMLError as exc:
                logger.warning(f"Failed to decode {len(self._data)} byte WBXML payload: {type(exc).__name__}: {exc}")
                raise
        return self._decoded[options]

    def to_bytes(self) -> bytes:
        if self._data is not None:
            return self._data
        try:
            return Encoder().encode(self._document)
        except WBXMLError as exc:
            logger.warning(f"Failed to encode tree: {type(exc).__name__}: {exc}")
            raise

    def to_xml(self, options: Optional[ViewOptions] = None) -> str:
        options = options or ViewOptions()
        return tree_to_xml(self.tree(options), options)


def wbxml_to_xml(wbxml_data: bytes, options: Optional[ViewOptions] = None) -> str:
    """
    Convert WBXML binary data to an XML string

    Args:
        wbxml_data: WBXML binary data
        options: diagnostic view; defaults to namespaces shown, no doc refs

    Returns:
        XML string
    """
    return WBXMLPayload.from_bytes(wbxml_data).to_xml(options)


def xml_to_wbxml(xml_content: Union[str, bytes]) -> bytes:
    """
    Convert an XML string to WBXML binary format

    Args:
        xml_content: ActiveSync XML with namespace declarations

    Returns:
        WBXML binary data as bytes
    """
    return WBXMLPayload.from_xml(xml_content).to_bytes()
