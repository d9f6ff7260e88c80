"""
WBXML Encoder for ActiveSync

Serializes a Document tree to MS-ASWBXML.
Implements the WBXML 1.3 subset used by Exchange ActiveSync: tags, inline
strings (STR_I) and opaque data, with SWITCH_PAGE emitted whenever an
element lives in a code page other than the active one.
"""

import logging
from typing import Optional, Union

from .binary import WBXMLWriter
from .codepages import CodePageTable, get_code_page_table
from .constants import HEADER
from .exceptions import ConflictingDefaultNamespace, UnencodableTag, UnknownNamespace
from .nodes import Document, Element, Node, Opaque, Text

logger = logging.getLogger(__name__)


class Encoder:
    def __init__(self, table: Optional[CodePageTable] = None):
        self.table = table or get_code_page_table()

    def encode(self, tree: Union[Document, Element]) -> bytes:
        writer = WBXMLWriter()
        writer.header(HEADER)

        nodes = tree.children if isinstance(tree, Document) else [tree]
        for node in nodes:
            self._encode_node(writer, node, None)

        data = writer.bytes()
        logger.debug(f"Encoded tree into {len(data)} bytes")
        return data

    def _encode_node(self, writer: WBXMLWriter, node: Node, default_page: Optional[int]):
        if isinstance(node, Element):
            self._encode_element(writer, node, default_page)
        elif isinstance(node, Text):
            writer.write_str(node.value)
        elif isinstance(node, Opaque):
            writer.write_opaque(bytes(node.data))
        else:
            raise TypeError(f"Cannot encode {type(node).__name__} as WBXML")

    def _resolve_declarations(self, element: Element, default_page: Optional[int]) -> Optional[int]:
        """Check the element's xmlns declarations; returns the default page in scope."""
        for prefix, namespace in element.namespaces.items():
            page = self.table.page_for_namespace(namespace)
            if page is None:
                raise UnknownNamespace(namespace)
            if prefix:
                continue
            if default_page is not None and page != default_page:
                raise ConflictingDefaultNamespace(self.table[default_page].namespace, namespace)
            default_page = page
        return default_page

    def _encode_element(self, writer: WBXMLWriter, element: Element, default_page: Optional[int]):
        default_page = self._resolve_declarations(element, default_page)

        code_page = self.table[element.code_page]
        if writer.page(code_page.index):
            logger.debug(f"SWITCH_PAGE to {code_page.index} ({code_page.namespace}) for <{element.tag}>")

        token = code_page.token_for(element.tag)
        if token is None:
            raise UnencodableTag(element.tag, code_page.index)

        has_content = bool(element.children)
        writer.start(token, with_content=has_content)

        if has_content:
            for child in element.children:
                self._encode_node(writer, child, default_page)
            writer.end()


def encode(tree: Union[Document, Element]) -> bytes:
    return Encoder().encode(tree)
