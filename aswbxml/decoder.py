"""
WBXML Decoder for ActiveSync

Reads an MS-ASWBXML byte stream into a Document tree.

The body is a single linear token stream: global tokens (SWITCH_PAGE, END,
STR_I, OPAQUE) and tag bytes whose meaning depends on the active code page.
iter_tokens() exposes that stream for tracing; decode() assembles the tree.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from .binary import ByteCursor
from .codepages import CodePageTable, get_code_page_table
from .config import ViewOptions
from .constants import (
    CHARSET_UTF8,
    CODE_PAGE_COUNT,
    END,
    GLOBAL_TOKEN_NAMES,
    OPAQUE,
    STR_I,
    SWITCH_PAGE,
    TAG_ATTRIBUTES_FLAG,
    TAG_CONTENT_FLAG,
    TAG_TOKEN_MASK,
    UNKNOWN_TAG_FORMAT,
    UNSUPPORTED_GLOBAL_TOKENS,
)
from .exceptions import (
    AttributesNotSupported,
    InvalidCodePage,
    StringTableNotSupported,
    UnbalancedEnd,
    UnsupportedCharset,
    UnsupportedFeature,
)
from .nodes import Document, Element, Opaque, Text

logger = logging.getLogger(__name__)

# Token kinds produced by iter_tokens()
HEADER = "HEADER"
TAG = "TAG"


@dataclass
class WBXMLToken:
    offset: int
    kind: str
    code_page: int
    token: Optional[int] = None
    tag: Optional[str] = None
    has_content: bool = False
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"offset": self.offset, "kind": self.kind, "code_page": self.code_page}
        if self.kind == TAG:
            data.update(token=self.token, tag=self.tag, has_content=self.has_content)
        elif isinstance(self.value, bytes):
            data["hex"] = self.value.hex()
        elif self.value is not None:
            data["value"] = self.value
        return data


@dataclass
class _DecodeCursor:
    """Per-call tree position; never shared between decode() calls."""

    document: Document
    open_elements: List[Element] = field(default_factory=list)

    @property
    def current(self) -> Union[Document, Element]:
        return self.open_elements[-1] if self.open_elements else self.document

    def push(self, element: Element):
        self.open_elements.append(element)

    def pop(self):
        self.open_elements.pop()


class Decoder:
    def __init__(self, table: Optional[CodePageTable] = None, options: Optional[ViewOptions] = None):
        self.table = table or get_code_page_table()
        self.options = options or ViewOptions()

    def _read_header(self, cursor: ByteCursor) -> Dict[str, int]:
        # Version and public identifier are not validated
        version = cursor.dequeue_byte()
        public_id = cursor.dequeue_var_uint()

        charset = cursor.dequeue_var_uint()
        if charset != CHARSET_UTF8:
            raise UnsupportedCharset(charset)

        # MS-ASWBXML does not use string tables
        string_table_length = cursor.dequeue_var_uint()
        if string_table_length != 0:
            raise StringTableNotSupported(string_table_length)

        logger.debug(f"WBXML header: version=0x{version:02X} public_id={public_id} charset=UTF-8")
        return {"version": version, "public_id": public_id, "charset": charset}

    def iter_tokens(self, data: bytes) -> Iterator[WBXMLToken]:
        """
        Yield the token stream of ``data``, header first.

        Structural errors (bad header, unknown code page, unbalanced END,
        unsupported global tokens, attributes) raise as soon as they are read.
        """
        cursor = ByteCursor(data)
        header = self._read_header(cursor)
        yield WBXMLToken(0, HEADER, 0, value=header)

        code_page = 0
        depth = 0

        while cursor.remaining() > 0:
            offset = cursor.tell()
            current_byte = cursor.dequeue_byte()

            if current_byte == SWITCH_PAGE:
                new_page = cursor.dequeue_byte()
                if new_page >= CODE_PAGE_COUNT:
                    raise InvalidCodePage(new_page)
                code_page = new_page
                yield WBXMLToken(offset, "SWITCH_PAGE", code_page, value=new_page)

            elif current_byte == END:
                if depth == 0:
                    raise UnbalancedEnd("END global token encountered out of sequence", offset)
                depth -= 1
                yield WBXMLToken(offset, "END", code_page)

            elif current_byte == OPAQUE:
                length = cursor.dequeue_var_uint()
                yield WBXMLToken(offset, "OPAQUE", code_page, value=cursor.dequeue_bytes(length))

            elif current_byte == STR_I:
                yield WBXMLToken(offset, "STR_I", code_page, value=cursor.dequeue_nul_terminated_string())

            elif current_byte in UNSUPPORTED_GLOBAL_TOKENS:
                raise UnsupportedFeature(current_byte, GLOBAL_TOKEN_NAMES[current_byte], offset)

            else:
                token = current_byte & TAG_TOKEN_MASK
                if current_byte & TAG_ATTRIBUTES_FLAG:
                    raise AttributesNotSupported(token)

                has_content = bool(current_byte & TAG_CONTENT_FLAG)
                tag = self.table.tag_for(code_page, token)
                if tag is None:
                    # Newer protocol versions may add tokens this table lacks
                    tag = UNKNOWN_TAG_FORMAT.format(token)
                    logger.debug(f"Unassigned token 0x{token:02X} in code page {code_page}")

                if has_content:
                    depth += 1
                yield WBXMLToken(offset, TAG, code_page, token=token, tag=tag, has_content=has_content)

        if depth:
            raise UnbalancedEnd(f"Input ended with {depth} element(s) still open", cursor.tell())

    def decode(self, data: bytes) -> Document:
        """Decode a complete WBXML document."""
        cursor = _DecodeCursor(Document())

        for item in self.iter_tokens(data):
            if item.kind == TAG:
                element = Element(item.tag, item.code_page)
                if self.options.show_doc_refs:
                    element.doc_ref = self.table.doc_ref_for(item.code_page, item.token)
                cursor.current.append(element)
                if item.has_content:
                    cursor.push(element)
            elif item.kind == "END":
                cursor.pop()
            elif item.kind == "STR_I":
                cursor.current.append(Text(item.value))
            elif item.kind == "OPAQUE":
                cursor.current.append(Opaque(item.value))

        logger.debug(f"Decoded {len(data)} bytes into {sum(1 for _ in cursor.document.iter())} element(s)")
        return cursor.document


def decode(data: bytes, options: Optional[ViewOptions] = None) -> Document:
    return Decoder(options=options).decode(data)
