"""
MS-ASWBXML codec

Binary XML encoding used by Exchange ActiveSync:
- binary.py: ByteCursor reader and WBXMLWriter byte sink
- codepages.py: the 26 code page vocabularies
- decoder.py / encoder.py: bytes <-> Document tree
- xmltree.py: Document <-> XML text
- converter.py: WBXMLPayload facade
"""

from .codepages import CodePage, CodePageTable, get_code_page_table
from .config import ViewOptions
from .converter import WBXMLPayload, wbxml_to_xml, xml_to_wbxml
from .decoder import Decoder, WBXMLToken, decode
from .encoder import Encoder, encode
from .exceptions import WBXMLDecodeError, WBXMLEncodeError, WBXMLError
from .nodes import Document, Element, Opaque, Text

__version__ = "0.1.0"

__all__ = [
    'CodePage',
    'CodePageTable',
    'Decoder',
    'Document',
    'Element',
    'Encoder',
    'Opaque',
    'Text',
    'ViewOptions',
    'WBXMLDecodeError',
    'WBXMLEncodeError',
    'WBXMLError',
    'WBXMLPayload',
    'WBXMLToken',
    'decode',
    'encode',
    'get_code_page_table',
    'wbxml_to_xml',
    'xml_to_wbxml',
]
