"""
XML view of WBXML trees.

tree_to_xml() renders a decoded Document as XML text; xml_to_tree() reads an
ActiveSync XML document back into a Document the encoder accepts.
Opaque payloads are CDATA sections, inline strings are text.
"""

import logging
import re
from typing import Dict, List, Optional, Union
from xml.dom import Node as DomNode
from xml.dom import minidom
from xml.parsers.expat import ExpatError

from .codepages import CodePageTable, get_code_page_table
from .config import ViewOptions
from .constants import DOC_REF_ATTRIBUTE
from .exceptions import AttributesNotSupported, InvalidXml, UnknownNamespace
from .nodes import Document, Element, Node, Opaque, Text

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
INDENT = "  "

# XML 1.0 cannot carry these, not even as character references
_XML_INVALID_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _xml_safe(value: str) -> str:
    return _XML_INVALID_CHARS.sub("\ufffd", value)


def _cdata_sections(payload: str) -> List[str]:
    """Split a payload so that no section contains the ']]>' terminator."""
    pieces = payload.split("]]>")
    sections = []
    for i, piece in enumerate(pieces):
        if i:
            piece = ">" + piece
        if i < len(pieces) - 1:
            piece += "]]"
        sections.append(piece)
    return sections


class _InlineElement(minidom.Element):
    """
    Element whose text sits next to other children.

    Its content is written without indentation or line breaks; whitespace
    added there would be read back as part of the text.
    """

    def writexml(self, writer, indent="", addindent="", newl=""):
        writer.write(indent)
        super().writexml(writer, "", "", "")
        writer.write(newl)


class _Renderer:
    def __init__(self, options: ViewOptions, table: CodePageTable):
        self.options = options
        self.table = table
        self.factory = minidom.Document()

    def doc_ref(self, element: Element) -> Optional[str]:
        if element.doc_ref:
            return element.doc_ref
        if 0 <= element.code_page < len(self.table):
            token = self.table.token_for(element.code_page, element.tag)
            if token is not None:
                return self.table.doc_ref_for(element.code_page, token)
        return None

    def element(self, element: Element, declared: frozenset) -> minidom.Element:
        mixed = len(element.children) > 1 and any(isinstance(c, Text) for c in element.children)
        element_class = _InlineElement if mixed else minidom.Element

        page = None
        if self.options.show_namespaces and 0 <= element.code_page < len(self.table):
            page = self.table[element.code_page]
            dom_element = element_class(f"{page.prefix}:{element.tag}", page.namespace, page.prefix)
        else:
            dom_element = element_class(element.tag)
        dom_element.ownerDocument = self.factory

        if page is not None and page.prefix not in declared:
            dom_element.setAttribute(f"xmlns:{page.prefix}", page.namespace)
            declared = declared | {page.prefix}

        if self.options.show_doc_refs:
            reference = self.doc_ref(element)
            if reference:
                dom_element.setAttribute(DOC_REF_ATTRIBUTE, reference)

        for child in element.children:
            for dom_child in self.nodes(child, declared):
                dom_element.appendChild(dom_child)
        return dom_element

    def nodes(self, node: Node, declared: frozenset) -> List[DomNode]:
        if isinstance(node, Element):
            return [self.element(node, declared)]
        if isinstance(node, Text):
            return [self.factory.createTextNode(_xml_safe(node.value))]
        if isinstance(node, Opaque):
            payload = _xml_safe(bytes(node.data).decode("utf-8", errors="replace"))
            return [self.factory.createCDATASection(s) for s in _cdata_sections(payload)]
        raise TypeError(f"Cannot render {type(node).__name__} as XML")


def tree_to_xml(
    tree: Union[Document, Element],
    options: Optional[ViewOptions] = None,
    table: Optional[CodePageTable] = None,
) -> str:
    """Pretty-printed XML for a decoded tree."""
    renderer = _Renderer(options or ViewOptions(), table or get_code_page_table())
    nodes = tree.children if isinstance(tree, Document) else [tree]

    parts = [XML_DECLARATION]
    for node in nodes:
        for dom_node in renderer.nodes(node, frozenset()):
            parts.append(dom_node.toprettyxml(indent=INDENT).removesuffix("\n"))
    return "\n".join(parts) + "\n"


def _read_declarations(dom_element: minidom.Element) -> Dict[str, str]:
    namespaces: Dict[str, str] = {}
    for attribute in dom_element.attributes.values():
        name = attribute.name
        if name == "xmlns":
            namespaces[""] = attribute.value
        elif name.startswith("xmlns:"):
            namespaces[name[len("xmlns:"):]] = attribute.value
        elif name == DOC_REF_ATTRIBUTE:
            # Written by tree_to_xml for display only
            continue
        else:
            raise AttributesNotSupported(attribute=name)
    return namespaces


def _from_dom(dom_element: minidom.Element, table: CodePageTable) -> Element:
    namespaces = _read_declarations(dom_element)

    code_page = table.page_for_namespace(dom_element.namespaceURI)
    if code_page is None:
        raise UnknownNamespace(dom_element.namespaceURI or dom_element.prefix)

    element = Element(
        dom_element.localName,
        code_page,
        namespaces=namespaces,
        prefix=dom_element.prefix,
    )

    children: List[Node] = []
    for dom_child in dom_element.childNodes:
        if dom_child.nodeType == DomNode.ELEMENT_NODE:
            children.append(_from_dom(dom_child, table))
        elif dom_child.nodeType == DomNode.TEXT_NODE:
            if children and isinstance(children[-1], Text):
                children[-1] = Text(children[-1].value + dom_child.data)
            else:
                children.append(Text(dom_child.data))
        elif dom_child.nodeType == DomNode.CDATA_SECTION_NODE:
            payload = dom_child.data.encode("utf-8")
            if children and isinstance(children[-1], Opaque):
                children[-1] = Opaque(children[-1].data + payload)
            else:
                children.append(Opaque(payload))
        # comments and processing instructions carry nothing to encode

    # Indentation between child elements is not content
    if any(not isinstance(child, Text) for child in children):
        children = [c for c in children if not (isinstance(c, Text) and not c.value.strip())]

    element.children = children
    return element


def xml_to_tree(xml_text: Union[str, bytes], table: Optional[CodePageTable] = None) -> Document:
    """Parse an ActiveSync XML document into a tree for the encoder."""
    table = table or get_code_page_table()
    try:
        dom = minidom.parseString(xml_text)
    except ExpatError as exc:
        raise InvalidXml(str(exc)) from exc

    try:
        document = Document()
        for dom_child in dom.childNodes:
            if dom_child.nodeType == DomNode.ELEMENT_NODE:
                document.append(_from_dom(dom_child, table))
    finally:
        dom.unlink()

    logger.debug(f"Parsed XML into {sum(1 for _ in document.iter())} element(s)")
    return document
