"""
Element tree produced by the decoder and consumed by the encoder.

Trees compare equal on structure only: tag, code page, child order and leaf
content. Namespace declarations, the prefix an element was written with and
diagnostic references are carried along but ignored by ``==``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union


@dataclass
class Text:
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "value": self.value}


@dataclass
class Opaque:
    data: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "opaque", "hex": self.data.hex()}


@dataclass
class Element:
    tag: str
    code_page: int
    children: List["Node"] = field(default_factory=list)
    # prefix -> namespace URI declared on this element ("" is the default namespace)
    namespaces: Dict[str, str] = field(default_factory=dict, compare=False)
    prefix: Optional[str] = field(default=None, compare=False)
    doc_ref: Optional[str] = field(default=None, compare=False)

    def append(self, node: "Node") -> "Node":
        self.children.append(node)
        return node

    def find(self, tag: str) -> Optional["Element"]:
        """First child element with the given tag."""
        for child in self.children:
            if isinstance(child, Element) and child.tag == tag:
                return child
        return None

    def iter(self) -> Iterator["Element"]:
        """This element and every descendant element, depth first."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    @property
    def text(self) -> Optional[str]:
        """Concatenated Text children, or None when there are none."""
        parts = [child.value for child in self.children if isinstance(child, Text)]
        return "".join(parts) if parts else None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": "element",
            "tag": self.tag,
            "code_page": self.code_page,
            "children": [child.to_dict() for child in self.children],
        }
        if self.doc_ref:
            data["doc_ref"] = self.doc_ref
        return data


Node = Union[Element, Text, Opaque]


@dataclass
class Document:
    """Synthetic root; its children are the top-level nodes."""

    children: List[Node] = field(default_factory=list)

    def append(self, node: Node) -> Node:
        self.children.append(node)
        return node

    @property
    def root(self) -> Optional[Element]:
        for child in self.children:
            if isinstance(child, Element):
                return child
        return None

    def iter(self) -> Iterator[Element]:
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "document", "children": [child.to_dict() for child in self.children]}
