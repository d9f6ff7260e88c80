"""
Code page registry.

Each code page gives the one-byte tag tokens 0x05-0x3F their meaning for one
ActiveSync namespace. The table is built once and shared read-only by the
decoder and the encoder.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional

from .codepage_data import CODE_PAGE_SPECS, CodePageSpec
from .constants import CODE_PAGE_COUNT
from .exceptions import InvalidCodePage


def _namespace_key(namespace: str) -> str:
    # "AirSync:", "airsync:" and "AirSync" all name the same page
    return namespace.rstrip(":").casefold()


@dataclass(frozen=True)
class CodePage:
    index: int
    namespace: str
    prefix: str
    tags: Dict[int, str]
    doc_refs: Dict[int, str] = field(default_factory=dict)
    tokens: Dict[str, int] = field(init=False, repr=False)

    def __post_init__(self):
        inverse = {tag: token for token, tag in self.tags.items()}
        if len(inverse) != len(self.tags):
            raise ValueError(f"Code page {self.index} assigns a tag name twice")
        object.__setattr__(self, "tokens", inverse)

    @classmethod
    def from_spec(cls, spec: CodePageSpec) -> "CodePage":
        return cls(
            index=spec.index,
            namespace=spec.namespace,
            prefix=spec.prefix,
            tags=dict(spec.tokens),
            doc_refs=dict(spec.doc_refs or {}),
        )

    def tag_for(self, token: int) -> Optional[str]:
        return self.tags.get(token)

    def token_for(self, tag: str) -> Optional[int]:
        return self.tokens.get(tag)

    def doc_ref_for(self, token: int) -> Optional[str]:
        return self.doc_refs.get(token)


class CodePageTable:
    """Lookup service over the fixed set of code pages."""

    def __init__(self, pages: Iterable[CodePage]):
        self._pages = tuple(sorted(pages, key=lambda page: page.index))
        if [page.index for page in self._pages] != list(range(len(self._pages))):
            raise ValueError("Code pages must be numbered contiguously from 0")
        self._by_prefix = {page.prefix.casefold(): page.index for page in self._pages}
        self._by_namespace = {
            _namespace_key(page.namespace): page.index for page in self._pages
        }

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[CodePage]:
        return iter(self._pages)

    def __getitem__(self, index: int) -> CodePage:
        if not 0 <= index < len(self._pages):
            raise InvalidCodePage(index)
        return self._pages[index]

    def tag_for(self, page_index: int, token: int) -> Optional[str]:
        return self[page_index].tag_for(token)

    def token_for(self, page_index: int, tag: str) -> Optional[int]:
        return self[page_index].token_for(tag)

    def doc_ref_for(self, page_index: int, token: int) -> Optional[str]:
        return self[page_index].doc_ref_for(token)

    def page_for_prefix(self, prefix: Optional[str]) -> Optional[int]:
        if not prefix:
            return None
        return self._by_prefix.get(prefix.casefold())

    def page_for_namespace(self, namespace: Optional[str]) -> Optional[int]:
        if not namespace:
            return None
        return self._by_namespace.get(_namespace_key(namespace))


def _build_code_page_table() -> CodePageTable:
    table = CodePageTable(CodePage.from_spec(spec) for spec in CODE_PAGE_SPECS)
    if len(table) != CODE_PAGE_COUNT:
        raise RuntimeError(f"Expected {CODE_PAGE_COUNT} code pages, found {len(table)}")
    return table


# Built at import time; module import runs once per process
_TABLE = _build_code_page_table()


def get_code_page_table() -> CodePageTable:
    """The process-wide MS-ASWBXML table."""
    return _TABLE
