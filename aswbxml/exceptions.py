"""
Errors raised by the WBXML codec.

Decoding and encoding abort on the first error; nothing is recovered.
"""

from typing import Optional


class WBXMLError(ValueError):
    """Base class for every codec failure."""


class WBXMLDecodeError(WBXMLError):
    """The byte stream is not MS-ASWBXML this codec can read."""


class WBXMLEncodeError(WBXMLError):
    """The tree or XML document cannot be expressed as MS-ASWBXML."""


class TruncatedInput(WBXMLDecodeError):
    def __init__(self, needed: int, available: int, offset: Optional[int] = None):
        self.needed = needed
        self.available = available
        self.offset = offset
        super().__init__(
            f"Input ended early: needed {needed} byte(s), {available} available"
            + (f" at offset {offset}" if offset is not None else "")
        )


class MalformedString(WBXMLDecodeError):
    def __init__(self, reason: str, offset: Optional[int] = None):
        self.offset = offset
        super().__init__(
            f"Malformed inline string: {reason}"
            + (f" at offset {offset}" if offset is not None else "")
        )


class UnsupportedCharset(WBXMLDecodeError):
    def __init__(self, charset: int):
        self.charset = charset
        super().__init__(f"Only UTF-8 (0x6A) is supported, got charset 0x{charset:X}")


class StringTableNotSupported(WBXMLDecodeError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(f"WBXML data contains a string table ({length} bytes)")


class InvalidCodePage(WBXMLError):
    """Raised for decode (SWITCH_PAGE target) and encode (element page) alike."""

    def __init__(self, code_page: int):
        self.code_page = code_page
        super().__init__(f"Unknown code page ID 0x{code_page:X}")


class UnbalancedEnd(WBXMLDecodeError):
    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        super().__init__(message + (f" at offset {offset}" if offset is not None else ""))


class UnsupportedFeature(WBXMLDecodeError):
    def __init__(self, token: int, name: str = "", offset: Optional[int] = None):
        self.token = token
        self.offset = offset
        label = f"{name} " if name else ""
        super().__init__(f"Encountered unsupported global token {label}(0x{token:02X})")


class AttributesNotSupported(WBXMLError):
    """A tag byte with the attribute bit, or an XML element with attributes."""

    def __init__(self, token: Optional[int] = None, attribute: Optional[str] = None):
        self.token = token
        self.attribute = attribute
        if attribute is not None:
            message = f"Attribute '{attribute}' cannot be encoded"
        else:
            message = f"Token 0x{token:02X} has attributes"
        super().__init__(message)


class UnknownNamespace(WBXMLEncodeError):
    def __init__(self, namespace: Optional[str]):
        self.namespace = namespace
        super().__init__(f"Namespace '{namespace or ''}' does not map to a code page")


class ConflictingDefaultNamespace(WBXMLEncodeError):
    def __init__(self, in_scope: str, declared: str):
        self.in_scope = in_scope
        self.declared = declared
        super().__init__(
            f"Default namespace '{declared}' redeclared while '{in_scope}' is in scope"
        )


class UnencodableTag(WBXMLEncodeError):
    def __init__(self, tag: str, code_page: int):
        self.tag = tag
        self.code_page = code_page
        super().__init__(f"Tag '{tag}' has no token in code page {code_page}")


class InvalidTextContent(WBXMLEncodeError):
    def __init__(self, reason: str):
        super().__init__(f"Text content cannot be encoded: {reason}")


class InvalidXml(WBXMLEncodeError):
    def __init__(self, reason: str):
        super().__init__(f"Invalid XML document: {reason}")
