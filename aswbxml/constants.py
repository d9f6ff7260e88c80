"""
ActiveSync WBXML Constants

Global tokens and header values from:
- WBXML 1.3 (WAP-192-WBXML) Section 5.8.1
- MS-ASWBXML Section 2.1.2.1
"""

# ============================================================================
# Global tokens (WBXML 1.3 Section 7.1)
# ============================================================================

SWITCH_PAGE = 0x00
END = 0x01
ENTITY = 0x02
STR_I = 0x03
LITERAL = 0x04
EXT_I_0 = 0x40
EXT_I_1 = 0x41
EXT_I_2 = 0x42
PI = 0x43
LITERAL_C = 0x44
EXT_T_0 = 0x80
EXT_T_1 = 0x81
EXT_T_2 = 0x82
STR_T = 0x83
LITERAL_A = 0x84
EXT_0 = 0xC0
EXT_1 = 0xC1
EXT_2 = 0xC2
OPAQUE = 0xC3
LITERAL_AC = 0xC4

GLOBAL_TOKEN_NAMES = {
    SWITCH_PAGE: "SWITCH_PAGE",
    END: "END",
    ENTITY: "ENTITY",
    STR_I: "STR_I",
    LITERAL: "LITERAL",
    EXT_I_0: "EXT_I_0",
    EXT_I_1: "EXT_I_1",
    EXT_I_2: "EXT_I_2",
    PI: "PI",
    LITERAL_C: "LITERAL_C",
    EXT_T_0: "EXT_T_0",
    EXT_T_1: "EXT_T_1",
    EXT_T_2: "EXT_T_2",
    STR_T: "STR_T",
    LITERAL_A: "LITERAL_A",
    EXT_0: "EXT_0",
    EXT_1: "EXT_1",
    EXT_2: "EXT_2",
    OPAQUE: "OPAQUE",
    LITERAL_AC: "LITERAL_AC",
}

# MS-ASWBXML does not use these; their presence is an error
UNSUPPORTED_GLOBAL_TOKENS = frozenset(
    [
        ENTITY,
        EXT_I_0,
        EXT_I_1,
        EXT_I_2,
        EXT_T_0,
        EXT_T_1,
        EXT_T_2,
        EXT_0,
        EXT_1,
        EXT_2,
        PI,
        LITERAL,
        LITERAL_A,
        LITERAL_C,
        LITERAL_AC,
        STR_T,
    ]
)

# ============================================================================
# Tag byte layout
# ============================================================================

TAG_ATTRIBUTES_FLAG = 0x80
TAG_CONTENT_FLAG = 0x40
TAG_TOKEN_MASK = 0x3F

UNKNOWN_TAG_FORMAT = "UNKNOWN_TAG_{:02X}"

# ============================================================================
# Document header
# ============================================================================

WBXML_VERSION = 0x03  # WBXML 1.3
PUBLIC_ID_UNKNOWN = 0x01
CHARSET_UTF8 = 0x6A  # IANA MIBenum 106
STRING_TABLE_LENGTH = 0x00

HEADER = bytes([WBXML_VERSION, PUBLIC_ID_UNKNOWN, CHARSET_UTF8, STRING_TABLE_LENGTH])

CODE_PAGE_COUNT = 26

DOC_REF_ATTRIBUTE = "DocRef"
