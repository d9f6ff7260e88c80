"""
WBXML Binary Primitives

ByteCursor reads the wire format, WBXMLWriter writes it.
Multi-byte integers are WBXML mb_u_int32 values: big-endian groups of 7 bits,
continuation bit (0x80) set on every byte but the last.

Reference: WBXML 1.3 Section 5.1, MS-ASWBXML Section 2.1.2
"""

from typing import Union

from .constants import END, OPAQUE, STR_I, SWITCH_PAGE, TAG_CONTENT_FLAG
from .exceptions import InvalidTextContent, MalformedString, TruncatedInput


def encode_var_uint(value: int) -> bytes:
    """Minimal mb_u_int32 encoding of a non-negative integer."""
    if value < 0:
        raise ValueError(f"Multi-byte integers are unsigned, got {value}")

    stack = [value & 0x7F]
    value >>= 7
    while value:
        stack.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(stack))


class ByteCursor:
    """
    Sequential reader over an immutable byte buffer.

    The position only moves forward.
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview]):
        self.data = bytes(data)
        self.position = 0

    def tell(self) -> int:
        """Get current position in the buffer."""
        return self.position

    def remaining(self) -> int:
        """Get number of bytes remaining."""
        return len(self.data) - self.position

    def dequeue_bytes(self, count: int) -> bytes:
        """Read exactly ``count`` raw bytes."""
        if count < 0:
            raise ValueError(f"Cannot read a negative byte count ({count})")
        if self.remaining() < count:
            raise TruncatedInput(count, self.remaining(), self.position)
        start = self.position
        self.position += count
        return self.data[start:self.position]

    def dequeue_byte(self) -> int:
        if not self.remaining():
            raise TruncatedInput(1, 0, self.position)
        value = self.data[self.position]
        self.position += 1
        return value

    def dequeue_var_uint(self) -> int:
        """Read a multi-byte unsigned integer."""
        value = 0
        while True:
            byte = self.dequeue_byte()
            value = (value << 7) | (byte & 0x7F)
            if not byte & 0x80:
                return value

    def dequeue_nul_terminated_string(self) -> str:
        """
        Read a UTF-8 string up to its 0x00 terminator.

        The terminator is consumed but not returned.
        """
        start = self.position
        end = self.data.find(b"\x00", start)
        if end == -1:
            raise MalformedString("no terminator before end of input", start)
        self.position = end + 1
        try:
            return self.data[start:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedString(f"invalid UTF-8 ({exc.reason})", start) from exc

    def dequeue_fixed_string(self, length: int) -> str:
        """Read exactly ``length`` bytes as UTF-8."""
        start = self.position
        raw = self.dequeue_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedString(f"invalid UTF-8 ({exc.reason})", start) from exc


class WBXMLWriter:
    """Byte sink for the encoder."""

    def __init__(self):
        self.buf = bytearray()
        self.cur_page = 0

    def header(self, header: bytes):
        self.buf.extend(header)

    def write_byte(self, b: int):
        self.buf.append(b & 0xFF)

    def write_mb_uint(self, value: int):
        self.buf.extend(encode_var_uint(value))

    def write_str(self, s: str):
        if "\x00" in s:
            raise InvalidTextContent("embedded NUL character")
        try:
            encoded = s.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidTextContent(f"not representable as UTF-8 ({exc.reason})") from exc
        self.write_byte(STR_I)
        self.buf.extend(encoded)
        self.write_byte(0x00)

    def write_opaque(self, data_bytes: bytes):
        """Write OPAQUE block (token + mb_u_int32 length + raw bytes)"""
        self.write_byte(OPAQUE)
        self.write_mb_uint(len(data_bytes))
        self.buf.extend(data_bytes)

    def page(self, cp: int) -> bool:
        """Switch code page if needed; returns True when SWITCH_PAGE was written."""
        if self.cur_page == cp:
            return False
        self.write_byte(SWITCH_PAGE)
        self.write_byte(cp)
        self.cur_page = cp
        return True

    def start(self, tok: int, with_content: bool = True):
        self.write_byte((tok | TAG_CONTENT_FLAG) if with_content else tok)

    def end(self):
        self.write_byte(END)

    def bytes(self) -> bytes:
        return bytes(self.buf)
