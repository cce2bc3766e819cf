"""
Bounds-checked forward cursor over an immutable byte buffer.
"""

import struct
from typing import Optional

from musbank.utils.validation import TruncatedInputError

BIG_ENDIAN = ">"
LITTLE_ENDIAN = "<"


class ByteCursor:
    """
    Forward-only read position over a bytes buffer.

    Every read checks bounds before consuming; on failure the position is
    left where the failed read started.

    Example:
        cursor = ByteCursor(data)
        magic = cursor.read_u32()
        name = cursor.read_fixed_string(20)
    """

    def __init__(self, data: bytes, byte_order: str = BIG_ENDIAN, position: int = 0):
        self.data = data
        self.byte_order = byte_order
        self._position = position

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return len(self.data) - self._position

    def _check(self, width: int) -> None:
        if self._position + width > len(self.data):
            raise TruncatedInputError(self._position, width, len(self.data))

    def _unpack(self, code: str, width: int, byte_order: Optional[str], advance: bool):
        self._check(width)
        fmt = (byte_order or self.byte_order) + code
        value = struct.unpack_from(fmt, self.data, self._position)[0]
        if advance:
            self._position += width
        return value

    def read_u8(self) -> int:
        return self._unpack("B", 1, None, True)

    def read_u16(self, byte_order: Optional[str] = None) -> int:
        return self._unpack("H", 2, byte_order, True)

    def read_u32(self, byte_order: Optional[str] = None) -> int:
        return self._unpack("I", 4, byte_order, True)

    def read_i32(self, byte_order: Optional[str] = None) -> int:
        return self._unpack("i", 4, byte_order, True)

    def read_f32(self, byte_order: Optional[str] = None) -> float:
        return self._unpack("f", 4, byte_order, True)

    def peek_u32(self, byte_order: Optional[str] = None) -> int:
        """Read a u32 at the current position without advancing."""
        return self._unpack("I", 4, byte_order, False)

    def peek_bytes(self, n: int) -> bytes:
        """Return the next n bytes without advancing."""
        self._check(n)
        return self.data[self._position : self._position + n]

    def read_bytes(self, n: int) -> bytes:
        chunk = self.peek_bytes(n)
        self._position += n
        return chunk

    def read_fixed_string(self, n: int) -> bytes:
        """
        Read a fixed-capacity name field.

        Returns the raw n bytes; trimming is left to musbank.utils.names.
        """
        return self.read_bytes(n)
