"""
Binary File Utilities

Write primitives for the project data file's binary record formats.

All integers are little-endian and unpadded. Strings are "pascal" strings:
- u32 byte_length
- [byte_length bytes of encoded text]

Every writer returns the number of bytes it wrote so record serializers can
report their total size. Exceptions raised by the underlying buffer are not
caught here; a buffer that accepts fewer bytes than offered raises OSError.
"""

import struct
from typing import BinaryIO

from ..constants import STRING_ENCODING

U32_MAX = 0xFFFFFFFF
I32_MIN = -0x80000000
I32_MAX = 0x7FFFFFFF


def _write_all(buffer: BinaryIO, data: bytes) -> int:
    """Write data, raising OSError if the buffer accepts only part of it."""
    written = buffer.write(data)
    if written is not None and written != len(data):
        raise OSError(f"Short write: {written} of {len(data)} bytes accepted")
    return len(data)


def write_u32(buffer: BinaryIO, value: int) -> int:
    """
    Write an unsigned 32-bit integer.

    Args:
        buffer: Output buffer (file or BytesIO)
        value: Integer in range 0..2^32-1

    Returns:
        Bytes written (always 4)
    """
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"Value {value} out of range for u32")
    return _write_all(buffer, struct.pack('<I', value))


def write_i32(buffer: BinaryIO, value: int) -> int:
    """Write a signed 32-bit integer."""
    if not I32_MIN <= value <= I32_MAX:
        raise ValueError(f"Value {value} out of range for i32")
    return _write_all(buffer, struct.pack('<i', value))


def write_bool32(buffer: BinaryIO, flag: bool) -> int:
    """Write a boolean as a u32 (0 or 1)."""
    return write_u32(buffer, 1 if flag else 0)


def write_pas_string(buffer: BinaryIO, text: str) -> int:
    """
    Write a length-prefixed string.

    Args:
        buffer: Output buffer
        text: String to encode

    Returns:
        Bytes written (4 + encoded length)
    """
    encoded = text.encode(STRING_ENCODING)
    written = write_u32(buffer, len(encoded))
    return written + _write_all(buffer, encoded)
