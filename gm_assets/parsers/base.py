"""
Base utilities for project data file parsing.

This module provides shared utilities used by all record codecs:
- ByteReader: forward cursor over an in-memory byte buffer
- ParserOptions: per-call parsing policy (strict or lenient)
- check_or_skip_version / check_or_skip_count: the strict/lenient gate for
  fixed-value fields
- FormatError, VersionMismatch, TruncatedDataError
"""

import struct
from dataclasses import dataclass
from typing import List, Union

import numpy as np

from ..constants import STRING_ENCODING, U32_SIZE
from ..utils import logDebug

BytesLike = Union[bytes, bytearray, memoryview]


class FormatError(ValueError):
    """The data is readable but does not match the expected layout."""


class VersionMismatch(FormatError):
    """A version field did not carry the expected value (strict mode only)."""

    def __init__(self, field: str, expected: int, actual: int, offset: int):
        self.field = field
        self.expected = expected
        self.actual = actual
        self.offset = offset
        super().__init__(
            f"{field} mismatch at offset {offset}: expected {expected}, found {actual}"
        )


class TruncatedDataError(IOError):
    """The byte source ended before a field could be read in full."""

    def __init__(self, offset: int, needed: int, available: int):
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Unexpected end of data at offset {offset}: "
            f"needed {needed} bytes, {available} available"
        )


@dataclass
class ParserOptions:
    """
    Parsing policy shared by every codec involved in one decode.

    strict: enforce exact version-field values. When False, version fields
            are consumed without being looked at.
    """
    strict: bool = True


class ByteReader:
    """
    Forward-only cursor over a little-endian binary record.

    Nested codecs share one reader, so each codec advances the cursor by
    exactly the bytes it owns.

    Usage:
        reader = ByteReader(data)
        name = reader.read_pas_string()
        count = reader.read_u32()
        for _ in range(count):
            ...
    """

    def __init__(self, data: BytesLike, start_offset: int = 0):
        """
        Initialize reader.

        Args:
            data: Binary data to read
            start_offset: Offset to start reading from (default 0)
        """
        self.data = bytes(data)
        self.offset = start_offset

    def _take(self, size: int) -> int:
        """Reserve size bytes at the cursor, returning their start offset."""
        if size < 0:
            raise ValueError(f"Negative read size {size}")
        start = self.offset
        if start + size > len(self.data):
            raise TruncatedDataError(start, size, self.remaining_bytes)
        self.offset = start + size
        return start

    def read_bytes(self, size: int) -> bytes:
        start = self._take(size)
        return self.data[start:start + size]

    def read_u32(self) -> int:
        start = self._take(4)
        return struct.unpack_from('<I', self.data, start)[0]

    def read_i32(self) -> int:
        start = self._take(4)
        return struct.unpack_from('<i', self.data, start)[0]

    def read_bool32(self) -> bool:
        """Read a u32 flag; any non-zero value is True."""
        return self.read_u32() != 0

    def read_u32_array(self, count: int) -> List[int]:
        """Read count consecutive u32 values."""
        if count == 0:
            return []
        start = self._take(count * 4)
        return np.frombuffer(self.data, dtype='<u4', count=count, offset=start).tolist()

    def read_pas_string(self) -> str:
        """
        Read a length-prefixed string.

        Undecodable bytes are replaced. On truncation the cursor is left at
        the length prefix.
        """
        start = self.offset
        length = self.read_u32()
        try:
            raw = self.read_bytes(length)
        except TruncatedDataError:
            self.offset = start
            raise
        return raw.decode(STRING_ENCODING, errors='replace')

    def skip(self, size: int):
        """Advance the cursor without reading."""
        self._take(size)

    @property
    def remaining_bytes(self) -> int:
        """Number of bytes remaining to be read."""
        return max(0, len(self.data) - self.offset)

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.data)


def check_or_skip_version(reader: ByteReader, expected: int, options: ParserOptions,
                          field: str = "version"):
    """
    Validate or skip a u32 version field.

    Strict mode reads the field and raises VersionMismatch unless it equals
    expected exactly. Lenient mode advances past the 4 bytes unconditionally,
    without looking at them.

    Args:
        reader: Reader positioned at the version field
        expected: Version constant this codec writes
        options: Parser policy for this decode
        field: Field name used in error and debug messages
    """
    if not options.strict:
        logDebug(f"    Skipped {field} at offset {reader.offset}")
        reader.skip(U32_SIZE)
        return

    offset = reader.offset
    actual = reader.read_u32()
    if actual != expected:
        raise VersionMismatch(field, expected, actual, offset)


def check_or_skip_count(reader: ByteReader, expected: int, options: ParserOptions,
                        field: str):
    """
    Validate or skip a u32 field whose value is fixed by the format
    (e.g. the length of a fixed-size array). Raises plain FormatError.
    """
    if not options.strict:
        reader.skip(U32_SIZE)
        return

    offset = reader.offset
    actual = reader.read_u32()
    if actual != expected:
        raise FormatError(f"{field} at offset {offset}: expected {expected}, found {actual}")
