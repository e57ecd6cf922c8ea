"""Byte builders and stub collaborators shared by the tests."""

import struct

from gm_assets.assets import CodeAction
from gm_assets.parsers import ByteReader
from gm_assets.utils.binary import write_u32


def u32(value: int) -> bytes:
    return struct.pack('<I', value)


def pas(text: str) -> bytes:
    encoded = text.encode('utf-8')
    return u32(len(encoded)) + encoded


class U32ActionCodec:
    """Minimal action codec: each action is a bare u32. Counts decode calls."""

    def __init__(self):
        self.decoded = 0

    def serialize(self, action: int, writer) -> int:
        return write_u32(writer, action)

    def deserialize(self, reader: ByteReader, options) -> int:
        self.decoded += 1
        return reader.read_u32()


class FailingWriter:
    """Accepts limit bytes, then raises like a full disk."""

    def __init__(self, limit: int):
        self.limit = limit
        self.written = bytearray()

    def write(self, data: bytes) -> int:
        if len(self.written) + len(data) > self.limit:
            raise OSError(28, "No space left on device")
        self.written.extend(data)
        return len(data)


class ShortWriter:
    """A raw stream that accepts one byte less than offered on every call."""

    def __init__(self):
        self.written = bytearray()

    def write(self, data: bytes) -> int:
        accepted = bytes(data[:-1])
        self.written.extend(accepted)
        return len(accepted)


def make_action(**overrides) -> CodeAction:
    fields = dict(
        lib_id=1,
        id=603,
        action_kind=7,
        execution_type=2,
        fn_name="",
        fn_code="instance_destroy();",
        param_count=2,
        param_types=[1, 0, 0, 0, 0, 0, 0, 0],
        param_strings=["obj_player", "1", "", "", "", "", "", ""],
        applies_to=-1,
    )
    fields.update(overrides)
    return CodeAction(**fields)
