"""
Project Data File Parsers

Shared reading machinery for the asset record codecs:

- base: ByteReader, ParserOptions, strict/lenient field checks, parse errors

Usage:
    from gm_assets.parsers import ByteReader, ParserOptions
    from gm_assets.assets import Timeline

    reader = ByteReader(data)
    timeline = Timeline.deserialize(reader, ParserOptions(strict=False))
"""

from .base import (
    BytesLike,
    ByteReader,
    ParserOptions,
    FormatError,
    VersionMismatch,
    TruncatedDataError,
    check_or_skip_version,
    check_or_skip_count,
)

__all__ = [
    'BytesLike',
    'ByteReader',
    'ParserOptions',
    'FormatError',
    'VersionMismatch',
    'TruncatedDataError',
    'check_or_skip_version',
    'check_or_skip_count',
]
