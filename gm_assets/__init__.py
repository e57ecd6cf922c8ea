"""
gm_assets - binary codecs for game project asset records.

Usage:
    from gm_assets import Timeline, ParserOptions

    timeline = Timeline.from_file("intro.timeline", ParserOptions(strict=False))
    data = timeline.to_bytes()
"""

from .parsers import (
    ByteReader,
    ParserOptions,
    FormatError,
    VersionMismatch,
    TruncatedDataError,
)
from .assets import CodeAction, Timeline
from .constants import TIMELINE_VERSION, MOMENT_VERSION, ACTION_VERSION

__version__ = "0.1.0"

__all__ = [
    'ByteReader',
    'ParserOptions',
    'FormatError',
    'VersionMismatch',
    'TruncatedDataError',
    'CodeAction',
    'Timeline',
    'TIMELINE_VERSION',
    'MOMENT_VERSION',
    'ACTION_VERSION',
]
