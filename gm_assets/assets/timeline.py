"""
Timeline Record

A timeline is a named list of moments. Each moment pairs a step index with the
code actions executed when the timeline reaches that step.

Format:
- string name
- u32 version (TIMELINE_VERSION = 500)
- u32 moment_count
- For each moment:
  - u32 moment_index
  - u32 version (MOMENT_VERSION = 400)
  - u32 action_count
  - [action_count code actions, each self-delimiting]

Neither moment indices nor their order are validated: duplicates and any
ordering round-trip unchanged.
"""

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Tuple, Union

from ..constants import MOMENT_VERSION, TIMELINE_VERSION
from ..parsers.base import BytesLike, ByteReader, ParserOptions, check_or_skip_version
from ..utils import logDebug
from ..utils.binary import write_pas_string, write_u32
from .code_action import CodeAction

Moment = Tuple[int, List[Any]]


@dataclass
class Timeline:
    """A timeline asset."""
    # Asset name as used in scripts and the editor
    name: str
    moments: List[Moment] = field(default_factory=list)

    @property
    def moment_count(self) -> int:
        return len(self.moments)

    @property
    def action_count(self) -> int:
        """Total actions across all moments."""
        return sum(len(actions) for _, actions in self.moments)

    def get_actions(self, moment_index: int) -> Optional[List[Any]]:
        """Actions of the first moment with this index, or None."""
        for index, actions in self.moments:
            if index == moment_index:
                return actions
        return None

    def serialize(self, writer: BinaryIO, action_codec=CodeAction) -> int:
        """
        Write this timeline.

        Write failures propagate immediately; the writer is then left partially
        written.

        Args:
            writer: Output buffer (file or BytesIO)
            action_codec: Provides serialize(action, writer) -> int

        Returns:
            Total number of bytes written
        """
        result = write_pas_string(writer, self.name)
        result += write_u32(writer, TIMELINE_VERSION)
        result += write_u32(writer, len(self.moments))
        for moment_index, actions in self.moments:
            result += write_u32(writer, moment_index)
            result += write_u32(writer, MOMENT_VERSION)
            result += write_u32(writer, len(actions))
            for action in actions:
                result += action_codec.serialize(action, writer)

        logDebug(f"  Wrote timeline '{self.name}': {len(self.moments)} moments, "
                 f"{self.action_count} actions, {result} bytes")
        return result

    @classmethod
    def deserialize(cls, data: Union[BytesLike, ByteReader],
                    options: Optional[ParserOptions] = None,
                    action_codec=CodeAction) -> 'Timeline':
        """
        Read a timeline.

        Args:
            data: Record bytes, or a ByteReader positioned at the record start
                  (the reader is left just past the record)
            options: Parser policy (default strict)
            action_codec: Provides deserialize(reader, options); it is called
                          exactly action_count times per moment and owns the
                          cursor while it runs

        Returns:
            Timeline instance

        Raises:
            VersionMismatch: strict mode and a version field is not current
            TruncatedDataError: data ends before the record is complete
        """
        if options is None:
            options = ParserOptions()
        reader = data if isinstance(data, ByteReader) else ByteReader(data)
        start = reader.offset

        name = reader.read_pas_string()
        check_or_skip_version(reader, TIMELINE_VERSION, options, "timeline version")

        moment_count = reader.read_u32()
        moments: List[Moment] = []
        for _ in range(moment_count):
            moment_index = reader.read_u32()
            check_or_skip_version(reader, MOMENT_VERSION, options,
                                  f"moment {moment_index} version")

            action_count = reader.read_u32()
            actions = [action_codec.deserialize(reader, options) for _ in range(action_count)]
            moments.append((moment_index, actions))

        timeline = cls(name=name, moments=moments)
        logDebug(f"  Read timeline '{name}': {moment_count} moments, "
                 f"{timeline.action_count} actions, {reader.offset - start} bytes")
        return timeline

    def to_bytes(self, action_codec=CodeAction) -> bytes:
        buffer = io.BytesIO()
        self.serialize(buffer, action_codec)
        return buffer.getvalue()

    @classmethod
    def from_file(cls, filepath: Union[str, Path],
                  options: Optional[ParserOptions] = None) -> 'Timeline':
        """
        Load a timeline from a file holding a single record.

        Args:
            filepath: Path to the binary record
            options: Parser policy (default strict)
        """
        with open(filepath, 'rb') as f:
            data = f.read()
        return cls.deserialize(data, options)

    def write_file(self, filepath: Union[str, Path]) -> int:
        """
        Write this timeline to a file.

        The record is encoded in memory first, so an encoding error leaves an
        existing file untouched.

        Returns:
            Number of bytes written
        """
        data = self.to_bytes()
        with open(filepath, 'wb') as f:
            f.write(data)
        return len(data)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        return {
            'name': self.name,
            'moments': [
                {
                    'index': moment_index,
                    'actions': [action.to_dict() for action in actions],
                }
                for moment_index, actions in self.moments
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Timeline':
        """
        Build a timeline from its to_dict() form.

        Raises ValueError on missing fields or values of the wrong type.
        """
        if not isinstance(data, dict) or 'name' not in data:
            raise ValueError("Timeline data has no name")
        name = data['name']
        if not isinstance(name, str):
            raise ValueError(f"Timeline name must be a string, got {type(name).__name__}")

        raw_moments = data.get('moments', [])
        if not isinstance(raw_moments, list):
            raise ValueError(f"Timeline '{name}': moments must be a list")

        moments: List[Moment] = []
        for moment in raw_moments:
            if not isinstance(moment, dict) or 'index' not in moment:
                raise ValueError(f"Moment in timeline '{name}' has no index")
            index = moment['index']
            if isinstance(index, bool) or not isinstance(index, int):
                raise ValueError(f"Timeline '{name}': moment index must be an integer, got {index!r}")
            raw_actions = moment.get('actions', [])
            if not isinstance(raw_actions, list):
                raise ValueError(f"Timeline '{name}': actions of moment {index} must be a list")
            moments.append((index, [CodeAction.from_dict(a) for a in raw_actions]))
        return cls(name=name, moments=moments)
