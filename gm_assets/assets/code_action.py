"""
Code Action Record

A drag-and-drop "code action": one unit of behaviour attached to an event or
a timeline moment. The record is self-delimiting; it carries no overall
length prefix, so containers only store how many actions follow.

Format:
- u32 version (ACTION_VERSION = 440)
- u32 lib_id
- u32 id
- u32 action_kind
- u32 can_be_relative
- u32 is_condition (bool)
- u32 applies_to_something (bool)
- u32 execution_type
- string fn_name
- string fn_code
- u32 param_count (slots in use)
- u32 8 (param_types length)
- u32 param_types[8]
- i32 applies_to
- u32 is_relative (bool)
- u32 8 (param_strings length)
- string param_strings[8]
- u32 invert_condition (bool)
"""

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Optional

from ..constants import ACTION_PARAM_SLOTS, ACTION_VERSION
from ..parsers.base import (
    ByteReader, ParserOptions, check_or_skip_count, check_or_skip_version,
)
from ..utils.binary import write_bool32, write_i32, write_pas_string, write_u32

# Special applies_to targets
APPLIES_TO_SELF = -1
APPLIES_TO_OTHER = -2


def _empty_types() -> List[int]:
    return [0] * ACTION_PARAM_SLOTS


def _empty_strings() -> List[str]:
    return [""] * ACTION_PARAM_SLOTS


def _check_type(key: str, value: Any, expected: type):
    # bool is an int subclass; keep flags and numbers apart
    if isinstance(value, bool) != (expected is bool) or not isinstance(value, expected):
        raise ValueError(f"Code action field '{key}' must be {expected.__name__}, "
                         f"got {type(value).__name__}")


@dataclass
class CodeAction:
    """A single drag-and-drop action."""
    lib_id: int = 1
    id: int = 0
    action_kind: int = 0
    can_be_relative: int = 0
    is_condition: bool = False
    applies_to_something: bool = True
    execution_type: int = 0
    fn_name: str = ""
    fn_code: str = ""
    param_count: int = 0
    param_types: List[int] = field(default_factory=_empty_types)
    applies_to: int = APPLIES_TO_SELF
    is_relative: bool = False
    param_strings: List[str] = field(default_factory=_empty_strings)
    invert_condition: bool = False

    def serialize(self, writer: BinaryIO) -> int:
        """
        Write this action.

        Args:
            writer: Output buffer

        Returns:
            Number of bytes written
        """
        if len(self.param_types) != ACTION_PARAM_SLOTS:
            raise ValueError(
                f"Action {self.id}: expected {ACTION_PARAM_SLOTS} param types, "
                f"got {len(self.param_types)}"
            )
        if len(self.param_strings) != ACTION_PARAM_SLOTS:
            raise ValueError(
                f"Action {self.id}: expected {ACTION_PARAM_SLOTS} param strings, "
                f"got {len(self.param_strings)}"
            )
        if self.param_count > ACTION_PARAM_SLOTS:
            raise ValueError(
                f"Action {self.id}: param_count {self.param_count} exceeds {ACTION_PARAM_SLOTS} slots"
            )

        result = write_u32(writer, ACTION_VERSION)
        result += write_u32(writer, self.lib_id)
        result += write_u32(writer, self.id)
        result += write_u32(writer, self.action_kind)
        result += write_u32(writer, self.can_be_relative)
        result += write_bool32(writer, self.is_condition)
        result += write_bool32(writer, self.applies_to_something)
        result += write_u32(writer, self.execution_type)
        result += write_pas_string(writer, self.fn_name)
        result += write_pas_string(writer, self.fn_code)
        result += write_u32(writer, self.param_count)
        result += write_u32(writer, ACTION_PARAM_SLOTS)
        for param_type in self.param_types:
            result += write_u32(writer, param_type)
        result += write_i32(writer, self.applies_to)
        result += write_bool32(writer, self.is_relative)
        result += write_u32(writer, ACTION_PARAM_SLOTS)
        for param in self.param_strings:
            result += write_pas_string(writer, param)
        result += write_bool32(writer, self.invert_condition)
        return result

    @classmethod
    def deserialize(cls, reader: ByteReader, options: Optional[ParserOptions] = None) -> 'CodeAction':
        """
        Read one action from the reader's current position.

        Args:
            reader: Shared reader; advanced past exactly this action
            options: Parser policy (default strict)

        Returns:
            CodeAction instance
        """
        if options is None:
            options = ParserOptions()

        check_or_skip_version(reader, ACTION_VERSION, options, "action version")

        lib_id = reader.read_u32()
        action_id = reader.read_u32()
        action_kind = reader.read_u32()
        can_be_relative = reader.read_u32()
        is_condition = reader.read_bool32()
        applies_to_something = reader.read_bool32()
        execution_type = reader.read_u32()
        fn_name = reader.read_pas_string()
        fn_code = reader.read_pas_string()
        param_count = reader.read_u32()

        check_or_skip_count(reader, ACTION_PARAM_SLOTS, options, "param type count")
        param_types = reader.read_u32_array(ACTION_PARAM_SLOTS)

        applies_to = reader.read_i32()
        is_relative = reader.read_bool32()

        check_or_skip_count(reader, ACTION_PARAM_SLOTS, options, "param string count")
        param_strings = [reader.read_pas_string() for _ in range(ACTION_PARAM_SLOTS)]

        invert_condition = reader.read_bool32()

        return cls(
            lib_id=lib_id,
            id=action_id,
            action_kind=action_kind,
            can_be_relative=can_be_relative,
            is_condition=is_condition,
            applies_to_something=applies_to_something,
            execution_type=execution_type,
            fn_name=fn_name,
            fn_code=fn_code,
            param_count=param_count,
            param_types=param_types,
            applies_to=applies_to,
            is_relative=is_relative,
            param_strings=param_strings,
            invert_condition=invert_condition,
        )

    @property
    def params(self) -> List[str]:
        """Parameter strings that are actually in use."""
        return self.param_strings[:self.param_count]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        return {
            'lib_id': self.lib_id,
            'id': self.id,
            'action_kind': self.action_kind,
            'can_be_relative': self.can_be_relative,
            'is_condition': self.is_condition,
            'applies_to_something': self.applies_to_something,
            'execution_type': self.execution_type,
            'fn_name': self.fn_name,
            'fn_code': self.fn_code,
            'param_count': self.param_count,
            'param_types': list(self.param_types),
            'applies_to': self.applies_to,
            'is_relative': self.is_relative,
            'param_strings': list(self.param_strings),
            'invert_condition': self.invert_condition,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CodeAction':
        """
        Build an action from its to_dict() form.

        Missing keys take the dataclass defaults; short param lists are padded
        to the fixed slot count. Values of the wrong type raise ValueError.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Code action must be an object, got {type(data).__name__}")

        action = cls()
        for key, value in data.items():
            if not hasattr(action, key) or key == 'params':
                raise ValueError(f"Unknown code action field: {key}")
            _check_type(key, value, type(getattr(action, key)))
            if key == 'param_types':
                for item in value:
                    _check_type(key, item, int)
            elif key == 'param_strings':
                for item in value:
                    _check_type(key, item, str)
            setattr(action, key, value)

        action.param_types = list(action.param_types) + [0] * (ACTION_PARAM_SLOTS - len(action.param_types))
        action.param_strings = list(action.param_strings) + [""] * (ACTION_PARAM_SLOTS - len(action.param_strings))
        return action
