import io

import pytest

from gm_assets.assets import CodeAction
from gm_assets.constants import ACTION_VERSION
from gm_assets.parsers import ByteReader, FormatError, ParserOptions, VersionMismatch

from tests.helpers import make_action, u32

# 8 fixed u32 fields, param_count, two array lengths, 8 param types,
# applies_to, is_relative, invert_condition, plus 10 empty string prefixes
EMPTY_ACTION_SIZE = 128


def encode(action: CodeAction) -> bytes:
    buffer = io.BytesIO()
    action.serialize(buffer)
    return buffer.getvalue()


def test_default_action_size():
    assert len(encode(CodeAction())) == EMPTY_ACTION_SIZE


def test_serialize_returns_byte_count(action):
    buffer = io.BytesIO()
    assert action.serialize(buffer) == len(buffer.getvalue())


def test_layout_prefix(action):
    data = encode(action)
    assert data[:32] == b''.join(u32(v) for v in (ACTION_VERSION, 1, 603, 7, 0, 0, 1, 2))


def test_round_trip(action):
    data = encode(action)
    reader = ByteReader(data + b'next')
    assert CodeAction.deserialize(reader, ParserOptions(strict=True)) == action
    assert reader.remaining_bytes == 4


def test_round_trip_flags_and_negative_target():
    action = make_action(is_condition=True, invert_condition=True, is_relative=True,
                         applies_to=-2, can_be_relative=1, fn_name="action_if_variable")
    assert CodeAction.deserialize(ByteReader(encode(action))) == action


def test_strict_rejects_foreign_action_version(action):
    data = bytearray(encode(action))
    data[0:4] = u32(430)
    with pytest.raises(VersionMismatch):
        CodeAction.deserialize(ByteReader(bytes(data)), ParserOptions(strict=True))
    assert CodeAction.deserialize(ByteReader(bytes(data)), ParserOptions(strict=False)) == action


def test_strict_rejects_wrong_param_slot_count():
    data = bytearray(encode(CodeAction()))
    # param type count follows 8 u32 fields, two empty strings and param_count
    data[44:48] = u32(6)
    with pytest.raises(FormatError):
        CodeAction.deserialize(ByteReader(bytes(data)), ParserOptions(strict=True))
    assert CodeAction.deserialize(ByteReader(bytes(data)), ParserOptions(strict=False)) == CodeAction()


def test_lenient_decode_ignores_version_and_slot_counts():
    action = make_action(fn_code="")
    encoded = encode(action)
    data = bytearray(encoded)
    data[0:4] = u32(430)
    # with both code strings empty the slot counts sit at fixed offsets
    data[44:48] = u32(6)
    data[88:92] = u32(3)
    reader = ByteReader(bytes(data) + u32(0xDEAD))

    assert CodeAction.deserialize(reader, ParserOptions(strict=False)) == action
    assert reader.offset == len(encoded)
    assert reader.remaining_bytes == 4


@pytest.mark.parametrize("field", ["param_types", "param_strings"])
def test_serialize_requires_eight_slots(field):
    action = CodeAction()
    setattr(action, field, getattr(action, field)[:5])
    with pytest.raises(ValueError):
        encode(action)


def test_serialize_rejects_param_count_over_slots():
    with pytest.raises(ValueError):
        encode(make_action(param_count=9))


def test_params_property(action):
    assert action.params == ["obj_player", "1"]


def test_dict_round_trip(action):
    assert CodeAction.from_dict(action.to_dict()) == action


def test_from_dict_pads_param_lists():
    action = CodeAction.from_dict({'id': 5, 'param_count': 1, 'param_strings': ["3"], 'param_types': [2]})
    assert action.param_strings == ["3"] + [""] * 7
    assert action.param_types == [2] + [0] * 7


def test_from_dict_rejects_unknown_field():
    with pytest.raises(ValueError):
        CodeAction.from_dict({'bogus': 1})


@pytest.mark.parametrize("data", [
    {'lib_id': "x"},
    {'is_condition': 1},
    {'param_count': True},
    {'fn_code': 5},
    {'param_types': "1,0"},
    {'param_types': [1, "0"]},
    {'param_strings': ["obj_player", 3]},
])
def test_from_dict_rejects_wrong_types(data):
    with pytest.raises(ValueError):
        CodeAction.from_dict(data)


def test_from_dict_requires_object():
    with pytest.raises(ValueError):
        CodeAction.from_dict(["lib_id", 1])
