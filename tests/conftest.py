import pytest

from gm_assets.assets import CodeAction, Timeline
from gm_assets.utils import close_logging

from tests.helpers import make_action


@pytest.fixture
def action() -> CodeAction:
    return make_action()


@pytest.fixture
def timeline() -> Timeline:
    return Timeline(
        name="tl_boss_fight",
        moments=[
            (0, [make_action()]),
            (30, [make_action(id=101, fn_code="", is_condition=True, invert_condition=True),
                  make_action(id=203, applies_to=-2, is_relative=True)]),
            (30, []),
            (12, [make_action(fn_name="action_sound", param_strings=["snd_roar"] + [""] * 7)]),
        ],
    )


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    close_logging()
