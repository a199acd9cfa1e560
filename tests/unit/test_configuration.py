"""
Unit tests for per-variant configuration.

Covers:
- split_config(): plain pairs, escaping, trailing pair, empty input
- select(): defaults, parsing, SelectError on bad values, warning on unknown keys
- parse_dimension(): with and without parentheses, invalid input
"""

import pytest

from gymnarium_app.availables import (
    AgentVariant,
    AiLearnsToDriveSettings,
    EnvironmentVariant,
    EpisodesSimulatedSettings,
    ExitConditionVariant,
    MountainCarSettings,
    NoSettings,
    PistonIn2dSettings,
    VisualiserVariant,
    available_configurations,
    select,
    split_config,
)
from gymnarium_app.availables.configuration import parse_dimension
from gymnarium_app.errors import SelectError


# ---------------------------------------------------------------------------
# split_config()
# ---------------------------------------------------------------------------

class TestSplitConfig:
    def test_empty_string(self):
        assert split_config("") == {}

    def test_single_pair_without_separator(self):
        assert split_config("goal_velocity=0.5") == {"goal_velocity": "0.5"}

    def test_multiple_pairs(self):
        assert split_config("a=1;b=2;c=3") == {"a": "1", "b": "2", "c": "3"}

    def test_trailing_separator(self):
        assert split_config("a=1;") == {"a": "1"}

    def test_escaped_separator_in_value(self):
        assert split_config(r"key=val\;ue") == {"key": "val;ue"}

    def test_escaped_separator_in_key(self):
        assert split_config(r"ke\;y=va\\lue") == {"ke;y": "va\\lue"}

    def test_second_equals_belongs_to_value(self):
        assert split_config("a=b=c") == {"a": "b=c"}

    def test_key_without_value_is_dropped(self):
        assert split_config("dangling") == {}

    def test_window_title_with_spaces(self):
        assert split_config("window_title=My Window;window_dimension=(800, 600)") == {
            "window_title": "My Window",
            "window_dimension": "(800, 600)",
        }


# ---------------------------------------------------------------------------
# select()
# ---------------------------------------------------------------------------

class TestSelectDefaults:
    def test_mountain_car_default(self):
        selected = select(EnvironmentVariant.GYM_MOUNTAIN_CAR)
        assert selected.settings == MountainCarSettings(goal_velocity=0.0)

    def test_ai_learns_to_drive_defaults(self):
        selected = select(EnvironmentVariant.CODE_BULLET_AI_LEARNS_TO_DRIVE, {})
        assert selected.settings == AiLearnsToDriveSettings(
            sensor_lines_visible=False, track_visible=True
        )

    def test_piston_defaults(self):
        selected = select(VisualiserVariant.PISTON_IN_2D)
        assert selected.settings == PistonIn2dSettings("Gymnarium Application", (640, 480))

    def test_episodes_default(self):
        assert select(ExitConditionVariant.EPISODES_SIMULATED).settings.count_of_episodes == 20

    @pytest.mark.parametrize("variant", [
        AgentVariant.RANDOM, AgentVariant.INPUT,
        VisualiserVariant.NONE, ExitConditionVariant.VISUALISER_CLOSED,
    ])
    def test_variants_without_options(self, variant):
        assert available_configurations(variant) == []
        assert select(variant).settings == NoSettings()

    def test_selected_keeps_variant_and_axis(self):
        selected = select(AgentVariant.INPUT)
        assert selected.variant is AgentVariant.INPUT
        assert selected.axis is AgentVariant.INPUT.axis


class TestSelectParsing:
    def test_goal_velocity_parsed(self):
        selected = select(EnvironmentVariant.GYM_MOUNTAIN_CAR, {"goal_velocity": "0.07"})
        assert selected.settings.goal_velocity == pytest.approx(0.07)

    def test_booleans_parsed_case_insensitive(self):
        selected = select(
            EnvironmentVariant.CODE_BULLET_AI_LEARNS_TO_DRIVE,
            {"sensor_lines_visible": "TRUE", "track_visible": "false"},
        )
        assert selected.settings.sensor_lines_visible is True
        assert selected.settings.track_visible is False

    def test_count_of_episodes_parsed(self):
        selected = select(ExitConditionVariant.EPISODES_SIMULATED, {"count_of_episodes": "3"})
        assert selected.settings == EpisodesSimulatedSettings(count_of_episodes=3)

    def test_window_configuration_parsed(self):
        selected = select(
            VisualiserVariant.PISTON_IN_2D,
            {"window_title": "Drive", "window_dimension": "(800, 600)"},
        )
        assert selected.settings == PistonIn2dSettings("Drive", (800, 600))

    def test_bad_float_raises(self):
        with pytest.raises(SelectError):
            select(EnvironmentVariant.GYM_MOUNTAIN_CAR, {"goal_velocity": "fast"})

    def test_bad_bool_raises(self):
        with pytest.raises(SelectError):
            select(EnvironmentVariant.CODE_BULLET_AI_LEARNS_TO_DRIVE, {"track_visible": "yes"})

    def test_negative_count_raises(self):
        with pytest.raises(SelectError):
            select(ExitConditionVariant.EPISODES_SIMULATED, {"count_of_episodes": "-1"})

    def test_bad_dimension_falls_back_to_default(self):
        with pytest.warns(UserWarning, match="window_dimension"):
            selected = select(VisualiserVariant.PISTON_IN_2D, {"window_dimension": "huge"})
        assert selected.settings.window_dimension == (640, 480)

    def test_unknown_key_warns_and_is_ignored(self):
        with pytest.warns(UserWarning, match="speed"):
            selected = select(AgentVariant.RANDOM, {"speed": "11"})
        assert selected.settings == NoSettings()


class TestParseDimension:
    def test_with_parentheses(self):
        assert parse_dimension("(640, 480)") == (640, 480)

    def test_without_parentheses(self):
        assert parse_dimension("1024,768") == (1024, 768)

    def test_single_number_is_invalid(self):
        assert parse_dimension("640") is None

    def test_non_numeric_is_invalid(self):
        assert parse_dimension("(a, b)") is None
