"""
Per-variant configuration.

Each variant declares the options it understands.  ``select`` turns the raw
``key=value`` strings gathered by the CLI into a typed settings object and
pairs it with the variant, producing a :class:`Selected`.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors import SelectError
from .variants import (
    AgentVariant,
    Axis,
    EnvironmentVariant,
    ExitConditionVariant,
    Variant,
    VisualiserVariant,
)

DEFAULT_WINDOW_TITLE = "Gymnarium Application"
DEFAULT_WINDOW_DIMENSION = (640, 480)


@dataclass(frozen=True)
class ConfigurationOption:
    """A single configurable key of a variant."""
    name: str
    description: str
    default: str
    data_type: str


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NoSettings:
    """Settings of variants without any options."""


@dataclass(frozen=True)
class MountainCarSettings:
    goal_velocity: float = 0.0


@dataclass(frozen=True)
class AiLearnsToDriveSettings:
    sensor_lines_visible: bool = False
    track_visible: bool = True


@dataclass(frozen=True)
class PistonIn2dSettings:
    window_title: str = DEFAULT_WINDOW_TITLE
    window_dimension: Tuple[int, int] = DEFAULT_WINDOW_DIMENSION


@dataclass(frozen=True)
class EpisodesSimulatedSettings:
    count_of_episodes: int = 20


# ---------------------------------------------------------------------------
# Value parsers
# ---------------------------------------------------------------------------

def parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise SelectError(f'ParseError occurred while selecting ("provided string was not `true` or `false`: {text!r}")')


def parse_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError as exc:
        raise SelectError(f'ParseError occurred while selecting ("{exc}")') from exc


def parse_count(text: str) -> int:
    try:
        value = int(text.strip())
    except ValueError as exc:
        raise SelectError(f'ParseError occurred while selecting ("{exc}")') from exc
    if value < 0:
        raise SelectError(f'ParseError occurred while selecting ("negative count: {value}")')
    return value


def parse_dimension(text: str) -> Optional[Tuple[int, int]]:
    """Parse ``"(w, h)"`` or ``"w, h"``; None when the text is not a pair of integers."""
    stripped = text.strip()
    if stripped.startswith("(") and stripped.endswith(")"):
        stripped = stripped[1:-1]
    parts = [p.strip() for p in stripped.split(",")]
    if len(parts) != 2:
        return None
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if width < 0 or height < 0:
        return None
    return (width, height)


# ---------------------------------------------------------------------------
# Option declarations
# ---------------------------------------------------------------------------

AVAILABLE_CONFIGURATIONS: Dict[Variant, List[ConfigurationOption]] = {
    EnvironmentVariant.GYM_MOUNTAIN_CAR: [
        ConfigurationOption(
            name="goal_velocity",
            description=(
                "The velocity which the agent has to have at least when he reaches "
                "the flag. Because the velocity never is negative a value of 0.0 is "
                "the off-switch for this."
            ),
            default="0.0",
            data_type="float",
        ),
    ],
    EnvironmentVariant.CODE_BULLET_AI_LEARNS_TO_DRIVE: [
        ConfigurationOption(
            name="sensor_lines_visible",
            description=(
                "Whether the given sensor lines should be drawn in the visualiser. "
                "Sometimes it's nice to see what an agent sees."
            ),
            default="false",
            data_type="bool",
        ),
        ConfigurationOption(
            name="track_visible",
            description=(
                'Whether the track should be drawn in the visualiser. This set to '
                'false in addition to "sensor_lines_visible" to true simulates the '
                'view the agent has.'
            ),
            default="true",
            data_type="bool",
        ),
    ],
    AgentVariant.RANDOM: [],
    AgentVariant.INPUT: [],
    VisualiserVariant.NONE: [],
    VisualiserVariant.PISTON_IN_2D: [
        ConfigurationOption(
            name="window_title",
            description="Sets the window title.",
            default=DEFAULT_WINDOW_TITLE,
            data_type="str",
        ),
        ConfigurationOption(
            name="window_dimension",
            description=(
                "Sets the window dimensions with which it should start. It's "
                "important to specify them with the parentheses and the comma."
            ),
            default="(640, 480)",
            data_type="(int, int)",
        ),
    ],
    ExitConditionVariant.EPISODES_SIMULATED: [
        ConfigurationOption(
            name="count_of_episodes",
            description="The number of episodes to run through before exiting.",
            default="20",
            data_type="int",
        ),
    ],
    ExitConditionVariant.VISUALISER_CLOSED: [],
}


def available_configurations(variant: Variant) -> List[ConfigurationOption]:
    """Options understood by ``variant`` (empty list when it has none)."""
    return list(AVAILABLE_CONFIGURATIONS[variant])


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Selected:
    """A variant together with its parsed settings."""
    variant: Variant
    settings: Any = field(default_factory=NoSettings)

    @property
    def axis(self) -> Axis:
        return self.variant.axis

    def __str__(self) -> str:
        return f"{self.variant} {self.settings}"


def _build_mountain_car(values: Dict[str, str]) -> MountainCarSettings:
    return MountainCarSettings(goal_velocity=parse_float(values.get("goal_velocity", "0.0")))


def _build_ai_learns_to_drive(values: Dict[str, str]) -> AiLearnsToDriveSettings:
    return AiLearnsToDriveSettings(
        sensor_lines_visible=parse_bool(values.get("sensor_lines_visible", "false")),
        track_visible=parse_bool(values.get("track_visible", "true")),
    )


def _build_piston_in_2d(values: Dict[str, str]) -> PistonIn2dSettings:
    dimension = None
    if "window_dimension" in values:
        dimension = parse_dimension(values["window_dimension"])
        if dimension is None:
            warnings.warn(
                f"Could not parse window_dimension {values['window_dimension']!r}; "
                f"using {DEFAULT_WINDOW_DIMENSION}.",
                UserWarning,
            )
    return PistonIn2dSettings(
        window_title=values.get("window_title", DEFAULT_WINDOW_TITLE),
        window_dimension=dimension or DEFAULT_WINDOW_DIMENSION,
    )


def _build_episodes_simulated(values: Dict[str, str]) -> EpisodesSimulatedSettings:
    return EpisodesSimulatedSettings(
        count_of_episodes=parse_count(values.get("count_of_episodes", "20"))
    )


_SETTINGS_BUILDERS: Dict[Variant, Callable[[Dict[str, str]], Any]] = {
    EnvironmentVariant.GYM_MOUNTAIN_CAR: _build_mountain_car,
    EnvironmentVariant.CODE_BULLET_AI_LEARNS_TO_DRIVE: _build_ai_learns_to_drive,
    VisualiserVariant.PISTON_IN_2D: _build_piston_in_2d,
    ExitConditionVariant.EPISODES_SIMULATED: _build_episodes_simulated,
}


def select(variant: Variant, configuration: Optional[Dict[str, str]] = None) -> Selected:
    """
    Parse raw configuration strings for ``variant``.

    Missing keys take the declared defaults.  Keys the variant does not
    understand are ignored with a warning.

    Raises:
        SelectError: if a value cannot be parsed.
    """
    values = dict(configuration or {})
    known = {option.name for option in AVAILABLE_CONFIGURATIONS[variant]}
    unknown = sorted(set(values) - known)
    if unknown:
        warnings.warn(
            f"Ignoring unknown configuration for {variant}: {', '.join(unknown)}",
            UserWarning,
        )
    builder = _SETTINGS_BUILDERS.get(variant)
    settings = builder(values) if builder else NoSettings()
    return Selected(variant=variant, settings=settings)


def split_config(configuration_string: str) -> Dict[str, str]:
    r"""
    Split ``"key=value;key=value"`` into a dict.

    A backslash escapes the following character, so ``;``, ``=`` and ``\``
    can appear inside keys and values (``"key=val\;ue"``).
    """
    output: Dict[str, str] = {}
    key: List[str] = []
    value: List[str] = []
    parsing_value = False
    escaped = False
    for c in configuration_string:
        if not escaped and c == "\\":
            escaped = True
        elif not escaped and not parsing_value and c == "=":
            parsing_value = True
        elif not escaped and parsing_value and c == ";":
            output["".join(key)] = "".join(value)
            key, value = [], []
            parsing_value = False
        else:
            escaped = False
            (value if parsing_value else key).append(c)
    if parsing_value:
        output["".join(key)] = "".join(value)
    return output
