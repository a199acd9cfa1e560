"""
Closed enumerations of the variants available on each axis.

Every axis is an ``Enum`` whose member order is the registry order.  A
variant's identity is its (axis, member) pair; the three names mirror the
spellings accepted on the command line.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Type, Union


class Axis(Enum):
    """The four independent configuration dimensions."""
    ENVIRONMENT = ("Environment", "Available Environments")
    AGENT = ("Agent", "Available Agents")
    VISUALISER = ("Visualiser", "Available Visualisers")
    EXIT_CONDITION = ("ExitCondition", "Available Exit Conditions")

    def __init__(self, label: str, headline: str):
        self.label = label
        self.headline = headline

    @property
    def variant_type(self) -> Type["_Variant"]:
        return _VARIANT_TYPES[self]

    def __str__(self) -> str:
        return self.label


class _Variant(Enum):
    """Shared behaviour of the per-axis variant enumerations."""

    def __init__(self, label: str, nice_name: str, long_name: str, short_name: str):
        self.label = label
        self.nice_name = nice_name
        self.long_name = long_name
        self.short_name = short_name

    @property
    def axis(self) -> Axis:
        return _AXIS_OF_TYPE[type(self)]

    @property
    def names(self):
        return (self.nice_name, self.long_name, self.short_name)

    def matches(self, text: str) -> bool:
        """Case-insensitive match against every accepted spelling."""
        lowered = text.strip().lower()
        return lowered in {n.lower() for n in self.names} or lowered in {
            self.label.lower(), self.name.lower()
        }

    def __str__(self) -> str:
        return f"{self.axis.label}={self.label}"


class EnvironmentVariant(_Variant):
    GYM_MOUNTAIN_CAR = (
        "GymMountainCar", "Gym MountainCar", "gym_mountaincar", "g_mc",
    )
    CODE_BULLET_AI_LEARNS_TO_DRIVE = (
        "CodeBulletAiLearnsToDrive", "Code Bullet AI Learns to DRIVE",
        "code_bullet_ai_learns_to_drive", "cb_drive",
    )


class AgentVariant(_Variant):
    RANDOM = ("Random", "Random", "random", "rand")
    INPUT = ("Input", "Input", "input", "inp")


class VisualiserVariant(_Variant):
    NONE = ("None", "None", "none", "none")
    PISTON_IN_2D = ("PistonIn2d", "Piston in 2D", "piston2d", "pi2d")


class ExitConditionVariant(_Variant):
    EPISODES_SIMULATED = (
        "EpisodesSimulated", "episodes done simulating",
        "episodes_done_simulating", "epsdone",
    )
    VISUALISER_CLOSED = (
        "VisualiserClosed", "visualiser is closed",
        "visualiser_is_closed", "visclosed",
    )


Variant = Union[EnvironmentVariant, AgentVariant, VisualiserVariant, ExitConditionVariant]

_VARIANT_TYPES: Dict[Axis, Type[_Variant]] = {
    Axis.ENVIRONMENT: EnvironmentVariant,
    Axis.AGENT: AgentVariant,
    Axis.VISUALISER: VisualiserVariant,
    Axis.EXIT_CONDITION: ExitConditionVariant,
}

_AXIS_OF_TYPE: Dict[Type[_Variant], Axis] = {t: a for a, t in _VARIANT_TYPES.items()}
