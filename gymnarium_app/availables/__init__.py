"""availables – variant registry and per-variant configuration."""

from .variants import (
    Axis, Variant, EnvironmentVariant, AgentVariant, VisualiserVariant, ExitConditionVariant,
)
from .registry import all_axes, variants_of, is_member, axis_of, parse_variant
from .configuration import (
    ConfigurationOption, Selected, NoSettings,
    MountainCarSettings, AiLearnsToDriveSettings, PistonIn2dSettings, EpisodesSimulatedSettings,
    available_configurations, select, split_config,
)

__all__ = [
    "Axis", "Variant", "EnvironmentVariant", "AgentVariant", "VisualiserVariant",
    "ExitConditionVariant",
    "all_axes", "variants_of", "is_member", "axis_of", "parse_variant",
    "ConfigurationOption", "Selected", "NoSettings",
    "MountainCarSettings", "AiLearnsToDriveSettings", "PistonIn2dSettings",
    "EpisodesSimulatedSettings",
    "available_configurations", "select", "split_config",
]
