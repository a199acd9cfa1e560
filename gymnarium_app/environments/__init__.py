"""environments – environment capability interface and the concrete environments."""

from .base import (
    EnvironmentBehavior, InputToActionMapper, TwoDimensionalScene, Viewport,
    Polyline, Polygon, Circle,
)
from .gymnasium_adapter import GymnasiumEnvironment
from .mountain_car import MountainCarEnvironment, MountainCarInputToActionMapper
from .ai_learns_to_drive import (
    AiLearnsToDriveEnv, AiLearnsToDriveEnvironment, AiLearnsToDriveInputToActionMapper,
    TrackGeometry,
)

__all__ = [
    "EnvironmentBehavior", "InputToActionMapper", "TwoDimensionalScene", "Viewport",
    "Polyline", "Polygon", "Circle",
    "GymnasiumEnvironment",
    "MountainCarEnvironment", "MountainCarInputToActionMapper",
    "AiLearnsToDriveEnv", "AiLearnsToDriveEnvironment", "AiLearnsToDriveInputToActionMapper",
    "TrackGeometry",
]
