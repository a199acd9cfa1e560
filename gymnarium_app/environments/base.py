"""
Environment capability interface and two-dimensional drawing primitives.

Environments describe what should be drawn as plain geometry; visualisers
decide how to put it on screen.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

import numpy as np
from gymnasium import spaces

Point = Tuple[float, float]
Color = str

# Maps the set of currently pressed keys to an action for the environment
InputToActionMapper = Callable[[FrozenSet[str]], Any]


@dataclass(frozen=True)
class Viewport:
    """World-coordinate bounds of the drawing area."""
    left: float
    right: float
    bottom: float
    top: float


@dataclass(frozen=True)
class Polyline:
    points: Sequence[Point]
    color: Color = "black"
    width: float = 1.0
    closed: bool = False


@dataclass(frozen=True)
class Polygon:
    points: Sequence[Point]
    fill: Color = "grey"
    edge: Optional[Color] = None


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float
    fill: Color = "grey"
    edge: Optional[Color] = None


Shape = Any  # Polyline | Polygon | Circle


@dataclass
class TwoDimensionalScene:
    """Everything a 2D visualiser needs for one frame."""
    viewport: Viewport
    shapes: List[Shape] = field(default_factory=list)
    background: Color = "white"


class EnvironmentBehavior(ABC):
    """What the run loop and the other variants may ask of an environment."""

    @property
    @abstractmethod
    def action_space(self) -> spaces.Space:
        ...

    @property
    def suggested_steps_per_second(self) -> Optional[float]:
        """Pace for interactive runs; None lets the visualiser decide."""
        return None

    @abstractmethod
    def reseed(self, seed: Optional[int] = None) -> None:
        ...

    @abstractmethod
    def reset(self) -> np.ndarray:
        """Start a new episode and return the initial state."""

    @abstractmethod
    def state(self) -> np.ndarray:
        ...

    @abstractmethod
    def step(self, action: Any) -> Tuple[np.ndarray, float, bool, Dict[str, Any]]:
        """Advance one step; returns (state, reward, done, info)."""

    @abstractmethod
    def two_dimensional_scene(self) -> TwoDimensionalScene:
        ...

    @abstractmethod
    def input_to_action_mapper(self) -> InputToActionMapper:
        ...

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serializable snapshot of the environment state."""

    @abstractmethod
    def load_dict(self, data: Dict[str, Any]) -> None:
        ...

    def close(self) -> None:
        pass
