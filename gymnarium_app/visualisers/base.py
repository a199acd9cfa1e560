"""Visualiser capability interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..agents.input_agent import InputProvider
from ..environments.base import EnvironmentBehavior

DEFAULT_STEPS_PER_SECOND = 30.0


class VisualiserBehavior(ABC):
    """What the run loop and the other variants may ask of a visualiser."""

    # Whether the visualiser owns a window the user can close
    has_window: bool = False

    @abstractmethod
    def is_open(self) -> bool:
        ...

    @abstractmethod
    def render(self, environment: EnvironmentBehavior) -> None:
        ...

    @abstractmethod
    def input_provider(self) -> InputProvider:
        ...

    def frame_interval(self, environment: EnvironmentBehavior) -> float:
        """Seconds to wait between two rendered steps."""
        return 0.0

    def close(self) -> None:
        pass


def steps_per_second(environment: EnvironmentBehavior, fallback: float = DEFAULT_STEPS_PER_SECOND) -> float:
    suggested: Optional[float] = environment.suggested_steps_per_second
    return float(suggested) if suggested and suggested > 0 else fallback
