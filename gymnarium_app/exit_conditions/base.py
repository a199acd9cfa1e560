"""Exit condition capability interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..agents.base import AgentBehavior
from ..environments.base import EnvironmentBehavior
from ..visualisers.base import VisualiserBehavior


class ExitConditionBehavior(ABC):
    """Decides, before every step, whether the run is over."""

    @abstractmethod
    def should_exit(
        self,
        environment: EnvironmentBehavior,
        agent: AgentBehavior,
        visualiser: VisualiserBehavior,
        episode: int,
        step: int,
    ) -> bool:
        ...

    def describe(self) -> str:
        return type(self).__name__
