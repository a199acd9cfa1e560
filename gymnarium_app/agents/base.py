"""Agent capability interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import numpy as np


class AgentBehavior(ABC):
    """What the run loop asks of an agent."""

    @abstractmethod
    def reseed(self, seed: Optional[int] = None) -> None:
        ...

    def reset(self) -> None:
        pass

    @abstractmethod
    def choose_action(self, state: np.ndarray) -> Any:
        ...

    def process_reward(
        self,
        previous_state: np.ndarray,
        new_state: np.ndarray,
        reward: float,
        done: bool,
    ) -> None:
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {}

    def load_dict(self, data: Dict[str, Any]) -> None:
        pass

    def close(self) -> None:
        pass
