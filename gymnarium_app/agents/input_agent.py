"""
Input agent.

Lets a human drive the environment: the keys currently held in the
visualiser window are translated into an action by an environment specific
mapper.
"""

from __future__ import annotations

from typing import Any, Callable, FrozenSet, Optional

import numpy as np

from .base import AgentBehavior

InputProvider = Callable[[], FrozenSet[str]]


class InputAgent(AgentBehavior):

    def __init__(self, input_provider: InputProvider, to_action_mapper: Callable[[FrozenSet[str]], Any]):
        self.input_provider = input_provider
        self.to_action_mapper = to_action_mapper

    def reseed(self, seed: Optional[int] = None) -> None:
        pass

    def choose_action(self, state: np.ndarray) -> Any:
        return self.to_action_mapper(frozenset(self.input_provider()))
