"""
Random agent.

Samples uniformly from the environment's action space.  The space keeps its
own generator, so reseeding the agent makes a run reproducible.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
from gymnasium import spaces

from .base import AgentBehavior


class RandomAgent(AgentBehavior):

    def __init__(self, action_space: spaces.Space):
        # Private copy so sampling does not disturb the environment's own space
        self.action_space = _copy_space(action_space)
        self.seed: Optional[int] = None
        self.actions_chosen = 0
        self.total_reward = 0.0

    def reseed(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.action_space.seed(seed)

    def reset(self) -> None:
        self.total_reward = 0.0

    def choose_action(self, state: np.ndarray) -> Any:
        self.actions_chosen += 1
        return self.action_space.sample()

    def process_reward(self, previous_state, new_state, reward: float, done: bool) -> None:
        self.total_reward += reward

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "actions_chosen": self.actions_chosen,
            "total_reward": self.total_reward,
        }

    def load_dict(self, data: Dict[str, Any]) -> None:
        self.reseed(data.get("seed"))
        self.actions_chosen = int(data.get("actions_chosen", 0))
        self.total_reward = float(data.get("total_reward", 0.0))


def _copy_space(space: spaces.Space) -> spaces.Space:
    if isinstance(space, spaces.Discrete):
        return spaces.Discrete(int(space.n), start=int(space.start))
    if isinstance(space, spaces.MultiDiscrete):
        return spaces.MultiDiscrete(space.nvec.copy(), dtype=space.dtype)
    if isinstance(space, spaces.Box):
        return spaces.Box(low=space.low.copy(), high=space.high.copy(), dtype=space.dtype)
    return space
