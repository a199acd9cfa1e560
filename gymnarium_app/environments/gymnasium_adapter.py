"""
Adapter exposing any ``gymnasium.Env`` through EnvironmentBehavior.

Seeds are applied on the next reset, as gymnasium expects, and an episode is
started lazily if a step or state load arrives before the first reset.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .base import EnvironmentBehavior


class GymnasiumEnvironment(EnvironmentBehavior):
    """Shared reseed / reset / step plumbing for gymnasium backed variants."""

    def __init__(self, env: gym.Env):
        self._env = env
        self._pending_seed: Optional[int] = None
        self._needs_reset = True

    @property
    def action_space(self) -> spaces.Space:
        return self._env.action_space

    @property
    def suggested_steps_per_second(self) -> Optional[float]:
        return self._env.metadata.get("render_fps")

    @property
    def core(self) -> gym.Env:
        """The innermost, unwrapped environment."""
        return self._env.unwrapped

    def reseed(self, seed: Optional[int] = None) -> None:
        self._pending_seed = seed
        self._env.action_space.seed(seed)

    def reset(self) -> np.ndarray:
        observation, _ = self._env.reset(seed=self._pending_seed)
        self._pending_seed = None
        self._needs_reset = False
        return np.asarray(observation, dtype=np.float32)

    def _ensure_started(self) -> None:
        if self._needs_reset:
            self.reset()

    def step(self, action: Any) -> Tuple[np.ndarray, float, bool, Dict[str, Any]]:
        self._ensure_started()
        observation, reward, terminated, truncated, info = self._env.step(action)
        info = dict(info, terminated=bool(terminated), truncated=bool(truncated))
        done = bool(terminated or truncated)
        return np.asarray(observation, dtype=np.float32), float(reward), done, info

    def close(self) -> None:
        self._env.close()
