"""
Gym MountainCar environment.

Wraps gymnasium's ``MountainCar-v0`` and describes the hill, the car and
the flag as 2D geometry.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet

import numpy as np
import gymnasium as gym

from .base import InputToActionMapper, Polygon, Polyline, TwoDimensionalScene, Viewport
from .gymnasium_adapter import GymnasiumEnvironment

GYM_ID = "MountainCar-v0"

# Discrete actions of MountainCar-v0
PUSH_LEFT, NO_PUSH, PUSH_RIGHT = 0, 1, 2

CAR_LENGTH = 0.12
CAR_HEIGHT = 0.05
FLAG_HEIGHT = 0.12


class MountainCarInputToActionMapper:
    """Left / right arrow keys push the car; anything else coasts."""

    def __call__(self, pressed: FrozenSet[str]) -> int:
        left = "left" in pressed
        right = "right" in pressed
        if left and not right:
            return PUSH_LEFT
        if right and not left:
            return PUSH_RIGHT
        return NO_PUSH


def hill_height(position):
    return np.sin(3 * position) * 0.45 + 0.55


class MountainCarEnvironment(GymnasiumEnvironment):
    """
    MountainCar from gymnasium.

    Args:
        goal_velocity: Minimum velocity required when reaching the flag.
            0.0 switches the requirement off.
    """

    def __init__(self, goal_velocity: float = 0.0):
        super().__init__(gym.make(GYM_ID, goal_velocity=goal_velocity))
        self.goal_velocity = goal_velocity

    def state(self) -> np.ndarray:
        self._ensure_started()
        return np.asarray(self.core.state, dtype=np.float32)

    def step(self, action: Any):
        return super().step(int(action))

    def two_dimensional_scene(self) -> TwoDimensionalScene:
        core = self.core
        xs = np.linspace(core.min_position, core.max_position, 100)
        hill = Polyline(points=list(zip(xs, hill_height(xs))), color="black", width=2.0)

        state = getattr(core, "state", None)
        position = float(state[0]) if state is not None else -0.5
        angle = float(np.arctan(np.cos(3 * position) * 1.35))
        rotation = np.array([[np.cos(angle), -np.sin(angle)], [np.sin(angle), np.cos(angle)]])
        corners = np.array([
            [-CAR_LENGTH / 2, 0.0], [CAR_LENGTH / 2, 0.0],
            [CAR_LENGTH / 2, CAR_HEIGHT], [-CAR_LENGTH / 2, CAR_HEIGHT],
        ]) @ rotation.T + np.array([position, float(hill_height(position))])
        car = Polygon(points=[tuple(c) for c in corners], fill="black")

        flag_x = core.goal_position
        flag_y = float(hill_height(flag_x))
        pole = Polyline(points=[(flag_x, flag_y), (flag_x, flag_y + FLAG_HEIGHT)])
        flag = Polygon(
            points=[
                (flag_x, flag_y + FLAG_HEIGHT),
                (flag_x, flag_y + FLAG_HEIGHT - 0.04),
                (flag_x + 0.06, flag_y + FLAG_HEIGHT - 0.02),
            ],
            fill="gold",
        )
        return TwoDimensionalScene(
            viewport=Viewport(core.min_position, core.max_position, 0.0, 1.2),
            shapes=[hill, pole, flag, car],
        )

    def input_to_action_mapper(self) -> InputToActionMapper:
        return MountainCarInputToActionMapper()

    def to_dict(self) -> Dict[str, Any]:
        position, velocity = (float(v) for v in self.state())
        return {"goal_velocity": self.goal_velocity, "position": position, "velocity": velocity}

    def load_dict(self, data: Dict[str, Any]) -> None:
        self._ensure_started()
        self.core.state = np.array([data["position"], data["velocity"]], dtype=np.float32)
