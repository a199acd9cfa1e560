"""
Code Bullet "AI Learns to DRIVE" environment.

A car drives laps around an elliptical track.  It observes the distances
measured by a fan of sensor rays plus its own speed, is rewarded for every
reward gate it passes in driving direction and crashes as soon as it
leaves the track.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .base import InputToActionMapper, Polygon, Polyline, TwoDimensionalScene, Viewport
from .gymnasium_adapter import GymnasiumEnvironment

# Throttle and steering indices of the MultiDiscrete action
BRAKE, COAST, ACCELERATE = 0, 1, 2
STEER_LEFT, STRAIGHT, STEER_RIGHT = 0, 1, 2


@dataclass(frozen=True)
class TrackGeometry:
    """Track between two concentric ellipses centred on the origin."""
    outer_a: float = 300.0
    outer_b: float = 200.0
    inner_a: float = 180.0
    inner_b: float = 90.0

    @property
    def mid_a(self) -> float:
        return (self.outer_a + self.inner_a) / 2

    @property
    def mid_b(self) -> float:
        return (self.outer_b + self.inner_b) / 2

    def on_track(self, points: np.ndarray) -> np.ndarray:
        """Vectorised check for an (..., 2) array of points."""
        x, y = points[..., 0], points[..., 1]
        inside_outer = (x / self.outer_a) ** 2 + (y / self.outer_b) ** 2 <= 1.0
        outside_inner = (x / self.inner_a) ** 2 + (y / self.inner_b) ** 2 >= 1.0
        return inside_outer & outside_inner

    def progress_angle(self, point: np.ndarray) -> float:
        """Angle around the centre line in [0, 2*pi), zero at the start line."""
        angle = math.atan2(point[1] / self.mid_b, point[0] / self.mid_a)
        return (angle + math.pi / 2) % (2 * math.pi)

    def outline(self, a: float, b: float, n: int = 120) -> List[Tuple[float, float]]:
        t = np.linspace(0.0, 2 * math.pi, n, endpoint=False)
        return list(zip(a * np.cos(t), b * np.sin(t)))


class AiLearnsToDriveEnv(gym.Env):
    """
    Gymnasium environment of a car learning to drive around a track.

    Action: MultiDiscrete([3, 3]) = (brake / coast / accelerate,
    left / straight / right).
    Observation: sensor distances scaled to [0, 1] followed by the scaled speed.
    """

    metadata = {"render_modes": [], "render_fps": 30}

    SENSOR_ANGLES = np.radians([-90.0, -45.0, -20.0, 0.0, 20.0, 45.0, 90.0])
    SENSOR_RANGE = 250.0
    SENSOR_RESOLUTION = 4.0

    ACCELERATION = 0.4
    BRAKE_DECELERATION = 0.6
    FRICTION = 0.02
    MAX_SPEED = 10.0
    TURN_RATE = 0.07

    CAR_LENGTH = 20.0
    CAR_WIDTH = 10.0

    def __init__(
        self,
        track: Optional[TrackGeometry] = None,
        reward_gates: int = 24,
        max_episode_steps: int = 1000,
    ):
        super().__init__()
        self.track = track or TrackGeometry()
        self.reward_gates = reward_gates
        self.max_episode_steps = max_episode_steps

        self.action_space = spaces.MultiDiscrete([3, 3])
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(len(self.SENSOR_ANGLES) + 1,), dtype=np.float32
        )

        self.position = np.array([0.0, -self.track.mid_b])
        self.heading = 0.0
        self.speed = 0.0
        self.gate = 0
        self.laps = 0
        self.steps = 0
        self.crashed = False

    # ------------------------------------------------------------------
    # Sensors
    # ------------------------------------------------------------------

    def sensor_endpoints(self) -> np.ndarray:
        """Point where each sensor ray first leaves the track."""
        distances = np.arange(
            self.SENSOR_RESOLUTION, self.SENSOR_RANGE + self.SENSOR_RESOLUTION,
            self.SENSOR_RESOLUTION,
        )
        angles = self.heading + self.SENSOR_ANGLES
        directions = np.stack([np.cos(angles), np.sin(angles)], axis=-1)
        samples = self.position + directions[:, None, :] * distances[None, :, None]
        off_track = ~self.track.on_track(samples)
        hit = np.where(off_track.any(axis=1), off_track.argmax(axis=1), len(distances) - 1)
        return samples[np.arange(len(angles)), hit]

    def sensor_distances(self) -> np.ndarray:
        return np.linalg.norm(self.sensor_endpoints() - self.position, axis=1)

    def observe(self) -> np.ndarray:
        scaled = np.clip(self.sensor_distances() / self.SENSOR_RANGE, 0.0, 1.0)
        return np.append(scaled, self.speed / self.MAX_SPEED).astype(np.float32)

    def _gate_index(self) -> int:
        fraction = self.track.progress_angle(self.position) / (2 * math.pi)
        return int(fraction * self.reward_gates) % self.reward_gates

    # ------------------------------------------------------------------
    # gymnasium API
    # ------------------------------------------------------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        self.position = np.array([0.0, -self.track.mid_b])
        self.heading = float(self.np_random.uniform(-0.05, 0.05))
        self.speed = 0.0
        self.gate = self._gate_index()
        self.laps = 0
        self.steps = 0
        self.crashed = False
        return self.observe(), {}

    def step(self, action):
        throttle, steering = (int(a) for a in action)
        if throttle == ACCELERATE:
            self.speed += self.ACCELERATION
        elif throttle == BRAKE:
            self.speed -= self.BRAKE_DECELERATION
        self.speed = float(np.clip(self.speed * (1.0 - self.FRICTION), 0.0, self.MAX_SPEED))

        grip = min(1.0, self.speed / 2.0)
        if steering == STEER_LEFT:
            self.heading += self.TURN_RATE * grip
        elif steering == STEER_RIGHT:
            self.heading -= self.TURN_RATE * grip

        self.position = self.position + self.speed * np.array(
            [math.cos(self.heading), math.sin(self.heading)]
        )
        self.steps += 1

        reward = 0.0
        terminated = False
        if not bool(self.track.on_track(self.position)):
            self.crashed = True
            terminated = True
            reward = -1.0
        else:
            gate = self._gate_index()
            if gate == (self.gate + 1) % self.reward_gates:
                reward = 1.0
                if gate == 0:
                    self.laps += 1
            elif gate == (self.gate - 1) % self.reward_gates:
                reward = -1.0
            self.gate = gate

        truncated = not terminated and self.steps >= self.max_episode_steps
        info = {"laps": self.laps, "gate": self.gate}
        return self.observe(), reward, terminated, truncated, info

    def get_state(self) -> Dict[str, Any]:
        return {
            "position": [float(v) for v in self.position],
            "heading": self.heading,
            "speed": self.speed,
            "gate": self.gate,
            "laps": self.laps,
            "steps": self.steps,
            "crashed": self.crashed,
        }

    def set_state(self, data: Dict[str, Any]) -> None:
        self.position = np.array(data["position"], dtype=float)
        self.heading = float(data["heading"])
        self.speed = float(data["speed"])
        self.gate = int(data["gate"])
        self.laps = int(data.get("laps", 0))
        self.steps = int(data.get("steps", 0))
        self.crashed = bool(data.get("crashed", False))


class AiLearnsToDriveInputToActionMapper:
    """Arrow keys: up accelerates, down brakes, left/right steer."""

    def __call__(self, pressed: FrozenSet[str]) -> np.ndarray:
        throttle = COAST
        if "up" in pressed and "down" not in pressed:
            throttle = ACCELERATE
        elif "down" in pressed and "up" not in pressed:
            throttle = BRAKE
        steering = STRAIGHT
        if "left" in pressed and "right" not in pressed:
            steering = STEER_LEFT
        elif "right" in pressed and "left" not in pressed:
            steering = STEER_RIGHT
        return np.array([throttle, steering], dtype=np.int64)


class AiLearnsToDriveEnvironment(GymnasiumEnvironment):
    """
    Code Bullet AI Learns to DRIVE.

    Args:
        sensor_lines_visible: Draw the sensor rays.
        track_visible: Draw the track borders.
    """

    def __init__(self, sensor_lines_visible: bool = False, track_visible: bool = True):
        super().__init__(AiLearnsToDriveEnv())
        self.sensor_lines_visible = sensor_lines_visible
        self.track_visible = track_visible

    def state(self) -> np.ndarray:
        self._ensure_started()
        return self.core.observe()

    def two_dimensional_scene(self) -> TwoDimensionalScene:
        env: AiLearnsToDriveEnv = self.core
        track = env.track
        shapes = []
        if self.track_visible:
            shapes.append(Polyline(track.outline(track.outer_a, track.outer_b), color="black", width=2.0, closed=True))
            shapes.append(Polyline(track.outline(track.inner_a, track.inner_b), color="black", width=2.0, closed=True))
        if self.sensor_lines_visible:
            origin = tuple(env.position)
            for end in env.sensor_endpoints():
                shapes.append(Polyline([origin, tuple(end)], color="red", width=0.8))

        cos_h, sin_h = math.cos(env.heading), math.sin(env.heading)
        half_l, half_w = env.CAR_LENGTH / 2, env.CAR_WIDTH / 2
        corners = [
            (env.position[0] + dx * cos_h - dy * sin_h, env.position[1] + dx * sin_h + dy * cos_h)
            for dx, dy in ((-half_l, -half_w), (half_l, -half_w), (half_l, half_w), (-half_l, half_w))
        ]
        shapes.append(Polygon(corners, fill="darkred" if env.crashed else "royalblue", edge="black"))

        margin = 20.0
        return TwoDimensionalScene(
            viewport=Viewport(
                -track.outer_a - margin, track.outer_a + margin,
                -track.outer_b - margin, track.outer_b + margin,
            ),
            shapes=shapes,
        )

    def input_to_action_mapper(self) -> InputToActionMapper:
        return AiLearnsToDriveInputToActionMapper()

    def to_dict(self) -> Dict[str, Any]:
        self._ensure_started()
        return dict(
            self.core.get_state(),
            sensor_lines_visible=self.sensor_lines_visible,
            track_visible=self.track_visible,
        )

    def load_dict(self, data: Dict[str, Any]) -> None:
        self._ensure_started()
        self.core.set_state(data)
