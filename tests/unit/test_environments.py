"""
Unit tests for the environment variants.

Covers:
- MountainCarEnvironment: reset, step, seeding, scene, state snapshot
- AiLearnsToDriveEnv: sensors, reward gates, crash, truncation
- AiLearnsToDriveEnvironment: scene options, state snapshot
- Keyboard input mappers of both environments
"""

import numpy as np
import pytest

from gymnarium_app.environments import (
    AiLearnsToDriveEnv,
    AiLearnsToDriveEnvironment,
    AiLearnsToDriveInputToActionMapper,
    MountainCarEnvironment,
    MountainCarInputToActionMapper,
    Polygon,
    Polyline,
    TrackGeometry,
)
from gymnarium_app.environments.ai_learns_to_drive import (
    ACCELERATE, BRAKE, COAST, STEER_LEFT, STEER_RIGHT, STRAIGHT,
)
from gymnarium_app.environments.mountain_car import NO_PUSH, PUSH_LEFT, PUSH_RIGHT


@pytest.fixture
def mountain_car():
    env = MountainCarEnvironment()
    yield env
    env.close()


@pytest.fixture
def driving():
    env = AiLearnsToDriveEnvironment()
    yield env
    env.close()


# ---------------------------------------------------------------------------
# MountainCar
# ---------------------------------------------------------------------------

class TestMountainCar:
    def test_reset_returns_position_and_velocity(self, mountain_car):
        state = mountain_car.reset()
        assert state.shape == (2,)
        assert -0.6 <= state[0] <= -0.4
        assert state[1] == 0.0

    def test_step_returns_four_tuple(self, mountain_car):
        mountain_car.reset()
        state, reward, done, info = mountain_car.step(PUSH_RIGHT)
        assert state.shape == (2,)
        assert reward == -1.0
        assert done is False
        assert info["terminated"] is False and info["truncated"] is False

    def test_step_before_reset_starts_episode(self, mountain_car):
        state, _, done, _ = mountain_car.step(np.int64(NO_PUSH))
        assert state.shape == (2,)
        assert not done

    def test_episode_truncates_after_200_steps(self, mountain_car):
        mountain_car.reseed(0)
        mountain_car.reset()
        for step in range(1, 201):
            _, _, done, info = mountain_car.step(NO_PUSH)
            if done:
                break
        assert step == 200
        assert info["truncated"] is True

    def test_same_seed_same_start(self):
        first, second = MountainCarEnvironment(), MountainCarEnvironment()
        try:
            first.reseed(42)
            second.reseed(42)
            np.testing.assert_array_equal(first.reset(), second.reset())
        finally:
            first.close()
            second.close()

    def test_goal_velocity_reaches_gymnasium(self):
        env = MountainCarEnvironment(goal_velocity=0.05)
        try:
            assert env.core.goal_velocity == 0.05
        finally:
            env.close()

    def test_suggested_steps_per_second(self, mountain_car):
        assert mountain_car.suggested_steps_per_second == 30

    def test_scene(self, mountain_car):
        mountain_car.reset()
        scene = mountain_car.two_dimensional_scene()
        assert scene.viewport.left == pytest.approx(-1.2)
        assert scene.viewport.right == pytest.approx(0.6)
        kinds = [type(shape) for shape in scene.shapes]
        assert kinds.count(Polyline) == 2
        assert kinds.count(Polygon) == 2

    def test_scene_before_reset(self, mountain_car):
        assert len(mountain_car.two_dimensional_scene().shapes) == 4

    def test_to_dict_and_load_dict(self, mountain_car):
        mountain_car.reset()
        mountain_car.load_dict({"position": 0.3, "velocity": 0.01})
        snapshot = mountain_car.to_dict()
        assert snapshot["position"] == pytest.approx(0.3)
        assert snapshot["velocity"] == pytest.approx(0.01)
        assert snapshot["goal_velocity"] == 0.0

    def test_loaded_state_drives_to_flag(self, mountain_car):
        mountain_car.reset()
        mountain_car.load_dict({"position": 0.49, "velocity": 0.07})
        _, _, done, info = mountain_car.step(PUSH_RIGHT)
        assert done
        assert info["terminated"] is True


class TestMountainCarInput:
    @pytest.mark.parametrize("pressed, action", [
        (frozenset(), NO_PUSH),
        (frozenset({"left"}), PUSH_LEFT),
        (frozenset({"right"}), PUSH_RIGHT),
        (frozenset({"left", "right"}), NO_PUSH),
        (frozenset({"up"}), NO_PUSH),
    ])
    def test_mapping(self, pressed, action):
        assert MountainCarInputToActionMapper()(pressed) == action


# ---------------------------------------------------------------------------
# AI Learns to DRIVE
# ---------------------------------------------------------------------------

class TestTrackGeometry:
    def test_centre_line_is_on_track(self):
        track = TrackGeometry()
        assert track.on_track(np.array([0.0, -track.mid_b]))
        assert track.on_track(np.array([track.mid_a, 0.0]))

    def test_inside_and_outside_are_off_track(self):
        track = TrackGeometry()
        points = np.array([[0.0, 0.0], [0.0, -250.0], [400.0, 0.0]])
        assert not track.on_track(points).any()

    def test_progress_starts_at_start_line(self):
        track = TrackGeometry()
        assert track.progress_angle(np.array([0.0, -track.mid_b])) == pytest.approx(0.0)
        assert track.progress_angle(np.array([track.mid_a, 0.0])) == pytest.approx(np.pi / 2)


class TestAiLearnsToDriveEnv:
    def test_observation_layout(self):
        env = AiLearnsToDriveEnv()
        observation, info = env.reset(seed=0)
        assert observation.shape == (8,)
        assert observation.dtype == np.float32
        assert env.observation_space.contains(observation)
        assert info == {}

    def test_side_sensors_see_track_borders(self):
        env = AiLearnsToDriveEnv()
        env.reset(seed=0)
        distances = env.sensor_distances()
        # car starts halfway between inner (90) and outer (200) border
        assert distances[0] == pytest.approx(55.0, abs=5.0)
        assert distances[-1] == pytest.approx(55.0, abs=5.0)
        assert distances[3] > 150.0

    def test_coasting_from_standstill_does_not_move(self):
        env = AiLearnsToDriveEnv()
        env.reset(seed=0)
        start = env.position.copy()
        _, reward, terminated, truncated, _ = env.step([COAST, STRAIGHT])
        np.testing.assert_array_equal(env.position, start)
        assert reward == 0.0
        assert not terminated and not truncated

    def test_driving_straight_passes_gates_then_crashes(self):
        env = AiLearnsToDriveEnv()
        env.reset(seed=0)
        rewards = []
        terminated = False
        for _ in range(200):
            _, reward, terminated, truncated, _ = env.step([ACCELERATE, STRAIGHT])
            rewards.append(reward)
            if terminated or truncated:
                break
        assert terminated
        assert env.crashed
        assert rewards[-1] == -1.0
        assert rewards.count(1.0) >= 1

    def test_truncates_after_max_episode_steps(self):
        env = AiLearnsToDriveEnv(max_episode_steps=5)
        env.reset(seed=0)
        for _ in range(4):
            assert env.step([COAST, STRAIGHT])[3] is False
        assert env.step([COAST, STRAIGHT])[3] is True

    def test_speed_is_bounded(self):
        env = AiLearnsToDriveEnv()
        env.reset(seed=0)
        env.step([BRAKE, STRAIGHT])
        assert env.speed == 0.0
        for _ in range(5):
            env.step([ACCELERATE, STRAIGHT])
        assert 0.0 < env.speed <= env.MAX_SPEED

    def test_same_seed_same_heading(self):
        first, second = AiLearnsToDriveEnv(), AiLearnsToDriveEnv()
        first.reset(seed=3)
        second.reset(seed=3)
        assert first.heading == second.heading


class TestAiLearnsToDriveEnvironment:
    def test_default_scene_draws_track_and_car(self, driving):
        driving.reset()
        shapes = driving.two_dimensional_scene().shapes
        assert [type(s) for s in shapes] == [Polyline, Polyline, Polygon]
        assert shapes[0].closed

    def test_sensor_lines_without_track(self):
        env = AiLearnsToDriveEnvironment(sensor_lines_visible=True, track_visible=False)
        try:
            env.reset()
            shapes = env.two_dimensional_scene().shapes
            assert len(shapes) == len(AiLearnsToDriveEnv.SENSOR_ANGLES) + 1
            assert all(isinstance(s, Polyline) for s in shapes[:-1])
        finally:
            env.close()

    def test_step_accepts_mapper_output(self, driving):
        driving.reset()
        action = driving.input_to_action_mapper()(frozenset({"up"}))
        state, reward, done, info = driving.step(action)
        assert state.shape == (8,)
        assert "laps" in info

    def test_suggested_steps_per_second(self, driving):
        assert driving.suggested_steps_per_second == 30

    def test_to_dict_and_load_dict(self, driving):
        driving.reset()
        driving.step([ACCELERATE, STRAIGHT])
        snapshot = driving.to_dict()
        assert snapshot["track_visible"] is True

        other = AiLearnsToDriveEnvironment()
        try:
            other.load_dict(snapshot)
            assert other.core.position.tolist() == snapshot["position"]
            assert other.core.speed == snapshot["speed"]
            np.testing.assert_array_equal(other.state(), driving.state())
        finally:
            other.close()


class TestAiLearnsToDriveInput:
    @pytest.mark.parametrize("pressed, action", [
        (frozenset(), [COAST, STRAIGHT]),
        (frozenset({"up"}), [ACCELERATE, STRAIGHT]),
        (frozenset({"down", "left"}), [BRAKE, STEER_LEFT]),
        (frozenset({"up", "down", "right"}), [COAST, STEER_RIGHT]),
    ])
    def test_mapping(self, pressed, action):
        assert AiLearnsToDriveInputToActionMapper()(pressed).tolist() == action
