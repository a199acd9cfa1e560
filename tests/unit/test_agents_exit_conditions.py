"""
Unit tests for agents and exit conditions.

Covers:
- RandomAgent: seeding, private action space, bookkeeping, state snapshot
- InputAgent: provider and mapper wiring
- EpisodesSimulated and VisualiserClosed decisions
"""

from types import SimpleNamespace

import numpy as np
import pytest
from gymnasium import spaces

from gymnarium_app.agents import InputAgent, RandomAgent
from gymnarium_app.exit_conditions import EpisodesSimulated, VisualiserClosed
from gymnarium_app.visualisers import NoVisualiser


def _window(open_):
    return SimpleNamespace(has_window=True, is_open=lambda: open_)


# ---------------------------------------------------------------------------
# RandomAgent
# ---------------------------------------------------------------------------

class TestRandomAgent:
    def test_samples_from_discrete_space(self):
        agent = RandomAgent(spaces.Discrete(3))
        agent.reseed(0)
        actions = {int(agent.choose_action(None)) for _ in range(50)}
        assert actions <= {0, 1, 2}
        assert agent.actions_chosen == 50

    def test_same_seed_same_actions(self):
        space = spaces.MultiDiscrete([3, 3])
        first, second = RandomAgent(space), RandomAgent(space)
        first.reseed(11)
        second.reseed(11)
        for _ in range(10):
            np.testing.assert_array_equal(first.choose_action(None), second.choose_action(None))

    def test_space_is_copied(self):
        space = spaces.Box(low=-1.0, high=1.0, shape=(2,), dtype=np.float32)
        agent = RandomAgent(space)
        assert agent.action_space is not space
        assert agent.action_space == space

    def test_rewards_accumulate_until_reset(self):
        agent = RandomAgent(spaces.Discrete(2))
        agent.process_reward(None, None, -1.0, False)
        agent.process_reward(None, None, 2.5, True)
        assert agent.total_reward == pytest.approx(1.5)
        agent.reset()
        assert agent.total_reward == 0.0

    def test_to_dict_and_load_dict(self):
        agent = RandomAgent(spaces.Discrete(3))
        agent.reseed(5)
        agent.choose_action(None)
        agent.process_reward(None, None, -1.0, False)

        restored = RandomAgent(spaces.Discrete(3))
        restored.load_dict(agent.to_dict())
        assert restored.to_dict() == {"seed": 5, "actions_chosen": 1, "total_reward": -1.0}


# ---------------------------------------------------------------------------
# InputAgent
# ---------------------------------------------------------------------------

class TestInputAgent:
    def test_maps_pressed_keys(self):
        seen = []

        def mapper(pressed):
            seen.append(pressed)
            return len(pressed)

        agent = InputAgent(lambda: {"left", "up"}, mapper)
        assert agent.choose_action(np.zeros(2)) == 2
        assert seen == [frozenset({"left", "up"})]

    def test_reads_provider_every_step(self):
        keys = iter([frozenset(), frozenset({"right"})])
        agent = InputAgent(lambda: next(keys), lambda pressed: "right" in pressed)
        assert agent.choose_action(None) is False
        assert agent.choose_action(None) is True

    def test_reseed_is_accepted(self):
        agent = InputAgent(frozenset, lambda pressed: 0)
        agent.reseed(3)
        assert agent.to_dict() == {}


# ---------------------------------------------------------------------------
# Exit conditions
# ---------------------------------------------------------------------------

class TestEpisodesSimulated:
    def test_exits_after_count(self):
        condition = EpisodesSimulated(2)
        visualiser = NoVisualiser()
        assert not condition.should_exit(None, None, visualiser, episode=1, step=10)
        assert condition.should_exit(None, None, visualiser, episode=2, step=0)

    def test_zero_episodes_exits_immediately(self):
        assert EpisodesSimulated(0).should_exit(None, None, NoVisualiser(), 0, 0)

    def test_closed_window_ends_run_early(self):
        condition = EpisodesSimulated(20)
        assert not condition.should_exit(None, None, _window(True), 0, 0)
        assert condition.should_exit(None, None, _window(False), 0, 0)

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            EpisodesSimulated(-1)

    def test_describe(self):
        assert EpisodesSimulated(4).describe() == "after 4 episodes"


class TestVisualiserClosed:
    def test_follows_window_state(self):
        condition = VisualiserClosed()
        assert not condition.should_exit(None, None, _window(True), 100, 0)
        assert condition.should_exit(None, None, _window(False), 0, 0)

    def test_never_exits_with_no_visualiser(self):
        assert not VisualiserClosed().should_exit(None, None, NoVisualiser(), 10**6, 0)
