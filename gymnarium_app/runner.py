"""
Run loop.

Drives an assembled Session until its exit condition holds: optionally
loads saved state, steps agent and environment, counts steps and episodes,
resets on episode end, renders, and finally stores state and closes the
session.
"""

from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Dict, List, Optional

import pandas as pd

from .persistence import check_suffix, load_state, store_state
from .session import Session


class StopReason(Enum):
    """Reasons for a run to end."""
    EXIT_CONDITION = auto()      # Exit condition became true
    USER_INTERRUPT = auto()      # Ctrl-C


def seed_from_string(seed: Optional[str]) -> Optional[int]:
    """Turn a free-form seed string into a 32 bit integer (None stays None)."""
    if seed is None:
        return None
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "little")


@dataclass
class RunOptions:
    seed: Optional[str] = None
    reset_environment_on_done: bool = True
    reset_agent_on_done: bool = False
    environment_load_path: Optional[str] = None
    environment_store_path: Optional[str] = None
    agent_load_path: Optional[str] = None
    agent_store_path: Optional[str] = None

    def __post_init__(self):
        for path in (
            self.environment_load_path, self.environment_store_path,
            self.agent_load_path, self.agent_store_path,
        ):
            if path:
                check_suffix(path)

    @property
    def numeric_seed(self) -> Optional[int]:
        return seed_from_string(self.seed)

    def describe(self) -> str:
        def path_text(path, verb, preposition, what):
            if path:
                return f'{verb} {what} {preposition} "{path}"'
            return f"not {verb} {what} {preposition} file"

        return (
            f"using seed {self.seed!r}, "
            f"{'' if self.reset_environment_on_done else 'not '}resetting the environment "
            f"and {'' if self.reset_agent_on_done else 'not '}resetting the agent when done. "
            f"Furthermore {path_text(self.environment_load_path, 'loading', 'from', 'environment')} and "
            f"{path_text(self.environment_store_path, 'storing', 'to', 'environment')}, as well as "
            f"{path_text(self.agent_load_path, 'loading', 'from', 'agent')} and "
            f"{path_text(self.agent_store_path, 'storing', 'to', 'agent')}."
        )


@dataclass
class RunResult:
    session_id: str
    stop_reason: StopReason
    episodes: int
    total_steps: int
    wall_clock_time_seconds: float
    episode_rewards: List[float] = field(default_factory=list)
    episode_lengths: List[int] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per finished episode."""
        return pd.DataFrame({
            "episode": list(range(1, len(self.episode_rewards) + 1)),
            "reward": self.episode_rewards,
            "steps": self.episode_lengths,
        })

    def summary(self) -> Dict[str, Any]:
        rewards = self.episode_rewards
        return {
            "session_id": self.session_id,
            "stop_reason": self.stop_reason.name,
            "episodes": self.episodes,
            "total_steps": self.total_steps,
            "wall_clock_time_seconds": self.wall_clock_time_seconds,
            "mean_episode_reward": sum(rewards) / len(rewards) if rewards else 0.0,
            "best_episode_reward": max(rewards) if rewards else 0.0,
        }


def run_session(
    session: Session,
    options: Optional[RunOptions] = None,
    verbose: bool = False,
    sleep=time.sleep,
) -> RunResult:
    """
    Run ``session`` until its exit condition is met.

    The session is closed on return, also when the run fails or is
    interrupted.

    Args:
        session: Assembled session; owned by this call from now on.
        options: Seed, reset and persistence options.
        verbose: Print start and end banners.
        sleep: Used for frame pacing when the visualiser owns a window.

    Returns:
        RunResult with episode statistics.
    """
    options = options or RunOptions()
    environment = session.environment
    agent = session.agent
    visualiser = session.visualiser
    exit_condition = session.exit_condition
    seed = options.numeric_seed

    if verbose:
        print("=" * 70)
        print(f"RUN START: {session.id}")
        print("=" * 70)
        for key, value in session.describe().items():
            print(f"{key}: {value}")
        print(options.describe())
        print("=" * 70)

    start = time.time()
    stop_reason = StopReason.EXIT_CONDITION
    episode = 0
    step = 0
    total_steps = 0
    episode_reward = 0.0
    episode_rewards: List[float] = []
    episode_lengths: List[int] = []

    try:
        if options.environment_load_path:
            environment.load_dict(load_state(options.environment_load_path))
            state = environment.state()
        else:
            environment.reseed(seed)
            state = environment.reset()

        visualiser.render(environment)

        if options.agent_load_path:
            agent.load_dict(load_state(options.agent_load_path))
        else:
            agent.reseed(seed)
            agent.reset()

        try:
            while not exit_condition.should_exit(environment, agent, visualiser, episode, step):
                action = agent.choose_action(state)
                new_state, reward, done, _ = environment.step(action)
                step += 1
                total_steps += 1
                episode_reward += reward

                agent.process_reward(state, new_state, reward, done)

                if options.reset_environment_on_done and done:
                    episode_rewards.append(episode_reward)
                    episode_lengths.append(step)
                    episode_reward = 0.0
                    step = 0
                    episode += 1
                    state = environment.reset()
                else:
                    state = new_state

                if options.reset_agent_on_done and done:
                    agent.reset()

                if visualiser.has_window:
                    visualiser.render(environment)
                    sleep(visualiser.frame_interval(environment))
        except KeyboardInterrupt:
            stop_reason = StopReason.USER_INTERRUPT

        if options.agent_store_path:
            store_state(options.agent_store_path, agent.to_dict())
        if options.environment_store_path:
            store_state(options.environment_store_path, environment.to_dict())
    finally:
        session.close()

    result = RunResult(
        session_id=session.id,
        stop_reason=stop_reason,
        episodes=episode,
        total_steps=total_steps,
        wall_clock_time_seconds=time.time() - start,
        episode_rewards=episode_rewards,
        episode_lengths=episode_lengths,
    )

    if verbose:
        summary = result.summary()
        print(f"\nStop reason: {summary['stop_reason']}")
        print(f"Episodes: {summary['episodes']}, steps: {summary['total_steps']}")
        print(f"Mean episode reward: {summary['mean_episode_reward']:.2f}")
        print(f"Wall clock time: {summary['wall_clock_time_seconds']:.2f} seconds")
    return result
