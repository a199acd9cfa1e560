"""Stop after a fixed number of finished episodes."""

from __future__ import annotations

from .base import ExitConditionBehavior


class EpisodesSimulated(ExitConditionBehavior):
    """
    Exit once ``count_of_episodes`` episodes have finished.

    When the visualiser owns a window, closing it ends the run early as well.
    """

    def __init__(self, count_of_episodes: int):
        if count_of_episodes < 0:
            raise ValueError(f"count_of_episodes must be non-negative, got {count_of_episodes}")
        self.count_of_episodes = count_of_episodes

    def should_exit(self, environment, agent, visualiser, episode: int, step: int) -> bool:
        if visualiser.has_window and not visualiser.is_open():
            return True
        return episode >= self.count_of_episodes

    def describe(self) -> str:
        return f"after {self.count_of_episodes} episodes"
