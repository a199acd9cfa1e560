"""Stop when the user closes the visualiser window."""

from __future__ import annotations

from .base import ExitConditionBehavior


class VisualiserClosed(ExitConditionBehavior):

    def should_exit(self, environment, agent, visualiser, episode: int, step: int) -> bool:
        return not visualiser.is_open()

    def describe(self) -> str:
        return "when the visualiser is closed"
