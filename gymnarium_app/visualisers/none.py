"""The "None" visualiser: renders nothing and never closes."""

from __future__ import annotations

from ..agents.input_agent import InputProvider
from .base import VisualiserBehavior


class NoVisualiser(VisualiserBehavior):

    has_window = False

    def __init__(self):
        self.frames_rendered = 0

    def is_open(self) -> bool:
        return True

    def render(self, environment) -> None:
        self.frames_rendered += 1

    def input_provider(self) -> InputProvider:
        raise RuntimeError("The None visualiser has no window to read input from")
