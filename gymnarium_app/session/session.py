"""
Session – the assembled, runnable wiring of four compatible variants.

A session owns its four behaviours exclusively and closes them together.
It holds no compatibility logic; that ended when assembly succeeded.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict

from ..agents.base import AgentBehavior
from ..compatibility.validator import Combination, Selection
from ..environments.base import EnvironmentBehavior
from ..exit_conditions.base import ExitConditionBehavior
from ..visualisers.base import VisualiserBehavior


@dataclass
class Session:
    selection: Selection
    environment: EnvironmentBehavior
    agent: AgentBehavior
    visualiser: VisualiserBehavior
    exit_condition: ExitConditionBehavior
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    closed: bool = False

    @property
    def combination(self) -> Combination:
        return self.selection.combination()

    def close(self) -> None:
        """Close agent, environment and visualiser (in that order); safe to call twice."""
        if self.closed:
            return
        self.closed = True
        try:
            self.agent.close()
        finally:
            try:
                self.environment.close()
            finally:
                self.visualiser.close()

    def describe(self) -> Dict[str, Any]:
        return {
            "session_id": self.id,
            "environment": str(self.selection.environment),
            "agent": str(self.selection.agent),
            "visualiser": str(self.selection.visualiser),
            "exit_condition": self.exit_condition.describe(),
        }

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
