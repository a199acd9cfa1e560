"""exit_conditions – exit condition capability interface and implementations."""

from .base import ExitConditionBehavior
from .episodes_simulated import EpisodesSimulated
from .visualiser_closed import VisualiserClosed

__all__ = ["ExitConditionBehavior", "EpisodesSimulated", "VisualiserClosed"]
