"""visualisers – visualiser capability interface, the no-op and the 2D window visualiser."""

from .base import VisualiserBehavior, DEFAULT_STEPS_PER_SECOND, steps_per_second
from .none import NoVisualiser
from .piston_2d import PistonIn2dVisualiser

__all__ = [
    "VisualiserBehavior", "DEFAULT_STEPS_PER_SECOND", "steps_per_second",
    "NoVisualiser", "PistonIn2dVisualiser",
]
