"""
Two dimensional window visualiser (the "Piston in 2D" variant).

Draws the environment's TwoDimensionalScene into a matplotlib figure,
records which keys are held down while the window has focus and notices
when the user closes the window.
"""

from __future__ import annotations

from typing import FrozenSet, Set, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Circle as CirclePatch
from matplotlib.patches import Polygon as PolygonPatch

from ..agents.input_agent import InputProvider
from ..environments.base import Circle, EnvironmentBehavior, Polygon, Polyline, TwoDimensionalScene
from .base import VisualiserBehavior, steps_per_second


class PistonIn2dVisualiser(VisualiserBehavior):
    """
    Args:
        window_title: Title of the window.
        window_dimension: (width, height) of the window in pixels.
        dpi: Pixel density used to convert the dimension into inches.
    """

    has_window = True

    def __init__(self, window_title: str, window_dimension: Tuple[int, int], dpi: int = 100):
        width, height = window_dimension
        self.window_title = window_title
        self.window_dimension = (int(width), int(height))
        self.figure = plt.figure(figsize=(max(width, 1) / dpi, max(height, 1) / dpi), dpi=dpi)
        self.axes = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.axes.set_axis_off()
        self.frames_rendered = 0
        self._pressed: Set[str] = set()
        self._open = True

        canvas = self.figure.canvas
        if canvas.manager is not None:
            canvas.manager.set_window_title(window_title)
        canvas.mpl_connect("key_press_event", self._on_key_press)
        canvas.mpl_connect("key_release_event", self._on_key_release)
        canvas.mpl_connect("close_event", self._on_close)

        # Headless backends (Agg) have no window to show
        if canvas.required_interactive_framework is not None:
            self.figure.show()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    @staticmethod
    def _key_name(key) -> str:
        return (key or "").split("+")[-1].lower()

    def _on_key_press(self, event) -> None:
        name = self._key_name(event.key)
        if name:
            self._pressed.add(name)

    def _on_key_release(self, event) -> None:
        self._pressed.discard(self._key_name(event.key))

    def _on_close(self, event) -> None:
        self._open = False
        self._pressed.clear()

    # ------------------------------------------------------------------
    # VisualiserBehavior
    # ------------------------------------------------------------------

    def is_open(self) -> bool:
        return self._open

    def pressed_keys(self) -> FrozenSet[str]:
        return frozenset(self._pressed)

    def input_provider(self) -> InputProvider:
        return self.pressed_keys

    def frame_interval(self, environment: EnvironmentBehavior) -> float:
        return 1.0 / steps_per_second(environment)

    def render(self, environment: EnvironmentBehavior) -> None:
        if not self._open:
            return
        self.draw_scene(environment.two_dimensional_scene())
        self.figure.canvas.draw_idle()
        self.figure.canvas.flush_events()
        self.frames_rendered += 1

    def draw_scene(self, scene: TwoDimensionalScene) -> None:
        ax = self.axes
        ax.clear()
        ax.set_axis_off()
        viewport = scene.viewport
        ax.set_xlim(viewport.left, viewport.right)
        ax.set_ylim(viewport.bottom, viewport.top)
        self.figure.set_facecolor(scene.background)

        for shape in scene.shapes:
            if isinstance(shape, Polyline):
                points = list(shape.points)
                if shape.closed and points:
                    points.append(points[0])
                xs, ys = zip(*points) if points else ((), ())
                ax.plot(xs, ys, color=shape.color, linewidth=shape.width)
            elif isinstance(shape, Polygon):
                ax.add_patch(PolygonPatch(
                    shape.points, closed=True, facecolor=shape.fill,
                    edgecolor=shape.edge or shape.fill,
                ))
            elif isinstance(shape, Circle):
                ax.add_patch(CirclePatch(
                    shape.center, shape.radius, facecolor=shape.fill,
                    edgecolor=shape.edge or shape.fill,
                ))
            else:
                raise TypeError(f"Cannot draw {type(shape).__name__}")

    def close(self) -> None:
        self._open = False
        plt.close(self.figure)
