"""
Circular layout algorithm.

Places all vertices evenly on the unit circle centered at the origin.
"""

from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np

from ..base import StaticLayout
from ..graph import GraphQuery
from ..types import EventCallback, Layout


def circle_points(count: int, radius: float = 1.0, start_angle: float = 0.0) -> Layout:
    """
    Evenly spaced points on a circle.

    The angles are ``start_angle + 2*pi*k/count`` for ``k = 0 .. count-1``;
    the closing angle 2*pi would duplicate the first point and is dropped.
    """
    theta = np.linspace(0.0, 2.0 * math.pi, count + 1)[:-1] + start_angle
    return Layout(radius * np.cos(theta), radius * np.sin(theta))


class CircularLayout(StaticLayout):
    """
    Circular layout - positions vertices on the unit circle.

    Vertex i sits at angle start_angle + 2*pi*i/N.

    Example:
        layout = CircularLayout(graph)
        x, y = layout.run().positions
    """

    def __init__(
        self,
        graph: Optional[GraphQuery] = None,
        *,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        # Circular-specific parameters
        start_angle: float = 0.0,
    ) -> None:
        """
        Initialize Circular layout.

        Args:
            graph: Graph to lay out
            on_start: Callback for start event
            on_tick: Callback for tick event (unused, single pass)
            on_end: Callback for end event
            start_angle: Angle of vertex 0 in radians.
        """
        super().__init__(
            graph,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )

        self._start_angle: float = float(start_angle)

    @property
    def start_angle(self) -> float:
        """Get starting angle in radians."""
        return self._start_angle

    @start_angle.setter
    def start_angle(self, value: float) -> None:
        """Set starting angle in radians."""
        self._start_angle = float(value)

    def _compute(self, **kwargs: Any) -> Layout:
        """Compute circular layout positions."""
        return circle_points(self._vertex_count(), start_angle=self._start_angle)


def circular_layout(G: GraphQuery, *, start_angle: float = 0.0) -> Layout:
    """
    Position vertices on the unit circle.

    Args:
        G: Graph to lay out
        start_angle: Angle of vertex 0 in radians

    Returns:
        Layout with N points at radius 1, spaced 2*pi/N apart
    """
    layout = CircularLayout(G, start_angle=start_angle)
    layout.run()
    assert layout.positions is not None
    return layout.positions


__all__ = ["CircularLayout", "circular_layout", "circle_points"]
