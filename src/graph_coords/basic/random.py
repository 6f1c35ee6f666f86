"""
Random layout algorithm.

Places vertices uniformly at random in the unit square [0, 1) x [0, 1).
Useful as a baseline and as a starting point for iterative algorithms.
"""

from __future__ import annotations

from typing import Any

from ..base import StaticLayout
from ..graph import GraphQuery
from ..types import Layout, SeedLike


class RandomLayout(StaticLayout):
    """
    Random layout - positions vertices uniformly in [0, 1) on each axis.

    Coordinates are returned raw, without centering or rescaling. All x
    coordinates are drawn first, then all y coordinates, so a fixed seed
    reproduces the exact same layout.

    Example:
        layout = RandomLayout(graph, random_seed=42)
        x, y = layout.run().positions
    """

    def _compute(self, **kwargs: Any) -> Layout:
        """Compute random layout positions."""
        n = self._vertex_count()
        rng = self._make_rng()
        x = rng.random(n)
        y = rng.random(n)
        return Layout(x, y)


def random_layout(G: GraphQuery, *, random_seed: SeedLike = None) -> Layout:
    """
    Position vertices uniformly at random in the unit square.

    Args:
        G: Graph to lay out
        random_seed: None, an int seed, or a numpy Generator

    Returns:
        Layout with coordinates in [0, 1)
    """
    layout = RandomLayout(G, random_seed=random_seed)
    layout.run()
    assert layout.positions is not None
    return layout.positions


__all__ = ["RandomLayout", "random_layout"]
