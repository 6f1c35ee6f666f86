"""
Common types for graph coordinate algorithms.

This module provides the fundamental types used across all layout algorithms:
- Link: Edge connecting two vertices, with an optional weight
- Layout: Parallel x/y coordinate arrays, one entry per vertex
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable, NamedTuple, Optional, Sequence, TypedDict, Union

import numpy as np


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout computation has begun
    - tick: Fired once per iteration (iterative layouts only)
    - end: Layout has finished
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    alpha: float
    iteration: int
    temperature: Optional[float]


class Link:
    """
    Edge connecting two vertices.

    Attributes:
        source: Source vertex index
        target: Target vertex index
        weight: Edge weight (optional, treated as 1.0 when missing)
    """

    def __init__(
        self,
        source: int,
        target: int,
        weight: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize link between two vertices.

        Args:
            source: Source vertex index (required)
            target: Target vertex index (required)
            weight: Edge weight (optional)

        Raises:
            ValueError: If source or target is None
        """
        if source is None:
            raise ValueError("Link source cannot be None")
        if target is None:
            raise ValueError("Link target cannot be None")

        self.source = source
        self.target = target
        self.weight = weight

        # Copy any additional custom properties
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        if self.weight is None:
            return f"Link({self.source} -> {self.target})"
        return f"Link({self.source} -> {self.target}, weight={self.weight})"


class Layout(NamedTuple):
    """
    Vertex coordinates produced by a layout algorithm.

    ``x[i]`` and ``y[i]`` are the coordinates of vertex ``i``. Unpacks as
    ``x, y = layout``.
    """

    x: np.ndarray
    y: np.ndarray

    @property
    def vertex_count(self) -> int:
        """Number of positioned vertices."""
        return int(self.x.shape[0])

    def as_array(self) -> np.ndarray:
        """Return coordinates as an ``(N, 2)`` array."""
        return np.column_stack((self.x, self.y))


def origin_layout(n: int = 1) -> Layout:
    """Layout placing ``n`` vertices at the origin."""
    return Layout(np.zeros(n, dtype=np.float64), np.zeros(n, dtype=np.float64))


# Type aliases for Pythonic API
# These allow flexible input types while maintaining type safety
LinkLike = Union[Link, dict[str, Any], tuple, Any]
"""Input type for links: Link objects, dicts, tuples, or objects with source/target."""

WeightsLike = Optional[Sequence[float]]
"""Per-edge weight vector, in edge enumeration order."""

PositionsLike = Optional[Sequence[Sequence[float]]]
"""Initial positions: a pair of coordinate sequences ``(x, y)``."""

SeedLike = Union[None, int, np.random.Generator]
"""Randomness source: None (fresh entropy), an integer seed, or a Generator."""

EventCallback = Callable[[Optional[Event]], None]


__all__ = [
    "EventType",
    "Event",
    "Link",
    "Layout",
    "origin_layout",
    # Pythonic API type aliases
    "LinkLike",
    "WeightsLike",
    "PositionsLike",
    "SeedLike",
    "EventCallback",
]
