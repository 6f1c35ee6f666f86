"""
Fruchterman-Reingold spring layout.

Based on the paper:
"Graph Drawing by Force-directed Placement" by Fruchterman and Reingold (1991)

The algorithm simulates a physical system where:
- All vertex pairs repel each other with force K^2 / d
- Vertices joined by an edge also attract each other with force d^2 / K
- A "temperature" caps per-iteration movement and cools as INITTEMP / iter

K = C * sqrt(4 / N) is the optimal distance for N vertices in the
[-1, 1] x [-1, 1] starting square. After the fixed iteration budget the
coordinates are rescaled into [-1, 1] on each axis.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from ..base import IterativeLayout
from ..graph import GraphQuery
from ..normalize import normalize_layout
from ..types import (
    EventCallback,
    EventType,
    Layout,
    PositionsLike,
    SeedLike,
    origin_layout,
)
from ..validation import (
    InvalidPositionsError,
    NumericalDegeneracyError,
    validate_positions,
    validate_positive,
)


class SpringLayout(IterativeLayout):
    """
    Fruchterman-Reingold force-directed layout.

    Every iteration computes the net force on each vertex from all other
    vertices, then moves each vertex along its force, at most by the
    current temperature. The run always performs exactly ``iterations``
    steps.

    Example:
        graph = Graph(3, [(0, 1), (1, 2), (2, 0)])
        layout = SpringLayout(graph, spacing=2.0, iterations=100, random_seed=7)
        x, y = layout.run().positions
    """

    def __init__(
        self,
        graph: Optional[GraphQuery] = None,
        *,
        random_seed: SeedLike = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        # IterativeLayout parameters
        iterations: int = 100,
        # Spring-specific parameters
        spacing: float = 2.0,
        initial_temperature: float = 2.0,
        initial_positions: PositionsLike = None,
    ) -> None:
        """
        Initialize spring layout.

        Args:
            graph: Graph to lay out
            random_seed: Randomness source for initial positions
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            iterations: Number of force iterations (MAXITER)
            spacing: Constant C scaling the optimal vertex distance; larger
                values spread vertices further apart
            initial_temperature: Maximum displacement in the first
                iteration (INITTEMP)
            initial_positions: Optional starting layout as (x, y). Copied;
                if omitted, positions are drawn uniformly from [-1, 1).
        """
        super().__init__(
            graph,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
            iterations=iterations,
        )

        self._spacing: float = validate_positive(spacing, "spacing")
        self._initial_temperature: float = validate_positive(
            initial_temperature, "initial_temperature"
        )
        self._initial_positions: Optional[tuple[np.ndarray, np.ndarray]] = None
        self.initial_positions = initial_positions

        # Simulation state, only alive during run()
        self._pos_x: Optional[np.ndarray] = None
        self._pos_y: Optional[np.ndarray] = None
        self._connected: Optional[np.ndarray] = None
        self._k: float = 0.0
        self._temperature: float = self._initial_temperature

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def spacing(self) -> float:
        """Get spacing constant C."""
        return self._spacing

    @spacing.setter
    def spacing(self, value: float) -> None:
        """Set spacing constant C (must be positive)."""
        self._spacing = validate_positive(value, "spacing")

    @property
    def initial_temperature(self) -> float:
        """Get initial temperature."""
        return self._initial_temperature

    @initial_temperature.setter
    def initial_temperature(self, value: float) -> None:
        """Set initial temperature (must be positive)."""
        self._initial_temperature = validate_positive(value, "initial_temperature")

    @property
    def temperature(self) -> float:
        """Get temperature of the most recent iteration."""
        return self._temperature

    @property
    def initial_positions(self) -> Optional[tuple[np.ndarray, np.ndarray]]:
        """Get the starting layout, or None for random initialization."""
        return self._initial_positions

    @initial_positions.setter
    def initial_positions(self, value: PositionsLike) -> None:
        """Set the starting layout as an (x, y) pair; the values are copied."""
        if value is None:
            self._initial_positions = None
            return
        if len(value) != 2:
            raise InvalidPositionsError(
                f"initial_positions must be a pair (x, y), got {len(value)} sequences"
            )
        self._initial_positions = (
            np.array(value[0], dtype=np.float64, copy=True),
            np.array(value[1], dtype=np.float64, copy=True),
        )

    @property
    def optimal_distance(self) -> float:
        """Get optimal distance K = C * sqrt(4 / N) for the current graph."""
        return self._compute_optimal_distance(self._vertex_count())

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def _compute_optimal_distance(self, n: int) -> float:
        """Optimal distance for n vertices in a square of area 4."""
        return self._spacing * math.sqrt(4.0 / n)

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Keyword Args:
            normalize: Rescale each axis into [-1, 1] (default: True).
                With False, positions hold the raw simulated coordinates.

        Returns:
            self for chaining

        Raises:
            EmptyGraphError: If the graph has no vertices.
            InvalidPositionsError: If initial positions don't match the graph.
            NumericalDegeneracyError: If two vertices coincide during the run.
        """
        normalize = kwargs.get("normalize", True)

        self.validate()
        n = self._vertex_count()

        self._iteration = 0
        self._temperature = self._initial_temperature
        self.trigger({"type": EventType.start, "alpha": 1.0})

        if n == 1:
            self._positions = origin_layout(1)
            self.trigger({"type": EventType.end, "alpha": 0.0})
            return self

        self._pos_x, self._pos_y = self._initialize_positions(n)
        self._k = self._compute_optimal_distance(n)
        self._connected = self._build_connection_mask()

        try:
            self.kick()
            if normalize:
                self._positions = normalize_layout(self._pos_x, self._pos_y)
            else:
                self._positions = Layout(self._pos_x.copy(), self._pos_y.copy())
        finally:
            self._pos_x = self._pos_y = self._connected = None

        self.trigger({"type": EventType.end, "alpha": 0.0})
        return self

    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True once the iteration budget is spent, False otherwise.
        """
        assert self._pos_x is not None and self._pos_y is not None

        if self._iteration >= self._iterations:
            return True

        self._iteration += 1
        force_x, force_y = self._compute_forces()

        # Cool down
        self._temperature = self._initial_temperature / self._iteration
        self._apply_forces(force_x, force_y, self._temperature)

        self.trigger(
            {
                "type": EventType.tick,
                "alpha": self._temperature / self._initial_temperature,
                "iteration": self._iteration,
                "temperature": self._temperature,
            }
        )
        return False

    def _initialize_positions(self, n: int) -> tuple[np.ndarray, np.ndarray]:
        """Copy the configured starting layout or draw one from [-1, 1)."""
        if self._initial_positions is not None:
            return validate_positions(self._initial_positions, n)

        rng = self._make_rng()
        pos_x = rng.uniform(-1.0, 1.0, n)
        pos_y = rng.uniform(-1.0, 1.0, n)
        return pos_x, pos_y

    def _build_connection_mask(self) -> np.ndarray:
        """Boolean N x N mask, True where an edge joins i and j in either direction."""
        assert self._graph is not None
        edge_count = len(self._graph.edges())
        A = self._graph.adjacency_matrix(np.ones(edge_count, dtype=np.float64))
        connected = (A != 0) | (A.T != 0)
        np.fill_diagonal(connected, False)
        return connected

    def _compute_forces(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Net force on every vertex from all other vertices.

        For the ordered pair (i, j) with displacement (dx, dy) = pos[j] - pos[i]
        and distance d, the force on i is F * (dx, dy) where
        F = d / K - K^2 / d^2 for adjacent vertices and F = -K^2 / d^2 otherwise.
        """
        assert self._pos_x is not None and self._pos_y is not None
        assert self._connected is not None

        k = self._k
        k_sq = k * k

        # dx[i, j] = x[j] - x[i]
        dx = self._pos_x[np.newaxis, :] - self._pos_x[:, np.newaxis]
        dy = self._pos_y[np.newaxis, :] - self._pos_y[:, np.newaxis]
        dist = np.hypot(dx, dy)
        # A vertex exerts no force on itself
        np.fill_diagonal(dist, np.inf)

        coincident = np.argwhere(dist == 0.0)
        if coincident.size:
            i, j = coincident[0]
            raise NumericalDegeneracyError(
                f"Vertices {i} and {j} occupy the same position after "
                f"{self._iteration - 1} iteration(s); repulsive force is unbounded"
            )

        repulsive = -k_sq / (dist * dist)
        magnitude = np.where(self._connected, dist / k + repulsive, repulsive)

        force_x = np.sum(magnitude * dx, axis=1)
        force_y = np.sum(magnitude * dy, axis=1)

        if not (np.all(np.isfinite(force_x)) and np.all(np.isfinite(force_y))):
            raise NumericalDegeneracyError(
                f"Non-finite force at iteration {self._iteration}; vertices are too close together"
            )
        return force_x, force_y

    def _apply_forces(self, force_x: np.ndarray, force_y: np.ndarray, temperature: float) -> None:
        """Move vertices along their forces, limiting displacement by temperature."""
        assert self._pos_x is not None and self._pos_y is not None

        force_mag = np.hypot(force_x, force_y)

        # Vertices under zero net force stay where they are
        scale = np.zeros_like(force_mag)
        moving = force_mag > 0
        scale[moving] = np.minimum(force_mag[moving], temperature) / force_mag[moving]

        self._pos_x += force_x * scale
        self._pos_y += force_y * scale


def spring_layout(
    G: GraphQuery,
    C: float = 2.0,
    MAXITER: int = 100,
    INITTEMP: float = 2.0,
    initial_positions: PositionsLike = None,
    *,
    random_seed: SeedLike = None,
) -> Layout:
    """
    Lay out a graph with the Fruchterman-Reingold spring model.

    Args:
        G: Graph to lay out
        C: Constant scaling the optimal distance between vertices
        MAXITER: Number of iterations to apply the forces
        INITTEMP: Initial temperature, the maximum per-iteration movement
        initial_positions: Optional starting (x, y); copied, not modified
        random_seed: Randomness source for the initial positions

    Returns:
        Layout with both axes rescaled into [-1, 1]

    Example:
        >>> graph = Graph(4, [(0, 1), (1, 2), (2, 3)])
        >>> x, y = spring_layout(graph, random_seed=1)
    """
    layout = SpringLayout(
        G,
        random_seed=random_seed,
        iterations=MAXITER,
        spacing=C,
        initial_temperature=INITTEMP,
        initial_positions=initial_positions,
    )
    layout.run()
    assert layout.positions is not None
    return layout.positions


__all__ = ["SpringLayout", "spring_layout"]
