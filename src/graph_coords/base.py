"""
Base classes for graph coordinate algorithms.

This module provides abstract base classes that define the common interface
and shared functionality for all layout algorithms:

- BaseLayout: Abstract base with event system, graph and randomness management
- IterativeLayout: For simulations with a fixed tick loop (force-directed)
- StaticLayout: For single-pass layouts (circular, shell, spectral, random)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from .graph import GraphQuery, as_graph
from .types import (
    Event,
    EventCallback,
    EventType,
    Layout,
    SeedLike,
    origin_layout,
)
from .validation import (
    EmptyGraphError,
    InvalidGraphError,
    validate_iterations,
)


class BaseLayout(ABC):
    """
    Abstract base class for all layout algorithms.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Graph management via properties
    - Explicit randomness source
    - Result storage

    Example:
        layout = SomeLayout(graph, random_seed=42)
        layout.run()

        # Access results via properties
        x, y = layout.positions
    """

    def __init__(
        self,
        graph: Optional[GraphQuery] = None,
        *,
        random_seed: SeedLike = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            graph: Graph to lay out (any GraphQuery implementation)
            random_seed: None, an int seed, or a numpy Generator
            on_start: Callback for start event
            on_tick: Callback for tick event (iterative layouts)
            on_end: Callback for end event
        """
        self._graph: Optional[GraphQuery] = None
        self._positions: Optional[Layout] = None
        self._events: dict[EventType, EventCallback] = {}
        self._random_seed: SeedLike = random_seed

        if graph is not None:
            self.graph = graph

        # Register event callbacks
        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def graph(self) -> Optional[GraphQuery]:
        """Get the graph being laid out."""
        return self._graph

    @graph.setter
    def graph(self, value: GraphQuery) -> None:
        """Set the graph, checking it implements GraphQuery."""
        self._graph = as_graph(value)
        self._positions = None

    @property
    def random_seed(self) -> SeedLike:
        """Get randomness source for reproducible layouts."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: SeedLike) -> None:
        """Set randomness source (None, int seed, or numpy Generator)."""
        self._random_seed = value

    @property
    def positions(self) -> Optional[Layout]:
        """Get the coordinates computed by the last run(), or None."""
        return self._positions

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Validate current configuration.

        Called automatically by run() but can be called early for fail-fast
        behavior.

        Returns:
            self (for chaining)

        Raises:
            InvalidGraphError: If no graph has been set.
            EmptyGraphError: If the graph has no vertices.
        """
        if self._graph is None:
            raise InvalidGraphError("No graph set; pass one to the constructor or assign .graph")
        if self._graph.vertex_count() == 0:
            raise EmptyGraphError("Cannot lay out a graph with no vertices")
        return self

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Implementations should:
        1. Validate the graph
        2. Run the layout algorithm
        3. Store the result in self._positions and fire events

        Returns:
            self (for chaining)
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _vertex_count(self) -> int:
        assert self._graph is not None
        return self._graph.vertex_count()

    def _make_rng(self) -> np.random.Generator:
        """Build the generator for this run from the configured seed."""
        return np.random.default_rng(self._random_seed)


class IterativeLayout(BaseLayout):
    """
    Base class for iterative layout algorithms.

    Provides:
    - Iteration budget management
    - Tick-based iteration loop

    Example:
        layout = SomeForceLayout(graph, iterations=300)
        layout.run()
    """

    def __init__(
        self,
        graph: Optional[GraphQuery] = None,
        *,
        random_seed: SeedLike = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        # IterativeLayout-specific parameters
        iterations: int = 100,
    ) -> None:
        """
        Initialize iterative layout.

        Args:
            graph: Graph to lay out
            random_seed: None, an int seed, or a numpy Generator
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            iterations: Number of iterations (>= 1)
        """
        super().__init__(
            graph,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._iterations: int = validate_iterations(iterations)
        self._iteration: int = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def iterations(self) -> int:
        """Get number of iterations."""
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        """Set number of iterations (must be >= 1)."""
        self._iterations = validate_iterations(value)

    @property
    def iteration(self) -> int:
        """Get number of iterations completed by the current run."""
        return self._iteration

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True if done, False if more iterations needed.
        """
        pass

    def kick(self) -> None:
        """Run tick() repeatedly until it reports done or the budget is spent."""
        for _ in range(self._iterations):
            if self.tick():
                break


class StaticLayout(BaseLayout):
    """
    Base class for single-pass layout algorithms.

    These layouts compute positions in one pass without iteration.
    Examples: circular, shell, spectral, random layouts.

    Example:
        layout = CircularLayout(graph)
        x, y = layout.run().positions
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Fires start event, computes layout, fires end event. A single
        vertex is always placed at the origin.

        Args:
            **kwargs: Additional arguments passed to _compute()

        Returns:
            self (for chaining)
        """
        self.validate()
        self.trigger({"type": EventType.start, "alpha": 1.0})

        if self._vertex_count() == 1:
            self._positions = origin_layout(1)
        else:
            # Subclasses implement _compute()
            self._positions = self._compute(**kwargs)

        self.trigger({"type": EventType.end, "alpha": 0.0})
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> Layout:
        """
        Compute vertex positions for a graph with at least two vertices.

        Subclasses must implement this to perform the actual layout computation.
        """
        pass


__all__ = [
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
]
