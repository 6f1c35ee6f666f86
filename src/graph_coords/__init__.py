"""
graph-coords: 2-D vertex coordinates for drawing graphs.

This package computes one (x, y) position per vertex for a graph given
through the GraphQuery interface.

Available algorithms:
- force: Fruchterman-Reingold spring layout, rescaled into [-1, 1]
- spectral: Laplacian eigenvector layout (dense or sparse solver)
- circular: Circular and shell layouts
- basic: Random layout
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    IterativeLayout,
    StaticLayout,
)

# Random layout
from .basic import RandomLayout, random_layout

# Circular layouts
from .circular import (
    CircularLayout,
    ShellLayout,
    circular_layout,
    shell_layout,
)

# Force-directed layouts
from .force import SpringLayout, spring_layout

# Graph query interface
from .graph import Graph, GraphQuery, as_graph

# Coordinate normalization
from .normalize import normalize_layout, rescale_axis, scaler

# Preprocessing utilities
from .preprocessing import connected_components, is_connected

# Spectral layouts
from .spectral import GraphStructureWarning, SpectralLayout, spectral_layout
from .types import (
    Event,
    EventType,
    Layout,
    Link,
    LinkLike,
    PositionsLike,
    SeedLike,
    WeightsLike,
)

# Errors and validation utilities
from .validation import (
    EmptyGraphError,
    InvalidGraphError,
    InvalidLinkError,
    InvalidPositionsError,
    InvalidShellError,
    InvalidWeightsError,
    LayoutError,
    NumericalDegeneracyError,
    SolverNonConvergenceError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Link",
    "Layout",
    "EventType",
    "Event",
    # Type aliases for API
    "LinkLike",
    "WeightsLike",
    "PositionsLike",
    "SeedLike",
    # Graph query interface
    "Graph",
    "GraphQuery",
    "as_graph",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
    # Force-directed layouts
    "SpringLayout",
    "spring_layout",
    # Spectral layouts
    "SpectralLayout",
    "spectral_layout",
    "GraphStructureWarning",
    # Circular layouts
    "CircularLayout",
    "ShellLayout",
    "circular_layout",
    "shell_layout",
    # Random layout
    "RandomLayout",
    "random_layout",
    # Normalization
    "scaler",
    "rescale_axis",
    "normalize_layout",
    # Preprocessing
    "connected_components",
    "is_connected",
    # Errors
    "LayoutError",
    "ValidationError",
    "EmptyGraphError",
    "InvalidGraphError",
    "InvalidLinkError",
    "InvalidWeightsError",
    "InvalidPositionsError",
    "InvalidShellError",
    "NumericalDegeneracyError",
    "SolverNonConvergenceError",
]
