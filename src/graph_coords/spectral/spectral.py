"""
Spectral layout algorithm.

Uses eigenvectors of the graph Laplacian L = D - A to position vertices.
The eigenvector of the second smallest eigenvalue (the Fiedler vector)
gives x, the third gives y. The smallest eigenvalue is ~0 with a constant
eigenvector and is skipped.

Small graphs use a full dense eigendecomposition. Large graphs build a
sparse Laplacian straight from the edge list and extract only the three
bottom eigenpairs with ARPACK's Lanczos iteration.
"""

from __future__ import annotations

import math
import warnings
from typing import Any, Optional

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import ArpackError, ArpackNoConvergence, eigsh

from ..base import StaticLayout
from ..graph import GraphQuery
from ..preprocessing import is_connected
from ..types import (
    EventCallback,
    Layout,
    SeedLike,
    WeightsLike,
)
from ..validation import (
    SolverNonConvergenceError,
    ValidationError,
    validate_iterations,
    validate_weights,
)

# Graphs with more vertices than this take the sparse eigensolver path
DENSE_THRESHOLD = 500

# Shift-invert target just below the spectrum; L - sigma*I stays positive definite
_SHIFT = -1e-3

# eigsh extracts k=3 eigenpairs and needs k < N; smaller graphs are always dense
_SPARSE_MIN_VERTICES = 4


class GraphStructureWarning(UserWarning):
    """Warning for graph structures whose spectral embedding is degenerate."""

    pass


class SpectralLayout(StaticLayout):
    """
    Spectral layout using Laplacian eigenvectors.

    Positions vertices using the eigenvectors corresponding to the smallest
    non-trivial eigenvalues of the graph Laplacian. Directed graphs are
    symmetrized. Eigenvector components are returned as-is, without
    rescaling.

    Disconnected graphs have a repeated zero eigenvalue, so the embedding
    is degenerate (whole components collapse or are separated along an
    arbitrary direction). A GraphStructureWarning is emitted in that case.

    Example:
        graph = Graph(5, [(0, 1), (1, 2), (2, 3), (3, 4)])
        layout = SpectralLayout(graph)
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
        # Spectral-specific parameters
        weights: WeightsLike = None,
        dense_threshold: int = DENSE_THRESHOLD,
        ncv: Optional[int] = None,
        tol: float = 0.0,
        maxiter: Optional[int] = None,
    ) -> None:
        """
        Initialize Spectral layout.

        Args:
            graph: Graph to lay out
            random_seed: Randomness source for the sparse solver start vector
            on_start: Callback for start event
            on_tick: Callback for tick event (unused, single pass)
            on_end: Callback for end event
            weights: One weight per edge in ``graph.edges()`` order. If None,
                link weights are used, defaulting to 1.0.
            dense_threshold: Largest vertex count solved with the dense
                eigendecomposition.
            ncv: Number of Lanczos vectors for the sparse solver. Defaults
                to max(7, floor(sqrt(N))).
            tol: Sparse solver relative accuracy (0 means machine precision).
            maxiter: Sparse solver iteration limit (None uses ARPACK's default).
        """
        super().__init__(
            graph,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )

        self._weights: WeightsLike = weights
        self._dense_threshold: int = _validate_threshold(dense_threshold)
        self._ncv: Optional[int] = _validate_ncv(ncv)
        self._tol: float = _validate_tol(tol)
        self._maxiter: Optional[int] = None if maxiter is None else validate_iterations(maxiter)
        self._eigenvalues: Optional[np.ndarray] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def weights(self) -> WeightsLike:
        """Get explicit edge weights (None means link weights or 1.0)."""
        return self._weights

    @weights.setter
    def weights(self, value: WeightsLike) -> None:
        """Set explicit edge weights."""
        self._weights = value

    @property
    def dense_threshold(self) -> int:
        """Get the largest vertex count solved densely."""
        return self._dense_threshold

    @dense_threshold.setter
    def dense_threshold(self, value: int) -> None:
        """Set the largest vertex count solved densely."""
        self._dense_threshold = _validate_threshold(value)

    @property
    def ncv(self) -> Optional[int]:
        """Get the Lanczos vector count override."""
        return self._ncv

    @ncv.setter
    def ncv(self, value: Optional[int]) -> None:
        """Set the Lanczos vector count (None for the size-based default)."""
        self._ncv = _validate_ncv(value)

    @property
    def tol(self) -> float:
        """Get sparse solver tolerance."""
        return self._tol

    @tol.setter
    def tol(self, value: float) -> None:
        """Set sparse solver tolerance."""
        self._tol = _validate_tol(value)

    @property
    def maxiter(self) -> Optional[int]:
        """Get sparse solver iteration limit."""
        return self._maxiter

    @maxiter.setter
    def maxiter(self, value: Optional[int]) -> None:
        """Set sparse solver iteration limit."""
        self._maxiter = None if value is None else validate_iterations(value)

    @property
    def eigenvalues(self) -> Optional[np.ndarray]:
        """Get the eigenvalues behind the last layout (x, y), ascending."""
        return self._eigenvalues

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> Layout:
        """
        Compute spectral layout positions.

        Keyword Args:
            stacklevel: Frame the disconnected-graph warning is attributed
                to (default: 3, the caller of run()).
        """
        assert self._graph is not None
        n = self._graph.vertex_count()
        edges = self._graph.edges()

        # Fail fast on a bad weight vector, before any matrix is built
        if self._weights is not None:
            validate_weights(self._weights, len(edges))

        if not is_connected(n, edges):
            warnings.warn(
                "Graph is disconnected: the Laplacian has a repeated zero eigenvalue "
                "and the spectral embedding is degenerate.",
                GraphStructureWarning,
                stacklevel=kwargs.get("stacklevel", 3),
            )

        if n > self._dense_threshold and n >= _SPARSE_MIN_VERTICES:
            A = self._graph.sparse_edge_weights(self._weights)
            if self._graph.is_directed():
                A = A + A.T
            return self._sparse_spectral(sparse.csr_array(A))

        L = self._graph.laplacian_matrix(self._weights)
        return self._dense_spectral(np.asarray(L, dtype=np.float64))

    def _dense_spectral(self, L: np.ndarray) -> Layout:
        """Full eigendecomposition of a dense Laplacian."""
        n = L.shape[0]
        eigenvalues, eigenvectors = np.linalg.eigh(L)

        index = np.argsort(eigenvalues)[1:3]
        self._eigenvalues = eigenvalues[index]

        x = eigenvectors[:, index[0]].copy()
        # Two vertices give only one non-trivial eigenvector
        y = eigenvectors[:, index[1]].copy() if n > 2 else np.zeros(n)
        return Layout(x, y)

    def _sparse_spectral(self, A: sparse.csr_array) -> Layout:
        """Bottom three eigenpairs of a sparse Laplacian via Lanczos iteration."""
        n = A.shape[0]
        degrees = np.asarray(A.sum(axis=0)).ravel()
        L = sparse.diags_array(degrees, format="csc") - sparse.csc_array(A)

        ncv = self._ncv if self._ncv is not None else max(7, int(math.sqrt(n)))
        ncv = min(ncv, n)

        rng = self._make_rng()
        v0 = rng.uniform(-1.0, 1.0, n)

        try:
            eigenvalues, eigenvectors = eigsh(
                L,
                k=3,
                sigma=_SHIFT,
                which="LM",
                ncv=ncv,
                v0=v0,
                tol=self._tol,
                maxiter=self._maxiter,
            )
        except ArpackNoConvergence as err:
            raise SolverNonConvergenceError(
                f"Sparse eigensolver did not converge for {n} vertices with ncv={ncv} "
                f"({len(err.eigenvalues)} of 3 eigenpairs found); "
                "try a larger ncv or maxiter"
            ) from err
        except ArpackError as err:
            raise SolverNonConvergenceError(
                f"Sparse eigensolver failed for {n} vertices with ncv={ncv}: {err}"
            ) from err

        eigenvalues = np.real(eigenvalues)
        index = np.argsort(eigenvalues)[1:3]
        self._eigenvalues = eigenvalues[index]

        x = _fix_sign(np.real(eigenvectors[:, index[0]]))
        y = _fix_sign(np.real(eigenvectors[:, index[1]]))
        return Layout(x, y)


def _fix_sign(vec: np.ndarray) -> np.ndarray:
    """
    Flip an eigenvector so its first large component is positive.

    The pivot is the first entry within half of the largest magnitude, so
    near-ties between entries of opposite sign don't decide the sign.
    """
    magnitude = np.abs(vec)
    pivot = int(np.flatnonzero(magnitude >= 0.5 * magnitude.max())[0])
    if vec[pivot] < 0:
        return -vec
    return vec.copy()


def _validate_threshold(value: int) -> int:
    if value < 1:
        raise ValidationError(f"dense_threshold must be >= 1, got {value}")
    return int(value)


def _validate_ncv(value: Optional[int]) -> Optional[int]:
    # ARPACK needs more Lanczos vectors than requested eigenpairs (3)
    if value is not None and value <= 3:
        raise ValidationError(f"ncv must be > 3, got {value}")
    return None if value is None else int(value)


def _validate_tol(value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"tol must be >= 0, got {value}")
    return value


def spectral_layout(
    G: GraphQuery,
    weights: WeightsLike = None,
    *,
    random_seed: SeedLike = None,
    dense_threshold: int = DENSE_THRESHOLD,
    ncv: Optional[int] = None,
    tol: float = 0.0,
    maxiter: Optional[int] = None,
) -> Layout:
    """
    Lay out a graph with the eigenvectors of its Laplacian.

    Args:
        G: Graph to lay out
        weights: One weight per edge in ``G.edges()`` order; None means
            link weights, defaulting to 1.0 (unweighted Laplacian)
        random_seed: Randomness source for the sparse solver start vector
        dense_threshold: Largest vertex count solved densely
        ncv: Lanczos vector count for the sparse solver
        tol: Sparse solver tolerance
        maxiter: Sparse solver iteration limit

    Returns:
        Layout of raw eigenvector components (2nd and 3rd smallest eigenvalues)

    Raises:
        EmptyGraphError: If G has no vertices
        InvalidWeightsError: If weights don't match the edge count
        SolverNonConvergenceError: If the sparse solver fails to converge

    Example:
        >>> graph = Graph(4, [(0, 1), (1, 2), (2, 3)])
        >>> x, y = spectral_layout(graph)
    """
    layout = SpectralLayout(
        G,
        random_seed=random_seed,
        weights=weights,
        dense_threshold=dense_threshold,
        ncv=ncv,
        tol=tol,
        maxiter=maxiter,
    )
    # Attribute warnings to the caller of this function
    layout.run(stacklevel=4)
    assert layout.positions is not None
    return layout.positions


__all__ = [
    "DENSE_THRESHOLD",
    "GraphStructureWarning",
    "SpectralLayout",
    "spectral_layout",
]
