"""
Graph query interface consumed by the layout algorithms.

Layout algorithms never depend on a concrete graph representation. They
only need the capability set described by ``GraphQuery``: vertex count,
edge enumeration, directedness, and adjacency/Laplacian construction.

``Graph`` is the bundled implementation, built from a vertex count and a
list of links.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

import numpy as np
from scipy import sparse

from .types import Link, LinkLike, WeightsLike
from .validation import (
    InvalidGraphError,
    InvalidLinkError,
    validate_link_indices,
    validate_vertex_count,
    validate_weights,
)


@runtime_checkable
class GraphQuery(Protocol):
    """Read-only graph capabilities required by the layout algorithms."""

    def vertex_count(self) -> int: ...

    def edges(self) -> list[tuple[int, int]]: ...

    def is_directed(self) -> bool: ...

    def adjacency_matrix(self, weights: WeightsLike = None) -> np.ndarray: ...

    def laplacian_matrix(self, weights: WeightsLike = None) -> np.ndarray: ...

    def sparse_edge_weights(self, weights: WeightsLike = None) -> sparse.csr_array: ...


class Graph:
    """
    Simple indexed graph implementing ``GraphQuery``.

    Vertices are the integers ``0 .. vertex_count - 1``. Edges keep their
    insertion order, which is also the order explicit weight vectors are
    matched against.

    Example:
        graph = Graph(4, [(0, 1), (1, 2), {"source": 2, "target": 3, "weight": 2.0}])
        graph.laplacian_matrix()
    """

    def __init__(
        self,
        vertex_count: int = 0,
        edges: Optional[Sequence[LinkLike]] = None,
        directed: bool = False,
    ) -> None:
        """
        Initialize graph.

        Args:
            vertex_count: Number of vertices
            edges: Links as Link objects, dicts with source/target[/weight],
                (source, target[, weight]) tuples, or objects with
                source/target attributes
            directed: Whether edges are directed

        Raises:
            InvalidGraphError: If vertex_count is negative
            InvalidLinkError: If an edge references a vertex out of range
            InvalidWeightsError: If a link weight is not a finite number
        """
        self._vertex_count: int = validate_vertex_count(vertex_count)
        self._directed: bool = bool(directed)
        self._links: list[Link] = []
        if edges is not None:
            self.links = edges

    @classmethod
    def from_adjacency(cls, matrix: Any, directed: bool = False) -> "Graph":
        """
        Build a graph from a square adjacency matrix.

        Non-zero entries become weighted edges. For undirected graphs only
        the upper triangle (diagonal included) is read.

        Args:
            matrix: Square dense array-like or scipy sparse matrix
            directed: Whether to read the full matrix as directed edges

        Returns:
            New Graph
        """
        if sparse.issparse(matrix):
            coo = sparse.coo_array(matrix)
            rows, cols, data = coo.row, coo.col, coo.data
            shape = coo.shape
        else:
            dense = np.asarray(matrix, dtype=np.float64)
            shape = dense.shape
            if dense.ndim != 2:
                raise InvalidGraphError(f"Adjacency matrix must be 2-D, got shape {shape}")
            rows, cols = np.nonzero(dense)
            data = dense[rows, cols]

        if len(shape) != 2 or shape[0] != shape[1]:
            raise InvalidGraphError(f"Adjacency matrix must be square, got shape {shape}")

        links = []
        for r, c, w in zip(rows, cols, data):
            if w == 0:
                continue
            if not directed and c < r:
                continue
            links.append(Link(int(r), int(c), float(w)))
        links.sort(key=lambda link: (link.source, link.target))
        return cls(int(shape[0]), links, directed=directed)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def links(self) -> list[Link]:
        """Get the list of links."""
        return self._links

    @links.setter
    def links(self, value: Sequence[LinkLike]) -> None:
        """Set links from a sequence of Link objects, dicts, tuples, or objects."""
        links = [_coerce_link(link_data) for link_data in value]
        validate_link_indices(links, self._vertex_count, strict=True)
        _link_weights(links)
        self._links = links

    # -------------------------------------------------------------------------
    # GraphQuery
    # -------------------------------------------------------------------------

    def vertex_count(self) -> int:
        return self._vertex_count

    def edge_count(self) -> int:
        return len(self._links)

    def edges(self) -> list[tuple[int, int]]:
        return [(link.source, link.target) for link in self._links]

    def is_directed(self) -> bool:
        return self._directed

    def edge_weights(self, weights: WeightsLike = None) -> np.ndarray:
        """
        Resolve the per-edge weight vector.

        Args:
            weights: Explicit weights, one per edge in ``edges()`` order.
                If None, each link's own weight is used (1.0 when unset).

        Returns:
            Float64 array of length ``edge_count()``

        Raises:
            InvalidWeightsError: If explicit weights have the wrong length,
                or any weight is not a finite number
        """
        if weights is not None:
            return validate_weights(weights, len(self._links))
        return _link_weights(self._links)

    def adjacency_matrix(self, weights: WeightsLike = None) -> np.ndarray:
        """
        Dense weighted adjacency matrix.

        Parallel edges sum. Undirected edges fill both ``A[s, t]`` and
        ``A[t, s]``; a self-loop is counted once.
        """
        n = self._vertex_count
        A = np.zeros((n, n), dtype=np.float64)
        if not self._links:
            return A

        w = self.edge_weights(weights)
        src, tgt = self._endpoint_arrays()
        np.add.at(A, (src, tgt), w)
        if not self._directed:
            off_diagonal = src != tgt
            np.add.at(A, (tgt[off_diagonal], src[off_diagonal]), w[off_diagonal])
        return A

    def laplacian_matrix(self, weights: WeightsLike = None) -> np.ndarray:
        """Dense Laplacian ``D - A`` of the symmetrized weighted adjacency."""
        A = self.adjacency_matrix(weights)
        if self._directed:
            A = A + A.T
        D = np.diag(np.sum(A, axis=1))
        return D - A

    def sparse_edge_weights(self, weights: WeightsLike = None) -> sparse.csr_array:
        """
        Sparse weighted adjacency matrix built directly from the edge list.

        Undirected graphs are stored symmetric. Directed graphs keep their
        orientation; callers symmetrize as needed.
        """
        n = self._vertex_count
        w = self.edge_weights(weights)
        src, tgt = self._endpoint_arrays()

        if not self._directed:
            # symmetrize, keeping self-loops on the diagonal once
            off_diagonal = src != tgt
            rows = np.concatenate((src, tgt[off_diagonal]))
            cols = np.concatenate((tgt, src[off_diagonal]))
            w = np.concatenate((w, w[off_diagonal]))
        else:
            rows, cols = src, tgt

        A = sparse.coo_array((w, (rows, cols)), shape=(n, n), dtype=np.float64)
        return A.tocsr()

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _endpoint_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        src = np.fromiter((link.source for link in self._links), dtype=np.intp, count=len(self._links))
        tgt = np.fromiter((link.target for link in self._links), dtype=np.intp, count=len(self._links))
        return src, tgt

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph(vertices={self._vertex_count}, edges={len(self._links)}, {kind})"


def _coerce_link(link_data: LinkLike) -> Link:
    """Normalize one edge description into a Link."""
    if isinstance(link_data, Link):
        return link_data
    try:
        if isinstance(link_data, dict):
            return Link(**link_data)
        if isinstance(link_data, tuple):
            if len(link_data) not in (2, 3):
                raise ValueError("expected (source, target) or (source, target, weight)")
            return Link(*link_data)
        # Generic object - extract source/target
        source = getattr(link_data, "source", None)
        target = getattr(link_data, "target", None)
        weight = getattr(link_data, "weight", None)
        return Link(source, target, weight)
    except (TypeError, ValueError) as err:
        raise InvalidLinkError(f"Cannot interpret {link_data!r} as an edge: {err}") from err


def _link_weights(links: Sequence[Link]) -> np.ndarray:
    """Weights stored on the links, 1.0 where unset, checked like explicit weights."""
    return validate_weights(
        [1.0 if link.weight is None else link.weight for link in links], len(links)
    )


def as_graph(obj: Any) -> GraphQuery:
    """
    Check that ``obj`` provides the graph query interface.

    Raises:
        InvalidGraphError: If obj does not implement GraphQuery
    """
    if isinstance(obj, GraphQuery):
        return obj
    raise InvalidGraphError(
        f"Expected an object implementing GraphQuery (e.g. Graph), got {type(obj).__name__}"
    )


__all__ = [
    "GraphQuery",
    "Graph",
    "as_graph",
]
