"""
Tests for the Graph class and the GraphQuery interface.
"""

import numpy as np
import pytest
from scipy import sparse

from graph_coords import (
    Graph,
    GraphQuery,
    InvalidGraphError,
    InvalidLinkError,
    InvalidWeightsError,
    Link,
    as_graph,
)

# =============================================================================
# Test Fixtures
# =============================================================================


class Edge:
    """Plain object with source/target attributes."""

    def __init__(self, source, target, weight=None):
        self.source = source
        self.target = target
        self.weight = weight


def create_weighted_triangle(directed=False):
    """Triangle with distinct edge weights."""
    return Graph(3, [(0, 1, 1.0), (1, 2, 2.0), (0, 2, 3.0)], directed=directed)


# =============================================================================
# Construction
# =============================================================================


class TestGraphConstruction:
    """Tests for building graphs from different edge descriptions."""

    def test_mixed_edge_forms(self):
        """Links, dicts, tuples and plain objects are all accepted."""
        graph = Graph(
            4,
            [
                Link(0, 1),
                {"source": 1, "target": 2, "weight": 2.0},
                (2, 3),
                Edge(3, 0, 0.5),
            ],
        )

        assert graph.edges() == [(0, 1), (1, 2), (2, 3), (3, 0)]
        assert list(graph.edge_weights()) == [1.0, 2.0, 1.0, 0.5]

    def test_defaults(self):
        """An empty graph is undirected with no vertices."""
        graph = Graph()
        assert graph.vertex_count() == 0
        assert graph.edges() == []
        assert not graph.is_directed()

    def test_edge_order_preserved(self):
        """Edges keep insertion order."""
        graph = Graph(3, [(2, 0), (0, 1), (1, 2)])
        assert graph.edges() == [(2, 0), (0, 1), (1, 2)]
        assert graph.edge_count() == 3

    def test_out_of_range_edge(self):
        """Edges must reference existing vertices."""
        with pytest.raises(InvalidLinkError, match="out of bounds"):
            Graph(2, [(0, 2)])

    def test_bad_tuple_length(self):
        """Tuples must have two or three entries."""
        with pytest.raises(InvalidLinkError, match="Cannot interpret"):
            Graph(3, [(0, 1, 2.0, 4)])

    def test_missing_endpoint(self):
        """Dicts without a target can't become edges."""
        with pytest.raises(InvalidLinkError):
            Graph(3, [{"source": 0}])

    def test_negative_vertex_count(self):
        """Negative vertex counts are rejected."""
        with pytest.raises(InvalidGraphError):
            Graph(-1)

    @pytest.mark.parametrize(
        "weight, message",
        [
            (float("inf"), "finite"),
            (float("nan"), "finite"),
            ("heavy", "numeric"),
        ],
    )
    def test_invalid_link_weight(self, weight, message):
        """Weights stored on links must be finite numbers."""
        with pytest.raises(InvalidWeightsError, match=message):
            Graph(3, [(0, 1, weight), (1, 2)])

    def test_link_weight_changed_after_construction(self):
        """Link weights are checked again whenever they are resolved."""
        link = Link(0, 1)
        graph = Graph(2, [link])
        link.weight = float("inf")

        with pytest.raises(InvalidWeightsError, match="finite"):
            graph.edge_weights()
        with pytest.raises(InvalidWeightsError):
            graph.sparse_edge_weights()

    def test_links_setter_validates(self):
        """Assigning links validates them like the constructor."""
        graph = Graph(3)
        graph.links = [(0, 1)]
        assert graph.edges() == [(0, 1)]

        with pytest.raises(InvalidLinkError):
            graph.links = [(0, 3)]
        assert graph.edges() == [(0, 1)]

    def test_repr(self):
        """repr summarizes the graph."""
        assert repr(Graph(3, [(0, 1)], directed=True)) == "Graph(vertices=3, edges=1, directed)"


class TestFromAdjacency:
    """Tests for Graph.from_adjacency."""

    def test_undirected_reads_upper_triangle(self):
        """A symmetric matrix yields one edge per pair."""
        matrix = [[0, 1, 0], [1, 0, 4], [0, 4, 0]]
        graph = Graph.from_adjacency(matrix)

        assert graph.edges() == [(0, 1), (1, 2)]
        assert list(graph.edge_weights()) == [1.0, 4.0]
        assert np.array_equal(graph.adjacency_matrix(), np.asarray(matrix, dtype=float))

    def test_directed_reads_full_matrix(self):
        """Directed graphs read every non-zero entry."""
        graph = Graph.from_adjacency([[0, 1], [2, 0]], directed=True)
        assert graph.edges() == [(0, 1), (1, 0)]
        assert list(graph.edge_weights()) == [1.0, 2.0]

    def test_sparse_input(self):
        """Sparse matrices are accepted."""
        matrix = sparse.csr_array(np.array([[0.0, 2.0, 0.0], [2.0, 0.0, 0.0], [0.0, 0.0, 0.0]]))
        graph = Graph.from_adjacency(matrix)

        assert graph.vertex_count() == 3
        assert graph.edges() == [(0, 1)]

    def test_non_square(self):
        """Adjacency matrices must be square."""
        with pytest.raises(InvalidGraphError, match="square"):
            Graph.from_adjacency(np.zeros((2, 3)))

    def test_not_two_dimensional(self):
        """Vectors are not adjacency matrices."""
        with pytest.raises(InvalidGraphError, match="2-D"):
            Graph.from_adjacency([1.0, 2.0])

    def test_infinite_entry(self):
        """Matrix entries become link weights and must be finite."""
        with pytest.raises(InvalidWeightsError, match="finite"):
            Graph.from_adjacency([[0.0, np.inf], [np.inf, 0.0]])


# =============================================================================
# Matrices
# =============================================================================


class TestGraphMatrices:
    """Tests for adjacency and Laplacian matrices."""

    def test_undirected_adjacency_is_symmetric(self):
        """Undirected edges fill both directions."""
        A = create_weighted_triangle().adjacency_matrix()
        assert np.array_equal(A, A.T)
        assert A[0, 2] == 3.0
        assert A[2, 0] == 3.0

    def test_directed_adjacency(self):
        """Directed edges fill one direction only."""
        A = create_weighted_triangle(directed=True).adjacency_matrix()
        assert A[0, 1] == 1.0
        assert A[1, 0] == 0.0

    def test_parallel_edges_sum(self):
        """Repeated edges add their weights."""
        A = Graph(2, [(0, 1, 1.5), (1, 0, 2.0)]).adjacency_matrix()
        assert A[0, 1] == 3.5
        assert A[1, 0] == 3.5

    def test_self_loop_counted_once(self):
        """A self-loop adds its weight to the diagonal once."""
        A = Graph(2, [(0, 0, 2.0), (0, 1)]).adjacency_matrix()
        assert A[0, 0] == 2.0

    def test_explicit_weights_override_links(self):
        """A weight vector replaces the link weights."""
        A = create_weighted_triangle().adjacency_matrix([5.0, 5.0, 5.0])
        assert A[0, 1] == 5.0
        assert A[1, 2] == 5.0

    def test_weights_length_mismatch(self):
        """Weight vectors must have one entry per edge."""
        with pytest.raises(InvalidWeightsError):
            create_weighted_triangle().adjacency_matrix([1.0])

    def test_laplacian_rows_sum_to_zero(self):
        """L = D - A has zero row sums."""
        L = create_weighted_triangle().laplacian_matrix()
        assert np.allclose(L.sum(axis=1), 0.0)
        assert L[0, 0] == 4.0
        assert L[0, 1] == -1.0

    def test_directed_laplacian_is_symmetrized(self):
        """Directed graphs use A + A^T."""
        directed = create_weighted_triangle(directed=True).laplacian_matrix()
        undirected = create_weighted_triangle().laplacian_matrix()
        assert np.array_equal(directed, undirected)

    def test_sparse_matches_dense(self):
        """The sparse adjacency equals the dense one for undirected graphs."""
        graph = Graph(4, [(0, 1, 2.0), (1, 2), (2, 2, 3.0), (3, 0)])
        S = graph.sparse_edge_weights()

        assert sparse.issparse(S)
        assert np.array_equal(S.toarray(), graph.adjacency_matrix())

    def test_sparse_directed_keeps_orientation(self):
        """Directed sparse matrices are not symmetrized."""
        S = Graph(2, [(0, 1, 2.0)], directed=True).sparse_edge_weights()
        dense = S.toarray()
        assert dense[0, 1] == 2.0
        assert dense[1, 0] == 0.0

    def test_sparse_without_edges(self):
        """A graph without edges has an all-zero sparse matrix."""
        S = Graph(3).sparse_edge_weights()
        assert S.shape == (3, 3)
        assert S.nnz == 0


# =============================================================================
# GraphQuery
# =============================================================================


class TestGraphQuery:
    """Tests for the GraphQuery protocol check."""

    def test_graph_implements_protocol(self):
        """Graph satisfies GraphQuery."""
        graph = Graph(2)
        assert isinstance(graph, GraphQuery)
        assert as_graph(graph) is graph

    def test_rejects_other_objects(self):
        """Objects without the query methods are rejected."""
        with pytest.raises(InvalidGraphError, match="GraphQuery"):
            as_graph([[0, 1], [1, 0]])
