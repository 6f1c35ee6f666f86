"""
Tests for input validation and the error hierarchy.
"""

import numpy as np
import pytest

from graph_coords import (
    EmptyGraphError,
    InvalidGraphError,
    InvalidLinkError,
    InvalidPositionsError,
    InvalidShellError,
    InvalidWeightsError,
    LayoutError,
    Link,
    NumericalDegeneracyError,
    SolverNonConvergenceError,
    ValidationError,
)
from graph_coords.validation import (
    validate_iterations,
    validate_link_indices,
    validate_positions,
    validate_positive,
    validate_shells,
    validate_vertex_count,
    validate_weights,
)


class TestErrorHierarchy:
    """Tests for exception base classes."""

    @pytest.mark.parametrize(
        "error",
        [
            EmptyGraphError,
            InvalidGraphError,
            InvalidLinkError,
            InvalidWeightsError,
            InvalidPositionsError,
            InvalidShellError,
        ],
    )
    def test_input_errors_are_validation_errors(self, error):
        """Input errors share ValidationError and ValueError."""
        assert issubclass(error, ValidationError)
        assert issubclass(error, ValueError)
        assert issubclass(error, LayoutError)

    def test_numerical_errors(self):
        """Numerical failures are not input errors."""
        assert issubclass(NumericalDegeneracyError, LayoutError)
        assert issubclass(NumericalDegeneracyError, ArithmeticError)
        assert not issubclass(NumericalDegeneracyError, ValidationError)

    def test_solver_errors(self):
        """Solver failures are runtime errors."""
        assert issubclass(SolverNonConvergenceError, LayoutError)
        assert issubclass(SolverNonConvergenceError, RuntimeError)


class TestValidateVertexCount:
    """Tests for vertex count validation."""

    def test_valid_counts(self):
        """Non-negative integers pass, numpy integers included."""
        assert validate_vertex_count(0) == 0
        assert validate_vertex_count(7) == 7
        assert validate_vertex_count(np.int64(3)) == 3

    def test_negative(self):
        """Negative counts are rejected."""
        with pytest.raises(InvalidGraphError, match=">= 0"):
            validate_vertex_count(-1)

    @pytest.mark.parametrize("value", [2.5, "3", None, True])
    def test_not_an_integer(self, value):
        """Only integers are vertex counts."""
        with pytest.raises(InvalidGraphError, match="integer"):
            validate_vertex_count(value)


class TestValidateLinkIndices:
    """Tests for link index validation."""

    def test_valid_links(self):
        """Valid links should pass validation."""
        links = [Link(0, 1), {"source": 1, "target": 2}]
        assert validate_link_indices(links, 3) == []

    def test_out_of_bounds_target(self):
        """Target out of bounds should raise."""
        with pytest.raises(InvalidLinkError, match="target index 5 out of bounds"):
            validate_link_indices([Link(0, 5)], 3)

    def test_negative_source(self):
        """Negative indices are out of bounds."""
        with pytest.raises(InvalidLinkError, match="source index -1"):
            validate_link_indices([Link(-1, 0)], 3)

    def test_non_integer_index(self):
        """Non-integer endpoints are reported."""
        with pytest.raises(InvalidLinkError, match="not an integer index"):
            validate_link_indices([{"source": "a", "target": 0}], 3)

    def test_non_strict_returns_issues(self):
        """With strict=False issues are returned instead of raised."""
        issues = validate_link_indices([Link(0, 1), Link(0, 9), Link(8, 9)], 3, strict=False)

        assert [index for index, _ in issues] == [1, 2, 2]


class TestValidateWeights:
    """Tests for per-edge weight validation."""

    def test_returns_float_array(self):
        """Valid weights are returned as float64."""
        result = validate_weights([1, 2, 3], 3)
        assert result.dtype == np.float64
        assert list(result) == [1.0, 2.0, 3.0]

    def test_wrong_length(self):
        """Length must equal the edge count."""
        with pytest.raises(InvalidWeightsError, match="expected 2, got 3"):
            validate_weights([1.0, 2.0, 3.0], 2)

    def test_not_one_dimensional(self):
        """Matrices are not weight vectors."""
        with pytest.raises(InvalidWeightsError, match="one-dimensional"):
            validate_weights([[1.0, 2.0]], 2)

    def test_not_numeric(self):
        """Values that cannot be read as floats are rejected."""
        with pytest.raises(InvalidWeightsError, match="numeric"):
            validate_weights(["heavy", 1.0], 2)

    def test_not_finite(self):
        """Infinite weights are rejected."""
        with pytest.raises(InvalidWeightsError, match="finite"):
            validate_weights([1.0, float("inf")], 2)


class TestValidatePositions:
    """Tests for initial position validation."""

    def test_returns_copies(self):
        """The validated arrays never alias the input."""
        x = np.array([0.0, 1.0])
        y = np.array([2.0, 3.0])
        out_x, out_y = validate_positions((x, y), 2)

        out_x[0] = 99.0
        assert x[0] == 0.0
        assert list(out_y) == [2.0, 3.0]

    def test_not_a_pair(self):
        """Exactly two sequences are required."""
        with pytest.raises(InvalidPositionsError, match="pair"):
            validate_positions(([0.0],), 1)

    def test_length_mismatch(self):
        """Both axes must have one entry per vertex."""
        with pytest.raises(InvalidPositionsError, match="y must have length 2"):
            validate_positions(([0.0, 1.0], [0.0]), 2)


class TestValidateShells:
    """Tests for shell partition validation."""

    def test_valid_partial_partition(self):
        """Shells may leave vertices out."""
        assert validate_shells([(0,), [np.int32(2), 1]], 4) == [[0], [2, 1]]

    def test_reports_every_issue(self):
        """All problems are collected into one error."""
        with pytest.raises(InvalidShellError) as info:
            validate_shells([[0, 9], [0]], 3)

        message = str(info.value)
        assert "out of bounds" in message
        assert "already placed in shell 0" in message


class TestValidateParameters:
    """Tests for scalar parameter validation."""

    def test_iterations(self):
        """Iteration counts must be at least one."""
        assert validate_iterations(1) == 1
        with pytest.raises(ValidationError, match="iterations"):
            validate_iterations(0)

    @pytest.mark.parametrize("value", [2.5, "3", True])
    def test_iterations_must_be_integer(self, value):
        """Fractional or non-numeric counts are rejected, not truncated."""
        with pytest.raises(ValidationError, match="must be an integer"):
            validate_iterations(value)

    def test_iterations_accepts_numpy_integer(self):
        """numpy integers are valid counts."""
        assert validate_iterations(np.int64(4)) == 4

    def test_positive(self):
        """Positive finite values pass and come back as float."""
        assert validate_positive(2, "spacing") == 2.0

    @pytest.mark.parametrize("value", [0, -0.5, float("nan"), float("inf")])
    def test_positive_rejects(self, value):
        """Zero, negative and non-finite values are rejected."""
        with pytest.raises(ValidationError, match="spacing must be positive"):
            validate_positive(value, "spacing")
