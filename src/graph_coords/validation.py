"""
Input validation utilities and error types for graph coordinate algorithms.

Provides centralized validation functions for graphs, links, weights,
initial positions, shell partitions and numeric parameters. Raises
descriptive exceptions on invalid input.

Error kinds:
- ValidationError: invalid caller input (InvalidArgument)
- NumericalDegeneracyError: the computation hit a singular configuration
- SolverNonConvergenceError: the sparse eigensolver gave up
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

import numpy as np


class LayoutError(Exception):
    """Base exception for everything raised by graph_coords."""

    pass


class ValidationError(LayoutError, ValueError):
    """Base exception for invalid layout input."""

    pass


class EmptyGraphError(ValidationError):
    """Raised when a layout is requested for a graph with no vertices."""

    pass


class InvalidGraphError(ValidationError):
    """Raised when an object does not provide the graph query interface."""

    pass


class InvalidLinkError(ValidationError):
    """Raised when a link references invalid vertices."""

    pass


class InvalidWeightsError(ValidationError):
    """Raised when an edge weight vector does not match the edge list."""

    pass


class InvalidPositionsError(ValidationError):
    """Raised when initial positions are malformed."""

    pass


class InvalidShellError(ValidationError):
    """Raised when a shell partition references invalid or repeated vertices."""

    pass


class NumericalDegeneracyError(LayoutError, ArithmeticError):
    """Raised when a layout computation reaches a singular configuration."""

    pass


class SolverNonConvergenceError(LayoutError, RuntimeError):
    """Raised when the iterative eigensolver fails to converge."""

    pass


def validate_vertex_count(n: int) -> int:
    """
    Validate a vertex count.

    Args:
        n: Number of vertices

    Returns:
        Validated vertex count

    Raises:
        InvalidGraphError: If n is negative or not an integer
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidGraphError(f"vertex_count must be an integer, got {type(n).__name__}")
    if n < 0:
        raise InvalidGraphError(f"vertex_count must be >= 0, got {n}")
    return int(n)


def validate_link_indices(
    links: Sequence[Any],
    node_count: int,
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that all link source/target indices are within bounds.

    Args:
        links: Sequence of Link objects or dicts with source/target
        node_count: Number of vertices in the graph
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (link_index, issue_description) tuples

    Raises:
        InvalidLinkError: If strict=True and invalid links found
    """
    issues: list[tuple[int, str]] = []

    for i, link in enumerate(links):
        src = _get_index(link, "source")
        tgt = _get_index(link, "target")

        for attr, idx in (("source", src), ("target", tgt)):
            if idx is None:
                issues.append((i, f"Link {i}: {attr} is not an integer index"))
            elif idx < 0 or idx >= node_count:
                issues.append(
                    (i, f"Link {i}: {attr} index {idx} out of bounds [0, {node_count})")
                )

    if strict and issues:
        msg = "Invalid link indices:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidLinkError(msg)

    return issues


def validate_weights(weights: Sequence[float], edge_count: int) -> np.ndarray:
    """
    Validate an explicit per-edge weight vector.

    Args:
        weights: One weight per edge, in edge enumeration order
        edge_count: Number of edges in the graph

    Returns:
        Weights as a float64 array

    Raises:
        InvalidWeightsError: If the length differs from edge_count or a
            weight is not a finite number
    """
    try:
        arr = np.asarray(weights, dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise InvalidWeightsError(f"weights must be numeric: {err}") from err
    if arr.ndim != 1:
        raise InvalidWeightsError(f"weights must be one-dimensional, got shape {arr.shape}")
    if arr.shape[0] != edge_count:
        raise InvalidWeightsError(
            f"weights must have one entry per edge: expected {edge_count}, got {arr.shape[0]}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidWeightsError("weights must be finite")
    return arr


def validate_positions(positions: Sequence[Sequence[float]], n: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Validate and copy initial positions.

    Args:
        positions: Pair of sequences (x, y)
        n: Number of vertices

    Returns:
        Fresh (x, y) float64 arrays, never aliasing the input

    Raises:
        InvalidPositionsError: If the shape is wrong or values are not finite
    """
    if len(positions) != 2:
        raise InvalidPositionsError(
            f"initial_positions must be a pair (x, y), got {len(positions)} sequences"
        )

    xs = np.array(positions[0], dtype=np.float64, copy=True)
    ys = np.array(positions[1], dtype=np.float64, copy=True)

    for name, arr in (("x", xs), ("y", ys)):
        if arr.ndim != 1 or arr.shape[0] != n:
            raise InvalidPositionsError(
                f"initial_positions {name} must have length {n}, got shape {arr.shape}"
            )
        if not np.all(np.isfinite(arr)):
            raise InvalidPositionsError(f"initial_positions {name} must be finite")

    return xs, ys


def validate_shells(shells: Sequence[Sequence[int]], n: int) -> list[list[int]]:
    """
    Validate a shell partition.

    Shells need not cover every vertex, but every listed index must be in
    range and appear at most once across all shells.

    Args:
        shells: Ordered sequence of shells, each an ordered sequence of indices
        n: Number of vertices

    Returns:
        Shells as lists of ints

    Raises:
        InvalidShellError: If an index is out of bounds or repeated
    """
    seen: dict[int, int] = {}
    result: list[list[int]] = []
    issues: list[str] = []

    for si, shell in enumerate(shells):
        members: list[int] = []
        for member in shell:
            if isinstance(member, bool) or not isinstance(member, (int, np.integer)):
                issues.append(f"Shell {si}: index {member!r} is not an integer")
                continue
            idx = int(member)
            if idx < 0 or idx >= n:
                issues.append(f"Shell {si}: index {idx} out of bounds [0, {n})")
            elif idx in seen:
                issues.append(f"Shell {si}: index {idx} already placed in shell {seen[idx]}")
            else:
                seen[idx] = si
            members.append(idx)
        result.append(members)

    if issues:
        raise InvalidShellError("Invalid shell partition:\n" + "\n".join(issues))

    return result


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is positive.

    Args:
        iterations: Number of iterations

    Returns:
        Validated iteration count

    Raises:
        ValidationError: If iterations is not an integer or is < 1
    """
    if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)):
        raise ValidationError(
            f"iterations must be an integer, got {type(iterations).__name__}"
        )
    if iterations < 1:
        raise ValidationError(f"iterations must be >= 1, got {iterations}")
    return int(iterations)


def validate_positive(value: float, name: str) -> float:
    """
    Validate a strictly positive, finite parameter.

    Args:
        value: Parameter value
        name: Parameter name used in the error message

    Returns:
        Validated value as float

    Raises:
        ValidationError: If value is not a finite number > 0
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def _get_index(obj: Any, attr: str) -> Optional[int]:
    """Extract index from a Link, dict, or object with the given attribute."""
    if isinstance(obj, dict):
        val = obj.get(attr)
    else:
        val = getattr(obj, attr, None)

    if val is None:
        return None
    if isinstance(val, (int, np.integer)):
        return int(val)
    return None


__all__ = [
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
    "validate_vertex_count",
    "validate_link_indices",
    "validate_weights",
    "validate_positions",
    "validate_shells",
    "validate_iterations",
    "validate_positive",
]
