"""
Shell layout algorithm.

Places vertices in concentric circles (shells) centered at the origin.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from ..base import StaticLayout
from ..graph import GraphQuery
from ..types import EventCallback, Layout
from ..validation import validate_shells
from .circular import circle_points


class ShellLayout(StaticLayout):
    """
    Shell layout - positions vertices in concentric circles.

    Shell k is a circle of radius r0 + k, where r0 is 0 when the first
    shell holds a single vertex (it sits at the center) and 1 otherwise.
    Within a shell, members are evenly spaced starting at angle 0, in the
    order given.

    Vertices not listed in any shell are placed at the origin.

    Example:
        layout = ShellLayout(graph, shells=[[0], [1, 2, 3], [4, 5, 6, 7]])
        x, y = layout.run().positions
    """

    def __init__(
        self,
        graph: Optional[GraphQuery] = None,
        *,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        # Shell-specific parameters
        shells: Optional[Sequence[Sequence[int]]] = None,
    ) -> None:
        """
        Initialize Shell layout.

        Args:
            graph: Graph to lay out
            on_start: Callback for start event
            on_tick: Callback for tick event (unused, single pass)
            on_end: Callback for end event
            shells: Shell assignments, innermost first. Each shell is a
                sequence of vertex indices. Defaults to a single shell with
                every vertex in index order.
        """
        super().__init__(
            graph,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )

        self._shells: Optional[Sequence[Sequence[int]]] = shells

    @property
    def shells(self) -> Optional[Sequence[Sequence[int]]]:
        """Get explicit shell assignments."""
        return self._shells

    @shells.setter
    def shells(self, value: Optional[Sequence[Sequence[int]]]) -> None:
        """Set explicit shell assignments."""
        self._shells = value

    def _get_shells(self) -> list[list[int]]:
        """Get validated shells (explicit or a single all-vertex shell)."""
        n = self._vertex_count()
        if self._shells is None:
            return [list(range(n))]
        return validate_shells(self._shells, n)

    def validate(self) -> Self:
        """Validate the graph and, if set, the shell partition."""
        super().validate()
        if self._shells is not None:
            validate_shells(self._shells, self._vertex_count())
        return self

    def _compute(self, **kwargs: Any) -> Layout:
        """Compute shell layout positions."""
        n = self._vertex_count()
        computed_shells = self._get_shells()

        x = np.zeros(n, dtype=np.float64)
        y = np.zeros(n, dtype=np.float64)

        radius = 1.0 if computed_shells and len(computed_shells[0]) > 1 else 0.0
        for shell_nodes in computed_shells:
            if shell_nodes:
                points = circle_points(len(shell_nodes), radius=radius)
                x[shell_nodes] = points.x
                y[shell_nodes] = points.y
            radius += 1.0

        return Layout(x, y)


def shell_layout(G: GraphQuery, nlist: Optional[Sequence[Sequence[int]]] = None) -> Layout:
    """
    Position vertices in concentric circles.

    Args:
        G: Graph to lay out
        nlist: Shells of vertex indices, innermost first. None places all
            vertices on one shell.

    Returns:
        Layout indexed by vertex

    Raises:
        InvalidShellError: If nlist has out-of-range or repeated indices

    Example:
        >>> x, y = shell_layout(Graph(5), [[0, 1, 2], [3, 4]])
    """
    layout = ShellLayout(G, shells=nlist)
    layout.run()
    assert layout.positions is not None
    return layout.positions


__all__ = ["ShellLayout", "shell_layout"]
