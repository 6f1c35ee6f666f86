"""
Graph preprocessing utilities.

Connected component detection used to flag graphs whose layouts are
structurally ambiguous (e.g. spectral embeddings of disconnected graphs).
These can also be used directly for graph analysis.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable


def connected_components(
    n: int,
    edges: Iterable[tuple[int, int]],
) -> list[list[int]]:
    """
    Find connected components in a graph.

    Edge direction is ignored, so directed graphs yield their weakly
    connected components.

    Args:
        n: Number of vertices
        edges: (source, target) pairs

    Returns:
        List of components, where each component is a list of vertex indices.

    Example:
        >>> components = connected_components(4, [(0, 1), (2, 3)])
        >>> len(components)
        2
    """
    # Build undirected adjacency list
    adj: list[list[int]] = [[] for _ in range(n)]
    for src, tgt in edges:
        if 0 <= src < n and 0 <= tgt < n:
            adj[src].append(tgt)
            adj[tgt].append(src)  # Always add reverse for connectivity

    visited = [False] * n
    components: list[list[int]] = []

    for start in range(n):
        if visited[start]:
            continue

        # BFS to find all vertices in this component
        component: list[int] = []
        queue: deque[int] = deque([start])
        visited[start] = True

        while queue:
            node = queue.popleft()
            component.append(node)

            for neighbor in adj[node]:
                if not visited[neighbor]:
                    visited[neighbor] = True
                    queue.append(neighbor)

        components.append(component)

    return components


def is_connected(n: int, edges: Iterable[tuple[int, int]]) -> bool:
    """
    Check if a graph is connected.

    Args:
        n: Number of vertices
        edges: (source, target) pairs

    Returns:
        True if graph is connected, False otherwise.
    """
    if n <= 1:
        return True
    return len(connected_components(n, edges)) == 1


__all__ = [
    "connected_components",
    "is_connected",
]
