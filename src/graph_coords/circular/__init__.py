"""
Circular graph layout algorithms.

This module provides circular layout algorithms:
- CircularLayout: Positions vertices evenly on the unit circle
- ShellLayout: Positions vertices in concentric circles by group
"""

from .circular import CircularLayout, circle_points, circular_layout
from .shell import ShellLayout, shell_layout

__all__ = [
    "CircularLayout",
    "ShellLayout",
    "circle_points",
    "circular_layout",
    "shell_layout",
]
