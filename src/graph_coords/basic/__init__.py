"""
Basic graph layout algorithms.

- RandomLayout: Positions vertices uniformly at random in the unit square
"""

from .random import RandomLayout, random_layout

__all__ = [
    "RandomLayout",
    "random_layout",
]
