"""
Force-directed graph layout algorithms.

This module provides the classic force-directed layout:
- SpringLayout: Fruchterman-Reingold repulsion/attraction with cooldown
"""

from .spring import SpringLayout, spring_layout

__all__ = [
    "SpringLayout",
    "spring_layout",
]
