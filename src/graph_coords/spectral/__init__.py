"""
Spectral graph layout algorithms.

This module provides spectral layout algorithms based on eigenvector
decomposition of the graph Laplacian matrix.
"""

from .spectral import DENSE_THRESHOLD, GraphStructureWarning, SpectralLayout, spectral_layout

__all__ = [
    "DENSE_THRESHOLD",
    "GraphStructureWarning",
    "SpectralLayout",
    "spectral_layout",
]
