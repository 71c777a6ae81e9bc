"""Central numerical tolerances.

Tiny numeric thresholds used across the package live here so they can be
tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

# Geometry tolerances
EPS_AREA: float = 1e-12           # polygon area / bbox_diag**2 below this is zero area
EPS_DEGENERATE: float = 1e-12     # |det| / (|e0|*|e1|) below this is a degenerate triangle

# VTK cell type code for a linear triangle
VTK_TRIANGLE: int = 5

__all__ = [
    'EPS_AREA',
    'EPS_DEGENERATE',
    'VTK_TRIANGLE',
]
