"""Exception types raised by the mesh construction pipeline."""
from __future__ import annotations

__all__ = [
    'InvalidBorderError',
    'DegenerateTriangleError',
    'MeshIndexError',
    'TriangulationError',
    'NonManifoldEdgeError',
]


class InvalidBorderError(ValueError):
    """Border polygon violates a precondition (too few vertices, repeated
    consecutive vertices, zero area, self-intersection, non-finite input)."""


class DegenerateTriangleError(ValueError):
    """Triangle has (near) zero area, so barycentric coordinates are undefined."""

    def __init__(self, message: str, corners=None):
        super().__init__(message)
        self.corners = corners


class MeshIndexError(IndexError):
    """A triangle references a vertex index outside its vertex sequence."""


class TriangulationError(RuntimeError):
    """The triangulator could not produce a triangulation."""


class NonManifoldEdgeError(RuntimeError):
    """An edge is shared by more than two cells."""
