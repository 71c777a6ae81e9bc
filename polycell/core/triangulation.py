"""Triangle index triples and the Delaunay triangulator.

A ``Triangle`` references three entries of a vertex sequence by index and
owns none of them; it stays meaningful only as long as that sequence does.
"""
from __future__ import annotations

import operator
from typing import Iterator, List, Sequence, Tuple

import numpy as np
from scipy.spatial import Delaunay, QhullError

from .conformity import Edge, triangle_edges
from .errors import MeshIndexError, TriangulationError
from .geometry import triangle_centroid, triangle_signed_area
from .logging_utils import get_logger
from .vertex import Vertex, vertices_to_points

logger = get_logger('polycell.triangulation')

__all__ = ['Triangle', 'delaunay_triangulate', 'triangles_from_flat']


class Triangle:
    """Three vertex indices, validated against ``vertices`` at construction."""

    __slots__ = ('_idx',)

    def __init__(self, vertices: Sequence, indices: Sequence[int]):
        if len(indices) != 3:
            raise MeshIndexError(f"a triangle needs exactly 3 indices, got {len(indices)}")
        n = len(vertices)
        idx = []
        for v in indices:
            try:
                v = operator.index(v)
            except TypeError as e:
                raise MeshIndexError(f"triangle index {v!r} is not an integer") from e
            if not (0 <= v < n):
                raise MeshIndexError(
                    f"cannot build triangle {tuple(indices)}: index {v} outside of vertex sequence of length {n}")
            idx.append(v)
        self._idx = tuple(idx)

    @property
    def indices(self) -> Tuple[int, int, int]:
        return self._idx

    def __iter__(self) -> Iterator[int]:
        return iter(self._idx)

    def __getitem__(self, k: int) -> int:
        return self._idx[k]

    def __len__(self) -> int:
        return 3

    def __eq__(self, other):
        if not isinstance(other, Triangle):
            return NotImplemented
        return self._idx == other._idx

    def __hash__(self):
        return hash(self._idx)

    def __repr__(self) -> str:
        return f"Triangle{self._idx}"

    def edges(self) -> List[Edge]:
        """Unordered edge keys; edge k joins corner k and corner k+1."""
        return triangle_edges(self._idx)

    def corners(self, vertices: Sequence) -> Tuple:
        return tuple(vertices[i] for i in self._idx)

    def centroid(self, vertices: Sequence) -> Vertex:
        return triangle_centroid(*self.corners(vertices))

    def signed_area(self, vertices: Sequence) -> float:
        return triangle_signed_area(*self.corners(vertices))


def delaunay_triangulate(points) -> List[int]:
    """Delaunay triangulation of the convex hull of ``points``.

    Returns a flat list of vertex indices; each consecutive triple is one
    triangle. Requires at least 3 non-colinear points.

    Raises
    ------
    TriangulationError
        When Qhull rejects the input.
    """
    coords = vertices_to_points(points)
    if coords.shape[0] < 3:
        raise TriangulationError(f"not enough points for triangulation ({coords.shape[0]})")
    try:
        tri = Delaunay(coords)
    except QhullError as e:
        raise TriangulationError(f"Delaunay triangulation failed: {e}") from e
    simplices = np.ascontiguousarray(tri.simplices, dtype=np.int64)
    logger.debug("Delaunay: %d points -> %d triangles", coords.shape[0], simplices.shape[0])
    return [int(i) for i in simplices.ravel()]


def triangles_from_flat(vertices: Sequence, flat: Sequence[int]) -> List[Triangle]:
    """Group a flat index sequence into validated triangles."""
    if len(flat) % 3 != 0:
        raise MeshIndexError(f"flat triangle index list length {len(flat)} is not a multiple of 3")
    return [Triangle(vertices, flat[i:i + 3]) for i in range(0, len(flat), 3)]
