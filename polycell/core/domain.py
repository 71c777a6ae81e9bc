"""Mesh builder: triangulate a border polygon and derive finite-volume cells.

Pipeline (one direction only)::

    border -> triangulator -> candidate triangles
           -> centroid classification (inside / exterior)
           -> mesh cells -> shared-edge adjacency

The ``Domain`` owns every arena (border, vertices, candidates, cells); all
cross references are integer indices into those arenas.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .config import MeshConfig
from .conformity import compute_neighbors
from .errors import DegenerateTriangleError
from .geometry import point_in_triangle, triangle_signed_area
from .io import write_vtu
from .logging_utils import get_logger
from .polygon import point_in_polygon, validate_border
from .triangulation import Triangle, delaunay_triangulate, triangles_from_flat
from .vertex import PointLike, Vertex, as_vertex, vertices_to_points

logger = get_logger('polycell.domain')

__all__ = ['MeshCell', 'Domain', 'classify_candidates']

Triangulator = Callable[[Sequence[Vertex]], Sequence[int]]


@dataclass(frozen=True)
class MeshCell:
    """A surviving triangle enriched for finite-volume use.

    ``neighbors[k]`` is the index (into ``Domain.cells``) of the cell across
    edge k of ``triangle``, or None on the polygon boundary. ``value`` is a
    payload slot for simulation state; nothing here computes it. The
    centroid is stored as a coordinate pair, so the cell stays immutable.
    """
    triangle: Triangle
    neighbors: Tuple[Optional[int], Optional[int], Optional[int]]
    is_boundary: bool
    center_xy: Tuple[float, float]
    value: float = 0.0

    @property
    def center(self) -> Vertex:
        """Centroid of the cell, as a new Vertex."""
        return Vertex(*self.center_xy)

    @property
    def n_neighbors(self) -> int:
        return sum(1 for n in self.neighbors if n is not None)


def classify_candidates(border, vertices: Sequence[PointLike], candidates: Sequence[Triangle],
                        on_degenerate: str = 'skip') -> List[int]:
    """Return the indices of candidates whose centroid lies inside ``border``.

    Each centroid is first checked against its own triangle; a degenerate
    triangle raises ``DegenerateTriangleError``, which is re-raised when
    ``on_degenerate == 'raise'`` and otherwise logged and skipped.
    """
    inside = []
    for t_idx, tri in enumerate(candidates):
        corners = tri.corners(vertices)
        center = tri.centroid(vertices)
        try:
            if not point_in_triangle(*corners, center):
                # only reachable through round-off on slivers
                logger.warning("centroid of candidate %d %s not strictly inside it", t_idx, tri)
        except DegenerateTriangleError:
            if on_degenerate == 'raise':
                raise
            logger.warning("skipping degenerate candidate triangle %d %s", t_idx, tri)
            continue
        if point_in_polygon(border, center):
            inside.append(t_idx)
    return inside


class Domain:
    """Triangular mesh of a simple polygon's interior.

    Build with ``Domain.from_border`` or ``Domain.from_rect``; the instance is
    read-only afterwards.

    Vertex coordinates are held as tuples of floats; ``border`` and
    ``vertices`` return fresh ``Vertex`` copies, so editing them never
    changes the mesh.

    Attributes
    ----------
    border : tuple of Vertex
        The closed border loop.
    vertices : tuple of Vertex
        Vertex arena used for triangulation; the border vertices come first.
    candidates : tuple of Triangle
        Every triangle the triangulator produced, kept for diagnostics.
    cells : tuple of MeshCell
        Interior cells, in candidate order, with adjacency.
    """

    __slots__ = ('_coords', '_n_border', '_candidates', '_cells', '_interior', 'config')

    def __init__(self, coords, n_border, candidates, cells, interior, config: MeshConfig):
        # Use from_border(); this only stores finished arenas
        self._coords = tuple((float(x), float(y)) for x, y in coords)
        self._n_border = int(n_border)
        self._candidates = tuple(candidates)
        self._cells = tuple(cells)
        self._interior = tuple(interior)
        self.config = config

    @classmethod
    def from_border(cls, border: Sequence[PointLike], config: Optional[MeshConfig] = None,
                    triangulator: Optional[Triangulator] = None) -> 'Domain':
        """Mesh the interior of ``border``.

        Parameters
        ----------
        border : sequence of Vertex or (x, y)
            Simple closed loop, at least 3 vertices.
        config : MeshConfig, optional
        triangulator : callable, optional
            ``f(vertices) -> flat index list``; defaults to
            ``delaunay_triangulate``.

        Raises
        ------
        InvalidBorderError
            Border preconditions fail; nothing is triangulated.
        DegenerateTriangleError
            A degenerate candidate with ``config.on_degenerate == 'raise'``.
        MeshIndexError
            The triangulator returned an index outside the vertex arena.
        TriangulationError
            The triangulator failed.
        """
        cfg = config or MeshConfig()
        tri_fn = triangulator or delaunay_triangulate
        coords = tuple(validate_border(border, check_self_intersections=cfg.check_self_intersections))

        flat = list(tri_fn([Vertex(x, y) for x, y in coords]))
        candidates = triangles_from_flat(coords, flat)
        interior = classify_candidates(coords, coords, candidates, on_degenerate=cfg.on_degenerate)
        kept = [candidates[i] for i in interior]

        neighbors = compute_neighbors(kept)
        cells = []
        for tri, nbrs in zip(kept, neighbors):
            cells.append(MeshCell(
                triangle=tri,
                neighbors=nbrs,
                is_boundary=any(n is None for n in nbrs),
                center_xy=tri.centroid(coords).as_point(),
                value=cfg.value_default,
            ))

        if not cells:
            logger.warning("empty mesh: none of %d candidate triangles lies inside the border", len(candidates))
        else:
            logger.info("meshed border of %d vertices: %d cells (%d candidates, %d exterior)",
                        len(coords), len(cells), len(candidates), len(candidates) - len(cells))
        return cls(coords, len(coords), candidates, cells, interior, cfg)

    @classmethod
    def from_rect(cls, lower: PointLike, upper: PointLike, config: Optional[MeshConfig] = None,
                  triangulator: Optional[Triangulator] = None) -> 'Domain':
        """Mesh the axis-aligned rectangle spanned by two opposite corners."""
        lo = as_vertex(lower); hi = as_vertex(upper)
        border = [lo, Vertex(lo.x, hi.y), hi, Vertex(hi.x, lo.y)]
        return cls.from_border(border, config=config, triangulator=triangulator)

    # -- read-only views ---------------------------------------------------
    @property
    def border(self) -> Tuple[Vertex, ...]:
        return tuple(Vertex(x, y) for x, y in self._coords[:self._n_border])

    @property
    def vertices(self) -> Tuple[Vertex, ...]:
        return tuple(Vertex(x, y) for x, y in self._coords)

    @property
    def candidates(self) -> Tuple[Triangle, ...]:
        return self._candidates

    @property
    def cells(self) -> Tuple[MeshCell, ...]:
        return self._cells

    @property
    def n_border(self) -> int:
        return self._n_border

    @property
    def n_cells(self) -> int:
        return len(self._cells)

    @property
    def is_empty(self) -> bool:
        return not self._cells

    def __repr__(self) -> str:
        return f"Domain(n_border={self.n_border}, n_candidates={len(self._candidates)}, n_cells={self.n_cells})"

    def interior_candidates(self) -> Tuple[int, ...]:
        """Candidate index of each cell, i.e. ``cells[i].triangle is candidates[interior_candidates()[i]]``."""
        return self._interior

    def exterior_candidates(self) -> List[Triangle]:
        """Candidates dropped by the classification (hull pockets, skipped degenerates)."""
        kept = set(self._interior)
        return [t for i, t in enumerate(self._candidates) if i not in kept]

    def points(self) -> np.ndarray:
        return vertices_to_points(self._coords)

    def cell_triangles(self) -> np.ndarray:
        """(M, 3) int32 array of cell vertex indices."""
        if not self._cells:
            return np.empty((0, 3), dtype=np.int32)
        return np.asarray([c.triangle.indices for c in self._cells], dtype=np.int32)

    def cell_ids(self) -> np.ndarray:
        return np.arange(self.n_cells, dtype=np.uint32)

    def cell_areas(self) -> np.ndarray:
        return np.asarray([abs(triangle_signed_area(*c.triangle.corners(self._coords)))
                           for c in self._cells], dtype=np.float64)

    def area(self) -> float:
        return float(self.cell_areas().sum())

    def locate(self, p: PointLike) -> Optional[int]:
        """Index of the cell strictly containing ``p``, or None."""
        for i, cell in enumerate(self._cells):
            if point_in_triangle(*cell.triangle.corners(self._coords), p):
                return i
        return None

    def contains(self, p: PointLike) -> bool:
        """Border classification of ``p`` (even-odd rule)."""
        return point_in_polygon(self._coords[:self._n_border], p)

    def to_vtu(self, filepath: str, include_exterior: bool = False) -> None:
        """Export cells (or every candidate with ``include_exterior``) to a ``.vtu`` file."""
        if include_exterior:
            tris = np.asarray([t.indices for t in self._candidates], dtype=np.int32).reshape(-1, 3)
            inside = np.zeros(len(self._candidates), dtype=np.uint8)
            inside[list(self._interior)] = 1
            cell_data = {
                'CellIndex': np.arange(len(tris), dtype=np.uint32),
                'Interior': inside,
            }
        else:
            tris = self.cell_triangles()
            cell_data = {
                'CellIndex': self.cell_ids(),
                'Value': np.asarray([c.value for c in self._cells], dtype=np.float64),
                'Boundary': np.asarray([c.is_boundary for c in self._cells], dtype=np.uint8),
            }
        write_vtu(filepath, self.points(), tris, cell_data=cell_data)
        logger.debug("wrote %d cells to %s", len(tris), filepath)
