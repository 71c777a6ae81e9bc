"""Edge maps and cell adjacency over an indexed triangle list."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set, Tuple

from .errors import NonManifoldEdgeError

__all__ = ['triangle_edges', 'build_edge_to_cell_map', 'boundary_edges', 'compute_neighbors']

Edge = Tuple[int, int]


def triangle_edges(tri) -> List[Edge]:
    """Unordered edge keys of an index triple; edge k joins corner k and corner k+1."""
    a, b, c = (int(v) for v in tri)
    return [tuple(sorted(e)) for e in ((a, b), (b, c), (c, a))]


def build_edge_to_cell_map(triangles: Sequence) -> Dict[Edge, List[int]]:
    """Map each unordered edge to the indices of the triangles using it, in triangle order."""
    edge_map: Dict[Edge, List[int]] = {}
    for t_idx, tri in enumerate(triangles):
        for key in triangle_edges(tri):
            edge_map.setdefault(key, []).append(t_idx)
    return edge_map


def boundary_edges(triangles: Sequence) -> Set[Edge]:
    return {e for e, cells in build_edge_to_cell_map(triangles).items() if len(cells) == 1}


def compute_neighbors(triangles: Sequence) -> List[Tuple[Optional[int], Optional[int], Optional[int]]]:
    """Per triangle, the neighbor across each edge or None.

    Entry k of the returned triple is the triangle sharing edge k
    (corner k to corner k+1). Adjacency is symmetric by construction.

    Raises
    ------
    NonManifoldEdgeError
        If an edge is used by more than two triangles, or the same triangle
        appears twice (two copies would share all three edges).
    """
    seen: Dict[Tuple[int, ...], int] = {}
    for t_idx, tri in enumerate(triangles):
        key = tuple(sorted(int(v) for v in tri))
        if key in seen:
            raise NonManifoldEdgeError(f"triangles {seen[key]} and {t_idx} both cover vertices {key}")
        seen[key] = t_idx
    edge_map = build_edge_to_cell_map(triangles)
    for e, cells in edge_map.items():
        if len(cells) > 2:
            raise NonManifoldEdgeError(f"edge {e} is shared by {len(cells)} cells: {cells}")
    out = []
    for t_idx, tri in enumerate(triangles):
        nbrs = []
        for key in triangle_edges(tri):
            other = [c for c in edge_map[key] if c != t_idx]
            nbrs.append(other[0] if other else None)
        out.append(tuple(nbrs))
    return out
