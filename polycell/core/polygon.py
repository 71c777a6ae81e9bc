"""Border polygon predicates and validation.

A border is an ordered sequence of vertices forming a closed loop: the last
vertex connects back to the first. Vertices may be ``Vertex`` objects or
``(x, y)`` pairs.
"""
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np

from .constants import EPS_AREA
from .errors import InvalidBorderError
from .geometry import orient, seg_intersect

__all__ = [
    'point_in_polygon',
    'polygon_signed_area',
    'polygon_has_self_intersections',
    'validate_border',
]


def _coords(polygon) -> List[Tuple[float, float]]:
    out = []
    for v in polygon:
        x, y = v
        out.append((float(x), float(y)))
    return out


def point_in_polygon(border, p) -> bool:
    """Even-odd ray casting along a horizontal ray towards +x.

    An edge (c0, c1) is a crossing candidate when p.y lies in
    ``[min(c0.y, c1.y), max(c0.y, c1.y))``; horizontal edges never are.
    A candidate is a crossing when the edge's x at p.y is greater than p.x.
    The closing edge (last vertex to first) is included. Points exactly on
    the boundary get whatever the rule yields, consistently.
    """
    poly = _coords(border)
    px, py = (float(c) for c in p)
    n = len(poly)
    crossings = 0
    for i in range(n):
        x0, y0 = poly[i]
        x1, y1 = poly[(i + 1) % n]
        if y0 == y1:
            continue
        if not (min(y0, y1) <= py < max(y0, y1)):
            continue
        xint = x0 + (py - y0) * (x1 - x0) / (y1 - y0)
        if xint > px:
            crossings += 1
    return crossings % 2 == 1


def polygon_signed_area(polygon) -> float:
    """Return signed area of polygon; positive if CCW."""
    arr = np.asarray(_coords(polygon), dtype=np.float64)
    if arr.shape[0] < 3:
        return 0.0
    x = arr[:, 0]; y = arr[:, 1]
    return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def _on_segment(p, a, b) -> bool:
    if orient(a, b, p) != 0:
        return False
    return (min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
            and min(a[1], b[1]) <= p[1] <= max(a[1], b[1]))


def polygon_has_self_intersections(polygon) -> bool:
    """Return True if the closed loop is not simple.

    Non-adjacent edges must not touch at all (proper crossing, a vertex on
    another edge, a repeated vertex or a colinear overlap all count).
    Adjacent edges must not fold back onto each other.
    """
    pts = _coords(polygon)
    n = len(pts)
    if n < 3:
        return False
    for i in range(n):
        a = pts[i]; b = pts[(i + 1) % n]; c = pts[(i + 2) % n]
        # fold-back at the shared vertex b
        if orient(a, b, c) == 0 and (a[0] - b[0]) * (c[0] - b[0]) + (a[1] - b[1]) * (c[1] - b[1]) > 0:
            return True
    for i in range(n):
        a = pts[i]; b = pts[(i + 1) % n]
        for j in range(i + 1, n):
            if j == (i + 1) % n or i == (j + 1) % n:
                continue
            c = pts[j]; d = pts[(j + 1) % n]
            if seg_intersect(a, b, c, d):
                return True
            if _on_segment(c, a, b) or _on_segment(d, a, b) or _on_segment(a, c, d) or _on_segment(b, c, d):
                return True
    return False


def validate_border(border: Sequence, check_self_intersections: bool = True) -> List[Tuple[float, float]]:
    """Check the border preconditions and return its coordinates.

    Raises
    ------
    InvalidBorderError
        Fewer than 3 vertices, non-finite coordinates, two consecutive equal
        vertices (the closing pair included), zero area, or (when
        ``check_self_intersections``) a non-simple loop.
    """
    try:
        pts = _coords(border)
    except (TypeError, ValueError, IndexError) as e:
        raise InvalidBorderError(f"border vertices must be (x, y) pairs: {e}") from e
    n = len(pts)
    if n < 3:
        raise InvalidBorderError(f"border needs at least 3 vertices, got {n}")
    for i, (x, y) in enumerate(pts):
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidBorderError(f"border vertex {i} is not finite: {(x, y)}")
    for i in range(n):
        if pts[i] == pts[(i + 1) % n]:
            raise InvalidBorderError(f"border vertices {i} and {(i + 1) % n} are equal: {pts[i]}")
    xs = [x for x, _ in pts]; ys = [y for _, y in pts]
    diag2 = (max(xs) - min(xs)) ** 2 + (max(ys) - min(ys)) ** 2
    # area measured against the bounding box diagonal squared
    if abs(polygon_signed_area(pts)) <= EPS_AREA * diag2:
        raise InvalidBorderError("border encloses zero area (all vertices colinear?)")
    if check_self_intersections and polygon_has_self_intersections(pts):
        raise InvalidBorderError("border polygon is self-intersecting")
    return pts
