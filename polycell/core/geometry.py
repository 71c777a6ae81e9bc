"""Geometry primitives: orientation, segment crossing and triangle predicates.

Functions accept ``Vertex`` objects or any ``(x, y)`` pair.
"""
from __future__ import annotations

import math

from .constants import EPS_DEGENERATE
from .errors import DegenerateTriangleError
from .vertex import Vertex

__all__ = [
    'orient', 'seg_intersect',
    'triangle_signed_area', 'triangle_centroid', 'point_in_triangle',
]


def _xy(p):
    x, y = p
    return float(x), float(y)


def orient(a, b, c) -> float:
    """2D orientation (signed area * 2) for points a,b,c.

    Positive when (a,b,c) are counter-clockwise, negative when clockwise,
    zero when colinear.
    """
    ax, ay = _xy(a); bx, by = _xy(b); cx, cy = _xy(c)
    return (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)


def seg_intersect(p1, p2, p3, p4) -> bool:
    """Return True if segment p1-p2 properly crosses p3-p4.

    Shared endpoints and colinear overlaps do not count as crossings.
    """
    p1 = _xy(p1); p2 = _xy(p2); p3 = _xy(p3); p4 = _xy(p4)
    if p1 == p3 or p1 == p4 or p2 == p3 or p2 == p4:
        return False
    o1 = orient(p1, p2, p3); o2 = orient(p1, p2, p4)
    o3 = orient(p3, p4, p1); o4 = orient(p3, p4, p2)
    if o1 == 0 and o2 == 0 and o3 == 0 and o4 == 0:
        return False
    return (o1 * o2 < 0) and (o3 * o4 < 0)


def triangle_signed_area(a, b, c) -> float:
    return 0.5 * orient(a, b, c)


def triangle_centroid(a, b, c) -> Vertex:
    """Arithmetic mean of the three corners."""
    ax, ay = _xy(a); bx, by = _xy(b); cx, cy = _xy(c)
    return Vertex((ax + bx + cx) / 3.0, (ay + by + cy) / 3.0)


def point_in_triangle(a, b, c, p) -> bool:
    """Strict containment of p in triangle (a, b, c).

    p is written in the affine basis e0 = b - a, e1 = c - a as
    ``p - a = t0*e0 + t1*e1``; p is inside iff t0 > 0, t1 > 0 and
    t0 + t1 < 1. Points on an edge or a corner are outside.

    Raises
    ------
    DegenerateTriangleError
        If the basis edges are (near) parallel or of zero length.
    """
    ax, ay = _xy(a); bx, by = _xy(b); cx, cy = _xy(c); px, py = _xy(p)
    e0x, e0y = bx - ax, by - ay
    e1x, e1y = cx - ax, cy - ay
    det = e0x * e1y - e0y * e1x
    scale = math.hypot(e0x, e0y) * math.hypot(e1x, e1y)
    if scale == 0.0 or not math.isfinite(det) or abs(det) <= EPS_DEGENERATE * scale:
        raise DegenerateTriangleError(
            f"degenerate triangle {(ax, ay)}, {(bx, by)}, {(cx, cy)} (det={det:.3e})",
            corners=((ax, ay), (bx, by), (cx, cy)))
    dx, dy = px - ax, py - ay
    t0 = (dx * e1y - dy * e1x) / det
    t1 = (e0x * dy - e0y * dx) / det
    return t0 > 0.0 and t1 > 0.0 and (t0 + t1) < 1.0
