"""2D vertex value type.

Vertices order by ``(y, x)``: smaller y first, x breaks ties. The order only
provides a stable total order for sweep-style comparisons; it carries no
other spatial meaning.
"""
from __future__ import annotations

import math
from functools import total_ordering
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

__all__ = ['Vertex', 'as_vertex', 'vertices_to_points']


@total_ordering
class Vertex:
    __slots__ = ('x', 'y')

    def __init__(self, x: float, y: float):
        self.x = float(x)
        self.y = float(y)

    # Mutable via scale()/normalize(), so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vertex({self.x!r}, {self.y!r})"

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __lt__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return (self.y, self.x) < (other.y, other.x)

    def __add__(self, other: 'Vertex') -> 'Vertex':
        return Vertex(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vertex') -> 'Vertex':
        return Vertex(self.x - other.x, self.y - other.y)

    def __mul__(self, fac: float) -> 'Vertex':
        return self.scaled(fac)

    __rmul__ = __mul__

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def scale(self, fac: float) -> None:
        """Scale in place."""
        self.x *= fac
        self.y *= fac

    def scaled(self, fac: float) -> 'Vertex':
        return Vertex(self.x * fac, self.y * fac)

    def normalize(self) -> None:
        """Scale in place to unit length; raises ZeroDivisionError for the zero vector."""
        self.scale(1.0 / self._checked_norm())

    def normalized(self) -> 'Vertex':
        """Return a unit-length copy; raises ZeroDivisionError for the zero vector."""
        return self.scaled(1.0 / self._checked_norm())

    def _checked_norm(self) -> float:
        mag = self.norm()
        if mag == 0.0:
            raise ZeroDivisionError("cannot normalize the zero vector")
        return mag

    def copy(self) -> 'Vertex':
        return Vertex(self.x, self.y)

    def as_point(self) -> Tuple[float, float]:
        """Coordinate pair in the format consumed by the triangulator."""
        return (self.x, self.y)


PointLike = Union[Vertex, Sequence[float]]


def as_vertex(p: PointLike) -> Vertex:
    """Coerce a Vertex or an ``(x, y)`` pair into a new Vertex."""
    if isinstance(p, Vertex):
        return p.copy()
    x, y = p
    return Vertex(x, y)


def vertices_to_points(verts: Iterable[PointLike]) -> np.ndarray:
    """Return an ``(N, 2)`` float64 array of coordinates."""
    coords = [tuple(v) for v in verts]
    if not coords:
        return np.empty((0, 2), dtype=np.float64)
    return np.asarray(coords, dtype=np.float64).reshape(-1, 2)
