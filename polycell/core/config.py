"""Configuration objects for polycell mesh construction."""
from __future__ import annotations

from dataclasses import dataclass

DEGENERATE_POLICIES = ('skip', 'raise')


@dataclass
class MeshConfig:
    """Mesh builder options.

    Attributes
    ----------
    value_default : float
        Initial payload stored in every mesh cell.
    on_degenerate : str
        What to do with a zero-area candidate triangle: ``'skip'`` logs and
        drops it, ``'raise'`` aborts construction with the
        ``DegenerateTriangleError``.
    check_self_intersections : bool
        Reject self-intersecting borders before triangulating. The check is
        O(n^2) in the number of border vertices.
    """
    value_default: float = 0.0
    on_degenerate: str = 'skip'
    check_self_intersections: bool = True

    def __post_init__(self):
        if self.on_degenerate not in DEGENERATE_POLICIES:
            raise ValueError(
                f"on_degenerate must be one of {DEGENERATE_POLICIES}, got {self.on_degenerate!r}")
        self.value_default = float(self.value_default)


__all__ = ['MeshConfig', 'DEGENERATE_POLICIES']
