"""Public package API for polycell.

polycell meshes the interior of a simple polygon with triangles and derives
per-cell adjacency for finite-volume style solvers. This facade provides a
flat import surface on top of ``polycell.core`` and defers the matplotlib
import of the plotting helpers until first use.

Example
-------
    from polycell import Domain

    domain = Domain.from_border([(0, 0), (4, 0), (4, 3), (2, 1), (0, 3)])
    domain.to_vtu('domain.vtu')
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("polycell")
except _NotFound:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

from .core.config import MeshConfig
from .core.constants import EPS_AREA, EPS_DEGENERATE
from .core.domain import Domain, MeshCell, classify_candidates
from .core.errors import (
    DegenerateTriangleError,
    InvalidBorderError,
    MeshIndexError,
    NonManifoldEdgeError,
    TriangulationError,
)
from .core.geometry import point_in_triangle, triangle_centroid, triangle_signed_area
from .core.io import write_vtu
from .core.logging_utils import configure_logging, get_logger
from .core.polygon import (
    point_in_polygon,
    polygon_has_self_intersections,
    polygon_signed_area,
    validate_border,
)
from .core.triangulation import Triangle, delaunay_triangulate
from .core.vertex import Vertex


def plot_domain(*args, **kwargs):
    """Lazy wrapper around ``polycell.core.visualization.plot_domain``."""
    return _imp('polycell.core.visualization').plot_domain(*args, **kwargs)


__all__ = [
    '__version__',
    # data model
    'Vertex', 'Triangle', 'MeshCell', 'Domain', 'MeshConfig',
    # predicates
    'point_in_polygon', 'point_in_triangle', 'polygon_signed_area',
    'polygon_has_self_intersections', 'validate_border',
    'triangle_centroid', 'triangle_signed_area',
    # pipeline pieces
    'delaunay_triangulate', 'classify_candidates',
    # errors
    'InvalidBorderError', 'DegenerateTriangleError', 'MeshIndexError',
    'TriangulationError', 'NonManifoldEdgeError',
    # io / viz / logging
    'write_vtu', 'plot_domain', 'configure_logging', 'get_logger',
    # tolerances
    'EPS_AREA', 'EPS_DEGENERATE',
]
