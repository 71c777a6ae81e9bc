"""Tests for Triangle index triples and the Delaunay collaborator."""
import pytest

from polycell.core.errors import MeshIndexError, TriangulationError
from polycell.core.triangulation import Triangle, delaunay_triangulate, triangles_from_flat
from polycell.core.vertex import Vertex

VERTS = [Vertex(0, 0), Vertex(1, 0), Vertex(1, 1), Vertex(0, 1)]


def test_triangle_holds_indices():
    t = Triangle(VERTS, [0, 1, 2])
    assert t.indices == (0, 1, 2)
    assert list(t) == [0, 1, 2]
    assert t[2] == 2
    assert t == Triangle(VERTS, (0, 1, 2))
    assert t != Triangle(VERTS, (0, 2, 1))


def test_triangle_edges_follow_corners():
    t = Triangle(VERTS, (2, 0, 3))
    assert t.edges() == [(0, 2), (0, 3), (2, 3)]


def test_triangle_geometry():
    t = Triangle(VERTS, (0, 1, 2))
    assert t.corners(VERTS) == (VERTS[0], VERTS[1], VERTS[2])
    assert t.centroid(VERTS) == Vertex(2.0 / 3.0, 1.0 / 3.0)
    assert t.signed_area(VERTS) == pytest.approx(0.5)


@pytest.mark.parametrize('indices', [(0, 1, 4), (-1, 0, 1), (0, 1, 100)])
def test_out_of_range_index_is_fatal(indices):
    with pytest.raises(MeshIndexError):
        Triangle(VERTS, indices)


def test_wrong_arity():
    with pytest.raises(MeshIndexError):
        Triangle(VERTS, (0, 1))


@pytest.mark.parametrize('indices', [(0.7, 1, 2), (0, 1.0, 2), ('0', 1, 2)])
def test_non_integer_index_is_rejected(indices):
    with pytest.raises(MeshIndexError):
        Triangle(VERTS, indices)


def test_delaunay_square():
    flat = delaunay_triangulate(VERTS)
    assert len(flat) == 6
    tris = triangles_from_flat(VERTS, flat)
    assert len(tris) == 2
    used = sorted({i for t in tris for i in t})
    assert used == [0, 1, 2, 3]
    area = sum(abs(t.signed_area(VERTS)) for t in tris)
    assert area == pytest.approx(1.0)


def test_delaunay_accepts_pairs_and_is_deterministic():
    pts = [(0, 0), (3, 0.2), (4, 2), (1.5, 3.1), (-0.5, 1.7)]
    assert delaunay_triangulate(pts) == delaunay_triangulate(pts)
    # convex pentagon: n - 2 triangles
    assert len(delaunay_triangulate(pts)) == 9


def test_delaunay_colinear_fails():
    with pytest.raises(TriangulationError):
        delaunay_triangulate([(0, 0), (1, 1), (2, 2), (3, 3)])


def test_delaunay_too_few_points():
    with pytest.raises(TriangulationError):
        delaunay_triangulate([(0, 0), (1, 1)])


def test_triangles_from_flat_rejects_partial_triple():
    with pytest.raises(MeshIndexError):
        triangles_from_flat(VERTS, [0, 1, 2, 3])
    with pytest.raises(MeshIndexError):
        triangles_from_flat(VERTS, [0, 1, 7])
