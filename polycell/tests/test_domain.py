"""End-to-end tests for mesh construction."""
import math

import numpy as np
import pytest

from polycell.core.config import MeshConfig
from polycell.core.domain import Domain, MeshCell, classify_candidates
from polycell.core.errors import DegenerateTriangleError, InvalidBorderError, MeshIndexError
from polycell.core.polygon import point_in_polygon, polygon_signed_area
from polycell.core.triangulation import Triangle
from polycell.core.vertex import Vertex

DEMO = [(-9.30, 7.58), (6.72, 7.62), (7.00, -1.00), (-1.58, -7.18),
        (-10.50, -4.18), (-5.14, -1.24), (-3.90, 2.82)]

ELLIPSE = [(2.0 * math.cos(a), math.sin(a)) for a in (0.1, 0.8, 1.3, 2.2, 2.9, 3.5, 4.1, 5.0, 5.7)]


def _assert_adjacency_consistent(domain):
    for a, cell in enumerate(domain.cells):
        tri = cell.triangle
        for k, b in enumerate(cell.neighbors):
            if b is None:
                continue
            assert b != a
            edge = tuple(sorted((tri[k], tri[(k + 1) % 3])))
            other = domain.cells[b]
            back = [j for j, n in enumerate(other.neighbors) if n == a]
            assert len(back) == 1
            j = back[0]
            assert tuple(sorted((other.triangle[j], other.triangle[(j + 1) % 3]))) == edge
        assert cell.is_boundary == (cell.n_neighbors < 3)


class TestRectangle:

    def test_border_order(self):
        d = Domain.from_rect((0, 0), (2, 1))
        assert d.border == (Vertex(0, 0), Vertex(0, 1), Vertex(2, 1), Vertex(2, 0))
        assert d.n_border == 4

    def test_two_boundary_cells(self):
        d = Domain.from_rect(Vertex(0, 0), Vertex(1, 1))
        assert len(d.candidates) == 2
        assert d.n_cells == 2
        assert not d.is_empty
        for cell in d.cells:
            assert cell.is_boundary
            assert cell.n_neighbors == 1
        assert d.cells[0].neighbors.count(1) == 1
        assert d.cells[1].neighbors.count(0) == 1
        assert d.area() == pytest.approx(1.0)
        _assert_adjacency_consistent(d)

    def test_centroids_and_payload(self):
        d = Domain.from_rect((0, 0), (1, 1), config=MeshConfig(value_default=2.5))
        for cell in d.cells:
            assert cell.value == 2.5
            assert cell.center == cell.triangle.centroid(d.vertices)
            assert point_in_polygon(d.border, cell.center)

    def test_locate(self):
        d = Domain.from_rect((0, 0), (1, 1))
        i = d.locate((0.3, 0.1))
        assert i is not None
        assert d.locate((5, 5)) is None
        assert d.contains((0.5, 0.5))
        assert d.contains(Vertex(0.5, 0.5))
        assert not d.contains((1.5, 0.5))


class TestConvex:

    def test_no_candidate_is_dropped(self):
        d = Domain.from_border(ELLIPSE)
        assert len(d.candidates) == len(ELLIPSE) - 2
        assert d.n_cells == len(d.candidates)
        assert d.exterior_candidates() == []
        assert d.area() == pytest.approx(abs(polygon_signed_area(ELLIPSE)))
        _assert_adjacency_consistent(d)

    def test_interior_cell_in_fan(self):
        d = Domain.from_border(ELLIPSE)
        # 7 triangles of a 9-gon: the dual graph is a tree with 6 links
        links = sum(c.n_neighbors for c in d.cells)
        assert links == 2 * (d.n_cells - 1)


class TestConcaveDemo:

    def test_cells_inside_and_notch_removed(self):
        d = Domain.from_border(DEMO)
        assert len(d.candidates) == 7
        assert 0 < d.n_cells < len(d.candidates)
        for cell in d.cells:
            assert point_in_polygon(DEMO, cell.center)
        # hull edge 0-4 spans the notch and is not a border edge
        for cell in d.cells:
            assert not {0, 4} <= set(cell.triangle.indices)
        assert any({0, 4} <= set(t.indices) for t in d.exterior_candidates())
        _assert_adjacency_consistent(d)

    def test_area_bounded_by_polygon(self):
        d = Domain.from_border(DEMO)
        hull_area = sum(abs(t.signed_area(d.vertices)) for t in d.candidates)
        assert d.area() < hull_area
        assert d.area() == pytest.approx(sum(d.cell_areas()))

    def test_deterministic(self):
        a = Domain.from_border(DEMO)
        b = Domain.from_border([Vertex(x, y) for x, y in DEMO])
        assert np.array_equal(a.cell_triangles(), b.cell_triangles())
        assert [c.neighbors for c in a.cells] == [c.neighbors for c in b.cells]
        assert a.interior_candidates() == b.interior_candidates()

    def test_survivors_match_independent_classification(self):
        d = Domain.from_border(DEMO)
        expected = [i for i, t in enumerate(d.candidates)
                    if point_in_polygon(DEMO, t.centroid(d.vertices))]
        assert list(d.interior_candidates()) == expected
        assert [c.triangle for c in d.cells] == [d.candidates[i] for i in expected]

    def test_cell_arrays(self):
        d = Domain.from_border(DEMO)
        tris = d.cell_triangles()
        assert tris.shape == (d.n_cells, 3)
        assert tris.dtype == np.int32
        assert tris.max() < d.n_border
        assert d.cell_ids().tolist() == list(range(d.n_cells))
        assert d.points().shape == (7, 2)


class TestFailureModes:

    def test_invalid_border_aborts_before_triangulation(self):
        calls = []

        def tri_fn(verts):
            calls.append(verts)
            return [0, 1, 2]

        with pytest.raises(InvalidBorderError):
            Domain.from_border([(0, 0), (2, 2), (0, 2), (3, 0)], triangulator=tri_fn)
        with pytest.raises(InvalidBorderError):
            Domain.from_border([(0, 0), (1, 0)], triangulator=tri_fn)
        assert calls == []

    def test_out_of_range_index_from_triangulator(self):
        with pytest.raises(MeshIndexError):
            Domain.from_border(DEMO, triangulator=lambda verts: [0, 1, 99])

    def test_empty_mesh_is_not_an_error(self):
        # only the notch triangle: its centroid is outside
        d = Domain.from_border(DEMO, triangulator=lambda verts: [0, 4, 5])
        assert d.is_empty
        assert d.n_cells == 0
        assert len(d.candidates) == 1
        assert d.cell_triangles().shape == (0, 3)
        assert d.area() == 0.0
        assert d.locate((0, 0)) is None

    def test_degenerate_candidate_skipped(self):
        border = [(0, 0), (1, 0), (2, 0), (2, 1), (0, 1)]
        fan = [0, 1, 2, 0, 2, 3, 0, 3, 4]
        d = Domain.from_border(border, triangulator=lambda verts: fan)
        assert d.n_cells == 2
        assert d.exterior_candidates() == [d.candidates[0]]
        assert d.cells[0].neighbors.count(1) == 1
        assert d.area() == pytest.approx(2.0)

    def test_degenerate_candidate_raises_on_request(self):
        border = [(0, 0), (1, 0), (2, 0), (2, 1), (0, 1)]
        fan = [0, 1, 2, 0, 2, 3, 0, 3, 4]
        with pytest.raises(DegenerateTriangleError):
            Domain.from_border(border, config=MeshConfig(on_degenerate='raise'),
                               triangulator=lambda verts: fan)

    def test_bad_policy(self):
        with pytest.raises(ValueError):
            MeshConfig(on_degenerate='ignore')


def test_classify_candidates_directly():
    verts = [Vertex(x, y) for x, y in DEMO]
    cands = [Triangle(verts, (0, 4, 5)), Triangle(verts, (1, 2, 3))]
    assert classify_candidates(verts, verts, cands) == [1]


def test_mesh_cell_is_frozen():
    d = Domain.from_rect((0, 0), (1, 1))
    cell = d.cells[0]
    assert isinstance(cell, MeshCell)
    with pytest.raises(AttributeError):
        cell.value = 3.0
    assert isinstance(d.cells, tuple)


def test_returned_vertices_are_copies():
    d = Domain.from_rect((0, 0), (2, 1))
    area = d.area()
    center = d.cells[0].center
    d.vertices[2].scale(10.0)
    d.border[0].scale(3.0)
    d.cells[0].center.scale(5.0)
    assert d.area() == pytest.approx(area)
    assert d.vertices == d.border
    assert d.cells[0].center == center
    assert d.locate((1.5, 0.1)) is not None


def test_small_border_is_meshed():
    side = 1e-7
    d = Domain.from_rect((0, 0), (side, side))
    assert d.n_cells == 2
    assert d.area() == pytest.approx(side * side)
