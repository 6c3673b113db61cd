import math

import pytest

from curvesweep.cross_section import (
    CrossSection,
    outline_edges,
    outline_normals,
    perimeter_fractions,
)
from curvesweep.errors import CurveSweepError, MalformedOutlineError
from curvesweep.geom import dot, mag, signed_area_xy, sub


SQUARE = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
SQUARE_TRIS = [0, 1, 2, 0, 2, 3]


def test_square_outline_edges():
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS)
    assert shape.outline_edges == [0, 1, 1, 2, 2, 3, 3, 0]
    assert shape.edges() == [(0, 1), (1, 2), (2, 3), (3, 0)]
    assert shape.edge_count == 4
    assert shape.face_indices == SQUARE_TRIS
    assert len(shape.normals) == len(shape.vertices) == 4
    assert not shape.has_uvs


def test_interior_edges_removed():
    # fan of four triangles around a centre vertex
    verts = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0.5, 0.5, 0)]
    tris = [0, 1, 4, 1, 2, 4, 2, 3, 4, 3, 0, 4]
    edges = outline_edges(tris)
    assert sorted(edges) == [(0, 1), (1, 2), (2, 3), (3, 0)]
    assert len(set(edges)) == len(edges)
    for a, b in edges:
        assert (b, a) not in edges


def test_single_triangle_keeps_all_edges():
    assert outline_edges([0, 1, 2]) == [(0, 1), (1, 2), (2, 0)]


def test_vertices_copied_verbatim():
    verts = [(0, 0, 0.25), (2, 0, 0.25), (0, 3, 0.25)]
    shape = CrossSection.from_outline_mesh(verts, [0, 1, 2])
    assert shape.vertices == [(0.0, 0.0, 0.25), (2.0, 0.0, 0.25), (0.0, 3.0, 0.25)]


def test_square_normals():
    normals = outline_normals([tuple(map(float, v)) for v in SQUARE])
    h = math.sqrt(0.5)
    assert normals[0] == pytest.approx((h, h, 0.0))
    assert normals[2] == pytest.approx((-h, -h, 0.0))
    for n in normals:
        assert mag(n) == pytest.approx(1.0)


def test_normals_carry_z():
    verts = [(0.0, 0.0, 0.0), (1.0, 0.0, 1.0), (0.0, 1.0, 0.0)]
    normals = outline_normals(verts)
    assert normals[0][2] != 0.0


def test_u_coords_from_uvs():
    uvs = [(0.0, 0.9), (0.25, 0.8), (0.5, 0.7), (0.75, 0.6)]
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS, uvs)
    assert shape.u_coords == [0.0, 0.25, 0.5, 0.75]
    assert shape.has_uvs


def test_malformed_uvs_ignored():
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS, [(0.0, 0.0)])
    assert shape.u_coords == []
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS, [(), (), (), ()])
    assert shape.u_coords == []
    # flat list instead of pairs
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS, [0.0, 0.25, 0.5, 0.75])
    assert shape.u_coords == []
    assert len(shape.vertices) == 4
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS,
                                           [('a', 0), ('b', 0), ('c', 0), ('d', 0)])
    assert shape.u_coords == []
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS, 7)
    assert not shape.has_uvs


@pytest.mark.parametrize('vertices, indices', [
    (None, SQUARE_TRIS),
    ([], SQUARE_TRIS),
    (SQUARE, None),
    (SQUARE, [0, 1, 2, 3]),
    (SQUARE, [0, 1, 7]),
    ([(0, 0), (1, 0), (0, 1)], [0, 1, 2]),
])
def test_malformed_outline(vertices, indices):
    with pytest.raises(MalformedOutlineError):
        CrossSection.from_outline_mesh(vertices, indices)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        CrossSection.from_outline_mesh(SQUARE, None)
    assert issubclass(MalformedOutlineError, CurveSweepError)


def test_from_polygon_rewinds_clockwise():
    shape = CrossSection.from_polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
    assert shape.vertices == [(0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 1.0, 0.0), (1.0, 0.0, 0.0)]
    assert signed_area_xy(shape.vertices) < 0
    assert len(shape.face_indices) == 6
    assert shape.edge_count == 4


def test_from_polygon_normals_point_outward():
    hexagon = [(math.cos(math.pi * i / 3), math.sin(math.pi * i / 3)) for i in range(6)]
    shape = CrossSection.from_polygon(hexagon)
    for v, n in zip(shape.vertices, shape.normals):
        assert dot(n, v) > 0.8


def test_from_polygon_outline_follows_boundary():
    # concave L shape
    loop = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]
    shape = CrossSection.from_polygon(loop)
    count = len(shape.vertices)
    assert count == 6
    assert len(shape.face_indices) == 12
    edges = shape.edges()
    assert len(edges) == 6
    for a, b in edges:
        assert (a - b) % count in (1, count - 1)
    # triangles are counter-clockwise
    f = shape.face_indices
    for i in range(0, len(f), 3):
        tri = [shape.vertices[f[i]], shape.vertices[f[i + 1]], shape.vertices[f[i + 2]]]
        assert signed_area_xy(tri) > 0


def test_from_polygon_drops_closing_point():
    shape = CrossSection.from_polygon([(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)])
    assert len(shape.vertices) == 4


def test_from_polygon_uvs():
    shape = CrossSection.from_polygon([(0, 0), (0, 1), (1, 1), (1, 0)], with_uvs=True)
    assert shape.u_coords == pytest.approx([0.0, 0.25, 0.5, 0.75])


def test_from_polygon_too_small():
    with pytest.raises(MalformedOutlineError):
        CrossSection.from_polygon([(0, 0), (1, 0), (1, 0)])


def test_perimeter_fractions():
    loop = [(0.0, 0.0, 0.0), (3.0, 0.0, 0.0), (3.0, 4.0, 0.0)]
    assert perimeter_fractions(loop) == pytest.approx([0.0, 0.25, 0.5833333333])
