import math

import numpy as np
import pytest

from curvesweep.bezier import CubicBezier
from curvesweep.cross_section import CrossSection
from curvesweep.errors import MissingPathError
from curvesweep.extrude import TRIANGLE_LIST, OutputMesh, extrude
from curvesweep.geom import dot, sub, triangle_centroid, triangle_normal
from curvesweep.mesh_checks import faces_oriented, mesh_is_finite, mesh_watertight


SQUARE = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
SQUARE_TRIS = [0, 1, 2, 0, 2, 3]
WELL_POSED = [(0, 0, 0), (5, 2, 0), (10, -2, 5), (15, 0, 10)]


def _straight_path(points=2):
    curve = CubicBezier([(0, 0, 0), (0, 0, 1), (0, 0, 2), (0, 0, 3)])
    return curve.generate_path(points - 1)


def _hexagon(radius=0.5, **kwargs):
    loop = [(radius * math.cos(math.pi * i / 3), radius * math.sin(math.pi * i / 3))
            for i in range(6)]
    return CrossSection.from_polygon(loop, **kwargs)


def _face_normals(mesh):
    for tri in mesh.triangles():
        v = [mesh.positions[i] for i in tri]
        yield tri, triangle_normal(*v), triangle_centroid(*v)


def test_square_along_straight_line():
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS)
    path = _straight_path()
    mesh = extrude(shape, path)

    assert isinstance(mesh, OutputMesh)
    assert mesh.topology == TRIANGLE_LIST
    assert mesh.vertex_count == 8
    assert len(mesh.normals) == 8
    assert len(mesh.indices) == 4 * 1 * 6
    assert mesh.uvs is None

    # walls are parallel to the sweep direction and face away from the axis
    center = path[0].local_to_world((0.5, 0.5, 0.0))
    for tri, normal, centroid in _face_normals(mesh):
        assert abs(normal[2]) < 1e-9
        radial = (centroid[0] - center[0], centroid[1] - center[1], 0.0)
        assert dot(normal, radial) > 0


def test_ring_vertices_follow_frames():
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS)
    path = CubicBezier(WELL_POSED).generate_path(4)
    mesh = extrude(shape, path)
    for i, point in enumerate(path):
        for j, vertex in enumerate(shape.vertices):
            assert mesh.positions[i * 4 + j] == point.local_to_world(vertex)
            assert mesh.normals[i * 4 + j] == point.local_to_world_direction(shape.normals[j])


def test_index_buffer_is_reversed():
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS)
    mesh = extrude(shape, _straight_path())
    # first outline edge (0, 1) of segment 0 is written first, so ends up last
    assert mesh.indices[-6:] == [4, 5, 1, 1, 0, 4]
    # last outline edge (3, 0) ends up first
    assert mesh.indices[:6] == [7, 4, 0, 0, 3, 7]


def test_triangle_along_curve():
    shape = CrossSection.from_outline_mesh([(0, 0, 0), (0.5, 0, 0), (0, 0.5, 0)], [0, 1, 2])
    mesh = extrude(shape, CubicBezier(WELL_POSED).generate_path(2))
    assert mesh.vertex_count == 9
    assert len(mesh.indices) == 3 * 2 * 6
    assert mesh_is_finite(mesh)
    assert max(mesh.indices) < mesh.vertex_count


def test_walls_face_outward_on_curved_path():
    shape = _hexagon()
    path = CubicBezier(WELL_POSED).generate_path(24)
    mesh = extrude(shape, path)
    count = len(shape.vertices)
    for tri, normal, centroid in _face_normals(mesh):
        ring = min(tri) // count
        assert dot(normal, sub(centroid, path[ring].position)) > 0
        for idx in tri:
            assert dot(mesh.normals[idx], normal) > 0


def test_uvs_use_u_coords_and_path_v():
    shape = _hexagon(with_uvs=True)
    curve = CubicBezier(WELL_POSED)
    path = curve.generate_path(5)
    mesh = extrude(shape, path)
    assert mesh.uvs is not None
    assert len(mesh.uvs) == mesh.vertex_count
    for i, point in enumerate(path):
        for j, u in enumerate(shape.u_coords):
            assert mesh.uvs[i * 6 + j] == (u, point.v)
    assert mesh.uvs[-1][1] == curve.sampled_lengths[-1]


def test_missing_path():
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS)
    with pytest.raises(MissingPathError):
        extrude(shape, _straight_path()[:1])
    with pytest.raises(MissingPathError):
        extrude(shape, [])


def test_open_tube_is_not_watertight():
    shape = _hexagon()
    mesh = extrude(shape, CubicBezier(WELL_POSED).generate_path(6))
    result = mesh_watertight(mesh)
    assert not result
    assert '12 boundary edges' in result.warnings[0]
    assert faces_oriented(mesh)


def test_caps_close_the_tube():
    shape = _hexagon()
    segments = 6
    mesh = extrude(shape, CubicBezier(WELL_POSED).generate_path(segments), caps=True)
    assert len(mesh.indices) == 6 * shape.edge_count * segments + 2 * len(shape.face_indices)
    assert mesh_watertight(mesh)
    assert faces_oriented(mesh)


def test_caps_face_away_from_the_tube():
    shape = CrossSection.from_polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
    path = _straight_path()
    mesh = extrude(shape, path, caps=True)
    forward = path[0].forward()
    start_cap = []
    end_cap = []
    for tri, normal, centroid in _face_normals(mesh):
        if max(tri) < 4:
            start_cap.append(dot(normal, forward))
        elif min(tri) >= 4:
            end_cap.append(dot(normal, forward))
    assert start_cap == pytest.approx([-1.0, -1.0])
    assert end_cap == pytest.approx([1.0, 1.0])


def test_degenerate_frame_propagates_nan():
    shape = CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS)
    # tangent at t=0.5 is vertical for this curve
    path = CubicBezier([(0, 0, 0), (0, 0, 10), (0, 10, 0), (0, 10, 10)]).generate_path(2)
    mesh = extrude(shape, path)
    result = mesh_is_finite(mesh)
    assert not result
    assert any(math.isnan(c) for c in mesh.positions[4])


def test_extrusion_is_deterministic():
    shape = _hexagon(with_uvs=True)
    curve = CubicBezier(WELL_POSED)
    a = extrude(shape, curve.generate_path(9), caps=True)
    b = extrude(shape, curve.generate_path(9), caps=True)
    assert a == b


def test_as_arrays():
    shape = _hexagon(with_uvs=True)
    mesh = extrude(shape, CubicBezier(WELL_POSED).generate_path(3))
    arrays = mesh.as_arrays()
    assert arrays['positions'].dtype == np.float32
    assert arrays['positions'].shape == (24, 3)
    assert arrays['normals'].shape == (24, 3)
    assert arrays['uvs'].shape == (24, 2)
    assert arrays['indices'].dtype == np.uint32
    assert arrays['indices'].shape == (len(mesh.indices),)

    plain = extrude(CrossSection.from_outline_mesh(SQUARE, SQUARE_TRIS), _straight_path())
    assert 'uvs' not in plain.as_arrays()


def test_to_trimesh():
    trimesh = pytest.importorskip('trimesh')
    mesh = extrude(_hexagon(), CubicBezier(WELL_POSED).generate_path(8), caps=True)
    tm = mesh.to_trimesh()
    assert isinstance(tm, trimesh.Trimesh)
    assert len(tm.faces) == mesh.triangle_count
    assert tm.is_watertight
    assert tm.volume > 0
