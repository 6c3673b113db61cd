"""Cross-sections: the 2D profile swept along a path.

A :class:`CrossSection` is derived from a small triangulated outline
mesh, normally lying in the XY plane.  Besides the vertices it keeps
the boundary ("outline") edges of that mesh, which are the only edges
that become walls when swept, plus a per-vertex normal for shading.

Outline normals are computed in vertex-array order: vertex ``i`` is
assumed to be joined to vertex ``i + 1`` by an outline edge.  Meshes
stored as an ordered fan or strip satisfy that; for anything else the
normals are meaningless.  :meth:`CrossSection.from_polygon` always
produces a mesh that satisfies it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from curvesweep.errors import MalformedOutlineError
from curvesweep.geom import Vec3, add, dist, normalize, signed_area_xy, sub, to_vec3
from curvesweep.triangulator import clean_loop, triangulate_indices

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


@dataclass
class CrossSection:
    """Swept profile: vertices, outline normals, outline edges and U coordinates."""

    vertices: List[Vec3]
    normals: List[Vec3]
    outline_edges: List[int]
    face_indices: List[int] = field(default_factory=list)
    u_coords: List[float] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return len(self.outline_edges) // 2

    @property
    def has_uvs(self) -> bool:
        return bool(self.u_coords)

    def edges(self) -> List[Edge]:
        """Outline edges as ``(a, b)`` pairs."""
        e = self.outline_edges
        return [(e[i], e[i + 1]) for i in range(0, len(e), 2)]

    @classmethod
    def from_outline_mesh(cls, vertices: Optional[Sequence[Sequence[float]]],
                          indices: Optional[Sequence[int]],
                          uvs: Optional[Sequence[Sequence[float]]] = None) -> 'CrossSection':
        """Build a cross-section from a triangulated 2D mesh.

        ``vertices`` are copied verbatim (Z included).  ``indices`` is a
        flat triangle list.  When ``uvs`` has one entry per vertex, the
        first component of each becomes the vertex's U coordinate;
        otherwise UVs are ignored.

        Raises :class:`~curvesweep.errors.MalformedOutlineError` if the
        positions or the index buffer are missing, the index count is
        not a multiple of three, or an index is out of range.
        """

        if vertices is None or len(vertices) == 0:
            raise MalformedOutlineError('outline mesh has no vertex positions')
        if indices is None:
            raise MalformedOutlineError('outline mesh has no index buffer')
        if len(indices) % 3 != 0:
            raise MalformedOutlineError(
                'outline index count {} is not a multiple of 3'.format(len(indices)))

        try:
            verts = [to_vec3(v) for v in vertices]
        except ValueError as exc:
            raise MalformedOutlineError('outline vertices must have three components') from exc

        face_indices = [int(i) for i in indices]
        bad = [i for i in face_indices if i < 0 or i >= len(verts)]
        if bad:
            raise MalformedOutlineError(
                'outline indices out of range for {} vertices: {}'.format(len(verts), sorted(set(bad))))

        edges = outline_edges(face_indices)
        u_coords = _u_coords(uvs, len(verts))
        normals = outline_normals(verts)

        logger.debug('cross-section: %d vertices, %d outline edges, %d triangles, uvs=%s',
                     len(verts), len(edges), len(face_indices) // 3, bool(u_coords))

        return cls(
            vertices=verts,
            normals=normals,
            outline_edges=[i for edge in edges for i in edge],
            face_indices=face_indices,
            u_coords=u_coords,
        )

    @classmethod
    def from_polygon(cls, points: Sequence[Sequence[float]], *,
                     with_uvs: bool = False) -> 'CrossSection':
        """Build a cross-section from an ordered outline loop.

        Points may be 2D (Z is taken as 0) or 3D.  A repeated closing
        point is dropped.  The loop is rewound clockwise in XY so the
        outline normals face outward, and triangulated with every
        triangle counter-clockwise, which makes the swept walls face
        outward too.  With ``with_uvs`` the U coordinate runs from 0 at
        the first vertex along the perimeter.
        """

        lifted = [_lift(p) for p in points]
        keep = clean_loop(lifted)
        loop = [lifted[i] for i in keep]
        if len(loop) < 3:
            raise MalformedOutlineError('outline polygon needs at least 3 distinct points')
        if signed_area_xy(loop) > 0:
            loop = [loop[0]] + loop[:0:-1]

        triangles = triangulate_indices(loop, ccw=True)
        if not triangles:
            raise MalformedOutlineError('outline polygon could not be triangulated')
        indices = [i for tri in triangles for i in tri]

        uvs = None
        if with_uvs:
            uvs = [(u, 0.0) for u in perimeter_fractions(loop)]

        return cls.from_outline_mesh(loop, indices, uvs)


def outline_edges(face_indices: Sequence[int]) -> List[Edge]:
    """Return the boundary edges of a triangle list.

    Every triangle ``(a, b, c)`` contributes ``(a, b)``, ``(b, c)`` and
    ``(c, a)``.  An edge is interior iff its reverse occurs anywhere in
    that list; the survivors are returned in emission order.
    """

    edges: List[Edge] = []
    for i in range(0, len(face_indices), 3):
        a, b, c = face_indices[i], face_indices[i + 1], face_indices[i + 2]
        edges.append((a, b))
        edges.append((b, c))
        edges.append((c, a))

    present = set(edges)
    return [edge for edge in edges if (edge[1], edge[0]) not in present]


def outline_normals(vertices: Sequence[Vec3]) -> List[Vec3]:
    """Per-vertex normals from the edges to the next and previous vertex.

    Edge ``i`` runs from vertex ``i`` to ``i + 1`` (wrapping); its
    normal is the edge vector turned 90 degrees counter-clockwise in XY
    with Z carried through.  Each vertex normal is the normalized sum of
    its two adjacent edge normals.
    """

    count = len(vertices)
    edge_normals = []
    for i in range(count):
        dx, dy, dz = sub(vertices[(i + 1) % count], vertices[i])
        edge_normals.append(normalize((-dy, dx, dz)))

    return [normalize(add(edge_normals[i], edge_normals[(i - 1) % count]))
            for i in range(count)]


def perimeter_fractions(loop: Sequence[Vec3]) -> List[float]:
    """Cumulative perimeter distance of each vertex, as a fraction of the closed perimeter."""

    total = 0.0
    running = [0.0]
    for i in range(1, len(loop)):
        total += dist(loop[i - 1], loop[i])
        running.append(total)
    total += dist(loop[-1], loop[0])
    if total == 0.0:
        return [0.0] * len(loop)
    return [r / total for r in running]


def _u_coords(uvs, vertex_count: int) -> List[float]:
    if uvs is None:
        return []
    try:
        if len(uvs) != vertex_count:
            logger.debug('ignoring uvs: %d entries for %d vertices', len(uvs), vertex_count)
            return []
        return [float(uv[0]) for uv in uvs]
    except (TypeError, ValueError, IndexError) as exc:
        logger.debug('ignoring malformed uvs: %s', exc)
        return []


def _lift(p: Sequence[float]) -> Vec3:
    if len(p) == 2:
        return (float(p[0]), float(p[1]), 0.0)
    return to_vec3(p)


__all__ = [
    'CrossSection',
    'outline_edges',
    'outline_normals',
    'perimeter_fractions',
]
