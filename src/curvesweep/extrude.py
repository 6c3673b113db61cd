## sweep a cross-section along a path of oriented points

## Copyright (c) 2024 curvesweep contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Extrusion of a :class:`~curvesweep.cross_section.CrossSection` along a path.

:func:`extrude` places one copy ("ring") of the cross-section at each
oriented point of the path and stitches neighbouring rings together
with two triangles per outline edge.  The result is an
:class:`OutputMesh`: flat position, normal, optional UV and index
buffers in triangle-list order, ready to be handed to whatever renders
them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

try:
    import trimesh
except ImportError:  # pragma: no cover - optional dependency
    trimesh = None  # type: ignore[assignment]

from curvesweep.cross_section import CrossSection
from curvesweep.errors import MissingPathError
from curvesweep.geom import Vec2, Vec3
from curvesweep.oriented_point import OrientedPoint

logger = logging.getLogger(__name__)

TRIANGLE_LIST = 'triangle_list'
MAX_INDEX = 2 ** 32 - 1


@dataclass
class OutputMesh:
    """Triangle-list mesh produced by :func:`extrude`.

    ``uvs`` is ``None`` when the cross-section had no U coordinates.
    """

    positions: List[Vec3]
    normals: List[Vec3]
    uvs: Optional[List[Vec2]]
    indices: List[int]
    topology: str = TRIANGLE_LIST

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def triangles(self) -> Iterator[Tuple[int, int, int]]:
        idx = self.indices
        for i in range(0, len(idx) - 2, 3):
            yield idx[i], idx[i + 1], idx[i + 2]

    def as_arrays(self) -> dict:
        """Return the buffers as numpy arrays.

        Positions, normals and UVs are ``float32``; indices are
        ``uint32``.  The ``'uvs'`` key is present only when the mesh has
        UVs.
        """
        arrays = {
            'positions': np.asarray(self.positions, dtype=np.float32).reshape(-1, 3),
            'normals': np.asarray(self.normals, dtype=np.float32).reshape(-1, 3),
            'indices': np.asarray(self.indices, dtype=np.uint32),
        }
        if self.uvs is not None:
            arrays['uvs'] = np.asarray(self.uvs, dtype=np.float32).reshape(-1, 2)
        return arrays

    def to_trimesh(self) -> "trimesh.Trimesh":
        """Convert to a ``trimesh.Trimesh`` (requires the optional ``trimesh`` package)."""
        if trimesh is None:  # pragma: no cover - optional dependency
            raise RuntimeError("trimesh is not installed")
        arrays = self.as_arrays()
        return trimesh.Trimesh(
            vertices=arrays['positions'].astype(np.float64),
            faces=arrays['indices'].astype(np.int64).reshape(-1, 3),
            vertex_normals=arrays['normals'].astype(np.float64),
            process=False,
        )


def extrude(shape: CrossSection, path: Sequence[OrientedPoint], *,
            caps: bool = False) -> OutputMesh:
    """Sweep ``shape`` along ``path``.

    The mesh has ``len(path)`` rings of ``len(shape.vertices)`` vertices.
    Ring ``i``, vertex ``j`` is ``path[i].local_to_world(vertex j)``, its
    normal is the cross-section normal rotated into the frame, and its
    UV (when the shape has U coordinates) is ``(u[j], path[i].v)``.

    Each outline edge ``(alpha, beta)`` and segment ``i`` gives the quad
    ``a = (i+1)V+alpha, b = iV+alpha, c = iV+beta, d = (i+1)V+beta`` as
    triangles ``(a, b, c)`` and ``(c, d, a)``.  The whole index list is
    then reversed, which flips every triangle so walls face outward.

    Without ``caps`` the ends are left open and the index buffer holds
    exactly ``6 * edges * segments`` entries.  With ``caps`` the shape's
    own triangles close ring 0 (facing backward) and the last ring
    (facing forward).

    Raises :class:`~curvesweep.errors.MissingPathError` for paths with
    fewer than two points.
    """

    if len(path) < 2:
        raise MissingPathError('extrusion path needs at least 2 points, got {}'.format(len(path)))

    shape_vertex_count = len(shape.vertices)
    segments = len(path) - 1
    edge_loops = len(path)
    vertex_count = shape_vertex_count * edge_loops
    if vertex_count - 1 > MAX_INDEX:
        raise ValueError('extrusion would need {} vertices, more than 32-bit indices allow'.format(vertex_count))

    has_uvs = bool(shape.u_coords)
    positions: List[Vec3] = []
    normals: List[Vec3] = []
    uvs: Optional[List[Vec2]] = [] if has_uvs else None

    # rings
    for point in path:
        for j in range(shape_vertex_count):
            positions.append(point.local_to_world(shape.vertices[j]))
            normals.append(point.local_to_world_direction(shape.normals[j]))
            if has_uvs:
                uvs.append((shape.u_coords[j], point.v))

    # walls
    edges = shape.outline_edges
    indices: List[int] = []
    for i in range(segments):
        offset = i * shape_vertex_count
        for k in range(0, len(edges) - 1, 2):
            a = offset + edges[k] + shape_vertex_count
            b = offset + edges[k]
            c = offset + edges[k + 1]
            d = offset + edges[k + 1] + shape_vertex_count
            indices.extend((a, b, c, c, d, a))

    if caps:
        indices.extend(_cap_indices(shape.face_indices, 0, reverse=True))
        last = (edge_loops - 1) * shape_vertex_count
        indices.extend(_cap_indices(shape.face_indices, last, reverse=False))

    indices.reverse()

    logger.debug('extruded %d vertices, %d triangles over %d segments (caps=%s)',
                 vertex_count, len(indices) // 3, segments, caps)

    return OutputMesh(positions=positions, normals=normals, uvs=uvs, indices=indices)


def _cap_indices(face_indices: Sequence[int], offset: int, *, reverse: bool) -> List[int]:
    # written before the final reversal of the whole buffer
    result: List[int] = []
    for i in range(0, len(face_indices) - 2, 3):
        a = face_indices[i] + offset
        b = face_indices[i + 1] + offset
        c = face_indices[i + 2] + offset
        if reverse:
            result.extend((c, b, a))
        else:
            result.extend((a, b, c))
    return result


__all__ = ['OutputMesh', 'extrude', 'TRIANGLE_LIST']
