"""Validation helpers for extruded meshes."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List

from curvesweep.extrude import OutputMesh
from curvesweep.geom import isfinite3


def mesh_is_finite(mesh: OutputMesh) -> "CheckResult":
    """Flag NaN or infinite positions and normals.

    Degenerate curve frames (vertical tangents, coincident control
    points) show up here.
    """

    bad_positions = [i for i, p in enumerate(mesh.positions) if not isfinite3(p)]
    bad_normals = [i for i, n in enumerate(mesh.normals) if not isfinite3(n)]

    warnings: List[str] = []
    if bad_positions:
        warnings.append(f'{len(bad_positions)} non-finite positions, first at {bad_positions[0]}')
    if bad_normals:
        warnings.append(f'{len(bad_normals)} non-finite normals, first at {bad_normals[0]}')
    return CheckResult(not warnings, warnings)


def mesh_watertight(mesh: OutputMesh) -> "CheckResult":
    edges = Counter()

    for a, b, c in mesh.triangles():
        edges[_edge_key(a, b)] += 1
        edges[_edge_key(b, c)] += 1
        edges[_edge_key(c, a)] += 1

    boundary = [edge for edge, count in edges.items() if count == 1]
    invalid = [edge for edge, count in edges.items() if count > 2]

    warnings: List[str] = []
    ok = True
    if boundary:
        ok = False
        warnings.append(f'{len(boundary)} boundary edges detected')
    if invalid:
        ok = False
        warnings.append(f'edges with multiplicity >2: {invalid}')

    return CheckResult(ok, warnings)


def faces_oriented(mesh: OutputMesh) -> "CheckResult":
    """Check that neighbouring triangles agree on winding.

    A shared edge must be walked once in each direction; the same
    directed edge appearing twice means one of the faces is flipped.
    """

    directed = Counter()
    for a, b, c in mesh.triangles():
        directed[(a, b)] += 1
        directed[(b, c)] += 1
        directed[(c, a)] += 1

    inconsistent = sorted(edge for edge, count in directed.items() if count > 1)
    if inconsistent:
        return CheckResult(False, [f'inconsistent winding on edges: {inconsistent[:10]}'])
    return CheckResult(True, [])


def _edge_key(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    'CheckResult',
    'mesh_is_finite',
    'mesh_watertight',
    'faces_oriented',
]
