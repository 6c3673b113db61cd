"""Triangulation helpers for cross-section outlines.

We delegate to ``mapbox-earcut`` (the fast ear clipping implementation
used by Mapbox GL) to keep the logic compact and reliable.  The helper
routine in this file normalises an outline loop into the format
expected by earcut and hands back index triples into that loop, so the
caller keeps control over vertex order.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

try:
    import mapbox_earcut as _earcut
except ImportError as exc:  # pragma: no cover - import guard
    raise ImportError(
        "mapbox-earcut must be installed to triangulate outline polygons"
    ) from exc

from curvesweep.geom import epsilon, signed_area_xy

Point2D = Tuple[float, float]
IndexTriangle = Tuple[int, int, int]


def clean_loop(points: Sequence[Sequence[float]]) -> List[int]:
    """Return indices of ``points`` with repeated neighbours removed.

    Consecutive duplicates and a closing point equal to the first one
    are dropped, comparing XY only.
    """

    keep: List[int] = []
    for i, pt in enumerate(points):
        if keep and _near(points[keep[-1]], pt):
            continue
        keep.append(i)
    if len(keep) > 1 and _near(points[keep[0]], points[keep[-1]]):
        keep.pop()
    return keep


def triangulate_indices(loop: Sequence[Sequence[float]], *,
                        ccw: bool = True) -> List[IndexTriangle]:
    """Return triangles covering the simple polygon ``loop``.

    ``loop`` is a sequence of XY-like points without a repeated closing
    point.  Each returned triangle is a triple of indices into ``loop``,
    wound counter-clockwise in the XY plane when ``ccw`` is true and
    clockwise otherwise.  Degenerate loops (fewer than three points)
    give an empty list.
    """

    if len(loop) < 3:
        return []

    vertices = np.asarray([(float(p[0]), float(p[1])) for p in loop], dtype=np.float64)
    ring_ends = np.asarray([len(loop)], dtype=np.uint32)
    indices = _earcut.triangulate_float64(vertices, ring_ends)

    triangles: List[IndexTriangle] = []
    for i in range(0, len(indices), 3):
        a, b, c = int(indices[i]), int(indices[i + 1]), int(indices[i + 2])
        area = signed_area_xy([loop[a], loop[b], loop[c]])
        if (area < 0) == ccw:
            b, c = c, b
        triangles.append((a, b, c))
    return triangles


def _near(p1: Sequence[float], p2: Sequence[float]) -> bool:
    return abs(p1[0] - p2[0]) <= epsilon and abs(p1[1] - p2[1]) <= epsilon
