## cubic Bezier curves with oriented frames for curvesweep

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

"""Cubic Bezier curve evaluation and sampling.

A :class:`CubicBezier` evaluates position and an orthonormal frame at
any parameter ``t`` and turns the curve into a list of
:class:`~curvesweep.oriented_point.OrientedPoint` values for
:func:`curvesweep.extrude.extrude`.

Arc-length reparameterization is a two-phase affair.  The table in
``arc_lengths`` is all zeros after construction; call
:meth:`CubicBezier.calculate_arc_lengths` (or the height-function
variant) before :meth:`CubicBezier.map`,
:meth:`CubicBezier.length_at` or
:meth:`CubicBezier.generate_uniform_path` mean anything.

Frames are built against the fixed reference ``UP``.  Where the tangent
is parallel to ``UP``, or all control points coincide, the frame is
NaN and so is everything swept with it.  Nothing here guards against
that; use :func:`curvesweep.mesh_checks.mesh_is_finite` on the result.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from math import ceil, floor, sqrt
from typing import Callable, List, Optional, Sequence, Tuple

from curvesweep.geom import (
    Vec3,
    Y_AXIS,
    cross,
    dist,
    lerp,
    lerp3,
    neg,
    normalize,
    to_vec3,
)
from curvesweep.oriented_point import OrientedPoint
from curvesweep.xform import Quaternion

logger = logging.getLogger(__name__)

HeightFunction = Callable[[float, float], float]

DEFAULT_ARC_TABLE_SIZE = 100
SAMPLE_STEPS = 10
UP: Vec3 = Y_AXIS


class CubicBezier:
    """Four-control-point Bezier curve in 3D."""

    def __init__(self, points: Sequence[Sequence[float]],
                 arc_table_size: Optional[int] = None):
        if len(points) != 4:
            raise ValueError('a cubic Bezier needs exactly 4 control points, got {}'.format(len(points)))
        if arc_table_size is None:
            arc_table_size = DEFAULT_ARC_TABLE_SIZE
        if arc_table_size < 1:
            raise ValueError('arc_table_size must be >= 1')

        self.points: List[Vec3] = [to_vec3(p) for p in points]
        self.len = int(arc_table_size)
        self.arc_lengths: List[float] = [0.0] * (self.len + 1)
        self.length = 0.0
        self.arc_table_ready = False
        self.sampled_lengths = self._generate_samples()

    def __repr__(self):
        return 'CubicBezier({}, arc_table_size={})'.format(self.points, self.len)

    def _generate_samples(self) -> List[float]:
        # cumulative chord lengths at t = 0, 0.1, ..., 0.9, 1
        samples = [0.0]
        total = 0.0
        prev = self.get_position(0.0)
        for i in range(1, SAMPLE_STEPS + 1):
            t = 1.0 if i == SAMPLE_STEPS else i / SAMPLE_STEPS
            pt = self.get_position(t)
            total += dist(pt, prev)
            samples.append(total)
            prev = pt
        return samples

    ## evaluation
    ## ----------

    def get_position(self, t: float) -> Vec3:
        """Return the curve position at ``t``, by de Casteljau subdivision.

        Coincident control points give back exactly that point, and
        ``t = 0`` and ``t = 1`` give back exactly the end points.
        """
        c0, c1, c2, c3 = self.points
        a = _mix(c0, c1, t)
        b = _mix(c1, c2, t)
        c = _mix(c2, c3, t)
        d = _mix(a, b, t)
        e = _mix(b, c, t)
        return _mix(d, e, t)

    def get_tangent(self, t: float) -> Vec3:
        """Return the unit tangent at ``t``.

        The weighted sum is one third of the derivative, so only its
        direction is meaningful.  A zero derivative gives a NaN tangent.
        """
        t2 = t * t
        it = 1.0 - t
        it2 = it * it
        c0, c1, c2, c3 = self.points
        w0 = -1.0 * it2
        w1 = t * (3.0 * t - 4.0) + 1.0
        w2 = -3.0 * t2 + t * 2.0
        return normalize((c0[0] * w0 + c1[0] * w1 + c2[0] * w2 + c3[0] * t2,
                          c0[1] * w0 + c1[1] * w1 + c2[1] * w2 + c3[1] * t2,
                          c0[2] * w0 + c1[2] * w1 + c2[2] * w2 + c3[2] * t2))

    @staticmethod
    def _normal(tangent: Vec3, up: Vec3) -> Vec3:
        binormal = cross(up, tangent)
        return cross(tangent, binormal)

    def get_point(self, t: float) -> Tuple[Vec3, Vec3, Vec3, Quaternion]:
        """Return ``(position, tangent, normal, rotation)`` at ``t``.

        The rotation has columns ``(right, up, -forward)``.
        """
        tangent = self.get_tangent(t)
        normal = self._normal(tangent, UP)

        f = normalize(tangent)
        r = normalize(cross(f, normal))
        u = cross(r, f)
        orientation = Quaternion.from_basis(r, u, neg(f))

        return self.get_position(t), tangent, normal, orientation

    def get_oriented_point(self, t: float) -> OrientedPoint:
        point, _, _, orientation = self.get_point(t)
        return OrientedPoint(point, orientation, self.sample(t))

    ## paths
    ## -----

    @staticmethod
    def _path_parameters(subdivisions: int) -> List[float]:
        if subdivisions < 1:
            raise ValueError('subdivisions must be >= 1')
        params = [i / subdivisions for i in range(subdivisions)]
        params.append(1.0)
        return params

    def generate_path(self, subdivisions: int) -> List[OrientedPoint]:
        """Sample ``subdivisions + 1`` oriented points, uniform in ``t``.

        The last point is always evaluated at exactly ``t = 1``.
        """
        return [self.get_oriented_point(t) for t in self._path_parameters(subdivisions)]

    def generate_path_with_height(self, subdivisions: int,
                                  height_fn: HeightFunction) -> List[OrientedPoint]:
        """Like :meth:`generate_path`, with each Y replaced by ``height_fn(x, z)``.

        Rotations still follow the Bezier, not the new slope.
        """
        result = []
        for t in self._path_parameters(subdivisions):
            point = self.get_oriented_point(t)
            x, _, z = point.position
            y = float(height_fn(x, z))
            result.append(OrientedPoint((x, y, z), point.rotation, point.v))
        return result

    def generate_uniform_path(self, subdivisions: int) -> List[OrientedPoint]:
        """Sample ``subdivisions + 1`` oriented points evenly spaced by arc length.

        Needs :meth:`calculate_arc_lengths` first.
        """
        return [self.get_oriented_point(self.map(u))
                for u in self._path_parameters(subdivisions)]

    ## arc length
    ## ----------

    def calculate_arc_lengths(self) -> None:
        """Fill ``arc_lengths`` with cumulative chord lengths at ``t = i/N``."""
        self._fill_arc_lengths(self.get_position)

    def calculate_arc_lengths_with_height(self, height_fn: HeightFunction) -> None:
        """Fill ``arc_lengths`` measuring along ``y = height_fn(x, z)``."""

        def position(t):
            x, _, z = self.get_position(t)
            return (x, float(height_fn(x, z)), z)

        self._fill_arc_lengths(position)

    def _fill_arc_lengths(self, position: Callable[[float], Vec3]) -> None:
        old_point = position(0.0)
        clen = 0.0
        self.arc_lengths[0] = 0.0
        for i in range(1, self.len + 1):
            point = position(i / self.len)
            dx = old_point[0] - point[0]
            dy = old_point[1] - point[1]
            dz = old_point[2] - point[2]
            clen += sqrt(dx * dx + dy * dy + dz * dz)
            self.arc_lengths[i] = clen
            old_point = point

        self.length = clen
        self.arc_table_ready = True
        logger.debug('arc length table: %d cells, total length %.6g', self.len, clen)

    def map(self, u: float) -> float:
        """Return the parameter ``t`` at arc-length fraction ``u``.

        Returns 0 (with a warning) if the arc-length table has not been
        calculated yet.
        """
        if not self.arc_table_ready:
            logger.warning('CubicBezier.map() called before calculate_arc_lengths(); returning 0')
            return 0.0

        arcs = self.arc_lengths
        n = self.len
        target = u * arcs[n]
        index = bisect_left(arcs, target)
        if index > n:
            # past the end: extrapolate the last cell
            index = n - 1
        elif arcs[index] > target:
            index = max(index - 1, 0)

        before = arcs[index]
        if before == target:
            return index / n
        span = arcs[index + 1] - before
        if span == 0.0:
            # zero-length cell: snap to the end nearer the target
            return (index if target < before else index + 1) / n
        return (index + (target - before) / span) / n

    def length_at(self, t: float) -> float:
        """Cumulative arc length at parameter ``t``, read from the table."""
        f = t * self.len
        index = min(max(int(floor(f)), 0), self.len - 1)
        return lerp(self.arc_lengths[index], self.arc_lengths[index + 1], f - index)

    def sample(self, t: float) -> float:
        """Interpolate ``sampled_lengths`` at ``t``; used as the V coordinate."""
        samples = self.sampled_lengths
        count = len(samples)
        if count == 1:
            return samples[0]

        f = t * (count - 1)
        id_lower = int(floor(f))
        id_upper = int(ceil(f))

        if id_upper >= count:
            return samples[count - 1]
        if id_lower < 0:
            return samples[0]

        return lerp(samples[id_lower], samples[id_upper], f - id_lower)


def _mix(a: Vec3, b: Vec3, t: float) -> Vec3:
    # interpolate from the nearer end so both ends are exact
    if t <= 0.5:
        return lerp3(a, b, t)
    return lerp3(b, a, 1.0 - t)


__all__ = [
    'CubicBezier',
    'DEFAULT_ARC_TABLE_SIZE',
    'SAMPLE_STEPS',
    'UP',
]
