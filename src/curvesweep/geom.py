## foundational vector helpers for curvesweep

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

"""vector helpers for **curvesweep**

Vectors are plain ``(x, y, z)`` tuples of floats.  Anything that looks
like a three-component sequence (a list, a tuple, a numpy row) can be
turned into one with :func:`to_vec3`.

Scalar comparisons use the module "constant" ``epsilon``.  Redefine it
at your peril.

Normalizing a zero-length vector does not raise: the result is a vector
of NaNs, so degenerate curve frames propagate into the output mesh
where :mod:`curvesweep.mesh_checks` can find them.
"""

from __future__ import annotations

from math import isfinite, nan, sqrt
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]

## constants
epsilon = 0.000005

ORIGIN: Vec3 = (0.0, 0.0, 0.0)
X_AXIS: Vec3 = (1.0, 0.0, 0.0)
Y_AXIS: Vec3 = (0.0, 1.0, 0.0)
Z_AXIS: Vec3 = (0.0, 0.0, 1.0)


## operations on scalars
## -----------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float))


def close(a, b):
    """ are two scalars the same within epsilon
    """
    return abs(a - b) < epsilon


def lerp(a: float, b: float, t: float) -> float:
    """linear interpolation between scalars ``a`` and ``b``"""
    return a + (b - a) * t


## conversions
## -----------

def to_vec3(point_like: Sequence[float]) -> Vec3:
    """Return the XYZ components of a point-like sequence as a tuple."""

    if len(point_like) < 3:
        raise ValueError("value must have at least three components")
    return float(point_like[0]), float(point_like[1]), float(point_like[2])


def isvect3(x) -> bool:
    """
    check to see if argument is a proper 3 vector for our purposes
    """
    return isinstance(x, tuple) and len(x) == 3 and \
        isgoodnum(x[0]) and isgoodnum(x[1]) and isgoodnum(x[2])


## R^3 -> R^3 functions
## --------------------

def add(a, b) -> Vec3:
    """ 3 vector, `a + b`"""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a, b) -> Vec3:
    """ 3 vector, `a - b`"""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale3(a, c) -> Vec3:
    """ 3 vector, vector ''a'' times scalar ``c``, `a * c`"""
    return (a[0] * c, a[1] * c, a[2] * c)


def neg(a) -> Vec3:
    return (-a[0], -a[1], -a[2])


def cross(a, b) -> Vec3:
    """ 3 vector cross product `a x b`"""
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def normalize(a) -> Vec3:
    """return the unit vector along ``a``.

    A zero-length input yields ``(nan, nan, nan)`` instead of raising.
    """
    m = mag(a)
    if m == 0.0:
        return (nan, nan, nan)
    return (a[0] / m, a[1] / m, a[2] / m)


def lerp3(a, b, t: float) -> Vec3:
    """ component-wise linear interpolation of 3 vectors"""
    return (lerp(a[0], b[0], t), lerp(a[1], b[1], t), lerp(a[2], b[2], t))


## R^3 -> R functions
## ------------------

def dot(a, b) -> float:
    """ 3 vector ``a`` dot ``b`` """
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def mag(a) -> float:
    """ compute the magnitude of 3 vector ``a``"""
    return sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def dist(a, b) -> float:
    """ compute the euclidean distance between two 3 vector points ``a`` and ``b``"""
    return mag(sub(a, b))


## R^3 -> bool functions
## ---------------------

def vclose(a, b) -> bool:
    """ determine if two vectors are the same, to within epsilon"""
    return close(mag(sub(a, b)), 0)


def isfinite3(a) -> bool:
    return isfinite(a[0]) and isfinite(a[1]) and isfinite(a[2])


## triangles
## ---------

def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3 | None:
    """Return the unit normal of a triangle or ``None`` if degenerate."""

    n = cross(sub(v1, v0), sub(v2, v0))
    length = mag(n)
    if length <= epsilon:
        return None
    return (n[0] / length, n[1] / length, n[2] / length)


def triangle_centroid(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3:
    """Return the centroid of a triangle."""

    return (
        (v0[0] + v1[0] + v2[0]) / 3.0,
        (v0[1] + v1[1] + v2[1]) / 3.0,
        (v0[2] + v1[2] + v2[2]) / 3.0,
    )


def signed_area_xy(loop: Sequence[Sequence[float]]) -> float:
    """signed area of a closed loop projected onto the XY plane,
    positive for counter-clockwise loops"""
    total = 0.0
    count = len(loop)
    for i in range(count):
        x0, y0 = loop[i][0], loop[i][1]
        x1, y1 = loop[(i + 1) % count][0], loop[(i + 1) % count][1]
        total += x0 * y1 - x1 * y0
    return total / 2.0
