## quaternion rotations for oriented frames in curvesweep

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

from math import cos, pi, sin, sqrt

import curvesweep.geom as geom

## A quaternion is stored as four scalars x, y, z, w where (x, y, z)
## is the vector part and w the scalar part.  Rotations are unit
## quaternions; we check the unit property against UNIT_TOLERANCE
## rather than renormalizing behind the caller's back.

## Matrices produced by to_matrix() are lists of three rows, and
## vectors are treated as column vectors, so M x applies the rotation.

UNIT_TOLERANCE = 1e-5


class Quaternion:
    """quaternion class for rotating 3D vectors"""

    __slots__ = ('x', 'y', 'z', 'w')

    def __init__(self, x=0.0, y=0.0, z=0.0, w=1.0):
        for c in (x, y, z, w):
            if not geom.isgoodnum(c):
                raise ValueError('bad element in quaternion initialization: {}'.format(c))
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    def __repr__(self):
        return "Quaternion({},{},{},{})".format(self.x, self.y, self.z, self.w)

    def __eq__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self.astuple() == other.astuple()

    def __hash__(self):
        return hash(self.astuple())

    @classmethod
    def identity(cls):
        return cls(0.0, 0.0, 0.0, 1.0)

    # build the rotation whose matrix has the three given vectors as
    # its columns.  The basis is assumed to be orthonormal and
    # right-handed; no check is made, and NaN components propagate.
    @classmethod
    def from_basis(cls, x_axis, y_axis, z_axis):
        m00, m01, m02 = x_axis
        m10, m11, m12 = y_axis
        m20, m21, m22 = z_axis
        # pick the largest of x, y, z, w to divide by
        if m22 <= 0.0:
            dif10 = m11 - m00
            omm22 = 1.0 - m22
            if dif10 <= 0.0:
                four_xsq = omm22 - dif10
                inv4x = 0.5 / sqrt(four_xsq)
                return cls(four_xsq * inv4x, (m01 + m10) * inv4x,
                           (m02 + m20) * inv4x, (m12 - m21) * inv4x)
            four_ysq = omm22 + dif10
            inv4y = 0.5 / sqrt(four_ysq)
            return cls((m01 + m10) * inv4y, four_ysq * inv4y,
                       (m12 + m21) * inv4y, (m20 - m02) * inv4y)
        sum10 = m11 + m00
        opm22 = 1.0 + m22
        if sum10 <= 0.0:
            four_zsq = opm22 - sum10
            inv4z = 0.5 / sqrt(four_zsq)
            return cls((m02 + m20) * inv4z, (m12 + m21) * inv4z,
                       four_zsq * inv4z, (m01 - m10) * inv4z)
        four_wsq = opm22 + sum10
        inv4w = 0.5 / sqrt(four_wsq)
        return cls((m12 - m21) * inv4w, (m20 - m02) * inv4w,
                   (m01 - m10) * inv4w, four_wsq * inv4w)

    def astuple(self):
        return (self.x, self.y, self.z, self.w)

    def norm(self):
        return sqrt(self.x * self.x + self.y * self.y +
                    self.z * self.z + self.w * self.w)

    def isunit(self, tol=UNIT_TOLERANCE):
        return abs(self.norm() - 1.0) <= tol

    def conjugate(self):
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def inverse(self):
        n2 = self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w
        if n2 < geom.epsilon:
            raise ValueError('cannot invert a zero-length quaternion')
        return Quaternion(-self.x / n2, -self.y / n2, -self.z / n2, self.w / n2)

    # quaternion product.  If q is a Quaternion, compute the Hamilton
    # product self*q (apply q first, then self).  If q is a 3 vector,
    # rotate it.  Anything else is an error.
    def mul(self, q):
        if isinstance(q, Quaternion):
            return Quaternion(
                self.w * q.x + self.x * q.w + self.y * q.z - self.z * q.y,
                self.w * q.y - self.x * q.z + self.y * q.w + self.z * q.x,
                self.w * q.z + self.x * q.y - self.y * q.x + self.z * q.w,
                self.w * q.w - self.x * q.x - self.y * q.y - self.z * q.z)
        elif isinstance(q, (tuple, list)) and len(q) == 3:
            return self.rotate(q)
        raise ValueError('bad thing passed to mul(): {}'.format(q))

    def __mul__(self, q):
        return self.mul(q)

    def rotate(self, v):
        """rotate the 3 vector ``v``, returning a new tuple"""
        u = (self.x, self.y, self.z)
        t = geom.scale3(geom.cross(u, v), 2.0)
        return geom.add(geom.add(v, geom.scale3(t, self.w)), geom.cross(u, t))

    def to_matrix(self):
        """return the equivalent 3x3 rotation matrix as a list of rows"""
        x, y, z, w = self.x, self.y, self.z, self.w
        return [[1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)],
                [2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)],
                [2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)]]

    def axes(self):
        """return the rotated (x, y, z) axes, i.e. the matrix columns"""
        return (self.rotate(geom.X_AXIS),
                self.rotate(geom.Y_AXIS),
                self.rotate(geom.Z_AXIS))


# return the rotation about an arbitrary axis by angle degrees
def Rotation(axis, angle, inverse=False):
    m = geom.mag(axis)
    if m < geom.epsilon:
        raise ValueError('zero-length rotation axis not allowed')
    u = geom.scale3(axis, 1.0 / m)

    if inverse:
        angle *= -1.0
    half = (angle % 360.0) * pi / 360.0
    s = sin(half)
    return Quaternion(u[0] * s, u[1] * s, u[2] * s, cos(half))
