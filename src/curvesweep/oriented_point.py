"""Oriented points: a position plus a rotation, sampled along a curve."""

from __future__ import annotations

from dataclasses import dataclass, field

from curvesweep.geom import Vec3, add, sub, to_vec3
from curvesweep.xform import Quaternion


@dataclass(frozen=True)
class OrientedPoint:
    """A moving frame along a path.

    ``rotation`` maps local axes to world axes: local ``-Z`` is the
    forward (tangent) direction, ``+Y`` is up and ``+X`` is right.  ``v``
    is the texture V coordinate shared by every vertex of the ring swept
    at this point.
    """

    position: Vec3
    rotation: Quaternion = field(default_factory=Quaternion.identity)
    v: float = 0.0

    def local_to_world(self, point) -> Vec3:
        return add(self.position, self.rotation.rotate(to_vec3(point)))

    def world_to_local(self, point) -> Vec3:
        return self.rotation.inverse().rotate(sub(to_vec3(point), self.position))

    def local_to_world_direction(self, direction) -> Vec3:
        return self.rotation.rotate(to_vec3(direction))

    def forward(self) -> Vec3:
        """World-space forward direction (local ``-Z``)."""
        return self.rotation.rotate((0.0, 0.0, -1.0))

    def up(self) -> Vec3:
        return self.rotation.rotate((0.0, 1.0, 0.0))

    def right(self) -> Vec3:
        return self.rotation.rotate((1.0, 0.0, 0.0))


__all__ = ['OrientedPoint']
