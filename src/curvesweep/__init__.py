# -*- coding: utf-8 -*-
"""Sweep 2D cross-sections along cubic Bezier paths into triangle meshes."""

from importlib.metadata import PackageNotFoundError, version

from curvesweep.bezier import CubicBezier
from curvesweep.cross_section import CrossSection
from curvesweep.errors import CurveSweepError, MalformedOutlineError, MissingPathError
from curvesweep.extrude import OutputMesh, extrude
from curvesweep.oriented_point import OrientedPoint
from curvesweep.xform import Quaternion

try:
    __version__ = version("curvesweep")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    'CrossSection',
    'CubicBezier',
    'CurveSweepError',
    'MalformedOutlineError',
    'MissingPathError',
    'OrientedPoint',
    'OutputMesh',
    'Quaternion',
    'extrude',
]
