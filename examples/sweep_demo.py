"""Sweep a rounded profile along a Bezier curve and export it as STL.

Usage::

    python examples/sweep_demo.py --sides 12 --radius 0.5 --segments 64 -o tube.stl

The path is re-parameterized by arc length so rings are evenly spaced,
and the ends are capped so the result is a closed solid.
"""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

from curvesweep import CrossSection, CubicBezier, extrude
from curvesweep.io import write_stl
from curvesweep.mesh_checks import faces_oriented, mesh_is_finite, mesh_watertight

CONTROL_POINTS = [
    (0.0, 0.0, 0.0),
    (6.0, 3.0, 0.0),
    (12.0, -3.0, 6.0),
    (18.0, 0.0, 12.0),
]


def polygon(sides: int, radius: float) -> list:
    """Regular polygon in the XY plane."""
    return [(radius * math.cos(2 * math.pi * i / sides),
             radius * math.sin(2 * math.pi * i / sides))
            for i in range(sides)]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--sides', type=int, default=12)
    parser.add_argument('--radius', type=float, default=0.5)
    parser.add_argument('--segments', type=int, default=64)
    parser.add_argument('--ascii', action='store_true', help='write ASCII STL')
    parser.add_argument('--open', action='store_true', help='leave the tube ends open')
    parser.add_argument('-o', '--output', type=Path, default=Path('sweep_demo.stl'))
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    shape = CrossSection.from_polygon(polygon(args.sides, args.radius), with_uvs=True)
    curve = CubicBezier(CONTROL_POINTS)
    curve.calculate_arc_lengths()
    path = curve.generate_uniform_path(args.segments)

    mesh = extrude(shape, path, caps=not args.open)

    for check in (mesh_is_finite, mesh_watertight, faces_oriented):
        result = check(mesh)
        status = 'ok' if result else 'FAILED'
        print(f'{check.__name__}: {status}')
        for warning in result.warnings:
            print(f'  {warning}')

    write_stl(mesh, args.output, binary=not args.ascii, name='sweep_demo')
    print(f'curve length {curve.length:.3f}, '
          f'{mesh.vertex_count} vertices, {mesh.triangle_count} triangles -> {args.output}')


if __name__ == '__main__':
    main()
