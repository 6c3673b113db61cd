"""I/O utilities for curvesweep."""

from .stl import write_stl

__all__ = ['write_stl']
