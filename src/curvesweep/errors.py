"""Exceptions raised by curvesweep.

All of them derive from :class:`ValueError`: they report inputs that
cannot be turned into a mesh, not internal failures.
"""


class CurveSweepError(ValueError):
    """Base class for curvesweep input errors."""


class MalformedOutlineError(CurveSweepError):
    """Raised when an outline mesh or polygon cannot form a cross-section.

    Covers missing positions, a missing index buffer, an index count that
    is not a multiple of three, and indices that point past the vertex
    list.
    """


class MissingPathError(CurveSweepError):
    """Raised when a sweep path has fewer than two oriented points."""


__all__ = ['CurveSweepError', 'MalformedOutlineError', 'MissingPathError']
