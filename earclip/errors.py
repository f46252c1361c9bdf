from __future__ import annotations


class TriangulationError(Exception):
    """Base class for every failure raised by a triangulation run."""


class InvalidInputError(TriangulationError, ValueError):
    pass


class AllReflexError(TriangulationError):
    """Every vertex of the working ring is reflex; the winding is inconsistent with the normal."""


class NoProgressError(TriangulationError):
    """A full ear scan clipped nothing; the input is self-intersecting, malformed or wrongly wound."""


class HoleMergeError(TriangulationError):
    pass


class RingInvariantError(TriangulationError, RuntimeError):
    """Internal ring bookkeeping is inconsistent. This is a defect, not a user error."""
