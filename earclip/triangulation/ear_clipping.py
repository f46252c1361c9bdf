"""
Triangulation by ear clipping over exact rationals.

Contract:
  - input: outer ring points (at least 3), optional hole point lists wound
    opposite to the outer ring, optional normal (Newell's normal otherwise);
  - output: flat list of ExactVector, three consecutive entries per
    triangle, each triangle wound like the outer ring;
  - every failure is terminal: no partial result is kept.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from earclip.config import DEFAULT_CONFIG, TriangulationConfig
from earclip.errors import AllReflexError, InvalidInputError, NoProgressError, TriangulationError
from earclip.geometry.predicates import is_collinear, newell_normal, point_in_or_on_triangle
from earclip.geometry.vector import ExactVector, Scalar
from earclip.triangulation.holes import HoleMerger
from earclip.triangulation.ring import ConnectionEdge, Ring, is_convex, reflex_edges

logger = logging.getLogger(__name__)

PointLike = Union[ExactVector, Sequence[Scalar]]
Triangle = Tuple[ExactVector, ExactVector, ExactVector]


def _to_points(points: Iterable[PointLike]) -> List[ExactVector]:
    return [ExactVector.of(p) for p in points]


class EarClipping:
    """
    One triangulation run.

    The constructor takes the place of "set points": it validates the input
    and builds fresh rings, so separate instances never share state.
    """

    def __init__(
        self,
        points: Optional[Sequence[PointLike]],
        holes: Optional[Sequence[Sequence[PointLike]]] = None,
        normal: Optional[PointLike] = None,
        config: Optional[TriangulationConfig] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        if points is None:
            raise InvalidInputError("No point list passed")
        outer = _to_points(points)
        if len(outer) < 3:
            raise InvalidInputError(f"Polygon needs at least 3 points, got {len(outer)}")
        hole_points = [_to_points(h) for h in (holes or ())]
        for k, h in enumerate(hole_points):
            if len(h) < 3:
                raise InvalidInputError(f"Hole {k} needs at least 3 points, got {len(h)}")
        total = len(outer) + sum(len(h) for h in hole_points)
        if self.config.max_points is not None and total > self.config.max_points:
            raise InvalidInputError(f"{total} input points exceed max_points={self.config.max_points}")

        self.normal = ExactVector.of(normal) if normal is not None else newell_normal(outer)
        self._outer = Ring.from_points(outer)
        self._holes = [Ring.from_points(h) for h in hole_points]
        self.result: List[ExactVector] = []
        self._done = False
        self._error: Optional[TriangulationError] = None

    def triangulate(self) -> List[ExactVector]:
        """Merge holes, clip ears, and return the flat result."""
        if self._error is not None:
            raise self._error
        if self._done:
            return self.result
        try:
            result = self._run()
        except TriangulationError as exc:
            self._error = exc
            raise
        self.result = result
        self._done = True
        return self.result

    def triangles(self) -> List[Triangle]:
        return group_triangles(self.result)

    def _run(self) -> List[ExactVector]:
        if self.normal.is_zero():
            raise InvalidInputError("The input is not a valid polygon: its normal is zero")
        ring = self._outer
        if self._holes:
            ring = HoleMerger(ring, self._holes, self.normal).merge_all()
            self._holes = []
            if self.config.check_invariants:
                ring.check()
        return self._clip(ring)

    def _clip(self, ring: Ring) -> List[ExactVector]:
        normal = self.normal
        reflex = reflex_edges(ring, normal)
        if len(reflex) == ring.count:
            raise AllReflexError("Every vertex is reflex; the winding does not match the normal")

        out: List[ExactVector] = []
        # first candidate ear is (v0, v1, v2) in input order
        cursor: ConnectionEdge = ring.start.next
        while ring.count > 2:
            ear = None
            for cur in ring.circulate(cursor):
                if is_convex(cur, normal) and self._is_ear(cur, reflex):
                    ear = cur
                    break

            if ear is None:
                if self._points_on_line(ring):
                    logger.debug("dropping %d collinear leftover vertices", ring.count)
                    break
                raise NoProgressError(
                    f"No ear found with {ring.count} vertices left; the input must be wrong"
                )

            prev, nxt = ear.prev, ear.next
            out.extend((prev.origin, ear.origin, nxt.origin))
            ring.remove(ear)
            for nb in (prev, nxt):
                if is_convex(nb, normal):
                    reflex = [e for e in reflex if e is not nb]
            cursor = nxt
            if self.config.check_invariants:
                ring.check()

        logger.debug("clipped %d triangles", len(out) // 3)
        return out

    def _is_ear(self, cur: ConnectionEdge, reflex: Sequence[ConnectionEdge]) -> bool:
        p, c, n = cur.prev.origin, cur.origin, cur.next.origin
        for r in reflex:
            q = r.origin
            if q == p or q == c or q == n:
                continue
            if point_in_or_on_triangle(p, c, n, q, self.normal):
                return False
        return True

    @staticmethod
    def _points_on_line(ring: Ring) -> bool:
        return all(is_collinear(e.prev.origin, e.origin, e.next.origin) for e in ring)


def group_triangles(result: Sequence[ExactVector]) -> List[Triangle]:
    """Split a flat result into (a, b, c) tuples."""
    if len(result) % 3:
        raise ValueError(f"Result length {len(result)} is not a multiple of 3")
    return [(result[i], result[i + 1], result[i + 2]) for i in range(0, len(result), 3)]


def triangulate(
    points: Optional[Sequence[PointLike]],
    holes: Optional[Sequence[Sequence[PointLike]]] = None,
    normal: Optional[PointLike] = None,
    config: Optional[TriangulationConfig] = None,
) -> List[ExactVector]:
    """Triangulate in one call and return the flat result."""
    return EarClipping(points, holes=holes, normal=normal, config=config).triangulate()
