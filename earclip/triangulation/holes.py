"""
Hole elimination by visibility bridging (after D. Eberly, "Triangulation by
Ear Clipping").

Each hole is joined to a ring that is visible from it by a pair of
coincident bridge edges, turning "outer ring + holes" into a single ring
that ear clipping can consume. The ray is cast from the hole vertex M that
is extreme on the right of the hole's first edge, in the direction
perpendicular to that edge, so no part of M's own hole can block it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import List, Optional, Sequence, Tuple

from earclip.errors import HoleMergeError
from earclip.geometry.predicates import (
    is_between,
    orientation,
    point_in_or_on_triangle,
    point_line_distance,
    ray_segment_intersection,
)
from earclip.geometry.vector import ExactVector
from earclip.triangulation.ring import ConnectionEdge, Ring, reflex_edges

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    """Nearest ray hit found so far."""
    distance: Optional[Fraction] = None
    point: Optional[ExactVector] = None
    ring_index: int = -1
    edge: Optional[ConnectionEdge] = None


class HoleMerger:
    def __init__(self, outer: Ring, holes: Sequence[Ring], normal: ExactVector) -> None:
        self.outer = outer
        self.holes: List[Ring] = list(holes)
        self.normal = normal

    def merge_all(self) -> Ring:
        """Fold every pending hole, in input order, into the outer ring and return it."""
        merged = 0
        while self.holes:
            rings = [self.outer] + self.holes
            m, p = self.find_bridge(1, rings)
            if m.origin == p.origin:
                raise HoleMergeError(f"Hole touches its bridge target at {m.origin!r}")
            logger.debug("bridging hole %d: M=%r -> P=%r", merged, m.origin, p.origin)
            p.ring.splice(p, m)
            del self.holes[0]
            merged += 1
        return self.outer

    def find_bridge(self, hole_index: int, rings: Sequence[Ring]) -> Tuple[ConnectionEdge, ConnectionEdge]:
        """Return (M, P): the hole edge to enter at and the edge of another ring to splice before."""
        hole = rings[hole_index]
        m = self.find_extreme_vertex(hole)
        direction = (hole.start.next.origin - hole.start.origin).cross(self.normal)
        hit = self.cast_ray(m, rings, hole_index, direction)
        if hit.edge is None:
            raise HoleMergeError(f"No ring edge is visible from hole vertex {m.origin!r}")

        vertex = rings[hit.ring_index].find(hit.point)
        if vertex is not None:
            return m, self._wedge_edge(vertex.incident, m)
        return m, self.find_visible_point(hit, rings, m, direction)

    def find_extreme_vertex(self, hole: Ring) -> ConnectionEdge:
        """Vertex farthest to the right of the hole's first edge; the start vertex if none is."""
        maximum = Fraction(0)
        best: Optional[ConnectionEdge] = None
        v0 = hole.start.origin
        v1 = hole.start.next.origin
        for e in hole:
            if orientation(v0, v1, e.origin, self.normal) < 0:
                r = point_line_distance(v0, v1, e.origin)
                if r > maximum:
                    maximum = r
                    best = e
        if best is None:
            return hole.start
        return best

    def cast_ray(self, m: ConnectionEdge, rings: Sequence[Ring], hole_index: int, direction: ExactVector) -> Candidate:
        candidate = Candidate()
        for i, ring in enumerate(rings):
            if i == hole_index:
                continue
            for e in ring:
                hit = ray_segment_intersection(m.origin, direction, e.origin, e.next.origin, direction)
                if hit is None:
                    continue
                point, distance = hit
                if candidate.distance is None or distance < candidate.distance:
                    take = True
                elif distance == candidate.distance:
                    # an existing bridge and its twin tie; keep the one with M on its left
                    take = orientation(e.origin, e.next.origin, m.origin, self.normal) == 1
                else:
                    take = False
                if take:
                    candidate.distance = distance
                    candidate.point = point
                    candidate.ring_index = i
                    candidate.edge = e
        return candidate

    def _wedge_edge(self, incident: Sequence[ConnectionEdge], m: ConnectionEdge) -> ConnectionEdge:
        # the ray hit a vertex: pick the incident edge whose interior wedge faces M
        matches = [
            e for e in incident
            if is_between(e.origin, e.next.origin, e.prev.origin, m.origin, self.normal) == 1
        ]
        if len(matches) != 1:
            raise HoleMergeError(
                f"{len(matches)} edges at {incident[0].origin!r} see hole vertex {m.origin!r}, expected 1"
            )
        return matches[0]

    def find_visible_point(self, hit: Candidate, rings: Sequence[Ring], m: ConnectionEdge, direction: ExactVector) -> ConnectionEdge:
        edge = hit.edge
        a, b = edge, edge.next
        # endpoint farther along the ray; greater x breaks ties
        da = direction.dot(a.origin - m.origin)
        db = direction.dot(b.origin - m.origin)
        if da != db:
            p_edge = a if da > db else b
        else:
            p_edge = a if a.origin.x > b.origin.x else b

        # every copy of P is excluded, not just the edge object
        reflex = [e for e in reflex_edges(rings[hit.ring_index], self.normal) if e.origin != p_edge.origin]

        mp = m.origin
        i = hit.point
        p = p_edge.origin
        # keep (M, I, P) counter-clockwise
        if orientation(mp, i, p, self.normal) < 0:
            i, p = p, i

        candidates = [
            e for e in reflex
            if e.origin != mp and point_in_or_on_triangle(mp, i, p, e.origin, self.normal)
        ]
        if not candidates:
            return p_edge
        return self._closest_to_ray(candidates, mp, direction)

    @staticmethod
    def _closest_to_ray(candidates: Sequence[ConnectionEdge], m: ExactVector, direction: ExactVector) -> ConnectionEdge:
        """Candidate with the smallest angle to the ray, compared as squared cosine."""
        best_value: Optional[Fraction] = None
        best: Optional[ConnectionEdge] = None
        for r in candidates:
            b = r.origin - m
            num = direction.dot(b) ** 2
            value = num / b.dot(b)
            if best_value is None or value > best_value:
                best = r
                best_value = value
        return best
