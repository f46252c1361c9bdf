"""
Circular doubly-linked polygon ring.

A Ring is one closed polygon (outer boundary or hole). Its nodes are
ConnectionEdges: each edge knows its origin Vertex and its ``next``/``prev``
neighbours. Points with equal coordinates share one Vertex record, which
tracks every edge leaving that point. After hole bridging the same Vertex
is the origin of several edges.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from earclip.errors import InvalidInputError, RingInvariantError
from earclip.geometry.predicates import orientation
from earclip.geometry.vector import ExactVector

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Vertex:
    """Vertex identity: coordinates plus the edges currently leaving them."""
    point: ExactVector
    incident: List["ConnectionEdge"] = field(default_factory=list)


class ConnectionEdge:
    """Directed edge from ``vertex`` to ``next.vertex``; also the ring node."""

    def __init__(self, vertex: Vertex, ring: "Ring") -> None:
        self.vertex = vertex
        self.ring = ring
        self.next: Optional[ConnectionEdge] = None
        self.prev: Optional[ConnectionEdge] = None
        vertex.incident.append(self)

    @property
    def origin(self) -> ExactVector:
        return self.vertex.point

    @property
    def key(self) -> Tuple[ExactVector, ExactVector]:
        """Directed-edge identity (origin, next.origin)."""
        return (self.origin, self.next.origin)

    def same_edge(self, other: "ConnectionEdge") -> bool:
        return self.key == other.key

    def __repr__(self) -> str:
        nxt = self.next.origin if self.next is not None else None
        return f"ConnectionEdge(origin={self.origin!r}, next={nxt!r})"


class Ring:
    def __init__(self) -> None:
        self.start: Optional[ConnectionEdge] = None
        self.count = 0
        self.vertices: Dict[ExactVector, Vertex] = {}

    @classmethod
    def from_points(cls, points: Iterable[ExactVector]) -> "Ring":
        ring = cls()
        ring.build(points)
        return ring

    def build(self, points: Iterable[ExactVector]) -> int:
        """Link ``points`` into a closed ring, coalescing duplicates. Returns the vertex count."""
        first: Optional[ConnectionEdge] = None
        prev: Optional[ConnectionEdge] = None
        for p in points:
            vertex = self.vertices.get(p)
            if vertex is None:
                vertex = Vertex(p)
                self.vertices[p] = vertex
                self.count += 1
            current = ConnectionEdge(vertex, self)
            if first is None:
                first = current
            if prev is not None:
                prev.next = current
            current.prev = prev
            prev = current
        if first is None:
            raise InvalidInputError("Cannot build a ring from an empty point list")
        first.prev = prev
        prev.next = first
        self.start = first
        logger.debug("built ring with %d vertices", self.count)
        return self.count

    def __iter__(self) -> Iterator[ConnectionEdge]:
        return self.circulate()

    def circulate(self, start: Optional[ConnectionEdge] = None) -> Iterator[ConnectionEdge]:
        """Walk every live edge once, from ``start`` (default: the ring start) back to it."""
        h = start if start is not None else self.start
        if h is None:
            return
        first = h
        while True:
            yield h
            h = h.next
            if h is first:
                break

    def points(self) -> List[ExactVector]:
        return [e.origin for e in self]

    def find(self, point: ExactVector) -> Optional[Vertex]:
        return self.vertices.get(point)

    def is_empty(self) -> bool:
        return self.start is None

    def remove(self, edge: ConnectionEdge) -> None:
        """Unlink ``edge``; drop its vertex once no edge leaves it anymore."""
        edge.prev.next = edge.next
        edge.next.prev = edge.prev
        incident = edge.vertex.incident
        for i, e in enumerate(incident):
            if e is edge:
                del incident[i]
                break
        else:
            raise RingInvariantError(f"{edge!r} missing from its vertex's incident edges")
        if not incident:
            self.count -= 1
            self.vertices.pop(edge.origin, None)
        if edge is self.start:
            self.start = edge.prev

    def splice(self, host_edge: ConnectionEdge, hole_edge: ConnectionEdge) -> None:
        """
        Insert the ring owning ``hole_edge`` right before ``host_edge``.

        The walk enters the hole at ``hole_edge`` (M) from a duplicate of the
        host vertex (P) and returns from a duplicate of M back to P:

            P.prev -> P' -> M -> ... -> M.prev -> M' -> P
        """
        if host_edge.ring is not self:
            raise RingInvariantError("splice host edge does not belong to this ring")
        hole = hole_edge.ring
        if hole is self:
            raise RingInvariantError("cannot splice a ring into itself")

        # adopt the hole's vertex table before creating bridge edges
        added = 0
        for key, vertex in hole.vertices.items():
            mine = self.vertices.get(key)
            if mine is None:
                self.vertices[key] = vertex
                added += 1
                continue
            # the hole touches this ring at a point: fold into one identity
            for e in vertex.incident:
                e.vertex = mine
                mine.incident.append(e)
            vertex.incident.clear()
        self.count += added

        last = hole_edge.prev
        for e in hole.circulate(hole_edge):
            e.ring = self

        forward = ConnectionEdge(host_edge.vertex, self)
        forward.prev = host_edge.prev
        forward.prev.next = forward
        forward.next = hole_edge
        hole_edge.prev = forward

        back = ConnectionEdge(hole_edge.vertex, self)
        last.next = back
        back.prev = last
        back.next = host_edge
        host_edge.prev = back

        hole.start = None
        hole.count = 0
        hole.vertices = {}

    def check(self) -> None:
        """Verify circularity and bookkeeping; raise RingInvariantError on any mismatch."""
        if self.start is None:
            if self.count or self.vertices:
                raise RingInvariantError("empty ring with a nonzero vertex count")
            return
        seen = set()
        live: Dict[ExactVector, int] = {}
        for e in self:
            if id(e) in seen:
                raise RingInvariantError("ring does not close back onto its start")
            seen.add(id(e))
            if e.next.prev is not e or e.prev.next is not e:
                raise RingInvariantError(f"next/prev mismatch at {e!r}")
            if e.ring is not self:
                raise RingInvariantError(f"{e!r} points at a foreign ring")
            if self.vertices.get(e.origin) is not e.vertex:
                raise RingInvariantError(f"{e!r} uses a vertex missing from the table")
            if not any(x is e for x in e.vertex.incident):
                raise RingInvariantError(f"{e!r} missing from its vertex's incident edges")
            live[e.origin] = live.get(e.origin, 0) + 1
        if len(live) != self.count or len(self.vertices) != self.count:
            raise RingInvariantError(
                f"vertex count {self.count} does not match {len(live)} live vertices"
            )
        for key, n in live.items():
            if len(self.vertices[key].incident) != n:
                raise RingInvariantError(f"stale incident edges at {key!r}")


def is_convex(edge: ConnectionEdge, normal: ExactVector) -> bool:
    return orientation(edge.prev.origin, edge.origin, edge.next.origin, normal) == 1


def reflex_edges(ring: Ring, normal: ExactVector) -> List[ConnectionEdge]:
    """Edges whose origin is not strictly convex (collinear counts as reflex)."""
    return [e for e in ring if not is_convex(e, normal)]
