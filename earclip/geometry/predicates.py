"""
Sign-exact geometric predicates on ExactVector.

All points handed to these predicates are assumed to lie in the polygon's
supporting plane. Orientation is decided by comparing the component signs
of a cross product with the polygon normal, which stands in for a 2D
projection and never needs a tolerance.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Optional, Sequence, Tuple

from earclip.geometry.vector import ExactVector


def orientation(v0: ExactVector, v1: ExactVector, v2: ExactVector, normal: ExactVector) -> int:
    """
    Turn direction of v0 -> v1 -> v2 about ``normal``.

    Returns +1 for a counter-clockwise turn (convex at v1), -1 for a
    clockwise turn (reflex at v1) and 0 when the points are collinear.
    ``(v0 - v1) x (v2 - v1)`` points against the normal for a CCW turn, so
    any differing component sign means +1.
    """
    res = (v0 - v1).cross(v2 - v1)
    if res.is_zero():
        return 0
    if res.signs() != normal.signs():
        return 1
    return -1


def _along(ray: ExactVector, test: ExactVector) -> bool:
    # test is collinear with ray; same direction iff every component sign agrees
    return ray.signs() == test.signs()


def is_between(origin: ExactVector, a: ExactVector, b: ExactVector, test: ExactVector, normal: ExactVector) -> int:
    """
    Is ``test`` inside the wedge swept counter-clockwise from origin->a to origin->b?

    > 0 if strictly yes
    < 0 if strictly no
    = 0 if test lies on one of the bounding rays
    """
    psca = orientation(origin, a, test, normal)
    pscb = orientation(origin, b, test, normal)

    # where does b lie relative to a: left, right or collinear?
    psb = orientation(origin, a, b, normal)
    if psb > 0:
        # convex wedge: strictly left of a AND strictly right of b
        if psca > 0 and pscb < 0:
            return 1
        if psca == 0:
            return 0 if _along(a - origin, test - origin) else -1
        if pscb == 0:
            return 0 if _along(b - origin, test - origin) else -1
        return -1
    if psb < 0:
        # reflex wedge: left of a OR right of b
        if psca > 0 or pscb < 0:
            return 1
        if psca == 0:
            return 0 if _along(a - origin, test - origin) else 1
        if pscb == 0:
            return 0 if _along(b - origin, test - origin) else 1
        return -1
    if psca > 0:
        return 1
    if psca < 0:
        return -1
    return 0


def point_in_or_on_triangle(p: ExactVector, c: ExactVector, n: ExactVector, test: ExactVector, normal: ExactVector) -> bool:
    """True if ``test`` lies inside or on the boundary of the CCW triangle (p, c, n)."""
    res0 = orientation(p, test, c, normal)
    res1 = orientation(c, test, n, normal)
    res2 = orientation(n, test, p, normal)
    return res0 != 1 and res1 != 1 and res2 != 1


def point_line_distance(p1: ExactVector, p2: ExactVector, p3: ExactVector) -> Fraction:
    """
    Squared doubled area of (p1, p2, p3).

    Zero iff p3 is collinear with p1-p2; otherwise proportional to the
    squared distance of p3 from that line (for a fixed p1-p2).
    """
    return (p2 - p1).cross(p3 - p1).length_squared()


def is_collinear(p1: ExactVector, p2: ExactVector, p3: ExactVector) -> bool:
    return point_line_distance(p1, p2, p3) == 0


def ray_segment_intersection(
    ray_origin: ExactVector,
    ray_dir: ExactVector,
    seg_a: ExactVector,
    seg_b: ExactVector,
    ref_dir: ExactVector,
) -> Optional[Tuple[ExactVector, Fraction]]:
    """
    Intersect a ray with a coplanar segment.

    Returns ``(point, squared_distance_from_ray_origin)`` or None. A ray
    collinear with the segment only hits when ``seg_a - ray_origin`` is
    exactly ``ref_dir``; that case identifies a bridge edge pointing back
    at the ray origin.
    """
    seg = seg_b - seg_a
    offset = seg_a - ray_origin
    cross_dir_seg = ray_dir.cross(seg)
    cross_off_seg = offset.cross(seg)

    if point_line_distance(seg_a, seg_b, ray_origin) == 0:
        # ray origin on the segment's line; is the ray along it too?
        if point_line_distance(seg_a, seg_b, ray_origin + ray_dir) == 0:
            if offset == ref_dir:
                return seg_a, offset.length_squared()

    denom = cross_dir_seg.length_squared()
    if denom > 0:
        s = cross_off_seg.dot(cross_dir_seg) / denom
        if s >= 0:
            travel = ray_dir * s
            hit = ray_origin + travel
            if (hit - seg_a).length_squared() + (hit - seg_b).length_squared() <= seg.length_squared():
                return hit, travel.length_squared()
    return None


def newell_normal(points: Sequence[ExactVector]) -> ExactVector:
    """Polygon normal by Newell's method; its length is twice the polygon area."""
    nx = ny = nz = Fraction(0)
    count = len(points)
    for i in range(count):
        p = points[i]
        q = points[(i + 1) % count]
        nx += (p.y - q.y) * (p.z + q.z)
        ny += (p.z - q.z) * (p.x + q.x)
        nz += (p.x - q.x) * (p.y + q.y)
    return ExactVector(nx, ny, nz)
