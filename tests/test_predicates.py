from __future__ import annotations

import pytest

from earclip.geometry.predicates import (
    is_between,
    is_collinear,
    newell_normal,
    orientation,
    point_in_or_on_triangle,
    point_line_distance,
    ray_segment_intersection,
)
from earclip.geometry.vector import ExactVector

Z = ExactVector(0, 0, 1)


def _p(x, y, z=0) -> ExactVector:
    return ExactVector(x, y, z)


def test_orientation_ccw_cw_collinear() -> None:
    assert orientation(_p(0, 0), _p(1, 0), _p(0, 1), Z) == 1
    assert orientation(_p(0, 0), _p(0, 1), _p(1, 0), Z) == -1
    assert orientation(_p(0, 0), _p(1, 1), _p(2, 2), Z) == 0


def test_orientation_flips_with_normal() -> None:
    assert orientation(_p(0, 0), _p(1, 0), _p(0, 1), -Z) == -1


@pytest.mark.parametrize(
    "a,b,c",
    [
        ((0, 0), (3, 1), (1, 4)),
        ((5, -2), (1, 1), (-3, 7)),
        ((0, 0), (1, 0), (2, 0)),
    ],
)
def test_orientation_is_antisymmetric(a, b, c) -> None:
    pa, pb, pc = _p(*a), _p(*b), _p(*c)
    assert orientation(pa, pb, pc, Z) == -orientation(pc, pb, pa, Z)


def test_orientation_in_tilted_plane() -> None:
    # plane y == z, normal (0, -1, 1)
    normal = ExactVector(0, -1, 1)
    assert orientation(_p(0, 0, 0), _p(1, 0, 0), _p(0, 1, 1), normal) == 1
    assert orientation(_p(0, 1, 1), _p(1, 0, 0), _p(0, 0, 0), normal) == -1


def test_is_between_convex_wedge() -> None:
    o, a, b = _p(0, 0), _p(1, 0), _p(0, 1)
    assert is_between(o, a, b, _p(1, 1), Z) == 1
    assert is_between(o, a, b, _p(-1, -1), Z) == -1
    assert is_between(o, a, b, _p(2, 0), Z) == 0
    assert is_between(o, a, b, _p(0, 3), Z) == 0
    assert is_between(o, a, b, _p(-1, 0), Z) == -1


def test_is_between_reflex_wedge() -> None:
    o, a, b = _p(0, 0), _p(0, 1), _p(1, 0)
    assert is_between(o, a, b, _p(-1, -1), Z) == 1
    assert is_between(o, a, b, _p(1, 1), Z) == -1
    assert is_between(o, a, b, _p(-1, 0), Z) == 1
    assert is_between(o, a, b, _p(0, 2), Z) == 0


def test_point_in_or_on_triangle() -> None:
    p, c, n = _p(0, 0), _p(4, 0), _p(0, 4)
    assert point_in_or_on_triangle(p, c, n, _p(1, 1), Z)
    assert point_in_or_on_triangle(p, c, n, _p(2, 2), Z)
    assert point_in_or_on_triangle(p, c, n, _p(0, 0), Z)
    assert not point_in_or_on_triangle(p, c, n, _p(3, 3), Z)
    assert not point_in_or_on_triangle(p, c, n, _p(-1, 1), Z)


def test_point_line_distance_and_collinearity() -> None:
    assert point_line_distance(_p(0, 0), _p(1, 0), _p(0, 2)) == 4
    assert is_collinear(_p(0, 0, 0), _p(1, 2, 3), _p(2, 4, 6))
    assert not is_collinear(_p(0, 0), _p(1, 0), _p(1, 1))


def test_ray_segment_intersection_hits_and_misses() -> None:
    o, d = _p(0, 0), _p(1, 0)
    hit = ray_segment_intersection(o, d, _p(2, -1), _p(2, 1), d)
    assert hit == (_p(2, 0), 4)
    # behind the ray origin
    assert ray_segment_intersection(o, d, _p(-2, -1), _p(-2, 1), d) is None
    # line crossed outside the segment
    assert ray_segment_intersection(o, d, _p(2, 1), _p(2, 3), d) is None
    # parallel, not collinear
    assert ray_segment_intersection(o, d, _p(0, 1), _p(5, 1), d) is None


def test_ray_segment_intersection_collinear_only_at_reference_offset() -> None:
    o, d = _p(0, 0), _p(1, 0)
    assert ray_segment_intersection(o, d, _p(1, 0), _p(3, 0), d) == (_p(1, 0), 1)
    assert ray_segment_intersection(o, d, _p(2, 0), _p(3, 0), d) is None


def test_newell_normal_length_is_twice_area() -> None:
    assert newell_normal([_p(0, 0), _p(1, 0), _p(0, 1)]) == Z
    square = [_p(0, 0), _p(8, 0), _p(8, 4), _p(0, 4)]
    assert newell_normal(square) == ExactVector(0, 0, 64)
    assert newell_normal(list(reversed(square))) == ExactVector(0, 0, -64)
