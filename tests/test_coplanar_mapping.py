from __future__ import annotations

from fractions import Fraction

import pytest

from earclip import InvalidInputError, coplanar_mapping, revert_coplanar_mapping, triangulate
from earclip.geometry.vector import ExactVector


def test_mapped_points_are_exactly_coplanar() -> None:
    pts = [(0.0, 0.0, 0.0), (2.0, 0.0, 0.001), (2.0, 2.0, 0.0), (0.0, 2.0, 0.001)]
    mapped, mapping = coplanar_mapping(pts)
    assert len(mapped) == 4
    for q in mapped:
        assert (q - mapped[0]).dot(mapping.normal) == 0
    assert 0.0 < mapping.max_deviation < 0.001


def test_planar_input_maps_close_to_itself() -> None:
    pts = [ExactVector(0, 0, 3), ExactVector(4, 0, 3), ExactVector(4, 3, 3), ExactVector(0, 3, 3)]
    mapped, mapping = coplanar_mapping(pts)
    for p, q in zip(pts, mapped):
        assert all(abs(a - b) < 1e-9 for a, b in zip(p.to_floats(), q.to_floats()))
    assert mapping.max_deviation == pytest.approx(0.0, abs=1e-12)


def test_triangulation_of_mapped_points_reverts_to_inputs() -> None:
    pts = [
        ExactVector(7197, -131, -6003),
        ExactVector(7197, 131, -6003),
        ExactVector(7103, 131, -6115),
        ExactVector(7103, 145, -6115),
        ExactVector(7296, 145, -5884),
        ExactVector(7296, 131, -5884),
        ExactVector(7202, 131, -5996),
        ExactVector(7202, -131, -5996),
        ExactVector(7296, -131, -5884),
        ExactVector(7296, -145, -5884),
        ExactVector(7103, -145, -6115),
        ExactVector(7103, -131, -6115),
    ]
    mapped, mapping = coplanar_mapping(pts)
    result = triangulate(mapped)
    assert len(result) == (len(pts) - 2) * 3

    reverted = mapping.revert(result)
    assert set(reverted) <= set(pts)
    assert revert_coplanar_mapping(result, mapping) == reverted


def test_collapsed_points_warn_and_first_wins() -> None:
    pts = [
        ExactVector(0, 0, 0),
        ExactVector(2, 0, 0),
        ExactVector(2, 2, 0),
        ExactVector(2, 2, Fraction(1, 10**30)),
        ExactVector(0, 2, 0),
    ]
    with pytest.warns(RuntimeWarning, match="collapse"):
        mapped, mapping = coplanar_mapping(pts)
    assert mapped[2] == mapped[3]
    assert mapping.revert([mapped[3]]) == [pts[2]]


def test_revert_rejects_foreign_points() -> None:
    _, mapping = coplanar_mapping([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
    with pytest.raises(InvalidInputError, match="not produced"):
        mapping.revert([ExactVector(9, 9, 9)])


def test_too_few_points() -> None:
    with pytest.raises(InvalidInputError, match="at least 3"):
        coplanar_mapping([(0, 0, 0), (1, 0, 0)])


def test_collinear_points_have_no_plane() -> None:
    with pytest.raises(InvalidInputError, match="collinear"):
        coplanar_mapping([(0, 0, 0), (1, 1, 1), (2, 2, 2)])
