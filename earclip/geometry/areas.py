from __future__ import annotations

from fractions import Fraction
from typing import Sequence

import numpy as np

from earclip.geometry.predicates import newell_normal
from earclip.geometry.vector import ExactVector


def projected_double_area(a: ExactVector, b: ExactVector, c: ExactVector, normal: ExactVector) -> Fraction:
    """
    Exact doubled triangle area scaled by |normal|.

    Equals ``2 * area * |normal|`` (signed: positive when the triangle winds
    counter-clockwise about ``normal``), so sums compare exactly without
    square roots.
    """
    return (b - a).cross(c - a).dot(normal)


def polygon_projected_double_area(points: Sequence[ExactVector], normal: ExactVector) -> Fraction:
    """Same measure as projected_double_area for a whole ring (Newell vector dotted with normal)."""
    if len(points) < 3:
        return Fraction(0)
    return newell_normal(points).dot(normal)


def triangle_area(a: ExactVector, b: ExactVector, c: ExactVector) -> float:
    va = a.to_array()
    vb = b.to_array()
    vc = c.to_array()
    return 0.5 * float(np.linalg.norm(np.cross(vb - va, vc - va)))


def result_area(result: Sequence[ExactVector]) -> float:
    """Total float area of a flat triangulation result."""
    area = 0.0
    for i in range(0, len(result) - 2, 3):
        area += triangle_area(result[i], result[i + 1], result[i + 2])
    return float(area)


def polygon_area(points: Sequence[ExactVector]) -> float:
    """Float area of a planar ring (half the Newell normal length)."""
    if len(points) < 3:
        return 0.0
    return 0.5 * newell_normal(points).length()
