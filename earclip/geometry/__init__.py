"""
Earclip Geometry Module

Provides the exact vector kernel, sign-exact predicates, area helpers and
the near-planar coplanar mapping.
"""

from earclip.geometry.vector import ExactVector, ExactPoint, to_rational
from earclip.geometry.predicates import (
    orientation,
    is_between,
    point_in_or_on_triangle,
    point_line_distance,
    is_collinear,
    ray_segment_intersection,
    newell_normal,
)
from earclip.geometry.areas import (
    projected_double_area,
    polygon_projected_double_area,
    triangle_area,
    result_area,
    polygon_area,
)
from earclip.geometry.coplanar import (
    CoplanarMapping,
    coplanar_mapping,
    revert_coplanar_mapping,
)

__all__ = [
    "ExactVector",
    "ExactPoint",
    "to_rational",
    "orientation",
    "is_between",
    "point_in_or_on_triangle",
    "point_line_distance",
    "is_collinear",
    "ray_segment_intersection",
    "newell_normal",
    "projected_double_area",
    "polygon_projected_double_area",
    "triangle_area",
    "result_area",
    "polygon_area",
    "CoplanarMapping",
    "coplanar_mapping",
    "revert_coplanar_mapping",
]
