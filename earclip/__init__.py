"""
Earclip

Exact-rational ear clipping triangulation of planar 3D polygons with holes.
"""

from earclip.config import TriangulationConfig, DEFAULT_CONFIG
from earclip.errors import (
    TriangulationError,
    InvalidInputError,
    AllReflexError,
    NoProgressError,
    HoleMergeError,
    RingInvariantError,
)
from earclip.geometry import (
    ExactVector,
    ExactPoint,
    CoplanarMapping,
    coplanar_mapping,
    revert_coplanar_mapping,
    projected_double_area,
    polygon_projected_double_area,
    triangle_area,
    result_area,
    polygon_area,
)
from earclip.triangulation import EarClipping, group_triangles, triangulate

__version__ = "0.1.0"

__all__ = [
    "TriangulationConfig",
    "DEFAULT_CONFIG",
    "TriangulationError",
    "InvalidInputError",
    "AllReflexError",
    "NoProgressError",
    "HoleMergeError",
    "RingInvariantError",
    "ExactVector",
    "ExactPoint",
    "CoplanarMapping",
    "coplanar_mapping",
    "revert_coplanar_mapping",
    "projected_double_area",
    "polygon_projected_double_area",
    "triangle_area",
    "result_area",
    "polygon_area",
    "EarClipping",
    "group_triangles",
    "triangulate",
]
