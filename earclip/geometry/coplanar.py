"""
Near-planar input support.

The triangulation predicates assume exactly coplanar points. Points read
from files or produced by float pipelines rarely are. ``coplanar_mapping``
fits a plane (least squares, via SVD), expresses every point in a plane
frame and rebuilds it from exact rational frame vectors, so the mapped
points are exactly coplanar. The returned mapping reverts triangulated
output back onto the caller's original points.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from earclip.errors import InvalidInputError
from earclip.geometry.tolerance import EPS_POS
from earclip.geometry.vector import ExactVector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoplanarMapping:
    origin: ExactVector
    u: ExactVector
    v: ExactVector
    normal: ExactVector
    reverse: Dict[ExactVector, ExactVector] = field(default_factory=dict)
    max_deviation: float = 0.0

    def revert(self, points: Iterable[ExactVector]) -> List[ExactVector]:
        """Map points produced by this mapping back to the original inputs."""
        out: List[ExactVector] = []
        for p in points:
            original = self.reverse.get(ExactVector.of(p))
            if original is None:
                raise InvalidInputError(f"{p!r} was not produced by this coplanar mapping")
            out.append(original)
        return out


def plane_basis(points: Sequence[ExactVector]) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Return a best-fit plane frame as float arrays (origin, u, v, n)."""
    verts = np.asarray([p.to_floats() for p in points], dtype=float)
    if verts.shape[0] < 3:
        raise InvalidInputError("coplanar mapping needs at least 3 points")

    c = np.mean(verts, axis=0)
    centered = verts - c
    _u_svd, s_svd, vh = np.linalg.svd(centered, full_matrices=False)
    if s_svd[1] <= EPS_POS * max(float(s_svd[0]), 1.0):
        raise InvalidInputError("points are collinear; no plane can be fitted")
    n = vh[-1]
    n = n / float(np.linalg.norm(n))

    # keep the fitted normal on the same side as the polygon's own winding
    winding = np.zeros(3)
    for i in range(len(verts)):
        winding += np.cross(verts[i], verts[(i + 1) % len(verts)])
    if float(np.dot(winding, n)) < 0.0:
        n = -n

    # prefer the first non-degenerate edge as U, projected onto the plane
    u = None
    for i in range(1, len(verts)):
        u_raw = verts[i] - verts[0]
        cand = u_raw - n * float(np.dot(u_raw, n))
        lu = float(np.linalg.norm(cand))
        if lu > EPS_POS:
            u = cand / lu
            break
    if u is None:
        u = vh[0] - n * float(np.dot(vh[0], n))
        u = u / float(np.linalg.norm(u))

    v = np.cross(n, u)
    v = v / float(np.linalg.norm(v))
    return c, u, v, n


def coplanar_mapping(points: Iterable[ExactVector]) -> Tuple[List[ExactVector], CoplanarMapping]:
    """
    Map ``points`` exactly onto their best-fit plane.

    Returns the mapped points (same order) and the mapping that reverts
    them. Two inputs landing on the same mapped point trigger a
    RuntimeWarning; the first one wins on revert.
    """
    pts = [ExactVector.of(p) for p in points]
    c, u, v, n = plane_basis(pts)

    origin = ExactVector.from_array(c)
    eu = ExactVector.from_array(u)
    ev = ExactVector.from_array(v)

    mapped: List[ExactVector] = []
    reverse: Dict[ExactVector, ExactVector] = {}
    max_dev = 0.0
    for p in pts:
        d = p.to_array() - c
        max_dev = max(max_dev, abs(float(np.dot(d, n))))
        q = origin + eu * float(np.dot(d, u)) + ev * float(np.dot(d, v))
        seen = reverse.get(q)
        if seen is None:
            reverse[q] = p
        elif seen != p:
            warnings.warn(
                f"Points {seen!r} and {p!r} collapse onto the same plane point",
                RuntimeWarning,
                stacklevel=2,
            )
        mapped.append(q)

    logger.debug("mapped %d points onto fitted plane, max deviation %.3g", len(pts), max_dev)
    mapping = CoplanarMapping(
        origin=origin,
        u=eu,
        v=ev,
        normal=eu.cross(ev),
        reverse=reverse,
        max_deviation=max_dev,
    )
    return mapped, mapping


def revert_coplanar_mapping(points: Iterable[ExactVector], mapping: CoplanarMapping) -> List[ExactVector]:
    return mapping.revert(points)
