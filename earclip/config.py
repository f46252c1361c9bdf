from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TriangulationConfig:
    """Per-run triangulation options.

    check_invariants runs the full ring consistency check after hole merging
    and after every clipped ear (quadratic, meant for debugging and tests).
    max_points bounds the total number of input points (outer + holes).
    """

    check_invariants: bool = False
    max_points: Optional[int] = None


DEFAULT_CONFIG = TriangulationConfig()
