"""
Exact 3D vector kernel.

Every component is a ``fractions.Fraction``, so sums, products, dot and
cross products are exact. Vectors are immutable and hash by value, which
lets them double as dictionary keys identifying polygon vertices.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Iterable, Tuple, Union

import numpy as np


Scalar = Union[int, float, str, Decimal, Fraction, numbers.Real]


def to_rational(value: Any) -> Fraction:
    """Convert a scalar to an exact Fraction (floats keep their exact binary value)."""
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a coordinate")
    if isinstance(value, (numbers.Rational, str, Decimal)):
        return Fraction(value)
    if isinstance(value, numbers.Real):
        f = float(value)
        if not math.isfinite(f):
            raise ValueError(f"Coordinate must be finite, got {value!r}")
        return Fraction(f)
    raise TypeError(f"Unsupported coordinate type: {type(value).__name__}")


def _sign(q: Fraction) -> int:
    return (q > 0) - (q < 0)


# =============================================================================
# Vector
# =============================================================================

@dataclass(frozen=True)
class ExactVector:
    """3D vector over exact rationals, used for points, directions and normals."""
    x: Fraction
    y: Fraction
    z: Fraction

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", to_rational(self.x))
        object.__setattr__(self, "y", to_rational(self.y))
        object.__setattr__(self, "z", to_rational(self.z))

    def __add__(self, other: 'ExactVector') -> 'ExactVector':
        return ExactVector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'ExactVector') -> 'ExactVector':
        return ExactVector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: Scalar) -> 'ExactVector':
        s = to_rational(scalar)
        return ExactVector(self.x * s, self.y * s, self.z * s)

    def __rmul__(self, scalar: Scalar) -> 'ExactVector':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: Scalar) -> 'ExactVector':
        s = to_rational(scalar)
        return ExactVector(self.x / s, self.y / s, self.z / s)

    def __neg__(self) -> 'ExactVector':
        return ExactVector(-self.x, -self.y, -self.z)

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"ExactVector({self.x}, {self.y}, {self.z})"

    def dot(self, other: 'ExactVector') -> Fraction:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'ExactVector') -> 'ExactVector':
        """Cross product."""
        return ExactVector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length_squared(self) -> Fraction:
        return self.dot(self)

    def length(self) -> float:
        """Euclidean length as a float (not exact)."""
        return math.sqrt(self.length_squared())

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0 and self.z == 0

    def signs(self) -> Tuple[int, int, int]:
        """Per-component sign, each in {-1, 0, 1}."""
        return (_sign(self.x), _sign(self.y), _sign(self.z))

    def absolute(self) -> 'ExactVector':
        return ExactVector(abs(self.x), abs(self.y), abs(self.z))

    def lerp(self, other: 'ExactVector', t: Scalar) -> 'ExactVector':
        return self + (other - self) * t

    def shorten_by_largest_component(self) -> 'ExactVector':
        """Scale so the largest absolute component becomes 1; the zero vector stays zero."""
        if self.is_zero():
            return ExactVector.zero()
        largest = max(abs(self.x), abs(self.y), abs(self.z))
        return self / largest

    def same_direction(self, other: 'ExactVector') -> bool:
        """True if the vectors are parallel (or anti-parallel, or either is zero)."""
        return self.cross(other).is_zero()

    def to_tuple(self) -> Tuple[Fraction, Fraction, Fraction]:
        return (self.x, self.y, self.z)

    def to_floats(self) -> Tuple[float, float, float]:
        return (float(self.x), float(self.y), float(self.z))

    def to_array(self) -> np.ndarray:
        """Convert to a float numpy array."""
        return np.array(self.to_floats(), dtype=float)

    @staticmethod
    def of(value: Union['ExactVector', Iterable[Scalar]]) -> 'ExactVector':
        """Coerce a vector or any 3-item sequence of scalars."""
        if isinstance(value, ExactVector):
            return value
        coords = tuple(value)
        if len(coords) != 3:
            raise ValueError(f"Expected 3 coordinates, got {len(coords)}")
        return ExactVector(*coords)

    @staticmethod
    def from_array(arr: np.ndarray) -> 'ExactVector':
        return ExactVector(float(arr[0]), float(arr[1]), float(arr[2]))

    @staticmethod
    def zero() -> 'ExactVector':
        return ExactVector(0, 0, 0)

    @staticmethod
    def plane_normal(v0: 'ExactVector', v1: 'ExactVector', v2: 'ExactVector') -> 'ExactVector':
        """Unnormalized normal of the plane through three points."""
        return (v1 - v0).cross(v2 - v0)


# Alias for clarity
ExactPoint = ExactVector
