"""
2D vectors over 64-bit integers for orientation and area tests.

Components are 64-bit so that multiplying two deltas of 32-bit coordinates (as the
cross product does) cannot overflow in any consumer that stores them in fixed-width
integers. `a * b` between two vectors is the cross product; `s * v` or `v * s` with a
float scales and truncates toward zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from routegeo.coordinate import FixedPointCoordinate

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class Vec:
    x: int
    y: int

    def __post_init__(self) -> None:
        # Python ints never overflow, so enforce the width that fixed-size consumers rely on.
        for name in ("x", "y"):
            value = getattr(self, name)
            if not INT64_MIN <= value <= INT64_MAX:
                raise OverflowError(f"Vec.{name}={value} does not fit in a signed 64-bit integer")

    @classmethod
    def from_coordinate(cls, coordinate: FixedPointCoordinate) -> Vec:
        # Planar convention: x is longitude, y is latitude.
        return cls(coordinate.lon, coordinate.lat)

    @classmethod
    def from_point(cls, point: Any) -> Vec:
        # Duck-typed: anything with numeric x and y attributes, e.g. a shapely Point.
        return cls(int(point.x), int(point.y))

    def __add__(self, other: Vec) -> Vec:
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec) -> Vec:
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Vec):
            # Cross product: signed area of the parallelogram spanned by both vectors.
            return self.x * other.y - self.y * other.x
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            # Scaling truncates toward zero.
            return Vec(int(other * self.x), int(other * self.y))
        return NotImplemented

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return Vec(int(other * self.x), int(other * self.y))
        return NotImplemented

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


def cross(a: Vec, b: Vec) -> int:
    return a * b


def orientation(origin: Vec, a: Vec, b: Vec) -> int:
    """
    Sign of the turn origin -> a -> b: 1 counter-clockwise, -1 clockwise, 0 collinear.
    """
    # Translate to the origin first so the cross product measures the turn, not absolute position.
    value = (a - origin) * (b - origin)
    return (value > 0) - (value < 0)
