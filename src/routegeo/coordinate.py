"""
Fixed-point geographic coordinates.

A coordinate is a pair of signed 32-bit integers holding degrees scaled by
`COORDINATE_PRECISION`. The minimum 32-bit integer in both fields marks the
"unset" value, which is still representable so data carrying it can be
recognized. Public entry points take `FixedPointCoordinate | None` and reject
both `None` and unset values with `CoordinatePreconditionError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from routegeo.constants import COORDINATE_PRECISION, INT32_MAX, UNSET_VALUE

logger = logging.getLogger(__name__)


class RouteGeoError(Exception):
    """Base class for errors raised by routegeo."""


class CoordinateError(RouteGeoError, ValueError):
    """A value cannot be represented as a fixed-point coordinate."""


class CoordinatePreconditionError(CoordinateError):
    """A missing or unset coordinate was passed where a point is required."""


def _check_int32(name: str, value: int) -> None:
    if not UNSET_VALUE <= value <= INT32_MAX:
        raise CoordinateError(f"{name}={value} does not fit in a signed 32-bit integer")
    # Valid scaled degrees never reach bit 30; a set bit there usually means a unit mixup upstream.
    if value != UNSET_VALUE and abs(value) >> 30:
        logger.debug("broken %s: %d, bits: %s", name, value, format(value & 0xFFFFFFFF, "032b"))


@dataclass(frozen=True)
class FixedPointCoordinate:
    lat: int
    lon: int

    def __post_init__(self) -> None:
        _check_int32("lat", self.lat)
        _check_int32("lon", self.lon)

    @classmethod
    def unset(cls) -> FixedPointCoordinate:
        return cls(UNSET_VALUE, UNSET_VALUE)

    @classmethod
    def from_degrees(cls, lat: float, lon: float) -> FixedPointCoordinate:
        return cls(int(round(lat * COORDINATE_PRECISION)), int(round(lon * COORDINATE_PRECISION)))

    def reset(self) -> FixedPointCoordinate:
        # Coordinates are immutable values; resetting yields the unset value instead of mutating.
        return FixedPointCoordinate.unset()

    def is_set(self) -> bool:
        return self.lat != UNSET_VALUE and self.lon != UNSET_VALUE

    def is_valid(self) -> bool:
        return (
            -90 * COORDINATE_PRECISION <= self.lat <= 90 * COORDINATE_PRECISION
            and -180 * COORDINATE_PRECISION <= self.lon <= 180 * COORDINATE_PRECISION
        )

    @property
    def lat_degrees(self) -> float:
        return self.lat / COORDINATE_PRECISION

    @property
    def lon_degrees(self) -> float:
        return self.lon / COORDINATE_PRECISION

    def bearing_from(self, other: Optional[FixedPointCoordinate]) -> float:
        """Initial bearing in degrees when travelling from `other` to this coordinate."""
        from routegeo.spatial.bearing import bearing

        return bearing(other, self)

    def __str__(self) -> str:
        return f"({self.lat_degrees},{self.lon_degrees})"


def require_set(coordinate: Optional[FixedPointCoordinate], name: str = "coordinate") -> FixedPointCoordinate:
    """
    Return `coordinate` if it is present and set, otherwise raise.

    Bounds are not checked here: a set coordinate outside the valid range is
    accepted and simply produces meaningless results.
    """
    if coordinate is None:
        raise CoordinatePreconditionError(f"{name} is required but was None")
    if not coordinate.is_set():
        raise CoordinatePreconditionError(f"{name} is unset")
    return coordinate


def require_set_raw(name: str, *values: int) -> None:
    for value in values:
        if value == UNSET_VALUE:
            raise CoordinatePreconditionError(f"{name} contains the unset sentinel value")
