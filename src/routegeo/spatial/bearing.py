"""
Initial compass bearing between two fixed-point coordinates.

Uses the spherical forward-azimuth formula and reports degrees clockwise from north,
normalized into [0, 360). Angles are rounded to single precision at every step the
conversion helpers would store a float, so results match the other single-precision
kernels bit for bit.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from routegeo.constants import COORDINATE_PRECISION, DEG_TO_RAD, RAD_TO_DEG
from routegeo.coordinate import FixedPointCoordinate, require_set

_F32 = np.float32


def _to_radians(degrees: float) -> np.float32:
    # The degree value is narrowed to float before the conversion, then the product again.
    return _F32(float(_F32(degrees)) * DEG_TO_RAD)


def _to_degrees(radians: float) -> np.float32:
    return _F32(float(_F32(radians)) * RAD_TO_DEG)


def bearing(
    a: Optional[FixedPointCoordinate],
    b: Optional[FixedPointCoordinate],
) -> float:
    """
    Initial compass bearing in degrees from `a` to `b`, normalized into [0, 360).

    Computed in single precision. Coincident points give atan2(0, 0), i.e. 0 degrees.
    """
    a = require_set(a, "a")
    b = require_set(b, "b")

    delta_lon = _to_radians(b.lon / COORDINATE_PRECISION - a.lon / COORDINATE_PRECISION)
    lat1 = _to_radians(a.lat / COORDINATE_PRECISION)
    lat2 = _to_radians(b.lat / COORDINATE_PRECISION)

    # East and north components of the direction at `a`.
    y_value = _F32(math.sin(delta_lon) * math.cos(lat2))
    x_value = _F32(math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(delta_lon))
    result = _to_degrees(math.atan2(y_value, x_value))

    # Rounding to single precision can land exactly on 360, so normalize after every step.
    while result < 0.0:
        result = _F32(result + _F32(360.0))
    while result >= 360.0:
        result = _F32(result - _F32(360.0))
    return float(result)
