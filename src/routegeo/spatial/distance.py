"""
Distance metrics over fixed-point coordinates.

Three flavours, from most to least accurate:
- `haversine_distance`: great-circle distance in double precision.
- `equirectangular_distance`: planar approximation in single precision; cheap and
  good enough for points a few kilometers apart.
- `ordered_perpendicular_distance`: integer-only point-to-segment value that is not
  metric at all, but preserves the relative order of candidate segments.

Functions taking coordinates have `_raw` twins taking four scaled integers.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from routegeo.constants import COORDINATE_PRECISION, DEG_TO_RAD, EARTH_RADIUS_M
from routegeo.coordinate import FixedPointCoordinate, require_set, require_set_raw

_F32 = np.float32
_RAD_F32 = _F32(DEG_TO_RAD)
_EARTH_RADIUS_F32 = _F32(EARTH_RADIUS_M)


def haversine_distance_raw(lat1: int, lon1: int, lat2: int, lon2: int) -> float:
    require_set_raw("haversine_distance_raw", lat1, lon1, lat2, lon2)

    phi1 = (lat1 / COORDINATE_PRECISION) * DEG_TO_RAD
    lambda1 = (lon1 / COORDINATE_PRECISION) * DEG_TO_RAD
    phi2 = (lat2 / COORDINATE_PRECISION) * DEG_TO_RAD
    lambda2 = (lon2 / COORDINATE_PRECISION) * DEG_TO_RAD

    delta_phi = phi1 - phi2
    delta_lambda = lambda1 - lambda2

    # Squared half-chord length between the points, then the angular distance.
    a =math.sin(delta_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def haversine_distance(
    a: Optional[FixedPointCoordinate],
    b: Optional[FixedPointCoordinate],
) -> float:
    """Great-circle distance in meters between two set coordinates."""
    a = require_set(a, "a")
    b = require_set(b, "b")
    return haversine_distance_raw(a.lat, a.lon, b.lat, b.lon)


def equirectangular_distance_raw(lat1: int, lon1: int, lat2: int, lon2: int) -> float:
    require_set_raw("equirectangular_distance_raw", lat1, lon1, lat2, lon2)

    # Single precision on purpose: callers rank candidates by this value and must see the same rounding everywhere.
    float_lat1 = _F32((lat1 / COORDINATE_PRECISION) * float(_RAD_F32))
    float_lon1 = _F32((lon1 / COORDINATE_PRECISION) * float(_RAD_F32))
    float_lat2 = _F32((lat2 / COORDINATE_PRECISION) * float(_RAD_F32))
    float_lon2 = _F32((lon2 / COORDINATE_PRECISION) * float(_RAD_F32))

    # Shrink the longitude delta by the cosine of the mean latitude.
    x_value = _F32(float(float_lon2 - float_lon1) * math.cos(float(float_lat1 + float_lat2) / 2.0))
    y_value = _F32(float_lat2 - float_lat1)
    return float(_F32(np.sqrt(x_value * x_value + y_value * y_value)) * _EARTH_RADIUS_F32)


def equirectangular_distance(
    a: Optional[FixedPointCoordinate],
    b: Optional[FixedPointCoordinate],
) -> float:
    """
    Planar (equirectangular) distance in meters.

    Longitude deltas are scaled by the cosine of the mean latitude before taking the
    Euclidean norm. Only meaningful for points close together.
    """
    a = require_set(a, "a")
    b = require_set(b, "b")
    return equirectangular_distance_raw(a.lat, a.lon, b.lat, b.lon)


def ordered_perpendicular_distance(
    point: Optional[FixedPointCoordinate],
    source: Optional[FixedPointCoordinate],
    target: Optional[FixedPointCoordinate],
) -> int:
    """
    Integer point-to-segment value for ranking candidate segments.

    Shares the projection math of `routegeo.spatial.projection` but skips its
    epsilon snapping and measures the offset in scaled coordinate units. The
    result is not a distance in any unit; only comparisons between values for
    the same query point are meaningful.
    """
    from routegeo.spatial.projection import foot_of_perpendicular

    point = require_set(point, "point")
    source = require_set(source, "source")
    target = require_set(target, "target")

    foot = foot_of_perpendicular(point, source, target, snap=False)
    ratio = foot.ratio

    # Strict comparisons: a ratio of exactly 0 or 1 still goes through the foot.
    if ratio < 0.0:
        dx = point.lon - source.lon
        dy = point.lat - source.lat
    elif ratio > 1.0:
        dx = point.lon - target.lon
        dy = point.lat - target.lat
    elif not foot.is_finite:
        # Pole endpoints leave no usable foot; take the endpoint the fallback ratio picked.
        end = target if ratio >= 1.0 else source
        dx = point.lon - end.lon
        dy = point.lat - end.lat
    else:
        # Foot back in scaled units, truncated toward zero like the coordinate fields.
        dx = int(point.lon - foot.q * COORDINATE_PRECISION)
        dy = int(point.lat - foot.lat_degrees * COORDINATE_PRECISION)
    return int(math.sqrt(dx * dx + dy * dy))
