"""
Latitude <-> linear-y transform (spherical Mercator, degrees in and out).

Segment projection works in a local plane: latitudes are stretched with the
Mercator transform so straight-line math is valid over short distances, while
longitudes are used as-is.
"""

from __future__ import annotations

import math

from routegeo.constants import DEG_TO_RAD, RAD_TO_DEG


def lat2y(lat_deg: float) -> float:
    # lat2y(0) is about -6e-15 rather than 0 because tan(pi/4) rounds just below 1; projection relies on that.
    tangent = math.tan(math.pi / 4.0 + lat_deg * DEG_TO_RAD / 2.0)
    # The south pole maps to tan(0); follow IEEE log(0) instead of raising.
    if tangent <= 0.0:
        return -math.inf
    return RAD_TO_DEG * math.log(tangent)


def y2lat(y: float) -> float:
    return RAD_TO_DEG * (2.0 * math.atan(math.exp(y * DEG_TO_RAD)) - math.pi / 2.0)
