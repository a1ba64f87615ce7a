"""
Shared numeric constants for the fixed-point geometry kernel.

Every distance function reads the earth radius and the coordinate precision from
here, so the haversine and planar approximations can never drift apart.
"""

from __future__ import annotations

import math

import numpy as np

# Coordinates are stored as integer degrees scaled by this factor (6 decimal digits, ~11cm at the equator).
COORDINATE_PRECISION = 1_000_000.0

# Minimum signed 32-bit integer; marks an unset coordinate field.
UNSET_VALUE = -(2**31)
INT32_MAX = 2**31 - 1

# Mean earth radius in meters, used by both the haversine and the equirectangular distance.
EARTH_RADIUS_M = 6_372_797.560856

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi

# Machine epsilon of IEEE single precision; the projection branches compare against it.
FLOAT32_EPSILON = float(np.finfo(np.float32).eps)
