"""
Point-to-segment projection on fixed-point coordinates.

The query point P and the segment endpoints S (source) and T (target) are mapped
into a local plane: x = lat2y(latitude), y = longitude, giving (x, y) for P,
(a, b) for S and (c, d) for T. The foot of the perpendicular (p, q) is found in
that plane, and its normalized position along the segment is

    nY    = (d*p - c*q) / (a*d - b*c)
    ratio = (p - nY*a) / c

With (p, q) = (1 - t)*(a, b) + t*(c, d), nY works out to 1 - t and the ratio to t,
so the two parametric weights never have to be computed separately. The shortcut
divides by c and by a*d - b*c, so segments whose supporting line passes through
the plane origin (or that end at latitude 0) produce NaN; those resolve to a
fixed fallback ratio rather than an error.

All plane arithmetic is single precision (numpy.float32) so the epsilon branches
fall the same way for every caller. Divisions follow IEEE semantics: x/0 gives
inf, 0/0 gives NaN.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from routegeo.constants import COORDINATE_PRECISION, FLOAT32_EPSILON
from routegeo.coordinate import FixedPointCoordinate, require_set
from routegeo.spatial.distance import equirectangular_distance
from routegeo.spatial.mercator import lat2y, y2lat

logger = logging.getLogger(__name__)

_F32 = np.float32
_EPS = _F32(FLOAT32_EPSILON)
_ONE = _F32(1.0)
# Below this magnitude nY is floating noise around the transform origin.
_NY_SNAP = 1.0 / COORDINATE_PRECISION


@dataclass(frozen=True)
class PerpendicularFoot:
    # Foot of the perpendicular in the local plane (p: Mercator y of latitude, q: longitude in degrees).
    p: float
    q: float
    # Normalized position along the segment; 0 is the source, 1 the target. Not clamped.
    ratio: float

    @property
    def lat_degrees(self) -> float:
        return float(y2lat(self.p))

    @property
    def is_finite(self) -> bool:
        # A pole endpoint maps to an infinite x, which poisons p and q with NaN.
        return math.isfinite(self.p) and math.isfinite(self.q)

    def to_coordinate(self) -> FixedPointCoordinate:
        # int() truncates toward zero, matching how the scaled integers are produced elsewhere.
        return FixedPointCoordinate(
            int(self.lat_degrees * COORDINATE_PRECISION),
            int(self.q * COORDINATE_PRECISION),
        )


@dataclass(frozen=True)
class SegmentProjection:
    nearest: FixedPointCoordinate
    ratio: float
    distance: float


def _to_plane(coordinate: FixedPointCoordinate) -> tuple[np.float32, np.float32]:
    # x is the Mercator-stretched latitude, y the plain longitude, both in degrees.
    return (
        _F32(lat2y(coordinate.lat / COORDINATE_PRECISION)),
        _F32(coordinate.lon / COORDINATE_PRECISION),
    )


def foot_in_plane(
    x: np.float32,
    y: np.float32,
    a: np.float32,
    b: np.float32,
    c: np.float32,
    d: np.float32,
    *,
    snap: bool = True,
) -> tuple[np.float32, np.float32, np.float32]:
    """
    Foot (p, q) of (x, y) on the line through (a, b) and (c, d), and its raw ratio.

    The ratio may be NaN or infinite; resolving those is left to the caller, who
    knows which coordinates the plane values came from.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        # Near-vertical in x: the slope would divide by (almost) zero, so drop straight across instead.
        vertical = abs(a - c) <= _EPS if snap else a == c
        if not vertical:
            m = _F32((d - b) / (c - a))
            numerator = (x + m * y) + (m * m * a - m * b)
            if snap:
                # The metric projection divides by a double-precision 1 + m*m before rounding p.
                p = _F32(float(numerator) / (1.0 + float(m * m)))
            else:
                p = _F32(numerator / (_ONE + m * m))
            q = _F32(b + m * (p - a))
        else:
            p = c
            q = y

        n_y = _F32((d * p - c * q) / (a * d - b * c))
        # Discretize to coordinate precision; this only ever zeroes noise, it is not a general rounding rule.
        if snap and abs(n_y) < _NY_SNAP:
            n_y = _F32(0.0)

        # n_y is the source weight 1 - t, so this yields t without solving for both weights.
        ratio = _F32((p - n_y * a) / c)
    return p, q, ratio


def foot_of_perpendicular(
    point: FixedPointCoordinate,
    source: FixedPointCoordinate,
    target: FixedPointCoordinate,
    *,
    snap: bool = True,
) -> PerpendicularFoot:
    """
    Project `point` onto the line through `source` and `target`.

    With `snap=True` (metric projection) near-vertical segments are detected with
    float32 epsilon, tiny nY values are zeroed, and ratios within epsilon of 0 or 1
    are snapped. With `snap=False` (ordering approximation) only an exact
    a == c test is made and nothing is snapped.
    """
    x, y = _to_plane(point)
    a, b = _to_plane(source)
    c, d = _to_plane(target)
    p, q, ratio = foot_in_plane(x, y, a, b, c, d, snap=snap)

    if np.isnan(ratio):
        # Degenerate geometry: only a query sitting exactly on the target counts as "at the end".
        ratio = _ONE if target == point else _F32(0.0)
        logger.debug("degenerate projection for %s onto %s-%s, ratio=%s", point, source, target, ratio)
    elif snap and np.isinf(ratio):
        # Zero-length segments away from latitude 0 divide by zero; keep the endpoint the sign selects.
        ratio = _F32(0.0) if ratio < 0.0 else _ONE
    elif snap and abs(ratio) <= _EPS:
        ratio = _F32(0.0)
    elif snap and abs(ratio - _ONE) <= _EPS:
        ratio = _ONE

    return PerpendicularFoot(p=float(p), q=float(q), ratio=float(ratio))


def _project(
    point: Optional[FixedPointCoordinate],
    source: Optional[FixedPointCoordinate],
    target: Optional[FixedPointCoordinate],
) -> SegmentProjection:
    point = require_set(point, "point")
    source = require_set(source, "source")
    target = require_set(target, "target")

    foot = foot_of_perpendicular(point, source, target, snap=True)
    # Inclusive bounds: a snapped ratio of exactly 0 or 1 picks the endpoint itself.
    if foot.ratio <= 0.0:
        nearest = source
    elif foot.ratio >= 1.0:
        nearest = target
    else:
        nearest = foot.to_coordinate()

    distance = equirectangular_distance(point, nearest)
    return SegmentProjection(nearest=nearest, ratio=foot.ratio, distance=distance)


def perpendicular_distance(
    point: Optional[FixedPointCoordinate],
    source: Optional[FixedPointCoordinate],
    target: Optional[FixedPointCoordinate],
) -> float:
    """Planar distance in meters from `point` to the nearest location on segment source-target."""
    return _project(point, source, target).distance


def project_onto_segment(
    point: Optional[FixedPointCoordinate],
    source: Optional[FixedPointCoordinate],
    target: Optional[FixedPointCoordinate],
) -> SegmentProjection:
    """
    Nearest location on segment source-target, its ratio along the segment and the distance.

    The ratio is reported as computed after snapping; the nearest location is the
    source when ratio <= 0, the target when ratio >= 1, and the projected foot
    otherwise.
    """
    return _project(point, source, target)
