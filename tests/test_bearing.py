import numpy as np
import pytest

from routegeo.coordinate import CoordinatePreconditionError, FixedPointCoordinate
from routegeo.spatial.bearing import bearing


def _c(lat: float, lon: float) -> FixedPointCoordinate:
    return FixedPointCoordinate.from_degrees(lat, lon)


def test_cardinal_directions() -> None:
    assert bearing(_c(52.5, 13.4), _c(52.6, 13.4)) == pytest.approx(0.0, abs=1e-3)
    assert bearing(_c(0.0, 0.0), _c(0.0, 1.0)) == pytest.approx(90.0, abs=1e-3)
    assert bearing(_c(52.6, 13.4), _c(52.5, 13.4)) == pytest.approx(180.0, abs=1e-3)
    assert bearing(_c(0.0, 1.0), _c(0.0, 0.0)) == pytest.approx(270.0, abs=1e-3)


def test_bearing_range() -> None:
    points = [_c(lat, lon) for lat in (-60.0, -0.5, 0.0, 0.5, 45.0, 89.0) for lon in (-179.0, -1.0, 0.0, 1.0, 120.0)]
    for a in points:
        for b in points:
            if a == b:
                continue
            result = bearing(a, b)
            assert 0.0 <= result < 360.0


def test_coincident_points_give_zero() -> None:
    p = _c(52.5, 13.4)
    assert bearing(p, p) == 0.0


def test_bearing_from_is_reverse_argument_order() -> None:
    a, b = _c(52.5, 13.4), _c(48.85, 2.35)
    assert b.bearing_from(a) == bearing(a, b)
    assert 240.0 < bearing(a, b) < 260.0


def test_unset_inputs_fail_fast() -> None:
    with pytest.raises(CoordinatePreconditionError):
        bearing(None, _c(1.0, 1.0))
    with pytest.raises(CoordinatePreconditionError):
        _c(1.0, 1.0).bearing_from(FixedPointCoordinate.unset())


def test_meridian_bearings_are_exact_single_precision() -> None:
    north = bearing(_c(52.5, 13.4), _c(52.6, 13.4))
    south = bearing(_c(52.6, 13.4), _c(52.5, 13.4))
    assert north == 0.0
    # atan2 gives pi, which rounds to a float just above pi before conversion to degrees.
    assert south == 180.0
    for value in (north, south, bearing(_c(52.5, 13.4), _c(48.85, 2.35))):
        assert float(np.float32(value)) == value
