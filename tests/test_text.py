import pytest

from routegeo.coordinate import CoordinateError, FixedPointCoordinate
from routegeo.text import (
    coordinate_to_reversed_string,
    coordinate_to_string,
    format_scaled,
    parse_coordinate,
    parse_scaled,
)


def test_format_scaled() -> None:
    assert format_scaled(52520000) == "52.520000"
    assert format_scaled(-500000) == "-0.500000"
    assert format_scaled(0) == "0.000000"
    assert format_scaled(7) == "0.000007"
    assert format_scaled(-180000000) == "-180.000000"
    assert len(format_scaled(-180000000)) == 11


def test_format_scaled_rejects_values_wider_than_11_chars() -> None:
    with pytest.raises(CoordinateError):
        format_scaled(-(2**31))


def test_coordinate_strings() -> None:
    coord = FixedPointCoordinate(lat=52520000, lon=13405000)
    assert coordinate_to_string(coord) == "13.405000,52.520000"
    assert coordinate_to_reversed_string(coord) == "52.520000,13.405000"


def test_scaled_round_trip() -> None:
    for value in [0, 1, -1, 999999, 1000000, -1000001, 52520000, -33868820, 180000000, -90000000]:
        assert parse_scaled(format_scaled(value)) == value


def test_parse_scaled_accepts_short_fractions() -> None:
    assert parse_scaled("1.5") == 1500000
    assert parse_scaled("-0.25") == -250000
    assert parse_scaled("13") == 13000000


def test_parse_scaled_rejects_garbage() -> None:
    for text in ["", "abc", "1.2345678", "1,5"]:
        with pytest.raises(CoordinateError):
            parse_scaled(text)


def test_coordinate_round_trip() -> None:
    coord = FixedPointCoordinate(lat=-33868820, lon=151209296)
    assert parse_coordinate(coordinate_to_string(coord)) == coord
    assert parse_coordinate(coordinate_to_reversed_string(coord), lat_first=True) == coord
    with pytest.raises(CoordinateError):
        parse_coordinate("1.0,2.0,3.0")
