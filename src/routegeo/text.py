"""
Text serialization for fixed-point coordinates.

Scaled integers are written with exactly six fractional digits and no padding of the
integer part, so the widest value ("-180.000000") takes 11 characters. Coordinates are
written "lon,lat" by default and "lat,lon" in the reversed form. Parsing works on the
digits directly, so a formatted value always reads back to the same integer.
"""

from __future__ import annotations

import re

from routegeo.coordinate import CoordinateError, FixedPointCoordinate

FRACTION_DIGITS = 6
MAX_WIDTH = 11

_SCALED_RE = re.compile(r"^\s*([+-]?)(\d+)(?:\.(\d{1,6}))?\s*$")


def format_scaled(value: int) -> str:
    sign = "-" if value < 0 else ""
    integer, fraction = divmod(abs(value), 10**FRACTION_DIGITS)
    text = f"{sign}{integer}.{fraction:0{FRACTION_DIGITS}d}"
    if len(text) > MAX_WIDTH:
        raise CoordinateError(f"{value} does not fit in {MAX_WIDTH} characters")
    return text


def parse_scaled(text: str) -> int:
    match = _SCALED_RE.match(text)
    if match is None:
        raise CoordinateError(f"Not a decimal degree value: {text!r}")
    sign, integer, fraction = match.groups()
    value = int(integer) * 10**FRACTION_DIGITS + int((fraction or "").ljust(FRACTION_DIGITS, "0"))
    return -value if sign == "-" else value


def coordinate_to_string(coordinate: FixedPointCoordinate) -> str:
    return f"{format_scaled(coordinate.lon)},{format_scaled(coordinate.lat)}"


def coordinate_to_reversed_string(coordinate: FixedPointCoordinate) -> str:
    return f"{format_scaled(coordinate.lat)},{format_scaled(coordinate.lon)}"


def parse_coordinate(text: str, *, lat_first: bool = False) -> FixedPointCoordinate:
    parts = text.split(",")
    if len(parts) != 2:
        raise CoordinateError(f"Expected two comma-separated values: {text!r}")
    first, second = (parse_scaled(part) for part in parts)
    if lat_first:
        return FixedPointCoordinate(lat=first, lon=second)
    return FixedPointCoordinate(lat=second, lon=first)
