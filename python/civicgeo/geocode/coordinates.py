"""Detection and parsing of ``"lat, lng"`` location strings.

Classification is syntactic: any string that looks like two decimal numbers
separated by a comma is treated as coordinates, whether or not it names a
plausible place.
"""
from __future__ import annotations

import math
import re

from civicgeo.geocode.models import Coordinates, in_range

# Optional sign, ASCII digits, optional decimal part; surrounding whitespace allowed.
COORDINATE_PATTERN = re.compile(
    r"^\s*([+-]?[0-9]+\.?[0-9]*)\s*,\s*([+-]?[0-9]+\.?[0-9]*)\s*$",
    re.ASCII,
)

CANONICAL_PRECISION = 6


def is_coordinate_string(value: str) -> bool:
    """Return True if *value* has the shape ``"<num>, <num>"``."""
    if not isinstance(value, str):
        return False
    return COORDINATE_PATTERN.match(value) is not None


def parse_coordinates(value: str) -> Coordinates | None:
    """Parse a coordinate string into a ``Coordinates`` pair.

    Returns None when *value* does not match ``COORDINATE_PATTERN``, when
    either component overflows to a non-finite float, or when the pair lies
    outside the latitude/longitude ranges.
    """
    if not isinstance(value, str):
        return None
    match = COORDINATE_PATTERN.match(value)
    if match is None:
        return None
    lat, lng = float(match.group(1)), float(match.group(2))
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    if not in_range(lat, lng):
        return None
    return Coordinates(lat, lng)


def format_coordinates(lat: float, lng: float) -> str:
    """Canonical ``"lat,lng"`` encoding used as the reverse-cache key."""
    return f"{lat:.{CANONICAL_PRECISION}f},{lng:.{CANONICAL_PRECISION}f}"
