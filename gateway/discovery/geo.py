"""Coordinate parsing and geohash encoding for location searches."""

import math
from typing import Optional

from geolib import geohash

from .exceptions import ValidationError

# 7 characters is a ~153m x 153m cell
SEARCH_GEOHASH_PRECISION = 7


def encode_location(lat: float, lng: float, precision: int = SEARCH_GEOHASH_PRECISION) -> str:
    """Encode a coordinate as a base-32 geohash of the given precision.

    Callers must pass latitude within +/-90 and longitude within +/-180.
    A coordinate lying exactly on a bisection midpoint falls in the upper
    half (geolib compares with >=), so (0, 0) encodes as "s000000", the
    geohash.org cell, rather than "7zzzzzz".
    """
    return str(geohash.encode(lat, lng, precision))


def parse_coordinate(value: Optional[str], name: str) -> float:
    """Convert a client-supplied coordinate string to a float.

    Raises:
        ValidationError: If the value is missing, blank, or not a finite number
    """
    if value is None or not str(value).strip():
        raise ValidationError("lat and lng are required")

    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be a number, got: {value!r}") from e

    if not math.isfinite(number):
        raise ValidationError(f"{name} must be a number, got: {value!r}")

    return number
