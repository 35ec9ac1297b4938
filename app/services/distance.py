"""
Great-circle distance between coordinates.

Coordinates arrive either as a ``{"lat": ..., "lng": ...}`` mapping (the shape
Google Places uses for ``geometry.location``) or as a ``"lat,lng"`` query
string. Both are normalized to :class:`Coordinate` before any math runs.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Union

from .exceptions import InvalidCoordinateError

# Mean Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinate:
    """Immutable latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to the Google Maps ``LatLng`` shape."""
        return {"lat": self.lat, "lng": self.lng}

    def __str__(self) -> str:
        return f"{self.lat},{self.lng}"


CoordinateLike = Union[Coordinate, Mapping, str]


def _to_float(raw: Any, source: Any, label: str) -> float:
    if isinstance(raw, bool):
        raise InvalidCoordinateError(source, f"{label} is not a number")
    try:
        number = float(raw)
    except (TypeError, ValueError):
        raise InvalidCoordinateError(source, f"{label} is not a number") from None

    if not math.isfinite(number):
        raise InvalidCoordinateError(source, f"{label} is not finite")
    return number


def parse_coordinate(value: CoordinateLike) -> Coordinate:
    """
    Normalize a coordinate-like value into a :class:`Coordinate`.

    Args:
        value: A ``Coordinate``, a mapping with ``lat`` and ``lng`` keys,
            or a ``"lat,lng"`` string

    Returns:
        The parsed coordinate

    Raises:
        InvalidCoordinateError: If the value is malformed, non-finite or
            outside the valid geographic range

    Example:
        >>> parse_coordinate("40.7128,-74.0060")
        Coordinate(lat=40.7128, lng=-74.006)
    """
    if isinstance(value, Coordinate):
        return value

    if isinstance(value, str):
        parts = value.split(",")
        if len(parts) != 2:
            raise InvalidCoordinateError(value, "expected 'lat,lng'")
        lat = _to_float(parts[0].strip(), value, "latitude")
        lng = _to_float(parts[1].strip(), value, "longitude")
    elif isinstance(value, Mapping):
        if "lat" not in value or "lng" not in value:
            raise InvalidCoordinateError(value, "expected 'lat' and 'lng' keys")
        lat = _to_float(value["lat"], value, "latitude")
        lng = _to_float(value["lng"], value, "longitude")
    else:
        raise InvalidCoordinateError(value, f"unsupported type {type(value).__name__}")

    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinateError(value, f"latitude {lat} outside [-90, 90]")
    if not -180.0 <= lng <= 180.0:
        raise InvalidCoordinateError(value, f"longitude {lng} outside [-180, 180]")

    return Coordinate(lat=lat, lng=lng)


def calculate_distance(location1: CoordinateLike, location2: CoordinateLike) -> float:
    """Haversine distance in kilometers between two coordinate-likes."""
    a = parse_coordinate(location1)
    b = parse_coordinate(location2)

    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat))
        * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push h just past 1 for antipodal points
    h = min(h, 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c
