"""
Geo Helpers
===========

Great-circle distance for proximity-aware staff suggestions.
"""

import math
from dataclasses import dataclass
from typing import Optional

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""
    lat: float
    lng: float

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lng}")


def haversine_km(point1: GeoPoint, point2: GeoPoint) -> float:
    """Calculate distance between two points using the Haversine formula."""
    lat1, lng1 = math.radians(point1.lat), math.radians(point1.lng)
    lat2, lng2 = math.radians(point2.lat), math.radians(point2.lng)

    dlat = lat2 - lat1
    dlng = lng2 - lng1

    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2)
    c = 2 * math.asin(math.sqrt(a))

    return c * EARTH_RADIUS_KM


def distance_between(
    origin: Optional[GeoPoint],
    destination: Optional[GeoPoint]
) -> Optional[float]:
    """Distance in km, or None when either side is unknown."""
    if origin is None or destination is None:
        return None
    return haversine_km(origin, destination)
