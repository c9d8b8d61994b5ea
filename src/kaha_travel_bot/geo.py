"""Geographic utility functions — pure Python, no external deps."""

from __future__ import annotations

import math

from kaha_travel_bot.models import GeoPoint

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points on Earth in kilometers.

    Uses the Haversine formula. Inputs are WGS84 decimal degrees.
    """
    rlat1, rlat2 = math.radians(lat1), math.radians(lat2)

    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(rlat1) * math.cos(rlat2) * math.sin(dlon / 2) ** 2
    # Float error can push a a hair past 1 for antipodal points
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_km(a: GeoPoint, b: GeoPoint) -> int:
    """Distance between two points, rounded to the nearest whole kilometer."""
    return round(haversine_km(a.latitude, a.longitude, b.latitude, b.longitude))
