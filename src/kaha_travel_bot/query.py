"""Query URL construction for the sunrise/sunset lookup."""

from __future__ import annotations

from datetime import date
from urllib.parse import quote, urlencode

from kaha_travel_bot.models import GeoPoint


def build_query_url(base_url: str, point: GeoPoint, on: date) -> str:
    """Build ``base_url?lat=..&lng=..&date=YYYY-MM-DD``.

    Keys and values are percent-encoded with no safe characters and kept in
    insertion order.
    """
    params = {
        "lat": str(point.latitude),
        "lng": str(point.longitude),
        "date": on.isoformat(),
    }
    return f"{base_url}?{urlencode(params, safe='', quote_via=quote)}"
