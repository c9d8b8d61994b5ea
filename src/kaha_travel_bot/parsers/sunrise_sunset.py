"""Parser for the sunrise-sunset.org JSON response."""

from __future__ import annotations

import json
from collections.abc import Mapping

from kaha_travel_bot.models import SunTimes
from kaha_travel_bot.parsers.base import ParseError


def parse_sun_times(raw_payload: str) -> SunTimes:
    try:
        data = json.loads(raw_payload)
    except ValueError as exc:
        raise ParseError(f"sun times response is not valid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ParseError("sun times response is not a JSON object")

    # The service reports lookup errors in-band with HTTP 200
    status = data.get("status", "OK")
    if status != "OK":
        raise ParseError(f"sun times lookup returned status {status!r}")

    results = data.get("results")
    if not isinstance(results, Mapping):
        raise ParseError("sun times response has no results")

    sunrise = results.get("sunrise")
    sunset = results.get("sunset")
    if sunrise is None or sunset is None:
        raise ParseError("sun times response is missing sunrise or sunset")

    return SunTimes(sunrise=str(sunrise), sunset=str(sunset))
