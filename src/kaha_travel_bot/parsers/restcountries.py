"""Parser for the REST Countries v3.1 `/all` response."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from kaha_travel_bot.models import Country, DrivingSide
from kaha_travel_bot.parsers.base import ParseError, safe_float

logger = logging.getLogger(__name__)


@dataclass
class ParseBatch:
    """Outcome of parsing a whole country listing."""

    countries: list[Country] = field(default_factory=list)
    failures: list[ParseError] = field(default_factory=list)
    warnings: dict[str, list[str]] = field(default_factory=dict)  # country name → warnings


def _extract_name(raw: Mapping) -> str | None:
    name = raw.get("name")
    if isinstance(name, Mapping):
        common = name.get("common")
        if isinstance(common, str) and common:
            return common
    return None


def parse_country(raw) -> tuple[Country, list[str]]:
    """Parse one country object, defaulting each field independently.

    Returns the country and the warnings raised while defaulting. Raises
    ParseError if the record has no name or has a shape that cannot be read.
    """
    if not isinstance(raw, Mapping):
        raise ParseError(f"expected a JSON object, got {type(raw).__name__}")

    name = _extract_name(raw)
    if name is None:
        raise ParseError("record has no name.common")

    warnings: list[str] = []

    # capital is a list of names; the first one is the seat of government
    capitals = raw.get("capital")
    if capitals is None:
        capital = "Unknown"
    elif isinstance(capitals, list):
        capital = str(capitals[0]) if capitals and capitals[0] is not None else "Unknown"
    else:
        raise ParseError(f"capital is {type(capitals).__name__}, expected list", name)

    languages = raw.get("languages")
    if languages is None:
        language_count = 0
    elif isinstance(languages, Mapping):
        language_count = len(languages)
    else:
        raise ParseError(f"languages is {type(languages).__name__}, expected object", name)

    car = raw.get("car")
    side = car.get("side") if isinstance(car, Mapping) else None
    driving_side = DrivingSide.from_raw(side)

    capital_info = raw.get("capitalInfo")
    latlng = capital_info.get("latlng") if isinstance(capital_info, Mapping) else None
    if not isinstance(latlng, list):
        latlng = []
    latitude, lat_ok = safe_float(latlng[0] if len(latlng) > 0 else None)
    longitude, lng_ok = safe_float(latlng[1] if len(latlng) > 1 else None)
    if not lat_ok:
        warnings.append("capital latitude missing or invalid, using 0.0")
    if not lng_ok:
        warnings.append("capital longitude missing or invalid, using 0.0")

    country = Country(
        name=name,
        capital=capital,
        latitude=latitude,
        longitude=longitude,
        language_count=language_count,
        driving_side=driving_side,
        coordinates_known=lat_ok and lng_ok,
    )
    return country, warnings


def parse_document(raw_payload: str) -> ParseBatch:
    """Parse a full listing; bad records are logged and skipped."""
    try:
        data = json.loads(raw_payload)
    except ValueError as exc:
        raise ParseError(f"country listing is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ParseError(f"country listing is {type(data).__name__}, expected array")

    batch = ParseBatch()
    for raw in data:
        try:
            country, warnings = parse_country(raw)
        except ParseError as exc:
            # Reported to the user by the caller; logged for -v runs only
            logger.info("Error parsing data for: %s (%s)", exc.label, exc)
            batch.failures.append(exc)
            continue

        if warnings:
            logger.debug("%s: %s", country.name, "; ".join(warnings))
            batch.warnings[country.name] = warnings
        batch.countries.append(country)

    logger.info(
        "Parsed %d countries, skipped %d", len(batch.countries), len(batch.failures),
    )
    return batch


def parse(raw_payload: str) -> list[Country]:
    return parse_document(raw_payload).countries
