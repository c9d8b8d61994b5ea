"""The travel bot pipeline: fetch, select, look up sun times, summarise.

A run is one linear sequence of awaited steps. Country fetch failures and
empty selections end the run with a message; a failed sun-times lookup
propagates as SecondaryLookupError.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date, timedelta

from kaha_travel_bot.clients import NetworkError, RestCountriesClient, SunriseSunsetClient
from kaha_travel_bot.geo import distance_km
from kaha_travel_bot.models import KAHA_OFFICE, Country, GeoPoint, SunTimes
from kaha_travel_bot.parsers import ParseError, parse_document
from kaha_travel_bot.selector import EmptySelectionError, choose_southern_country
from kaha_travel_bot.summary import Typewriter, format_summary, format_sun_times

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TravelReport:
    country: Country
    sun_times: SunTimes
    distance_km: int
    date: date


class TravelBot:
    def __init__(
        self,
        countries_client: RestCountriesClient,
        sun_client: SunriseSunsetClient,
        output: Typewriter,
        rng: random.Random | None = None,
        origin: GeoPoint = KAHA_OFFICE,
        today: date | None = None,
    ):
        self.countries_client = countries_client
        self.sun_client = sun_client
        self.output = output
        self.rng = rng
        self.origin = origin
        self.today = today

    async def fetch_countries(self) -> list[Country]:
        """Fetch and parse the country listing; empty on any fetch failure."""
        try:
            raw = await self.countries_client.fetch_countries()
            batch = parse_document(raw)
        except (NetworkError, ParseError) as exc:
            logger.error("Error handling country request: %s", exc)
            self.output.line(f"Error handling request due to: {exc}")
            return []

        for failure in batch.failures:
            self.output.line(f"Error parsing data for: {failure.label}")
        return batch.countries

    async def run(self) -> TravelReport | None:
        out = self.output
        out.line("Welcome to the KAHA Travel Bot")
        out.line("Fetching all countries from https://restcountries.com")

        countries = await self.fetch_countries()
        if not countries:
            out.line("Error fetching countries!")
            return None

        out.line("Choosing random country from the southern hemisphere...")
        try:
            country = choose_southern_country(countries, self.rng)
        except EmptySelectionError as exc:
            logger.warning("No southern hemisphere country to choose: %s", exc)
            out.line("No countries found in the southern hemisphere!")
            return None
        out.line(f"Selected Random Country: {country.name}")

        tomorrow = (self.today or date.today()) + timedelta(days=1)
        sun_times = await self.sun_client.fetch_sun_times(country.location, tomorrow)
        out.highlighted(format_sun_times(sun_times))

        distance = distance_km(self.origin, country.location)
        for line in format_summary(country, distance):
            out.highlighted(line)

        return TravelReport(country=country, sun_times=sun_times, distance_km=distance, date=tomorrow)
