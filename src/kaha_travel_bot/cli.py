"""CLI entrypoint for the KAHA travel bot."""

from __future__ import annotations

import asyncio
import logging
import random

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from kaha_travel_bot.bot import TravelBot, TravelReport
from kaha_travel_bot.clients import (
    NetworkError,
    RestCountriesClient,
    SecondaryLookupError,
    SunriseSunsetClient,
)
from kaha_travel_bot.geo import distance_km
from kaha_travel_bot.models import KAHA_OFFICE, Country, GeoPoint
from kaha_travel_bot.parsers import ParseError, parse
from kaha_travel_bot.selector import is_northern_hemisphere, is_southern_hemisphere
from kaha_travel_bot.sources import SOURCES
from kaha_travel_bot.summary import Typewriter

console = Console(highlight=False)

_HEMISPHERES = {
    "southern": is_southern_hemisphere,
    "northern": is_northern_hemisphere,
    "all": lambda country: True,
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool):
    """KAHA Travel Bot — a random trip to the southern hemisphere."""
    _configure_logging(verbose)


async def _run_bot(seed: int | None, delay: float, timeout: float) -> TravelReport | None:
    countries_client = RestCountriesClient(SOURCES["restcountries"].with_timeout(timeout))
    sun_client = SunriseSunsetClient(SOURCES["sunrise_sunset"].with_timeout(timeout))
    async with countries_client, sun_client:
        bot = TravelBot(
            countries_client,
            sun_client,
            Typewriter(console, delay=delay),
            rng=random.Random(seed) if seed is not None else None,
        )
        return await bot.run()


@cli.command()
@click.option("--seed", type=int, default=None, help="Seed for the country choice.")
@click.option("--delay", default=0.02, help="Typewriter delay per character in seconds (0 disables).")
@click.option("--timeout", default=15.0, help="Timeout per HTTP request in seconds.")
def run(seed: int | None, delay: float, timeout: float):
    """Pick a southern hemisphere country and summarise a trip there."""
    try:
        asyncio.run(_run_bot(seed, delay, timeout))
    except SecondaryLookupError as exc:
        raise click.ClickException(f"Sunrise/sunset lookup failed: {exc}") from exc


async def _fetch_countries(timeout: float) -> list[Country]:
    async with RestCountriesClient(SOURCES["restcountries"].with_timeout(timeout)) as client:
        return parse(await client.fetch_countries())


@cli.command()
@click.option("--hemisphere", default="southern", type=click.Choice(list(_HEMISPHERES)))
@click.option("--limit", default=20, help="Max results to display.")
@click.option("--timeout", default=15.0, help="Timeout per HTTP request in seconds.")
def countries(hemisphere: str, limit: int, timeout: float):
    """List parsed countries with their distance from KAHA's office."""
    predicate = _HEMISPHERES[hemisphere]
    try:
        fetched = asyncio.run(_fetch_countries(timeout))
    except (NetworkError, ParseError) as exc:
        raise click.ClickException(f"Could not fetch countries: {exc}") from exc
    rows = [c for c in fetched if predicate(c)]
    rows.sort(key=lambda c: c.name)

    table = Table(title=f"Countries ({hemisphere}, {len(rows)} total)")
    # Names never wrap; the numeric columns give up width first
    table.add_column("Country", style="bold", no_wrap=True, overflow="fold")
    table.add_column("Capital", no_wrap=True, overflow="fold")
    table.add_column("Coords")
    table.add_column("Languages", justify="right")
    table.add_column("Drives on")
    table.add_column("Distance (km)", justify="right")

    for c in rows[:limit]:
        coords = f"{c.latitude:.2f}, {c.longitude:.2f}" if c.coordinates_known else "[dim]unknown[/]"
        table.add_row(
            c.name,
            c.capital,
            coords,
            str(c.language_count),
            c.driving_side.value,
            str(distance_km(KAHA_OFFICE, c.location)),
        )

    console.print(table)


@cli.command()
@click.option("--lat", type=float, required=True, help="Latitude in decimal degrees.")
@click.option("--lng", type=float, required=True, help="Longitude in decimal degrees.")
def distance(lat: float, lng: float):
    """Great-circle distance from KAHA's office to a point."""
    if not -90 <= lat <= 90:
        raise click.BadParameter(f"{lat} out of range [-90, 90]", param_hint="--lat")
    if not -180 <= lng <= 180:
        raise click.BadParameter(f"{lng} out of range [-180, 180]", param_hint="--lng")
    km = distance_km(KAHA_OFFICE, GeoPoint(lat, lng))
    click.echo(f"{km} km")
