"""Parsers for converting raw API responses to travel bot models."""

from kaha_travel_bot.parsers.base import ParseError
from kaha_travel_bot.parsers.restcountries import ParseBatch, parse, parse_country, parse_document
from kaha_travel_bot.parsers.sunrise_sunset import parse_sun_times

__all__ = [
    "ParseBatch",
    "ParseError",
    "parse",
    "parse_country",
    "parse_document",
    "parse_sun_times",
]
