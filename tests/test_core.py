"""Tests for distance, parsing, selection and query building."""

from __future__ import annotations

import json
import logging
import random
from datetime import date

import pytest

from kaha_travel_bot.geo import distance_km, haversine_km
from kaha_travel_bot.models import KAHA_OFFICE, Country, DrivingSide, GeoPoint
from kaha_travel_bot.parsers import ParseError, parse, parse_country, parse_document, parse_sun_times
from kaha_travel_bot.query import build_query_url
from kaha_travel_bot.selector import (
    EmptySelectionError,
    choose_southern_country,
    is_southern_hemisphere,
    select_random,
)


# ── Haversine tests ──────────────────────────────────────────────────────


class TestHaversine:
    def test_same_point(self):
        assert haversine_km(0, 0, 0, 0) == 0.0
        assert distance_km(KAHA_OFFICE, KAHA_OFFICE) == 0

    def test_symmetric(self):
        pairs = [
            (GeoPoint(-33.9759679, 18.4566283), GeoPoint(0, 0)),
            (GeoPoint(51.5074, -0.1278), GeoPoint(-41.2865, 174.7762)),
            (GeoPoint(-90, 0), GeoPoint(89.5, 179.9)),
        ]
        for a, b in pairs:
            assert distance_km(a, b) == distance_km(b, a)
            assert haversine_km(a.latitude, a.longitude, b.latitude, b.longitude) == pytest.approx(
                haversine_km(b.latitude, b.longitude, a.latitude, a.longitude)
            )

    def test_kaha_office_to_null_island(self):
        # Reference Haversine value is ≈ 4239 km
        dist = distance_km(KAHA_OFFICE, GeoPoint(0.0, 0.0))
        assert isinstance(dist, int)
        assert 4230 <= dist <= 4250

    def test_known_distance(self):
        # New York to London ≈ 5570 km
        dist = haversine_km(40.7128, -74.0060, 51.5074, -0.1278)
        assert 5550 < dist < 5590

    def test_antipodal(self):
        # North pole to south pole ≈ 20015 km (half circumference)
        dist = haversine_km(90, 0, -90, 0)
        assert 20000 < dist < 20100

    def test_equator_one_degree_rounds(self):
        # One degree of longitude at equator ≈ 111.19 km on a 6371 km sphere
        assert distance_km(GeoPoint(0, 0), GeoPoint(0, 1)) == 111


# ── Country parser tests ─────────────────────────────────────────────────


SOUTH_AFRICA = {
    "name": {"common": "South Africa", "official": "Republic of South Africa"},
    "capital": ["Pretoria", "Bloemfontein", "Cape Town"],
    "capitalInfo": {"latlng": [-25.7, 28.22]},
    "languages": {"afr": "Afrikaans", "eng": "English", "zul": "Zulu"},
    "car": {"signs": ["ZA"], "side": "left"},
}


class TestParseCountry:
    def test_full_record(self):
        country, warnings = parse_country(SOUTH_AFRICA)
        assert country == Country(
            name="South Africa",
            capital="Pretoria",
            latitude=-25.7,
            longitude=28.22,
            language_count=3,
            driving_side=DrivingSide.LEFT,
        )
        assert warnings == []
        assert country.coordinates_known
        assert country.location == GeoPoint(-25.7, 28.22)

    def test_missing_capital_defaults_to_unknown(self):
        raw = {k: v for k, v in SOUTH_AFRICA.items() if k != "capital"}
        country, _ = parse_country(raw)
        assert country.capital == "Unknown"

    def test_empty_capital_list_defaults_to_unknown(self):
        country, _ = parse_country({**SOUTH_AFRICA, "capital": []})
        assert country.capital == "Unknown"

    def test_null_capital_defaults_to_unknown(self):
        country, _ = parse_country({**SOUTH_AFRICA, "capital": [None]})
        assert country.capital == "Unknown"

    def test_missing_latitude_defaults_to_zero(self):
        country, warnings = parse_country({**SOUTH_AFRICA, "capitalInfo": {}})
        assert country.latitude == 0.0
        assert country.longitude == 0.0
        assert not country.coordinates_known
        assert len(warnings) == 2

    def test_invalid_latitude_defaults_to_zero(self):
        country, warnings = parse_country({**SOUTH_AFRICA, "capitalInfo": {"latlng": ["north", 28.22]}})
        assert country.latitude == 0.0
        assert country.longitude == 28.22
        assert not country.coordinates_known
        assert any("latitude" in w for w in warnings)

    def test_numeric_strings_and_extra_elements(self):
        country, warnings = parse_country({**SOUTH_AFRICA, "capitalInfo": {"latlng": ["-25.7", "28.22", 99]}})
        assert (country.latitude, country.longitude) == (-25.7, 28.22)
        assert warnings == []

    def test_non_finite_coordinate_defaults_to_zero(self):
        country, _ = parse_country({**SOUTH_AFRICA, "capitalInfo": {"latlng": ["nan", "inf"]}})
        assert (country.latitude, country.longitude) == (0.0, 0.0)

    def test_missing_languages_counts_zero(self):
        raw = {k: v for k, v in SOUTH_AFRICA.items() if k != "languages"}
        country, _ = parse_country(raw)
        assert country.language_count == 0

    @pytest.mark.parametrize("car", [{"side": "right"}, {"side": "LEFT"}, {}, None, "left"])
    def test_anything_but_left_drives_right(self, car):
        country, _ = parse_country({**SOUTH_AFRICA, "car": car})
        assert country.driving_side is DrivingSide.RIGHT

    def test_left_drives_left(self):
        country, _ = parse_country(SOUTH_AFRICA)
        assert country.driving_side is DrivingSide.LEFT

    def test_missing_name_fails(self):
        raw = {k: v for k, v in SOUTH_AFRICA.items() if k != "name"}
        with pytest.raises(ParseError) as exc_info:
            parse_country(raw)
        assert exc_info.value.country is None
        assert exc_info.value.label == "<unknown>"

    def test_unreadable_languages_fails_with_name(self):
        with pytest.raises(ParseError) as exc_info:
            parse_country({**SOUTH_AFRICA, "languages": ["Afrikaans"]})
        assert exc_info.value.country == "South Africa"

    def test_non_object_record_fails(self):
        with pytest.raises(ParseError):
            parse_country(["South Africa"])

    def test_country_is_immutable(self):
        country, _ = parse_country(SOUTH_AFRICA)
        with pytest.raises(AttributeError):
            country.name = "Elsewhere"


class TestParseDocument:
    def test_bad_records_are_skipped(self):
        payload = json.dumps([
            SOUTH_AFRICA,
            {**SOUTH_AFRICA, "name": {"common": "Broken"}, "capital": "Nowhere"},
            {"capital": ["Anonymous"]},
            {"name": {"common": "Bare"}},
        ])
        batch = parse_document(payload)
        assert [c.name for c in batch.countries] == ["South Africa", "Bare"]
        assert [f.label for f in batch.failures] == ["Broken", "<unknown>"]
        assert "Bare" in batch.warnings
        assert "South Africa" not in batch.warnings

    def test_skips_are_logged_below_warning(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="kaha_travel_bot"):
            parse_document(json.dumps([{"name": {"common": "Broken"}, "languages": 3}]))
        skips = [r for r in caplog.records if "Error parsing data for: Broken" in r.getMessage()]
        assert len(skips) == 1
        assert skips[0].levelno == logging.INFO
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_parse_returns_countries(self):
        assert [c.name for c in parse(json.dumps([SOUTH_AFRICA]))] == ["South Africa"]

    def test_empty_listing(self):
        assert parse("[]") == []

    def test_invalid_json(self):
        with pytest.raises(ParseError):
            parse_document("<html>Service Unavailable</html>")

    def test_non_array_listing(self):
        with pytest.raises(ParseError):
            parse_document('{"status": 404, "message": "Not Found"}')


# ── Sun times parser tests ───────────────────────────────────────────────


class TestParseSunTimes:
    def test_parse(self):
        payload = json.dumps({
            "results": {"sunrise": "3:41:12 AM", "sunset": "5:52:03 PM", "day_length": "14:10:51"},
            "status": "OK",
        })
        times = parse_sun_times(payload)
        assert times.sunrise == "3:41:12 AM"
        assert times.sunset == "5:52:03 PM"

    def test_error_status(self):
        with pytest.raises(ParseError):
            parse_sun_times('{"results": "", "status": "INVALID_DATE"}')

    def test_missing_sunset(self):
        with pytest.raises(ParseError):
            parse_sun_times('{"results": {"sunrise": "3:41:12 AM"}, "status": "OK"}')


# ── Selector tests ───────────────────────────────────────────────────────


def _country(name: str, lat: float) -> Country:
    return Country(name=name, latitude=lat, longitude=10.0)


class TestSelector:
    def test_southern_hemisphere_is_strict(self):
        assert is_southern_hemisphere(_country("South", -0.1))
        assert not is_southern_hemisphere(_country("Equator", 0.0))

    def test_all_northern_raises(self):
        countries = [_country("A", 10.0), _country("B", 0.0), _country("C", 45.0)]
        with pytest.raises(EmptySelectionError):
            choose_southern_country(countries)

    def test_empty_input_raises(self):
        with pytest.raises(EmptySelectionError):
            select_random([], lambda item: True)

    def test_single_match_always_chosen(self):
        countries = [_country("North", 10.0), _country("South", -20.0), _country("Equator", 0.0)]
        for seed in range(20):
            assert choose_southern_country(countries, random.Random(seed)).name == "South"

    def test_only_matching_items_chosen(self):
        items = list(range(100))
        rng = random.Random(1)
        picks = {select_random(items, lambda n: n % 10 == 0, rng) for _ in range(200)}
        assert picks <= set(range(0, 100, 10))
        assert len(picks) > 1

    def test_seeded_rng_is_reproducible(self):
        countries = [_country(str(i), -float(i + 1)) for i in range(30)]
        first = choose_southern_country(countries, random.Random(42))
        second = choose_southern_country(countries, random.Random(42))
        assert first == second


# ── Query builder tests ──────────────────────────────────────────────────


class TestQueryBuilder:
    def test_build_query_url(self):
        url = build_query_url(
            "https://api.sunrise-sunset.org/json", GeoPoint(-33.9, 18.4), date(2024, 1, 2),
        )
        assert url == "https://api.sunrise-sunset.org/json?lat=-33.9&lng=18.4&date=2024-01-02"

    def test_single_question_mark_no_trailing_separator(self):
        url = build_query_url("https://example.org/json", GeoPoint(1.5, -2.25), date(2030, 12, 31))
        assert url.count("?") == 1
        assert not url.endswith("&")
        assert url.split("?", 1)[1].split("&") == ["lat=1.5", "lng=-2.25", "date=2030-12-31"]
