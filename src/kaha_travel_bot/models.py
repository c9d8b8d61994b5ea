"""Data models for countries, locations and sun times."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class DrivingSide(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def from_raw(cls, raw: object) -> DrivingSide:
        """Only an exact "left" drives on the left; everything else is right."""
        return cls.LEFT if raw == "left" else cls.RIGHT


@dataclass(frozen=True)
class GeoPoint:
    """A (latitude, longitude) pair in WGS84 decimal degrees."""

    latitude: float
    longitude: float


# KAHA office, Cape Town
KAHA_OFFICE = GeoPoint(latitude=-33.9759679, longitude=18.4566283)


@dataclass(frozen=True)
class Country:
    """One country's travel attributes, located at its capital."""

    name: str
    capital: str = "Unknown"
    latitude: float = 0.0           # capital latitude, 0.0 when unknown
    longitude: float = 0.0          # capital longitude, 0.0 when unknown
    language_count: int = 0
    driving_side: DrivingSide = DrivingSide.RIGHT
    coordinates_known: bool = True  # False when a coordinate fell back to 0.0

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


@dataclass(frozen=True)
class SunTimes:
    sunrise: str
    sunset: str
