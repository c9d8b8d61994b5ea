"""Random selection of countries by predicate."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import TypeVar

from kaha_travel_bot.models import Country

T = TypeVar("T")


class EmptySelectionError(Exception):
    """Raised when no element satisfies the selection predicate."""


def select_random(
    items: Sequence[T],
    predicate: Callable[[T], bool],
    rng: random.Random | None = None,
) -> T:
    """Pick one element uniformly at random from those matching *predicate*.

    *rng* defaults to the module-level generator of :mod:`random`.
    """
    candidates = [item for item in items if predicate(item)]
    if not candidates:
        raise EmptySelectionError(
            f"none of {len(items)} item(s) matched the selection predicate"
        )
    return (rng or random).choice(candidates)


def is_southern_hemisphere(country: Country) -> bool:
    return country.latitude < 0


def is_northern_hemisphere(country: Country) -> bool:
    return country.latitude >= 0


def choose_southern_country(
    countries: Sequence[Country], rng: random.Random | None = None,
) -> Country:
    return select_random(countries, is_southern_hemisphere, rng)
