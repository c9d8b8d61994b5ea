"""Summary text formatting and the typewriter console output."""

from __future__ import annotations

import time
from collections.abc import Callable

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from kaha_travel_bot.models import Country, SunTimes

HIGHLIGHT_STYLE = "green"


def highlight(text: str) -> str:
    """Wrap plain text in rich markup for the highlighted summary colour."""
    return f"[{HIGHLIGHT_STYLE}]{escape(text)}[/{HIGHLIGHT_STYLE}]"


def format_sun_times(times: SunTimes) -> str:
    return (
        f"For the selected country, the sun rises tomorrow at {times.sunrise} "
        f"and sets at {times.sunset}."
    )


def format_summary(country: Country, distance_km: int) -> list[str]:
    lines = [
        f"{country.name} has a total of {country.language_count} languages "
        f"and here, driving is on the {country.driving_side.value} side.",
        f"Little fact: the distance between {country.name}'s capital, {country.capital}, "
        f"and KAHA's office is approximately {distance_km} km.",
    ]
    if not country.coordinates_known:
        lines.append("(The capital's coordinates were incomplete, so this distance is a guess.)")
    return lines


class Typewriter:
    """Writes markup lines to a console one character at a time.

    `sleep` blocks the calling thread; when called from a coroutine it holds
    the event loop for the whole line.
    """

    def __init__(
        self,
        console: Console | None = None,
        delay: float = 0.02,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.console = console or Console(highlight=False)
        self.delay = delay
        self._sleep = sleep

    def write(self, markup: str) -> None:
        text = Text.from_markup(markup)
        if self.delay <= 0 or len(text) < 2:
            self.console.print(text, highlight=False)
            return
        for char in text.divide(range(1, len(text))):
            self.console.print(char, end="", highlight=False)
            self._sleep(self.delay)
        self.console.print()

    def line(self, text: str) -> None:
        self.write(escape(text))

    def highlighted(self, text: str) -> None:
        self.write(highlight(text))
