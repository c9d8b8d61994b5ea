"""Source registry for the travel bot's upstream APIs."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SourceConfig:
    """Configuration for a single upstream API."""

    name: str
    base_url: str
    timeout_seconds: float

    def with_timeout(self, timeout_seconds: float) -> SourceConfig:
        return replace(self, timeout_seconds=timeout_seconds)


SOURCES: dict[str, SourceConfig] = {
    "restcountries": SourceConfig(
        name="restcountries",
        # /all only answers when a field filter is given
        base_url="https://restcountries.com/v3.1/all?fields=name,capital,capitalInfo,languages,car",
        timeout_seconds=15,
    ),
    "sunrise_sunset": SourceConfig(
        name="sunrise_sunset",
        base_url="https://api.sunrise-sunset.org/json",
        timeout_seconds=15,
    ),
}
