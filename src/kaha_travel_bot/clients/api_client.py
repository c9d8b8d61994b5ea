"""Async HTTP clients for the country listing and sun-times services."""

from __future__ import annotations

import logging
from datetime import date

import httpx

from kaha_travel_bot.models import GeoPoint, SunTimes
from kaha_travel_bot.parsers import ParseError, parse_sun_times
from kaha_travel_bot.query import build_query_url
from kaha_travel_bot.sources import SOURCES, SourceConfig

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """Raised when a request fails or returns a non-success status."""


class SecondaryLookupError(Exception):
    """Raised when sunrise/sunset times cannot be obtained."""


class ApiClient:
    """Async HTTP GET client for one configured source.

    No retries: a failed request surfaces immediately as NetworkError.
    """

    def __init__(self, config: SourceConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds, transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def get_text(self, url: str) -> str:
        client = await self._get_client()
        logger.debug("%s: GET %s", self.config.name, url)
        try:
            resp = await client.get(url)
            resp.raise_for_status()
        except (httpx.HTTPStatusError, httpx.RequestError) as exc:
            raise NetworkError(f"{self.config.name}: request failed ({exc})") from exc
        return resp.text


class RestCountriesClient(ApiClient):
    def __init__(self, config: SourceConfig | None = None, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(config or SOURCES["restcountries"], transport)

    async def fetch_countries(self) -> str:
        """Fetch the raw country listing (a JSON array)."""
        return await self.get_text(self.config.base_url)


class SunriseSunsetClient(ApiClient):
    def __init__(self, config: SourceConfig | None = None, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(config or SOURCES["sunrise_sunset"], transport)

    async def fetch_sun_times(self, point: GeoPoint, on: date) -> SunTimes:
        url = build_query_url(self.config.base_url, point, on)
        try:
            return parse_sun_times(await self.get_text(url))
        except (NetworkError, ParseError) as exc:
            logger.error("Error requesting sunrise and sunset times: %s", exc)
            raise SecondaryLookupError(str(exc)) from exc
