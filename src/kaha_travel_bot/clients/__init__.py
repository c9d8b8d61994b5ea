from kaha_travel_bot.clients.api_client import (
    ApiClient,
    NetworkError,
    RestCountriesClient,
    SecondaryLookupError,
    SunriseSunsetClient,
)

__all__ = [
    "ApiClient",
    "NetworkError",
    "RestCountriesClient",
    "SecondaryLookupError",
    "SunriseSunsetClient",
]
