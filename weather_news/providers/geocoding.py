"""Geocoding via the OpenWeatherMap geocoding API.

Two lookups:
  1. ``/zip``   : zipcode → {name, lat, lon, country}
  2. ``/direct``: "City,State,US" → [{name, lat, lon, ...}] (limit 1)

The zip endpoint does not return a state code, so zipcode lookups carry the
fixed placeholder ``"US"`` in ``Location.state``.
"""

from typing import Any

from weather_news.core.errors import InvalidInputError, NotFoundError, ParseError
from weather_news.core.http import HttpClient
from weather_news.core.logger import logger
from weather_news.models.datatypes import Location
from weather_news.pipeline.validator import is_valid, normalize
from weather_news.providers.base import GeocodingProvider

ZIP_LOOKUP_STATE = "US"
_PROVIDER = "geocoding"


class OpenWeatherGeocoder(GeocodingProvider):
    """OpenWeatherMap ``geo/1.0`` implementation.

    Args:
        api_key: OpenWeatherMap API key (sent as ``appid``).
        http: Shared HTTP client.
        base_url: API root, e.g. ``https://api.openweathermap.org/geo/1.0``.
    """

    def __init__(self, api_key: str, http: HttpClient,
                 base_url: str = "https://api.openweathermap.org/geo/1.0") -> None:
        self.api_key = api_key
        self.http = http
        self.base_url = base_url.rstrip("/")

    def resolve_by_zipcode(self, zipcode: str) -> Location:
        """Resolve a zipcode through ``/zip``.

        Args:
            zipcode: ``12345`` or ``12345-6789``; the +4 part is dropped on the wire.

        Returns:
            Location with ``city`` from the provider and ``state="US"``.

        Raises:
            InvalidInputError: Malformed zipcode.
            NotFoundError: Provider answered 404; ``query`` is the caller's zipcode.
            TransportError: Any other non-success status or I/O failure.
            ParseError: Body lacks usable coordinates.
        """
        if not is_valid(zipcode):
            raise InvalidInputError(
                f"Invalid US zipcode format: {zipcode!r}. Expected 12345 or 12345-6789"
            )
        short = normalize(zipcode)
        logger.info(f"OpenWeatherGeocoder: resolving zipcode {short}")

        resp = self.http.get(
            f"{self.base_url}/zip",
            params={"zip": f"{short},US", "appid": self.api_key},
            provider=_PROVIDER,
        )
        if resp.status_code == 404:
            logger.warning(f"OpenWeatherGeocoder: zipcode not found: {zipcode}")
            raise NotFoundError(f"Zipcode not found: {zipcode}", query=zipcode)
        HttpClient.raise_for_status(resp, _PROVIDER)

        data = HttpClient.decode(resp, _PROVIDER)
        if not isinstance(data, dict):
            raise ParseError(f"Unexpected geocoding response for {short}: {type(data).__name__}")

        location = Location(
            zipcode=zipcode.strip(),
            city=_str_field(data, "name"),
            state=ZIP_LOOKUP_STATE,
            latitude=_coordinate(data, "lat", 90.0),
            longitude=_coordinate(data, "lon", 180.0),
        )
        logger.info(f"OpenWeatherGeocoder: {zipcode} → {location}")
        return location

    def resolve_by_city(self, city: str, state: str) -> Location:
        """Resolve a city/state pair through ``/direct``.

        Returns:
            Location whose ``city``/``state`` echo the caller's trimmed input.

        Raises:
            InvalidInputError: City or state is blank.
            NotFoundError: Provider returned an empty result list.
            TransportError: Non-success status or I/O failure.
            ParseError: Body is not a list of objects with coordinates.
        """
        city = (city or "").strip()
        state = (state or "").strip()
        if not city:
            raise InvalidInputError("City cannot be empty")
        if not state:
            raise InvalidInputError("State cannot be empty")

        logger.info(f"OpenWeatherGeocoder: resolving {city}, {state}")
        data = self.http.get_json(
            f"{self.base_url}/direct",
            params={"q": f"{city},{state},US", "limit": 1, "appid": self.api_key},
            provider=_PROVIDER,
        )
        if not isinstance(data, list):
            raise ParseError(f"Unexpected geocoding response for {city}, {state}: {type(data).__name__}")
        if not data:
            logger.warning(f"OpenWeatherGeocoder: location not found: {city}, {state}")
            raise NotFoundError(f"Location not found: {city}, {state}", query=f"{city}, {state}")

        first = data[0]
        if not isinstance(first, dict):
            raise ParseError(f"Unexpected geocoding entry for {city}, {state}")

        location = Location(
            zipcode="",
            city=city,
            state=state,
            latitude=_coordinate(first, "lat", 90.0),
            longitude=_coordinate(first, "lon", 180.0),
        )
        logger.info(f"OpenWeatherGeocoder: {city}, {state} → {location}")
        return location


# ── helpers ───────────────────────────────────────────────────────────────────

def _str_field(data: dict, key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def _coordinate(data: dict, key: str, bound: float) -> float:
    """Return ``data[key]`` as a float within ``[-bound, bound]`` or raise ParseError."""
    raw: Any = data.get(key)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ParseError(f"Geocoding response has no numeric '{key}'")
    value = float(raw)
    if not -bound <= value <= bound:
        raise ParseError(f"Geocoding '{key}'={value} outside [-{bound}, {bound}]")
    return value
