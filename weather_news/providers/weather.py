"""Current conditions via the OpenWeatherMap ``data/2.5/weather`` endpoint.

Units are always imperial (°F, mph). ``main`` and the first ``weather``
entry are required; wind and visibility are optional and default to 0.
"""

import math
from typing import Any, Optional

from weather_news.core.errors import InvalidInputError, ParseError
from weather_news.core.http import HttpClient
from weather_news.core.logger import logger
from weather_news.models.datatypes import Location, Weather
from weather_news.pipeline.validator import is_valid, normalize
from weather_news.providers.base import WeatherProvider

_PROVIDER = "weather"
_UNITS = "imperial"


class OpenWeatherProvider(WeatherProvider):
    """OpenWeatherMap current-weather implementation.

    Args:
        api_key: OpenWeatherMap API key (sent as ``appid``).
        http: Shared HTTP client.
        base_url: API root, e.g. ``https://api.openweathermap.org/data/2.5``.
    """

    def __init__(self, api_key: str, http: HttpClient,
                 base_url: str = "https://api.openweathermap.org/data/2.5") -> None:
        self.api_key = api_key
        self.http = http
        self.base_url = base_url.rstrip("/")

    def fetch_by_zipcode(self, zipcode: str) -> Weather:
        """Fetch conditions by ``zip={5digit},US``.

        The ``location`` label is taken from the response (``"{name}, {country}"``).
        """
        if not is_valid(zipcode):
            raise InvalidInputError(
                f"Invalid US zipcode format: {zipcode!r}. Expected 12345 or 12345-6789"
            )
        short = normalize(zipcode)
        logger.info(f"OpenWeatherProvider: fetching weather for zipcode {short}")
        data = self.http.get_json(
            f"{self.base_url}/weather",
            params={"zip": f"{short},US", "appid": self.api_key, "units": _UNITS},
            provider=_PROVIDER,
        )
        return parse_weather(data)

    def fetch_by_location(self, location: Location) -> Weather:
        """Fetch conditions at ``location``'s coordinates.

        The ``location`` label is ``str(location)``.
        """
        if location is None:
            raise InvalidInputError("Location cannot be empty")
        logger.info(f"OpenWeatherProvider: fetching weather for {location}")
        data = self.http.get_json(
            f"{self.base_url}/weather",
            params={
                "lat": f"{location.latitude:.4f}",
                "lon": f"{location.longitude:.4f}",
                "appid": self.api_key,
                "units": _UNITS,
            },
            provider=_PROVIDER,
        )
        return parse_weather(data, label=str(location))


# ── parsing ───────────────────────────────────────────────────────────────────

def parse_weather(data: Any, label: Optional[str] = None) -> Weather:
    """Normalize an OpenWeatherMap payload into :class:`Weather`.

    Args:
        data: Decoded JSON body.
        label: Caller-supplied location string; when ``None`` it is built from
            the payload's ``name`` and ``sys.country``.

    Raises:
        ParseError: ``main`` or ``weather[0]`` is missing or malformed.
    """
    if not isinstance(data, dict):
        raise ParseError("Weather response is not a JSON object")

    main = data.get("main")
    if not isinstance(main, dict):
        raise ParseError("Weather response has no 'main' block")

    conditions = data.get("weather")
    if not isinstance(conditions, list) or not conditions or not isinstance(conditions[0], dict):
        raise ParseError("Weather response has no 'weather[0]' condition")
    condition = conditions[0]

    try:
        temperature = float(main["temp"])
        feels_like = float(main["feels_like"])
        humidity = int(main["humidity"])
        pressure = float(main["pressure"])
    except (KeyError, TypeError, ValueError, OverflowError) as exc:
        raise ParseError(f"Weather 'main' block is incomplete: {exc}") from exc
    if not all(math.isfinite(v) for v in (temperature, feels_like, pressure)):
        raise ParseError("Weather 'main' block has non-finite values")

    # Absent wind block is reported as calm, not as an error
    wind = data.get("wind") if isinstance(data.get("wind"), dict) else {}

    if label is None:
        sys_block = data.get("sys") if isinstance(data.get("sys"), dict) else {}
        label = ", ".join(
            part for part in (data.get("name"), sys_block.get("country"))
            if isinstance(part, str) and part
        )

    weather = Weather(
        location=label,
        temperature=temperature,
        feels_like=feels_like,
        pressure=pressure,
        humidity=humidity,
        wind_direction=int(_number(wind.get("deg"))),
        visibility=int(_number(data.get("visibility"))),
        wind_speed=float(_number(wind.get("speed"))),
        main_condition=_text(condition.get("main")),
        description=_text(condition.get("description")),
        icon=_text(condition.get("icon")),
    )
    logger.info(f"OpenWeatherProvider: parsed weather for {weather.location}")
    return weather


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return float(value)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
