"""Tests for the OpenWeatherMap current-weather provider."""

import pytest

from weather_news.core.errors import InvalidInputError, ParseError, TransportError
from weather_news.models.datatypes import Location
from weather_news.providers.weather import OpenWeatherProvider, parse_weather

WEATHER_BODY = {
    "name": "Mountain View",
    "sys": {"country": "US"},
    "main": {"temp": 68.4, "feels_like": 67.1, "humidity": 55, "pressure": 1015},
    "weather": [{"main": "Clouds", "description": "scattered clouds", "icon": "03d"}],
    "wind": {"speed": 5.75, "deg": 310},
    "visibility": 10000,
}

LOCATION = Location("94040", "Mountain View", "US", 37.3861, -122.0839)


@pytest.fixture
def provider(http):
    return OpenWeatherProvider("weather-key", http, "https://owm.test/data/2.5")


class TestFetchByZipcode:
    """Tests for fetch_by_zipcode."""

    def test_parses_full_response(self, provider, session, make_response):
        session.get.return_value = make_response(200, WEATHER_BODY)

        weather = provider.fetch_by_zipcode("94040-1111")

        assert weather.location == "Mountain View, US"
        assert weather.temperature == 68.4
        assert weather.feels_like == 67.1
        assert weather.humidity == 55
        assert weather.pressure == 1015.0
        assert weather.main_condition == "Clouds"
        assert weather.description == "scattered clouds"
        assert weather.icon == "03d"
        assert weather.wind_speed == 5.75
        assert weather.wind_direction == 310
        assert weather.visibility == 10000
        _, kwargs = session.get.call_args
        assert kwargs["params"] == {"zip": "94040,US", "appid": "weather-key", "units": "imperial"}

    def test_invalid_zipcode(self, provider, session):
        with pytest.raises(InvalidInputError):
            provider.fetch_by_zipcode("9404")
        session.get.assert_not_called()

    def test_non_success_status(self, provider, session, make_response):
        session.get.return_value = make_response(401, {"message": "Invalid API key"}, "Unauthorized")

        with pytest.raises(TransportError) as exc_info:
            provider.fetch_by_zipcode("94040")

        assert exc_info.value.status_code == 401


class TestFetchByLocation:
    """Tests for fetch_by_location."""

    def test_uses_coordinates_and_location_label(self, provider, session, make_response):
        session.get.return_value = make_response(200, WEATHER_BODY)

        weather = provider.fetch_by_location(LOCATION)

        assert weather.location == str(LOCATION)
        _, kwargs = session.get.call_args
        assert kwargs["params"]["lat"] == "37.3861"
        assert kwargs["params"]["lon"] == "-122.0839"
        assert kwargs["params"]["units"] == "imperial"

    def test_none_location(self, provider):
        with pytest.raises(InvalidInputError):
            provider.fetch_by_location(None)


class TestParseWeather:
    """Tests for parse_weather edge cases."""

    def test_missing_main_is_parse_error(self):
        body = {k: v for k, v in WEATHER_BODY.items() if k != "main"}
        with pytest.raises(ParseError):
            parse_weather(body)

    def test_empty_weather_array_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_weather({**WEATHER_BODY, "weather": []})

    def test_incomplete_main_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_weather({**WEATHER_BODY, "main": {"temp": 70}})

    def test_missing_wind_defaults_to_zero(self):
        body = {k: v for k, v in WEATHER_BODY.items() if k != "wind"}

        weather = parse_weather(body)

        assert weather.wind_speed == 0
        assert weather.wind_direction == 0

    def test_wind_without_deg(self):
        weather = parse_weather({**WEATHER_BODY, "wind": {"speed": 3.2}})

        assert weather.wind_speed == 3.2
        assert weather.wind_direction == 0

    def test_missing_visibility_defaults_to_zero(self):
        body = {k: v for k, v in WEATHER_BODY.items() if k != "visibility"}
        assert parse_weather(body).visibility == 0

    def test_non_finite_wind_and_visibility_default_to_zero(self):
        body = {**WEATHER_BODY, "wind": {"speed": float("inf"), "deg": float("nan")},
                "visibility": float("-inf")}

        weather = parse_weather(body)

        assert weather.wind_speed == 0
        assert weather.wind_direction == 0
        assert weather.visibility == 0

    @pytest.mark.parametrize("key,value", [
        ("temp", float("nan")),
        ("feels_like", float("inf")),
        ("humidity", float("nan")),
        ("humidity", float("inf")),
    ])
    def test_non_finite_main_is_parse_error(self, key, value):
        with pytest.raises(ParseError):
            parse_weather({**WEATHER_BODY, "main": {**WEATHER_BODY["main"], key: value}})

    def test_missing_sys_uses_name_only(self):
        body = {k: v for k, v in WEATHER_BODY.items() if k != "sys"}
        assert parse_weather(body).location == "Mountain View"

    def test_same_payload_gives_equal_weather(self):
        assert parse_weather(WEATHER_BODY) == parse_weather(WEATHER_BODY)
