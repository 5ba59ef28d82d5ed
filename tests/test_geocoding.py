"""Tests for the OpenWeatherMap geocoder."""

import pytest

from weather_news.core.errors import (
    InvalidInputError, NotFoundError, ParseError, TransportError,
)
from weather_news.models.datatypes import Location
from weather_news.providers.geocoding import OpenWeatherGeocoder

ZIP_BODY = {"zip": "94040", "name": "Mountain View", "lat": 37.3861, "lon": -122.0839, "country": "US"}


@pytest.fixture
def geocoder(http):
    return OpenWeatherGeocoder("weather-key", http, "https://geo.test/geo/1.0")


class TestResolveByZipcode:
    """Tests for resolve_by_zipcode."""

    def test_builds_location_with_us_placeholder_state(self, geocoder, session, make_response):
        session.get.return_value = make_response(200, ZIP_BODY)

        location = geocoder.resolve_by_zipcode("94040")

        assert location == Location(
            zipcode="94040", city="Mountain View", state="US",
            latitude=37.3861, longitude=-122.0839,
        )

    def test_sends_short_zip_with_country(self, geocoder, session, make_response):
        session.get.return_value = make_response(200, ZIP_BODY)

        location = geocoder.resolve_by_zipcode("94040-1234")

        args, kwargs = session.get.call_args
        assert args[0] == "https://geo.test/geo/1.0/zip"
        assert kwargs["params"] == {"zip": "94040,US", "appid": "weather-key"}
        assert location.zipcode == "94040-1234"

    def test_invalid_zipcode_makes_no_request(self, geocoder, session):
        with pytest.raises(InvalidInputError):
            geocoder.resolve_by_zipcode("1234")
        session.get.assert_not_called()

    def test_404_is_not_found_with_original_zipcode(self, geocoder, session, make_response):
        session.get.return_value = make_response(404, {"cod": "404", "message": "not found"}, "Not Found")

        with pytest.raises(NotFoundError) as exc_info:
            geocoder.resolve_by_zipcode("99999-0000")

        assert exc_info.value.query == "99999-0000"

    def test_other_status_is_transport_error(self, geocoder, session, make_response):
        session.get.return_value = make_response(500, {}, "Server Error")

        with pytest.raises(TransportError) as exc_info:
            geocoder.resolve_by_zipcode("94040")

        assert exc_info.value.status_code == 500

    def test_missing_coordinates_is_parse_error(self, geocoder, session, make_response):
        session.get.return_value = make_response(200, {"name": "Nowhere"})

        with pytest.raises(ParseError):
            geocoder.resolve_by_zipcode("94040")

    def test_out_of_range_latitude_is_parse_error(self, geocoder, session, make_response):
        session.get.return_value = make_response(200, {**ZIP_BODY, "lat": 123.0})

        with pytest.raises(ParseError):
            geocoder.resolve_by_zipcode("94040")

    def test_missing_name_leaves_city_empty(self, geocoder, session, make_response):
        body = {k: v for k, v in ZIP_BODY.items() if k != "name"}
        session.get.return_value = make_response(200, body)

        location = geocoder.resolve_by_zipcode("94040")

        assert location.city == ""
        assert location.state == "US"


class TestResolveByCity:
    """Tests for resolve_by_city."""

    def test_uses_caller_city_and_state(self, geocoder, session, make_response):
        session.get.return_value = make_response(
            200, [{"name": "Springfield (city)", "lat": 39.78, "lon": -89.65, "state": "Illinois"}]
        )

        location = geocoder.resolve_by_city(" Springfield ", "IL")

        assert location.city == "Springfield"
        assert location.state == "IL"
        assert location.latitude == 39.78
        assert location.zipcode == ""
        _, kwargs = session.get.call_args
        assert kwargs["params"]["q"] == "Springfield,IL,US"
        assert kwargs["params"]["limit"] == 1

    @pytest.mark.parametrize("city,state", [("", "IL"), ("Springfield", "  "), (None, "IL")])
    def test_blank_input_is_invalid(self, geocoder, session, city, state):
        with pytest.raises(InvalidInputError):
            geocoder.resolve_by_city(city, state)
        session.get.assert_not_called()

    def test_empty_result_is_not_found(self, geocoder, session, make_response):
        session.get.return_value = make_response(200, [])

        with pytest.raises(NotFoundError):
            geocoder.resolve_by_city("Atlantis", "ZZ")

    def test_404_on_direct_is_transport_error(self, geocoder, session, make_response):
        session.get.return_value = make_response(404, {}, "Not Found")

        with pytest.raises(TransportError):
            geocoder.resolve_by_city("Springfield", "IL")

    def test_object_body_is_parse_error(self, geocoder, session, make_response):
        session.get.return_value = make_response(200, {"lat": 1.0, "lon": 2.0})

        with pytest.raises(ParseError):
            geocoder.resolve_by_city("Springfield", "IL")
