"""Shared fixtures: a mocked requests session behind a real HttpClient."""

from unittest.mock import Mock

import pytest

from weather_news.core.config import Settings
from weather_news.core.http import HttpClient


def build_response(status_code=200, payload=None, reason="OK"):
    """Return a Mock shaped like ``requests.Response``."""
    resp = Mock()
    resp.status_code = status_code
    resp.reason = reason
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def http(session):
    return HttpClient(session=session)


@pytest.fixture
def settings():
    return Settings(weather_api_key="weather-key", news_api_key="news-key")
