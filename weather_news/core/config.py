"""Configuration module for loading project settings and environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

from weather_news.core.errors import ConfigError

# Load environment variables from .env file
load_dotenv()

DEFAULT_GEOCODING_URL = "https://api.openweathermap.org/geo/1.0"
DEFAULT_WEATHER_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_NEWS_URL = "https://newsapi.org/v2"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings handed to the pipeline engine at startup.

    Attributes:
        weather_api_key: OpenWeatherMap key, used for both geocoding and weather.
        news_api_key: NewsAPI key.
        geocoding_url: Base URL of the geocoding API.
        weather_url: Base URL of the current-weather API.
        news_url: Base URL of the news API.
        connect_timeout: Seconds allowed to establish a connection.
        read_timeout: Seconds allowed between bytes of the response.
        max_articles: Default number of articles requested per run.
        output_dir: Directory for log files and debug dumps.
    """
    weather_api_key: str
    news_api_key: str
    geocoding_url: str = DEFAULT_GEOCODING_URL
    weather_url: str = DEFAULT_WEATHER_URL
    news_url: str = DEFAULT_NEWS_URL
    connect_timeout: float = 10.0
    read_timeout: float = 10.0
    max_articles: int = 5
    output_dir: str = "output"


def load_config(config_path: str | Path = "config.yaml") -> Dict[str, Any]:
    """
    Load configuration from the specified YAML file.

    Args:
        config_path (str | Path): Path to the configuration file. Defaults to "config.yaml".

    Returns:
        Dict[str, Any]: A dictionary containing the configuration settings.
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    with open(config_file, "r", encoding="utf-8") as file:
        config_data = yaml.safe_load(file)

    if not config_data:
        raise ValueError(f"Configuration file {config_path} is empty or invalid.")

    return config_data


def build_settings(config: Dict[str, Any]) -> Settings:
    """
    Resolve a parsed config dict plus the environment into :class:`Settings`.

    API keys are read from ``WEATHER_API_KEY`` / ``NEWS_API_KEY`` first and fall
    back to ``api_keys.weather`` / ``api_keys.news`` in the YAML.

    Args:
        config (Dict[str, Any]): Parsed config.yaml contents.

    Returns:
        Settings: Immutable settings for the engine.

    Raises:
        ConfigError: If either API key is missing or blank.
    """
    keys = config.get("api_keys") or {}
    weather_key = (os.getenv("WEATHER_API_KEY") or keys.get("weather") or "").strip()
    news_key = (os.getenv("NEWS_API_KEY") or keys.get("news") or "").strip()

    if not weather_key:
        raise ConfigError(
            "Weather API key not found. Set WEATHER_API_KEY in .env "
            "or api_keys.weather in config.yaml"
        )
    if not news_key:
        raise ConfigError(
            "News API key not found. Set NEWS_API_KEY in .env "
            "or api_keys.news in config.yaml"
        )

    providers = config.get("providers") or {}
    http = config.get("http") or {}
    news = config.get("news") or {}

    return Settings(
        weather_api_key=weather_key,
        news_api_key=news_key,
        geocoding_url=(providers.get("geocoding") or {}).get("base_url", DEFAULT_GEOCODING_URL),
        weather_url=(providers.get("weather") or {}).get("base_url", DEFAULT_WEATHER_URL),
        news_url=(providers.get("news") or {}).get("base_url", DEFAULT_NEWS_URL),
        connect_timeout=float(http.get("connect_timeout", 10.0)),
        read_timeout=float(http.get("read_timeout", 10.0)),
        max_articles=int(news.get("max_articles", 5)),
        output_dir=config.get("output_dir", "output"),
    )
