"""Human-readable rendering of pipeline results for the interactive loop."""

from typing import List

from weather_news.core.errors import (
    ConfigError, InvalidInputError, NotFoundError, ParseError, TransportError,
    WeatherNewsError,
)
from weather_news.models.datatypes import Article, Location, Weather
from weather_news.pipeline.engine import PipelineResult

DESCRIPTION_LIMIT = 150
DIVIDER = "=" * 60


def format_location(location: Location) -> str:
    return f"   Location: {location}"


def format_weather(weather: Weather) -> str:
    return (
        f"Weather in {weather.location}:\n"
        f"  Temperature: {weather.temperature:.1f}°F (feels like {weather.feels_like:.1f}°F)\n"
        f"  Condition: {weather.main_condition} - {weather.description}\n"
        f"  Humidity: {weather.humidity}%\n"
        f"  Wind: {weather.wind_speed:.1f} mph\n"
        f"  Pressure: {weather.pressure:.1f} hPa\n"
        f"  Visibility: {weather.visibility} meters"
    )


def format_articles(articles: List[Article]) -> str:
    """Numbered article list; descriptions are cut to 150 characters."""
    if not articles:
        return "   No local news found for this area."
    lines = [f"   Found {len(articles)} news articles:", "-" * 60]
    for i, article in enumerate(articles, start=1):
        lines.append(f"{i}. {article.title}")
        lines.append(f"   Source: {article.source or 'unknown'}")
        if article.description:
            description = article.description
            if len(description) > DESCRIPTION_LIMIT:
                description = description[:DESCRIPTION_LIMIT] + "..."
            lines.append(f"   {description}")
        if article.url:
            lines.append(f"   URL: {article.url}")
        lines.append("")
    return "\n".join(lines)


def error_message(exc: WeatherNewsError) -> str:
    """Map an error kind to the message shown to the user."""
    if isinstance(exc, InvalidInputError):
        return f"❌ {exc}"
    if isinstance(exc, NotFoundError):
        return f"❌ No location found for {exc.query or 'that input'}."
    if isinstance(exc, TransportError):
        return (
            f"❌ Failed to fetch data: {exc}\n"
            "Please check your internet connection and API keys."
        )
    if isinstance(exc, ParseError):
        return f"❌ The provider sent an unexpected response: {exc}"
    if isinstance(exc, ConfigError):
        return f"❌ Configuration problem: {exc}"
    return f"❌ An unexpected error occurred: {exc}"


def format_result(result: PipelineResult) -> str:
    """Render a whole run, section by section."""
    lines = [DIVIDER, f"Processing: {result.query}", DIVIDER]

    if result.failure is not None:
        lines.append(error_message(result.failure))
        return "\n".join(lines)

    lines.append("📍 Looking up location...")
    lines.append(format_location(result.location))

    lines.append("\n🌤️  Fetching weather information...")
    if result.weather is not None:
        lines.append(format_weather(result.weather))
    else:
        lines.append(error_message(result.weather_error))

    lines.append("\n📰 Fetching local news...")
    if result.news_error is not None:
        lines.append(error_message(result.news_error))
    else:
        lines.append(format_articles(result.articles))

    return "\n".join(lines)
