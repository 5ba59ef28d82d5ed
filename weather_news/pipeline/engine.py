"""Pipeline engine for zipcode → location → {weather, news}.

Flow per request:
  1. Validating: zipcode format check (or non-blank city/state)
  2. Resolving : geocode to a Location
  3. Fetching  : weather by coordinates, then news (city → state → country)
  4. Done

Validation and geocoding failures end the run in ``FAILED``; nothing
downstream is meaningful without a location. Weather and news failures are
recorded on the result and never stop the sibling fetch, so a run can finish
``DONE`` with one section holding an error.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from weather_news.core.config import Settings
from weather_news.core.errors import InvalidInputError, WeatherNewsError
from weather_news.core.http import HttpClient
from weather_news.core.logger import logger
from weather_news.models.datatypes import Article, Location, Weather
from weather_news.pipeline.validator import is_valid
from weather_news.providers.base import GeocodingProvider, NewsProvider, WeatherProvider
from weather_news.providers.geocoding import OpenWeatherGeocoder
from weather_news.providers.news import NewsApiProvider
from weather_news.providers.weather import OpenWeatherProvider


class PipelineState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineResult:
    """Outcome of one pipeline run.

    Attributes:
        query: The caller's input (zipcode or ``"City, ST"``).
        state: ``DONE`` or ``FAILED``.
        location: Resolved location, when resolution succeeded.
        weather: Current conditions, or ``None`` if the weather fetch failed.
        weather_error: Why the weather fetch failed.
        articles: News articles (possibly empty).
        news_tier: Which fallback tier served the articles.
        news_error: Why the news fetch failed.
        failure: Validation or geocoding error that ended the run.
        data_source_log: ``" | "``-joined per-stage outcome tags.
    """
    query: str
    state: PipelineState = PipelineState.IDLE
    location: Optional[Location] = None
    weather: Optional[Weather] = None
    weather_error: Optional[WeatherNewsError] = None
    articles: List[Article] = field(default_factory=list)
    news_tier: Optional[str] = None
    news_error: Optional[WeatherNewsError] = None
    failure: Optional[WeatherNewsError] = None
    data_source_log: str = ""

    @property
    def failure_kind(self) -> Optional[str]:
        return type(self.failure).__name__ if self.failure else None

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.DONE


class PipelineEngine:
    """Orchestrates geocoding, weather and news for one request at a time.

    The engine owns the shared :class:`HttpClient` unless one is passed in,
    and releases it on :meth:`close` or when used as a context manager.

    Args:
        settings: Resolved settings (API keys, URLs, timeouts).
        http: Optional pre-built client; the caller then owns its lifetime.
        geocoder: Optional provider override.
        weather: Optional provider override.
        news: Optional provider override.
    """

    def __init__(
        self,
        settings: Settings,
        http: Optional[HttpClient] = None,
        geocoder: Optional[GeocodingProvider] = None,
        weather: Optional[WeatherProvider] = None,
        news: Optional[NewsProvider] = None,
    ) -> None:
        self.settings = settings
        self._owns_http = http is None
        self.http = http or HttpClient(
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
        )

        self.geocoder = geocoder or OpenWeatherGeocoder(
            settings.weather_api_key, self.http, settings.geocoding_url,
        )
        self.weather = weather or OpenWeatherProvider(
            settings.weather_api_key, self.http, settings.weather_url,
        )
        self.news = news or NewsApiProvider(
            settings.news_api_key, self.http, settings.news_url,
        )
        self._closed = False

    # ── public ────────────────────────────────────────────────────────────────

    def run(self, zipcode: str, max_articles: Optional[int] = None) -> PipelineResult:
        """Run the pipeline for one zipcode.

        Args:
            zipcode: ``12345`` or ``12345-6789``.
            max_articles: Article cap; defaults to ``settings.max_articles``.

        Returns:
            :class:`PipelineResult`; errors are carried on it, never raised.
        """
        result = PipelineResult(query=zipcode)

        def validate() -> None:
            if not is_valid(zipcode):
                raise InvalidInputError(
                    f"Invalid US zipcode format: {zipcode!r}. Expected 12345 or 12345-6789"
                )

        return self._execute(
            result, validate,
            lambda: self.geocoder.resolve_by_zipcode(zipcode),
            max_articles,
        )

    def run_city(self, city: str, state: str, max_articles: Optional[int] = None) -> PipelineResult:
        """Run the pipeline for a city/state pair instead of a zipcode."""
        result = PipelineResult(query=f"{(city or '').strip()}, {(state or '').strip()}")

        def validate() -> None:
            if not (city or "").strip() or not (state or "").strip():
                raise InvalidInputError("City and state must both be provided")

        return self._execute(
            result, validate,
            lambda: self.geocoder.resolve_by_city(city, state),
            max_articles,
        )

    def close(self) -> None:
        """Release the HTTP client if this engine created it. Idempotent."""
        if self._closed:
            return
        if self._owns_http:
            self.http.close()
        self._closed = True
        logger.info("PipelineEngine: resources released")

    def __enter__(self) -> "PipelineEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ── internal ──────────────────────────────────────────────────────────────

    def _execute(
        self,
        result: PipelineResult,
        validate: Callable[[], None],
        resolve: Callable[[], Location],
        max_articles: Optional[int],
    ) -> PipelineResult:
        log_parts: List[str] = []
        limit = max_articles if max_articles is not None else self.settings.max_articles

        # ── Validating ────────────────────────────────────────────────────────
        result.state = PipelineState.VALIDATING
        try:
            validate()
        except InvalidInputError as exc:
            logger.warning(f"PipelineEngine: invalid input {result.query!r}: {exc}")
            log_parts.append("validate=invalid")
            return self._fail(result, exc, log_parts)

        # ── Resolving ─────────────────────────────────────────────────────────
        result.state = PipelineState.RESOLVING
        try:
            result.location = resolve()
            log_parts.append("geocode=ok")
        except WeatherNewsError as exc:
            logger.error(f"PipelineEngine: geocoding failed for {result.query!r}: {exc}")
            log_parts.append(f"geocode={_tag(exc)}")
            return self._fail(result, exc, log_parts)

        # ── Fetching ──────────────────────────────────────────────────────────
        result.state = PipelineState.FETCHING
        try:
            result.weather = self.weather.fetch_by_location(result.location)
            log_parts.append("weather=ok")
        except WeatherNewsError as exc:
            logger.error(f"PipelineEngine: weather fetch failed for {result.query!r}: {exc}")
            result.weather_error = exc
            log_parts.append(f"weather={_tag(exc)}")

        try:
            result.articles, result.news_tier = self.news.search_local_news(result.location, limit)
            log_parts.append(f"news={result.news_tier}")
        except WeatherNewsError as exc:
            logger.error(f"PipelineEngine: news fetch failed for {result.query!r}: {exc}")
            result.news_error = exc
            log_parts.append(f"news={_tag(exc)}")

        result.state = PipelineState.DONE
        result.data_source_log = " | ".join(log_parts)
        logger.info(f"PipelineEngine: [{result.query}] {result.data_source_log}")
        return result

    @staticmethod
    def _fail(result: PipelineResult, exc: WeatherNewsError, log_parts: List[str]) -> PipelineResult:
        result.state = PipelineState.FAILED
        result.failure = exc
        result.data_source_log = " | ".join(log_parts)
        return result


# ── helpers ───────────────────────────────────────────────────────────────────

def _tag(exc: WeatherNewsError) -> str:
    """Short log tag for an error, e.g. ``TransportError`` → ``transport_error``."""
    name = type(exc).__name__
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name).lstrip("_")
