"""Local news via NewsAPI with tiered query fallback.

Tiers per location (first non-empty tier wins):
  1. city   : ``/everything?q=<city>``   (skipped when city is blank)
  2. state  : ``/everything?q=<state>``  (skipped when blank or same as city)
  3. country: ``/top-headlines?country=us``

Each tier is one provider call. An article survives normalization only if its
trimmed title is non-empty, so a tier can come back empty even when the
provider returned entries. A non-"ok" provider status is logged and treated as
an empty tier.
"""

import re
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple

from weather_news.core.errors import InvalidInputError, ParseError
from weather_news.core.http import HttpClient
from weather_news.core.logger import logger
from weather_news.models.datatypes import Article, Location
from weather_news.providers.base import NewsProvider

MAX_PAGE_SIZE = 100
HEADLINES_COUNTRY = "us"

TIER_CITY = "city"
TIER_STATE = "state"
TIER_COUNTRY = "country"
TIER_NONE = "none"

_PROVIDER = "news"
_FRACTION_RE = re.compile(r"\.(\d{1,9})(?=[+-]\d{2}:\d{2}$|$)", re.ASCII)


class NewsApiProvider(NewsProvider):
    """NewsAPI ``/v2`` provider.

    Args:
        api_key: NewsAPI key (sent as ``apiKey``).
        http: Shared HTTP client.
        base_url: API root, e.g. ``https://newsapi.org/v2``.
    """

    def __init__(self, api_key: str, http: HttpClient,
                 base_url: str = "https://newsapi.org/v2") -> None:
        self.api_key = api_key
        self.http = http
        self.base_url = base_url.rstrip("/")

    # ── fallback orchestration ────────────────────────────────────────────────

    def search_local_news(
        self,
        location: Location,
        max_articles: int = 5,
    ) -> Tuple[List[Article], str]:
        """Run the city → state → country tiers and stop at the first hit.

        Args:
            location: Resolved location.
            max_articles: Requested article count; clamped to ``MAX_PAGE_SIZE``.

        Returns:
            Tuple of ``(articles, tier_label)`` where tier_label is one of
            ``"city"``, ``"state"``, ``"country"`` or ``"none"``.

        Raises:
            InvalidInputError: ``location`` is missing or ``max_articles < 1``.
            TransportError: A tier's request failed; later tiers are not tried.
            ParseError: A tier's body was not a JSON object.
        """
        if location is None:
            raise InvalidInputError("Location cannot be empty")
        page_size = clamp_page_size(max_articles)

        for label, fetch in self._tiers(location, page_size):
            articles = fetch()
            if articles:
                logger.info(
                    f"NewsApiProvider: tier={label} yielded {len(articles)} article(s) "
                    f"for {location}"
                )
                return articles[:page_size], label
            logger.info(f"NewsApiProvider: tier={label} empty for {location}")

        logger.warning(f"NewsApiProvider: no articles from any tier for {location}")
        return [], TIER_NONE

    def _tiers(
        self,
        location: Location,
        page_size: int,
    ) -> List[Tuple[str, Callable[[], List[Article]]]]:
        """Build the ordered list of tier thunks for ``location``."""
        city = (location.city or "").strip()
        state = (location.state or "").strip()

        tiers: List[Tuple[str, Callable[[], List[Article]]]] = []
        if city:
            tiers.append((TIER_CITY, lambda: self.fetch_by_query(city, page_size)))
        if state and state.lower() != city.lower():
            tiers.append((TIER_STATE, lambda: self.fetch_by_query(state, page_size)))
        tiers.append((
            TIER_COUNTRY,
            lambda: self.fetch_top_headlines(HEADLINES_COUNTRY, page_size),
        ))
        return tiers

    # ── single-tier calls ─────────────────────────────────────────────────────

    def fetch_by_query(self, query: str, max_articles: int = 5) -> List[Article]:
        """Search ``/everything`` for ``query``, newest first."""
        query = (query or "").strip()
        if not query:
            raise InvalidInputError("Query cannot be empty")
        logger.info(f"NewsApiProvider: fetching q={query!r}")
        data = self.http.get_json(
            f"{self.base_url}/everything",
            params={
                "q": query,
                "sortBy": "publishedAt",
                "pageSize": clamp_page_size(max_articles),
                "apiKey": self.api_key,
            },
            provider=_PROVIDER,
        )
        return parse_articles(data)

    def fetch_top_headlines(self, country: str = HEADLINES_COUNTRY, max_articles: int = 5) -> List[Article]:
        """Fetch ``/top-headlines`` for a two-letter country code."""
        logger.info(f"NewsApiProvider: fetching top headlines country={country}")
        data = self.http.get_json(
            f"{self.base_url}/top-headlines",
            params={
                "country": country,
                "pageSize": clamp_page_size(max_articles),
                "apiKey": self.api_key,
            },
            provider=_PROVIDER,
        )
        return parse_articles(data)


# ── parsing ───────────────────────────────────────────────────────────────────

def parse_articles(data: Any) -> List[Article]:
    """Normalize a NewsAPI body into articles with non-empty titles.

    Raises:
        ParseError: ``data`` is not a JSON object.
    """
    if not isinstance(data, dict):
        raise ParseError("News response is not a JSON object")

    status = data.get("status")
    if status != "ok":
        logger.warning(
            f"NewsApiProvider: provider status={status!r} "
            f"code={data.get('code')!r} message={data.get('message')!r}"
        )
        return []

    raw_articles = data.get("articles")
    if not isinstance(raw_articles, list):
        logger.warning("NewsApiProvider: 'articles' missing or not a list")
        return []

    articles: List[Article] = []
    for raw in raw_articles:
        if not isinstance(raw, dict):
            continue
        title = (_opt_str(raw.get("title")) or "").strip()
        if not title:
            logger.debug("NewsApiProvider: skipped article without title")
            continue
        source = raw.get("source") if isinstance(raw.get("source"), dict) else {}
        articles.append(Article(
            title=title,
            description=_opt_str(raw.get("description")),
            content=_opt_str(raw.get("content")),
            source=_opt_str(source.get("name")),
            author=_opt_str(raw.get("author")),
            url=_opt_str(raw.get("url")),
            image_url=_opt_str(raw.get("urlToImage")),
            published_at=parse_published_at(raw.get("publishedAt")),
        ))

    logger.info(f"NewsApiProvider: parsed {len(articles)} article(s)")
    return articles


def parse_published_at(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; unparseable values become ``None``."""
    if value is None:
        return None
    if not isinstance(value, str):
        logger.warning(f"NewsApiProvider: failed to parse published date: {value!r}")
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # fromisoformat on 3.10 only takes 3 or 6 fraction digits
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"NewsApiProvider: failed to parse published date: {value!r}")
        return None


def clamp_page_size(max_articles: int) -> int:
    """Clamp a requested count to ``[1, MAX_PAGE_SIZE]``; below 1 is an error."""
    if max_articles < 1:
        raise InvalidInputError(f"max_articles must be at least 1, got {max_articles}")
    return min(max_articles, MAX_PAGE_SIZE)


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
