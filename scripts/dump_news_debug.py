"""
Debug dump. Resolves one zipcode, then runs every news tier (city, state,
country) separately, without stopping at the first hit, and writes the
normalized results to output/news_debug.json.

Also runs the orchestrated fallback so the selected tier can be compared with
the per-tier counts.

Run with:
    python scripts/dump_news_debug.py 94040
"""

import json
import os
import sys
from dataclasses import asdict

from dotenv import load_dotenv

load_dotenv()

from weather_news.core.config import build_settings, load_config  # noqa: E402
from weather_news.core.errors import WeatherNewsError  # noqa: E402
from weather_news.core.http import HttpClient  # noqa: E402
from weather_news.providers.geocoding import OpenWeatherGeocoder  # noqa: E402
from weather_news.providers.news import HEADLINES_COUNTRY, NewsApiProvider  # noqa: E402


def _tier_block(fetch) -> dict:
    """Run one tier and summarize it, capturing errors instead of raising."""
    try:
        articles = fetch()
    except WeatherNewsError as exc:
        return {"error": f"{type(exc).__name__}: {exc}", "count": 0, "articles": []}
    return {
        "count": len(articles),
        "articles": [asdict(a) for a in articles],
    }


def main() -> int:
    if len(sys.argv) < 2:
        print("Usage: python scripts/dump_news_debug.py <zipcode>")
        return 1
    zipcode = sys.argv[1]

    settings = build_settings(load_config())
    os.makedirs(settings.output_dir, exist_ok=True)
    limit = settings.max_articles

    with HttpClient(settings.connect_timeout, settings.read_timeout) as http:
        geocoder = OpenWeatherGeocoder(settings.weather_api_key, http, settings.geocoding_url)
        news = NewsApiProvider(settings.news_api_key, http, settings.news_url)

        location = geocoder.resolve_by_zipcode(zipcode)
        print(f"Location: {location}")

        tiers = {
            f"city:{location.city}": _tier_block(lambda: news.fetch_by_query(location.city, limit)),
            f"state:{location.state}": _tier_block(lambda: news.fetch_by_query(location.state, limit)),
            f"country:{HEADLINES_COUNTRY}": _tier_block(
                lambda: news.fetch_top_headlines(HEADLINES_COUNTRY, limit)
            ),
        }
        for label, block in tiers.items():
            print(f"  {label:30}  count={block['count']}  {block.get('error', '')}")

        articles, tier = news.search_local_news(location, limit)
        print(f"  pipeline selected tier={tier} ({len(articles)} article(s))")

    out = {
        "zipcode": zipcode,
        "location": asdict(location),
        "tiers": tiers,
        "pipeline_selected": tier,
    }
    path = os.path.join(settings.output_dir, "news_debug.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(out, f, indent=2, ensure_ascii=False, default=str)
    print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
