"""Abstract base classes for data providers."""

from abc import ABC, abstractmethod
from typing import List, Tuple

from weather_news.models.datatypes import Article, Location, Weather


class GeocodingProvider(ABC):
    """Abstract interface for turning a zipcode or city/state into a Location."""

    @abstractmethod
    def resolve_by_zipcode(self, zipcode: str) -> Location:
        """
        Resolve a US zipcode to a location.

        Args:
            zipcode (str): ``12345`` or ``12345-6789``.

        Returns:
            Location: The resolved location.
        """
        pass

    @abstractmethod
    def resolve_by_city(self, city: str, state: str) -> Location:
        """
        Resolve a city and state pair to a location.

        Args:
            city (str): City name.
            state (str): State name or two-letter code.

        Returns:
            Location: The resolved location, carrying the caller's city/state.
        """
        pass


class WeatherProvider(ABC):
    """Abstract interface for fetching current weather conditions."""

    @abstractmethod
    def fetch_by_zipcode(self, zipcode: str) -> Weather:
        """
        Fetch current conditions for a US zipcode.

        Args:
            zipcode (str): ``12345`` or ``12345-6789``.

        Returns:
            Weather: Normalized current conditions.
        """
        pass

    @abstractmethod
    def fetch_by_location(self, location: Location) -> Weather:
        """
        Fetch current conditions at a resolved location's coordinates.

        Args:
            location (Location): A location from a GeocodingProvider.

        Returns:
            Weather: Normalized current conditions.
        """
        pass


class NewsProvider(ABC):
    """Abstract interface for fetching local news around a location."""

    @abstractmethod
    def search_local_news(self, location: Location, max_articles: int = 5) -> Tuple[List[Article], str]:
        """
        Fetch local news, falling back to broader queries when a tier is empty.

        Args:
            location (Location): Where to look for news.
            max_articles (int): Upper bound on the number of articles returned.

        Returns:
            Tuple[List[Article], str]: Articles plus the label of the tier that served them.
        """
        pass

    def get_local_news(self, location: Location, max_articles: int = 5) -> List[Article]:
        """Same as :meth:`search_local_news` without the tier label."""
        articles, _ = self.search_local_news(location, max_articles)
        return articles
