"""Data structures for the weather and news pipeline."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Location:
    """
    A resolved geographic location. Only the geocoding provider builds these.
    """
    zipcode: str
    city: str
    state: str
    latitude: float
    longitude: float

    def __str__(self) -> str:
        place = ", ".join(part for part in (self.city, self.state) if part)
        if self.zipcode:
            place = f"{place} {self.zipcode}".strip()
        return f"{place} ({self.latitude:.4f}, {self.longitude:.4f})"


@dataclass(frozen=True)
class Weather:
    """
    Current conditions normalized from the weather provider (imperial units).
    """
    location: str
    temperature: float
    feels_like: float
    pressure: float
    humidity: int
    wind_direction: int
    visibility: int
    wind_speed: float
    main_condition: str
    description: str
    icon: str


@dataclass(frozen=True)
class Article:
    """
    A normalized news article. ``title`` is always non-empty.
    """
    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    source: Optional[str] = None
    author: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None
    published_at: Optional[datetime] = None
