"""Error taxonomy shared by the providers and the pipeline engine.

Kinds:
  - InvalidInputError: malformed zipcode or empty city/state; caller-correctable.
  - NotFoundError    : valid input, but the provider has no matching location.
  - TransportError   : non-success HTTP status, connection failure or timeout.
  - ParseError       : provider JSON does not have the expected shape.
  - ConfigError      : missing credentials at startup; never raised per request.

None of these are retried. Every external call is attempted exactly once.
"""

from typing import Optional


class WeatherNewsError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(WeatherNewsError):
    """Raised when caller input fails validation before any request is made."""


class NotFoundError(WeatherNewsError):
    """Raised when a provider reports that the requested location does not exist.

    Attributes:
        query: The caller's original lookup string (zipcode or ``"City, ST"``).
    """

    def __init__(self, message: str, query: str = "") -> None:
        super().__init__(message)
        self.query = query


class TransportError(WeatherNewsError):
    """Raised on any non-success status or I/O failure talking to a provider.

    Attributes:
        provider: Short provider label (``"geocoding"``, ``"weather"``, ``"news"``).
        status_code: HTTP status, or ``None`` when no response was received.
    """

    def __init__(
        self,
        message: str,
        provider: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class ParseError(WeatherNewsError):
    """Raised when a provider response is missing structurally required fields."""


class ConfigError(WeatherNewsError):
    """Raised at startup when required configuration (API keys) is missing."""
