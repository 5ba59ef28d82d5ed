"""Shared HTTP transport for all providers.

One ``requests.Session`` backs every provider for the lifetime of a
``PipelineEngine``. Each call is a single attempt with a fixed
(connect, read) timeout. Failures are classified here so providers only deal
with :class:`TransportError` and :class:`ParseError`.
"""

from typing import Any, Dict, Optional

import requests

from weather_news.core.errors import ParseError, TransportError
from weather_news.core.logger import logger

USER_AGENT = "weather-news/0.1"


class HttpClient:
    """Thin wrapper around a pooled ``requests.Session``.

    Args:
        connect_timeout: Seconds allowed to establish a connection.
        read_timeout: Seconds allowed between bytes of the response.
        session: Pre-built session (tests inject a mock here).
    """

    def __init__(
        self,
        connect_timeout: float = 10.0,
        read_timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = (connect_timeout, read_timeout)
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        self._closed = False

    # ── public API ──────────────────────────────────────────────────────────

    def get(self, url: str, params: Dict[str, Any], provider: str) -> requests.Response:
        """Issue one GET. Returns the raw response whatever its status.

        Raises:
            TransportError: On connection failure or timeout.
        """
        if self._closed:
            raise TransportError(f"{provider}: HTTP client already closed", provider=provider)
        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error(f"HttpClient: INFRA_FAILURE [{provider}] {url}: {exc}")
            raise TransportError(
                f"{provider} request failed: {exc}", provider=provider,
            ) from exc

    def get_json(self, url: str, params: Dict[str, Any], provider: str) -> Any:
        """Issue one GET and decode the body, rejecting non-2xx statuses.

        Raises:
            TransportError: On I/O failure or a non-success status.
            ParseError: If the body is not valid JSON.
        """
        resp = self.get(url, params, provider)
        self.raise_for_status(resp, provider)
        return self.decode(resp, provider)

    @staticmethod
    def raise_for_status(resp: requests.Response, provider: str) -> None:
        """Raise :class:`TransportError` carrying status and reason for non-2xx."""
        if 200 <= resp.status_code < 300:
            return
        logger.error(
            f"HttpClient: INFRA_FAILURE [{provider}] "
            f"HTTP {resp.status_code} {resp.reason}"
        )
        raise TransportError(
            f"{provider} API request failed: {resp.status_code} {resp.reason}",
            provider=provider,
            status_code=resp.status_code,
        )

    @staticmethod
    def decode(resp: requests.Response, provider: str) -> Any:
        """Return the JSON body, or raise :class:`ParseError`."""
        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError(f"{provider} returned a non-JSON body: {exc}") from exc

    def close(self) -> None:
        """Release pooled connections. Safe to call more than once."""
        if self._closed:
            return
        self.session.close()
        self._closed = True
        logger.info("HttpClient: session closed")

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
