"""HTTP transport for the v1.1 search endpoint.

The pagination driver only depends on the ``Transport`` protocol; tests swap
in scripted transports.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol

import httpx
from pydantic import ValidationError
from search_utils import get_logger
from search_utils.settings import get_settings

from tweet_search.errors import TransportError
from tweet_search.query import SearchRequest
from tweet_search.types import PageResult, RateLimitedPage, RateLimitState, Tweet, TweetPage

log = get_logger("tweet_search.transport")

RATE_LIMIT_LIMIT_HEADER = "x-rate-limit-limit"
RATE_LIMIT_REMAINING_HEADER = "x-rate-limit-remaining"
RATE_LIMIT_RESET_HEADER = "x-rate-limit-reset"


class Transport(Protocol):
    """Capabilities the pagination driver needs from the HTTP layer."""

    def execute(self, request: SearchRequest) -> httpx.Response:
        """Send a request. Raises TransportError on failure."""
        ...

    def parse(self, response: httpx.Response) -> PageResult:
        """Decode a response into a page or a rate-limited outcome."""
        ...

    def rate_limit(self, response: httpx.Response) -> RateLimitState | None:
        """Read quota headers from a response, if present."""
        ...


def read_rate_limit(headers: httpx.Headers) -> RateLimitState | None:
    """Build a RateLimitState from response headers.

    Returns None unless all three headers are present and numeric.
    """
    try:
        limit = int(headers[RATE_LIMIT_LIMIT_HEADER])
        remaining = int(headers[RATE_LIMIT_REMAINING_HEADER])
        reset = datetime.fromtimestamp(int(headers[RATE_LIMIT_RESET_HEADER]), tz=UTC)
    except (KeyError, ValueError, OverflowError, OSError):
        return None

    return RateLimitState(limit=limit, remaining=remaining, reset=reset)


class HttpTransport:
    """Transport backed by an httpx client with bearer-token auth."""

    def __init__(
        self,
        bearer_token: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            bearer_token: Application bearer token. If not provided, reads from settings.
            base_url: API root. Defaults to the configured base URL.
            timeout: Request timeout in seconds. Defaults to the configured timeout.
            client: Prebuilt httpx client (used as-is, e.g. with a mock transport).

        Raises:
            TransportError: If no client is given and no token is available.
        """
        if client is not None:
            self._client = client
            return

        settings = get_settings()
        if bearer_token is None:
            if settings.twitter_bearer_token is None:
                raise TransportError.api_key_missing()
            bearer_token = settings.twitter_bearer_token.get_secret_value()

        self._client = httpx.Client(
            base_url=base_url or settings.twitter_api_base_url,
            headers={"Authorization": f"Bearer {bearer_token}"},
            timeout=timeout if timeout is not None else settings.twitter_timeout,
        )

    def execute(self, request: SearchRequest) -> httpx.Response:
        """Send the page request.

        Raises:
            TransportError: On connectivity failures.
        """
        log.debug("sending_request", method=request.method, url=request.url)
        try:
            return self._client.request(request.method, request.path, params=list(request.params))
        except httpx.RequestError as e:
            raise TransportError.network_error(str(e)) from e

    def parse(self, response: httpx.Response) -> PageResult:
        """Decode a search response.

        HTTP 429 becomes a RateLimitedPage; any other failure raises.

        Raises:
            TransportError: On non-2xx status or an undecodable body.
        """
        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            rate_limit = self.rate_limit(response)
            if rate_limit is None:
                # Refused without quota headers: assume the window is closed now
                rate_limit = RateLimitState(limit=0, remaining=0, reset=datetime.now(UTC))
            return RateLimitedPage(rate_limit=rate_limit)

        if response.is_error:
            raise TransportError.http_error(response.status_code, response.text[:200])

        try:
            data = response.json()
            statuses = data.get("statuses") or []
            tweets = [Tweet.model_validate(s) for s in statuses]
        except (ValueError, AttributeError, ValidationError) as e:
            raise TransportError.invalid_response(str(e)) from e

        return TweetPage(tweets=tweets, rate_limit=self.rate_limit(response))

    def rate_limit(self, response: httpx.Response) -> RateLimitState | None:
        """Read quota headers from a response."""
        return read_rate_limit(response.headers)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> HttpTransport:
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager."""
        self.close()
