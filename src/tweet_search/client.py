"""Search-optimized Twitter client."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from search_utils import get_logger

from tweet_search.pagination import PaginationDriver
from tweet_search.transport import HttpTransport, Transport
from tweet_search.types import ResultType, SearchConfig, SearchTweetsResponse

log = get_logger("tweet_search.client")

DEFAULT_LANGUAGE = "en"


class SearchTwitterClient:
    """Search client that backfills every tweet matching a query.

    Filters live in an immutable ``SearchConfig`` snapshot. Setters replace
    the snapshot; a running search keeps the one it started with.
    """

    def __init__(
        self,
        transport: Transport,
        config: SearchConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            transport: Transport used to execute page requests.
            config: Initial filters. Defaults to no filters.
            clock: Time source for the pending-reset stop policy.
        """
        self._transport = transport
        self._config = config or SearchConfig()
        self._clock = clock

    @classmethod
    def from_settings(cls, config: SearchConfig | None = None) -> SearchTwitterClient:
        """Create a client on an HttpTransport configured from settings.

        Raises:
            TransportError: If no bearer token is configured.
        """
        return cls(HttpTransport(), config)

    @property
    def config(self) -> SearchConfig:
        """Current filter snapshot."""
        return self._config

    def set_since_id(self, since_id: int) -> None:
        """Set the since_id lower fence (0 clears it)."""
        self._update(since_id=since_id or None)

    def set_language(self, language: str) -> None:
        """Set the lang filter, falling back to English when empty."""
        self._update(language=language or DEFAULT_LANGUAGE)

    def set_result_type(self, result_type: str) -> None:
        """Set the result_type filter; unknown values mean "mixed"."""
        try:
            value = ResultType(result_type)
        except ValueError:
            value = ResultType.MIXED
        self._update(result_type=value)

    def search(self, query: str) -> SearchTweetsResponse:
        """Search tweets for ``query`` until no more results or the rate limit is hit.

        Args:
            query: Free-text search query.

        Returns:
            SearchTweetsResponse with every tweet retrieved and the last quota state.

        Raises:
            QueryConstructionError: If the query is empty or cannot be encoded.
            TransportError: On transport failures (partial results are discarded).
            DefinitionError: If the max_id fence would underflow.
        """
        log.info(
            "searching_tweets",
            query=query,
            since_id=self._config.since_id,
            language=self._config.language,
            result_type=self._config.result_type,
        )
        driver = PaginationDriver(self._transport, self._config, clock=self._clock)
        return driver.run(query)

    def close(self) -> None:
        """Close the underlying transport if it supports closing."""
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> SearchTwitterClient:
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager."""
        self.close()

    def _update(self, **changes: object) -> None:
        self._config = SearchConfig(**{**self._config.model_dump(), **changes})
