"""Pagination driver for tweet search backfill.

One driver runs one search. It walks the result set from newest to oldest by
moving the ``max_id`` fence below the smallest id seen so far, so every page
covers a window strictly older than, and disjoint from, the previous ones.

The loop ends when:
- a page comes back empty (no more data under the fence)
- the service refuses the call for quota (tweets gathered so far are kept)
- a page is not full and the quota it reports is spent
- a transport error is raised (nothing is kept)
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import Field
from search_utils import MutableModel, get_logger

from tweet_search.errors import DefinitionError
from tweet_search.query import SearchRequestParams, build_search_request
from tweet_search.transport import Transport
from tweet_search.types import (
    MAX_TWEET_ID,
    RateLimitState,
    SearchConfig,
    SearchTweetsResponse,
    StopReason,
    Tweet,
    TweetPage,
)

log = get_logger("tweet_search.pagination")


class DriverState(StrEnum):
    """Lifecycle of a single search."""

    INIT = "init"
    AWAITING_FIRST_PAGE = "awaiting_first_page"
    AWAITING_NEXT_PAGE = "awaiting_next_page"
    DONE = "done"
    FAILED = "failed"


class SearchCursor(MutableModel):
    """Running bookkeeping of a search in progress."""

    min_id: int = MAX_TWEET_ID
    pages: int = 0
    tweets: list[Tweet] = Field(default_factory=list)
    rate_limit: RateLimitState | None = None

    def absorb(self, page: TweetPage) -> None:
        """Append a page's tweets and lower the running minimum id."""
        self.tweets.extend(page.tweets)
        self.min_id = min([self.min_id, *(t.id for t in page.tweets)])


def next_max_id(min_id: int) -> int:
    """Return the max_id fence for the page after ``min_id``.

    Raises:
        DefinitionError: If ``min_id`` is 0 and the fence would underflow.
    """
    if min_id <= 0:
        raise DefinitionError.boundary_underflow()
    return min_id - 1


class PaginationDriver:
    """Runs the request/response loop for one search."""

    def __init__(
        self,
        transport: Transport,
        config: SearchConfig,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._transport = transport
        self._config = config
        self._clock = clock or (lambda: datetime.now(UTC))
        self.state = DriverState.INIT

    def run(self, query: str) -> SearchTweetsResponse:
        """Fetch every page for ``query`` until a stop condition is reached.

        Args:
            query: Free-text search query.

        Returns:
            SearchTweetsResponse with all tweets and the last quota snapshot.

        Raises:
            QueryConstructionError: If the query is empty or cannot be encoded.
            TransportError: On any non-rate-limit transport failure.
            DefinitionError: If the next max_id would underflow.
        """
        params = SearchRequestParams.first_page(query, self._config)
        cursor = SearchCursor()

        try:
            # Validate before touching the network
            request = build_search_request(params)
            self.state = DriverState.AWAITING_FIRST_PAGE

            while True:
                response = self._transport.execute(request)
                page = self._transport.parse(response)
                cursor.pages += 1

                if page.kind == "rate_limited":
                    cursor.rate_limit = page.rate_limit
                    return self._finish(query, cursor, StopReason.RATE_LIMITED)

                if page.rate_limit is not None:
                    cursor.rate_limit = page.rate_limit

                log.debug(
                    "page_received",
                    query=query,
                    page=cursor.pages,
                    tweets=len(page.tweets),
                    has_rate_limit=page.rate_limit is not None,
                    rate_limit=page.rate_limit.limit if page.rate_limit else None,
                    rate_limit_remaining=page.rate_limit.remaining if page.rate_limit else None,
                    rate_limit_reset=page.rate_limit.reset.isoformat() if page.rate_limit else None,
                )

                if not page.tweets:
                    return self._finish(query, cursor, StopReason.EMPTY_PAGE)

                cursor.absorb(page)

                stop = self._stop_reason(page)
                if stop is not None:
                    return self._finish(query, cursor, stop)

                params = params.with_max_id(next_max_id(cursor.min_id))
                request = build_search_request(params)
                self.state = DriverState.AWAITING_NEXT_PAGE
        except Exception:
            self.state = DriverState.FAILED
            log.warning("search_failed", query=query, pages=cursor.pages, tweets=len(cursor.tweets))
            raise

    def _stop_reason(self, page: TweetPage) -> StopReason | None:
        """Decide whether a non-empty page ends the search."""
        rate_limit = page.rate_limit
        if rate_limit is None:
            return None
        if rate_limit.exhausted and not page.is_full:
            return StopReason.QUOTA_EXHAUSTED
        if self._config.stop_on_pending_reset and rate_limit.reset > self._clock():
            return StopReason.RESET_PENDING
        return None

    def _finish(self, query: str, cursor: SearchCursor, reason: StopReason) -> SearchTweetsResponse:
        self.state = DriverState.DONE
        log.info(
            "search_complete",
            query=query,
            pages=cursor.pages,
            tweets=len(cursor.tweets),
            stop_reason=reason,
            rate_limit_remaining=cursor.rate_limit.remaining if cursor.rate_limit else None,
        )
        return SearchTweetsResponse(
            tweets=cursor.tweets,
            rate_limit=cursor.rate_limit,
            pages=cursor.pages,
            stop_reason=reason,
        )
