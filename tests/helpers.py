"""Scripted transport and page builders shared by the test modules."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

import httpx

from tweet_search.query import SearchRequest
from tweet_search.types import RateLimitedPage, RateLimitState, Tweet, TweetPage

RESET_AT = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)

ScriptStep = TweetPage | RateLimitedPage | Exception


class ScriptedTransport:
    """Transport that replays a fixed sequence of page outcomes.

    Exceptions in the script are raised from ``execute``.
    """

    def __init__(self, steps: Sequence[ScriptStep]) -> None:
        self._steps = list(steps)
        self._pending: TweetPage | RateLimitedPage | None = None
        self.requests: list[SearchRequest] = []
        self.closed = False

    @property
    def calls(self) -> int:
        return len(self.requests)

    def max_ids(self) -> list[str | None]:
        """max_id sent with each request, in order."""
        return [r.param("max_id") for r in self.requests]

    def execute(self, request: SearchRequest) -> httpx.Response:
        self.requests.append(request)
        if not self._steps:
            raise AssertionError(f"Unexpected request #{len(self.requests)}: {request.url}")
        step = self._steps.pop(0)
        if isinstance(step, Exception):
            raise step
        self._pending = step
        return httpx.Response(200)

    def parse(self, response: httpx.Response) -> TweetPage | RateLimitedPage:
        assert self._pending is not None
        page, self._pending = self._pending, None
        return page

    def rate_limit(self, response: httpx.Response) -> RateLimitState | None:
        return None

    def close(self) -> None:
        self.closed = True


def make_rate_limit(remaining: int, *, limit: int = 180, reset: datetime = RESET_AT) -> RateLimitState:
    """Build a rate-limit snapshot."""
    return RateLimitState(limit=limit, remaining=remaining, reset=reset)


def make_page(ids: Sequence[int], *, remaining: int | None = None, reset: datetime = RESET_AT) -> TweetPage:
    """Build a page of tweets with the given ids."""
    return TweetPage(
        tweets=[Tweet(id=i, id_str=str(i), text=f"tweet {i}") for i in ids],
        rate_limit=make_rate_limit(remaining, reset=reset) if remaining is not None else None,
    )


def full_page(start: int, *, remaining: int | None = None) -> TweetPage:
    """Build a full page of 100 descending ids starting at ``start``."""
    return make_page(range(start, start - 100, -1), remaining=remaining)
