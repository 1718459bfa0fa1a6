"""Search request, page and result types with strict Pydantic validation."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import ConfigDict, Field
from search_utils import StrictModel

# Query for tweets in batches of this size (the API maximum per page)
BATCH_SIZE = 100

# Sentinel for "no minimum id seen yet"; every real id compares lower or equal
MAX_TWEET_ID = 2**64 - 1

TweetId = Annotated[int, Field(ge=0, le=MAX_TWEET_ID)]


class ResultType(StrEnum):
    """Values accepted by the ``result_type`` search parameter."""

    RECENT = "recent"
    POPULAR = "popular"
    MIXED = "mixed"


class StopReason(StrEnum):
    """Why a search finished without an error."""

    EMPTY_PAGE = "empty_page"
    QUOTA_EXHAUSTED = "quota_exhausted"
    RATE_LIMITED = "rate_limited"
    RESET_PENDING = "reset_pending"


class Tweet(StrictModel):
    """Status object from the search response.

    Only the identifier is required; unknown fields are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    id: TweetId
    id_str: str | None = None
    text: str | None = None
    full_text: str | None = None
    created_at: str | None = None
    lang: str | None = None


class RateLimitState(StrictModel):
    """Quota snapshot from ``x-rate-limit-*`` headers."""

    limit: int
    remaining: int
    reset: datetime

    @property
    def exhausted(self) -> bool:
        """Check whether no requests remain in the current window."""
        return self.remaining <= 0


class TweetPage(StrictModel):
    """A normal search response page."""

    kind: Literal["page"] = "page"
    tweets: list[Tweet] = Field(default_factory=list)
    rate_limit: RateLimitState | None = None

    @property
    def is_full(self) -> bool:
        """Check whether the page holds the maximum number of tweets."""
        return len(self.tweets) >= BATCH_SIZE


class RateLimitedPage(StrictModel):
    """Response refused because the quota is exhausted."""

    kind: Literal["rate_limited"] = "rate_limited"
    rate_limit: RateLimitState


PageResult = Annotated[TweetPage | RateLimitedPage, Field(discriminator="kind")]


class SearchConfig(StrictModel):
    """Per-search filters, fixed for the lifetime of one search."""

    since_id: TweetId | None = None
    language: str | None = None
    result_type: ResultType | None = None
    # Stop once the reset time is in the future even when quota remains
    stop_on_pending_reset: bool = False


class SearchTweetsResponse(StrictModel):
    """Accumulated result of a full search.

    Tweets keep page arrival order (newest to oldest); ``rate_limit`` is the
    most recently observed quota snapshot.
    """

    tweets: list[Tweet] = Field(default_factory=list)
    rate_limit: RateLimitState | None = None
    pages: int = 0
    stop_reason: StopReason

    @property
    def has_rate_limit(self) -> bool:
        """Check whether any quota information was observed."""
        return self.rate_limit is not None
