"""Search-optimized Twitter client.

This package pages through the v1.1 search endpoint until every tweet
matching a query has been fetched or the rate limit stops it.
"""

from tweet_search.client import SearchTwitterClient
from tweet_search.errors import (
    DefinitionError,
    ErrorCode,
    QueryConstructionError,
    TransportError,
    TwitterSearchError,
)
from tweet_search.pagination import DriverState, PaginationDriver
from tweet_search.query import SearchRequest, SearchRequestParams, build_search_request
from tweet_search.transport import HttpTransport, Transport
from tweet_search.types import (
    BATCH_SIZE,
    MAX_TWEET_ID,
    RateLimitedPage,
    RateLimitState,
    ResultType,
    SearchConfig,
    SearchTweetsResponse,
    StopReason,
    Tweet,
    TweetPage,
)

__all__ = [
    "BATCH_SIZE",
    "MAX_TWEET_ID",
    "DefinitionError",
    "DriverState",
    "ErrorCode",
    "HttpTransport",
    "PaginationDriver",
    "QueryConstructionError",
    "RateLimitState",
    "RateLimitedPage",
    "ResultType",
    "SearchConfig",
    "SearchRequest",
    "SearchRequestParams",
    "SearchTweetsResponse",
    "SearchTwitterClient",
    "StopReason",
    "Transport",
    "TransportError",
    "Tweet",
    "TweetPage",
    "TwitterSearchError",
    "build_search_request",
]
