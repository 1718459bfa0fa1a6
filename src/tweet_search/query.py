"""Search request construction.

Turns the driver's cursor (filters plus the current max_id fence) into a
request description the transport can execute. Pure: no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from urllib.parse import urlencode

from tweet_search.errors import QueryConstructionError
from tweet_search.types import BATCH_SIZE, ResultType, SearchConfig

SEARCH_PATH = "/1.1/search/tweets.json"


@dataclass(frozen=True)
class SearchRequestParams:
    """Parameters of a single page request."""

    query: str
    count: int = BATCH_SIZE
    language: str | None = None
    result_type: ResultType | None = None
    since_id: int | None = None
    max_id: int | None = None

    @classmethod
    def first_page(cls, query: str, config: SearchConfig) -> SearchRequestParams:
        """Build page-1 parameters (no max_id) from a search config."""
        return cls(
            query=query,
            language=config.language,
            result_type=config.result_type,
            since_id=config.since_id,
        )

    def with_max_id(self, max_id: int) -> SearchRequestParams:
        """Derive the parameters of the next page, keeping every other field."""
        return replace(self, max_id=max_id)


@dataclass(frozen=True)
class SearchRequest:
    """Request description consumed by the transport."""

    url: str
    params: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    method: str = "GET"
    path: str = SEARCH_PATH

    def param(self, key: str) -> str | None:
        """Look up a query-string value by key."""
        for name, value in self.params:
            if name == key:
                return value
        return None


def build_search_request(params: SearchRequestParams) -> SearchRequest:
    """Build the request for one search page.

    Args:
        params: Page parameters.

    Returns:
        SearchRequest with parameters sorted by key.

    Raises:
        QueryConstructionError: If the query is empty or cannot be encoded.
    """
    if not params.query.strip():
        raise QueryConstructionError.empty_query()

    values: dict[str, str] = {
        "count": str(params.count),
        "q": params.query,
    }
    if params.language:
        values["lang"] = params.language
    if params.max_id is not None:
        values["max_id"] = str(params.max_id)
    if params.result_type:
        values["result_type"] = str(params.result_type)
    if params.since_id:
        values["since_id"] = str(params.since_id)

    ordered = tuple(sorted(values.items()))
    try:
        encoded = urlencode(ordered)
    except UnicodeEncodeError as e:
        raise QueryConstructionError.invalid_encoding(str(e)) from e

    return SearchRequest(url=f"{SEARCH_PATH}?{encoded}", params=ordered)
