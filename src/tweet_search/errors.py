"""Tweet search error types.

Rate-limit exhaustion is deliberately absent: it ends a search normally and
is reported through ``RateLimitedPage`` rather than raised.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self


class ErrorCode(StrEnum):
    """Standardized search error codes."""

    EMPTY_QUERY = "EMPTY_QUERY"
    INVALID_QUERY_ENCODING = "INVALID_QUERY_ENCODING"
    API_KEY_MISSING = "API_KEY_MISSING"
    NETWORK_ERROR = "NETWORK_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    BOUNDARY_UNDERFLOW = "BOUNDARY_UNDERFLOW"


class TwitterSearchError(Exception):
    """Base search error with standardized error codes."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        http_status: int | None = None,
    ) -> None:
        """Initialize search error.

        Args:
            code: Standardized error code.
            message: Human-readable error message.
            http_status: Optional HTTP status code.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status

    def is_code(self, code: ErrorCode) -> bool:
        """Check if this error matches a specific code."""
        return self.code == code


class QueryConstructionError(TwitterSearchError):
    """Invalid input to the query builder, raised before any network call."""

    @classmethod
    def empty_query(cls) -> Self:
        """Create empty query error."""
        return cls(ErrorCode.EMPTY_QUERY, "Search query must not be empty")

    @classmethod
    def invalid_encoding(cls, details: str) -> Self:
        """Create query-string encoding error."""
        return cls(
            ErrorCode.INVALID_QUERY_ENCODING,
            f"Could not encode search parameters: {details}",
        )


class TransportError(TwitterSearchError):
    """Failure at or below the HTTP exchange. Always terminal for a search."""

    @classmethod
    def api_key_missing(cls) -> Self:
        """Create API key missing error."""
        return cls(
            ErrorCode.API_KEY_MISSING,
            "TWITTER_BEARER_TOKEN environment variable not set",
            http_status=401,
        )

    @classmethod
    def network_error(cls, details: str) -> Self:
        """Create network error."""
        return cls(
            ErrorCode.NETWORK_ERROR,
            f"Network error: {details}",
            http_status=502,
        )

    @classmethod
    def http_error(cls, status: int, details: str) -> Self:
        """Create error for a non-rate-limit HTTP failure."""
        return cls(
            ErrorCode.HTTP_ERROR,
            f"Twitter API returned HTTP {status}: {details}",
            http_status=status,
        )

    @classmethod
    def invalid_response(cls, details: str) -> Self:
        """Create error for a body that could not be decoded."""
        return cls(
            ErrorCode.INVALID_RESPONSE,
            f"Invalid search response: {details}",
            http_status=502,
        )


class DefinitionError(TwitterSearchError):
    """Programming-contract violation inside the pagination driver."""

    @classmethod
    def boundary_underflow(cls) -> Self:
        """Create error for a max_id computed below zero."""
        return cls(
            ErrorCode.BOUNDARY_UNDERFLOW,
            "Cannot derive next max_id: minimum tweet id is already 0",
        )
