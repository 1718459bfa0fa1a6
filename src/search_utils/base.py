"""Base Pydantic models shared by the search packages."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model with strict validation for values crossing a boundary.

    Request parameters, rate-limit snapshots and search results inherit
    from this class so that:
    - No type coercion (strict=True)
    - Immutable after creation (frozen=True)
    - Fail on unknown fields (extra="forbid")

    Enum fields keep their members; serialization still emits plain values.
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
        validate_assignment=True,
    )


class MutableModel(BaseModel):
    """Base model for internal mutable state.

    Used for bookkeeping that is updated in place while a search runs.
    """

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
    )
