"""
Exception hierarchy for farm_lookup.

A failed resolution is not an error: the resolver returns
``Resolution.not_found()`` instead. Ambiguous matches are settled by the
cascade order and never raised.

Usage:
    from farm_lookup.exceptions import StoreUnavailable

    try:
        resolution = await resolver.resolve(identifier)
    except StoreUnavailable as e:
        logger.error(f"Lookup failed: {e}")
"""

from __future__ import annotations

from typing import Optional, Sequence


class FarmLookupError(Exception):
    """
    Base exception for all farm_lookup errors.

    Attributes:
        message: Human-readable error description
        code: Optional machine-readable error code
    """

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class StoreUnavailable(FarmLookupError):
    """The record store could not answer a query (transport or query failure)."""

    def __init__(self, message: str, code: str = "STORE_UNAVAILABLE") -> None:
        super().__init__(message, code=code)


class AggregateSearchError(StoreUnavailable):
    """At least one collection of a cross-entity search failed."""

    def __init__(self, collections: Sequence[str], cause: Optional[BaseException] = None) -> None:
        self.collections = list(collections)
        detail = f": {cause}" if cause else ""
        super().__init__(
            f"Search failed for {', '.join(self.collections)}{detail}",
            code="AGGREGATE_FAILED",
        )


class UnknownCollectionError(FarmLookupError):
    """Requested collection is not one the resolver knows about."""

    def __init__(self, collection: str) -> None:
        self.collection = collection
        super().__init__(f"Unknown collection: {collection}", code="UNKNOWN_COLLECTION")
