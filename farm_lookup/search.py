"""Typeahead search: per-collection suggestions and the cross-entity search page"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from .db.config import settings
from .db.entities import Suggestion
from .db.repositories.base import RecordRepository, UnitOfWork
from .exceptions import AggregateSearchError, StoreUnavailable
from .observability import logger, metrics, track_latency


# ============ Single collection ============

async def _suggestions(repository: RecordRepository, query: str, limit: int) -> list[Suggestion]:
    records = await repository.search(query, limit=limit)
    return [record.to_suggestion() for record in records]


_timed_suggestions = track_latency("search")(_suggestions)


async def search_collection(
    repository: RecordRepository,
    query: Optional[str],
    limit: Optional[int] = None,
) -> list[Suggestion]:
    """
    Suggestions for records where any search field contains the query.

    Blank queries return [] without a store round trip and are not counted as
    searches. Results are ordered by display name and capped at ``limit``
    (settings.suggestion_limit).
    """
    if not query or not query.strip():
        return []
    return await _timed_suggestions(repository, query.strip(), limit or settings.suggestion_limit)


SearchFn = Callable[[str], Awaitable[list[Suggestion]]]


class LiveSearch:
    """
    Search-as-you-type state for one input box.

    Every update() takes the next sequence number. A response is applied only
    if its number is still the latest when it arrives, so a slow answer for
    "a" can never overwrite the answer for "ab". Superseded requests are
    dropped, not cancelled.
    """

    def __init__(self, search: SearchFn, debounce: float = 0.0):
        self._search = search
        self.debounce = debounce
        self._sequence = 0
        self.query = ""
        self.suggestions: list[Suggestion] = []
        self.error: Optional[str] = None

    @classmethod
    def for_repository(
        cls,
        repository: RecordRepository,
        limit: Optional[int] = None,
        debounce: Optional[float] = None,
    ) -> "LiveSearch":
        if debounce is None:
            debounce = settings.search_debounce_ms / 1000

        async def run(query: str) -> list[Suggestion]:
            return await search_collection(repository, query, limit)

        return cls(run, debounce=debounce)

    @property
    def sequence(self) -> int:
        return self._sequence

    def is_current(self, token: int) -> bool:
        return token == self._sequence

    def _discard(self, token: int, query: str) -> bool:
        metrics.increment("stale_count")
        logger.debug(f"Discarding stale suggestions for '{query}' (request {token}, latest {self._sequence})")
        return False

    async def update(self, query: str) -> bool:
        """
        Run a search for the new input value.

        Returns True when this call's result became the visible suggestions,
        False when a newer update() superseded it.
        """
        self._sequence += 1
        token = self._sequence
        self.query = query

        if not query or not query.strip():
            self.suggestions = []
            self.error = None
            return True

        if self.debounce > 0:
            await asyncio.sleep(self.debounce)
            if not self.is_current(token):
                return self._discard(token, query)

        try:
            results = await self._search(query)
        except StoreUnavailable as e:
            if not self.is_current(token):
                return self._discard(token, query)
            logger.warning(f"Live search for '{query}' failed: {e}")
            self.suggestions = []
            self.error = str(e)
            return True

        if not self.is_current(token):
            return self._discard(token, query)

        self.suggestions = results
        self.error = None
        return True


# ============ Cross-entity aggregation ============

TYPE_FILTERS = ("all", "equipment", "maintenance")

# Suggestion types whose records carry a category attribute
CATEGORIZED_TYPES = frozenset({"equipment"})


@track_latency("aggregate")
async def aggregate(
    uow: UnitOfWork,
    query: Optional[str],
    type_filter: str = "all",
    category_filter: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[Suggestion]:
    """
    Search equipment and maintenance logs in parallel and merge the results.

    Output is the equipment block followed by the maintenance block, each in
    its own fetch order. ``category_filter`` only affects categorized types.
    If any collection fails the whole search fails with AggregateSearchError.
    """
    if type_filter not in TYPE_FILTERS:
        raise ValueError(f"type_filter must be one of {TYPE_FILTERS}, got {type_filter!r}")
    if not query or not query.strip():
        return []

    query = query.strip()
    limit = limit or settings.aggregate_limit
    sources = [
        ("equipment", uow.equipment),
        ("maintenance", uow.maintenance_logs),
    ]
    included = [(name, repo) for name, repo in sources if type_filter in ("all", name)]

    results = await asyncio.gather(
        *(_suggestions(repo, query, limit) for _, repo in included),
        return_exceptions=True,
    )

    failures = [
        (name, result)
        for (name, _), result in zip(included, results)
        if isinstance(result, BaseException)
    ]
    for _, error in failures:
        if not isinstance(error, StoreUnavailable):
            raise error
    if failures:
        cause = failures[0][1]
        raise AggregateSearchError([name for name, _ in failures], cause) from cause

    merged: list[Suggestion] = []
    for suggestions in results:
        for suggestion in suggestions:
            if (
                category_filter
                and suggestion.type in CATEGORIZED_TYPES
                and suggestion.category != category_filter
            ):
                continue
            merged.append(suggestion)
    return merged


def available_categories(suggestions: list[Suggestion]) -> list[str]:
    """Distinct categories in first-seen order, for the category dropdown"""
    seen: list[str] = []
    for suggestion in suggestions:
        if suggestion.category and suggestion.category not in seen:
            seen.append(suggestion.category)
    return seen
