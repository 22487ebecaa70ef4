"""Candidate fetching: broad, capped queries that over-include on purpose"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from .db.repositories.base import RecordRepository
from .observability import logger
from .slug import looks_like_id

DEFAULT_CANDIDATE_LIMIT = 200
DEFAULT_FALLBACK_LIMIT = 500


class CandidateFetcher:
    """
    Retrieves records that might match an identifier from one collection.

    Results come back ordered by display name then id, so the same input
    always yields the same candidate order (modulo store changes). Store
    failures propagate as StoreUnavailable; retrying is the caller's business.
    """

    def __init__(
        self,
        repository: RecordRepository,
        limit: int = DEFAULT_CANDIDATE_LIMIT,
        fallback_limit: int = DEFAULT_FALLBACK_LIMIT,
    ):
        self.repository = repository
        self.limit = limit
        self.fallback_limit = fallback_limit

    @property
    def collection(self) -> str:
        return self.repository.collection

    async def fetch(
        self,
        identifier: str,
        match_id: Optional[bool] = None,
        fallback: bool = True,
    ) -> list:
        """
        Inclusive candidate query, with one capped full scan if it finds nothing.

        Matches on display name containing the identifier, display name equal
        to it, or (when the identifier is UUID-shaped) id equal to it.
        ``match_id=False`` leaves the id out of the filter; ``fallback=False``
        skips the full scan.
        """
        if match_id is None:
            match_id = looks_like_id(identifier)
        candidates = await self.repository.find_candidates(
            identifier,
            limit=self.limit,
            match_id=match_id,
        )
        if candidates or not fallback:
            return candidates

        logger.debug(
            f"No {self.collection} candidates for '{identifier}', scanning up to {self.fallback_limit}"
        )
        return await self.scan()

    async def scan(self) -> list:
        """Capped full-collection scan"""
        return await self.repository.scan(limit=self.fallback_limit)

    async def get(self, identifier: str) -> Optional[object]:
        """Direct id lookup; no store call unless the identifier is UUID-shaped"""
        if not looks_like_id(identifier):
            return None
        return await self.repository.get(UUID(identifier.strip()))
