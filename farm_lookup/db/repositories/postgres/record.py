"""Shared SQLAlchemy query logic for the read-only record repositories"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ....exceptions import StoreUnavailable
from ..base import contains_pattern, literal_pattern


class PostgresRecordRepository:
    """
    Mixin implementing RecordRepository on top of one SQLAlchemy model.

    Concrete classes set ``model`` and ``_to_entity``; the name/search fields
    come from the abstract repository they also inherit from.
    """

    model: Any = None
    collection: str
    name_fields: tuple[str, ...]
    search_fields: tuple[str, ...]

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model):
        raise NotImplementedError

    def _select(self) -> Select:
        return select(self.model)

    def _display_name(self):
        """SQL expression for the display name: first non-empty name field"""
        columns = [getattr(self.model, f) for f in self.name_fields]
        if len(columns) == 1:
            return columns[0]
        return func.coalesce(*(func.nullif(c, "") for c in columns))

    def _ordered(self, query: Select) -> Select:
        return query.order_by(self._display_name().asc().nulls_last(), self.model.id)

    async def _fetch_all(self, query: Select) -> list:
        try:
            result = await self._session.execute(query)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"{self.collection} query failed: {e}") from e
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_candidates(
        self,
        identifier: str,
        limit: int = 200,
        match_id: bool = False,
    ) -> list:
        """Inclusive candidate query, see RecordRepository.find_candidates"""
        name = self._display_name()
        conditions = [
            name.ilike(contains_pattern(identifier)),
            name == identifier,
        ]
        if match_id:
            conditions.append(self.model.id == UUID(identifier.strip()))

        query = self._ordered(self._select().where(or_(*conditions))).limit(limit)
        return await self._fetch_all(query)

    async def scan(self, limit: int = 500) -> list:
        """Capped full-collection scan"""
        return await self._fetch_all(self._ordered(self._select()).limit(limit))

    async def get(self, record_id: UUID) -> Optional[Any]:
        """Get record by ID"""
        rows = await self._fetch_all(self._select().where(self.model.id == record_id))
        return rows[0] if rows else None

    async def search(self, query: str, limit: int = 10) -> list:
        """Any search field contains query (ILIKE, no wildcards), ordered by display name"""
        pattern = literal_pattern(query)
        conditions = [getattr(self.model, f).ilike(pattern) for f in self.search_fields]
        stmt = self._ordered(self._select().where(or_(*conditions))).limit(limit)
        return await self._fetch_all(stmt)

    async def count(self) -> int:
        """Count records in the collection"""
        try:
            result = await self._session.execute(select(func.count(self.model.id)))
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"{self.collection} count failed: {e}") from e
        return result.scalar() or 0
