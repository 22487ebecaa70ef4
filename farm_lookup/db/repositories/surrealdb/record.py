"""Shared SurrealQL query logic for the read-only record repositories"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID

from ....exceptions import StoreUnavailable

if TYPE_CHECKING:
    from surrealdb import AsyncSurreal


class SurrealRecordRepository:
    """
    Mixin implementing RecordRepository with SurrealQL.

    The table name is the collection name. Concrete classes provide
    ``_to_entity`` and may widen ``_projection`` to pull linked fields.
    """

    collection: str
    name_fields: tuple[str, ...]
    search_fields: tuple[str, ...]

    _projection = "*"

    def __init__(self, client: "AsyncSurreal"):
        self._client = client

    def _parse_record_id(self, record_id) -> UUID:
        """Extract UUID from SurrealDB record ID (RecordID object or string)"""
        # Handle RecordID object from surrealdb SDK
        if hasattr(record_id, "id") and hasattr(record_id, "table_name"):
            return UUID(str(record_id.id))
        # Handle dict with 'id' key
        if isinstance(record_id, dict):
            return self._parse_record_id(record_id.get("id", ""))
        # Handle string format 'table:uuid' or 'table:⟨uuid⟩'
        if isinstance(record_id, str) and ":" in record_id:
            uuid_part = record_id.split(":", 1)[1]
            uuid_part = uuid_part.strip("⟨⟩<>")
            return UUID(uuid_part)
        return UUID(str(record_id))

    def _parse_optional_ref(self, ref) -> Optional[UUID]:
        if not ref:
            return None
        return self._parse_record_id(ref)

    def _parse_datetime(self, value) -> datetime:
        if isinstance(value, str):
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        if value is None:
            return datetime.utcnow()
        return value

    def _parse_date(self, value) -> Optional[date]:
        if isinstance(value, str):
            return date.fromisoformat(value[:10])
        if isinstance(value, datetime):
            return value.date()
        return value

    def _to_entity(self, record: dict):
        raise NotImplementedError

    async def _query(self, query: str, params: dict) -> list:
        try:
            result = await self._client.query(query, params)
        except Exception as e:
            raise StoreUnavailable(f"{self.collection} query failed: {e}") from e
        if not result:
            return []
        return [self._to_entity(r) for r in result]

    @property
    def _display_name(self) -> str:
        """SurrealQL expression for the display name: first non-empty name field"""
        if len(self.name_fields) == 1:
            return self.name_fields[0]
        return "(" + " || ".join(self.name_fields) + ")"

    @property
    def _listing(self) -> str:
        """Projection for ordered listings, exposing the display name as _display"""
        return f"{self._projection}, {self._display_name} AS _display"

    def _contains(self, field: str, param: str) -> str:
        return f"string::contains(string::lowercase({field} ?? ''), ${param})"

    async def find_candidates(
        self,
        identifier: str,
        limit: int = 200,
        match_id: bool = False,
    ) -> list:
        """Inclusive candidate query, see RecordRepository.find_candidates"""
        needle = identifier.lower()
        params: dict[str, Any] = {
            "needle": needle,
            # Slug input ("north-barn") against a spaced name ("North Barn")
            "spaced": needle.replace("-", " ").replace("_", " "),
            "identifier": identifier,
            "limit": limit,
        }
        conditions = [
            self._contains(self._display_name, "needle"),
            self._contains(self._display_name, "spaced"),
            f"{self._display_name} = $identifier",
        ]
        if match_id:
            conditions.append(f"id = type::thing('{self.collection}', $uuid)")
            params["uuid"] = str(UUID(identifier.strip()))

        where_clause = " OR ".join(conditions)
        return await self._query(
            f"""
            SELECT {self._listing} FROM {self.collection}
            WHERE {where_clause}
            ORDER BY _display ASC, id ASC
            LIMIT $limit
            """,
            params,
        )

    async def scan(self, limit: int = 500) -> list:
        """Capped full-collection scan"""
        return await self._query(
            f"""
            SELECT {self._listing} FROM {self.collection}
            ORDER BY _display ASC, id ASC
            LIMIT $limit
            """,
            {"limit": limit},
        )

    async def get(self, record_id: UUID) -> Optional[Any]:
        """Get record by ID"""
        rows = await self._query(
            f"SELECT {self._projection} FROM type::thing('{self.collection}', $uuid)",
            {"uuid": str(record_id)},
        )
        return rows[0] if rows else None

    async def search(self, query: str, limit: int = 10) -> list:
        """Any search field contains query, ordered by display name"""
        where_clause = " OR ".join(self._contains(f, "needle") for f in self.search_fields)
        return await self._query(
            f"""
            SELECT {self._listing} FROM {self.collection}
            WHERE {where_clause}
            ORDER BY _display ASC, id ASC
            LIMIT $limit
            """,
            {"needle": query.lower(), "limit": limit},
        )

    async def count(self) -> int:
        """Count records in the collection"""
        try:
            result = await self._client.query(
                f"SELECT count() FROM {self.collection} GROUP ALL", {}
            )
        except Exception as e:
            raise StoreUnavailable(f"{self.collection} count failed: {e}") from e
        if result:
            return result[0].get("count", 0)
        return 0
