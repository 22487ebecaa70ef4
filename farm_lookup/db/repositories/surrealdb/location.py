"""SurrealDB implementation of LocationRepository"""

from __future__ import annotations

from ...entities import LocationEntity
from ..base import LocationRepository
from .record import SurrealRecordRepository


class SurrealLocationRepository(SurrealRecordRepository, LocationRepository):
    """SurrealDB implementation using SurrealQL"""

    def _to_entity(self, record: dict) -> LocationEntity:
        """Convert SurrealDB record to domain entity"""
        return LocationEntity(
            id=self._parse_record_id(record.get("id", "")),
            name=record.get("name") or "",
            code=record.get("code"),
            is_primary=bool(record.get("is_primary", False)),
            address_line1=record.get("address_line1"),
            city=record.get("city"),
            province=record.get("province"),
            country=record.get("country"),
            nearest_town=record.get("nearest_town"),
            notes=record.get("notes"),
            created_at=self._parse_datetime(record.get("created_at")),
        )
