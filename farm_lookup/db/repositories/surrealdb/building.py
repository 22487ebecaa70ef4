"""SurrealDB implementation of BuildingRepository"""

from __future__ import annotations

from ...entities import BuildingEntity
from ..base import BuildingRepository
from .record import SurrealRecordRepository


class SurrealBuildingRepository(SurrealRecordRepository, BuildingRepository):
    """SurrealDB implementation using SurrealQL"""

    def _to_entity(self, record: dict) -> BuildingEntity:
        """Convert SurrealDB record to domain entity"""
        return BuildingEntity(
            id=self._parse_record_id(record.get("id", "")),
            name=record.get("name") or "",
            code=record.get("code"),
            type=record.get("type"),
            description=record.get("description"),
            capacity=record.get("capacity"),
            year_built=record.get("year_built"),
            location_id=self._parse_optional_ref(record.get("location")),
            notes=record.get("notes"),
            created_at=self._parse_datetime(record.get("created_at")),
        )
