"""SurrealDB implementation of EquipmentRepository"""

from __future__ import annotations

from ...entities import EquipmentEntity
from ..base import EquipmentRepository
from .record import SurrealRecordRepository


class SurrealEquipmentRepository(SurrealRecordRepository, EquipmentRepository):
    """SurrealDB implementation using SurrealQL"""

    def _to_entity(self, record: dict) -> EquipmentEntity:
        """Convert SurrealDB record to domain entity"""
        return EquipmentEntity(
            id=self._parse_record_id(record.get("id", "")),
            nickname=record.get("nickname"),
            unit_number=record.get("unit_number"),
            category=record.get("category"),
            make=record.get("make"),
            model=record.get("model"),
            serial_number=record.get("serial_number"),
            year=record.get("year"),
            location_id=self._parse_optional_ref(record.get("location")),
            active=record.get("active", True) is not False,
            notes=record.get("notes"),
            created_at=self._parse_datetime(record.get("created_at")),
        )
