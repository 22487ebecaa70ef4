"""SurrealDB implementation of MaintenanceLogRepository"""

from __future__ import annotations

from ...entities import MaintenanceLogEntity
from ..base import MaintenanceLogRepository
from .record import SurrealRecordRepository


class SurrealMaintenanceLogRepository(SurrealRecordRepository, MaintenanceLogRepository):
    """SurrealDB implementation using SurrealQL (follows the equipment link)"""

    _projection = (
        "*, equipment.nickname AS equipment_nickname, "
        "equipment.unit_number AS equipment_unit_number"
    )

    def _to_entity(self, record: dict) -> MaintenanceLogEntity:
        """Convert SurrealDB record to domain entity"""
        return MaintenanceLogEntity(
            id=self._parse_record_id(record.get("id", "")),
            title=record.get("title") or "",
            description=record.get("description"),
            status=record.get("status"),
            equipment_id=self._parse_optional_ref(record.get("equipment")),
            maintenance_date=self._parse_date(record.get("maintenance_date")),
            logged_at=self._parse_datetime(record.get("logged_at")),
            equipment_nickname=record.get("equipment_nickname"),
            equipment_unit_number=record.get("equipment_unit_number"),
        )
