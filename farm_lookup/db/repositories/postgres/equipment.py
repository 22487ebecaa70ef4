"""PostgreSQL implementation of EquipmentRepository"""

from __future__ import annotations

from ...models import Equipment
from ...entities import EquipmentEntity
from ..base import EquipmentRepository
from .record import PostgresRecordRepository


class PostgresEquipmentRepository(PostgresRecordRepository, EquipmentRepository):
    """PostgreSQL implementation using SQLAlchemy"""

    model = Equipment

    def _to_entity(self, model: Equipment) -> EquipmentEntity:
        """Convert SQLAlchemy model to domain entity"""
        return EquipmentEntity(
            id=model.id,
            nickname=model.nickname,
            unit_number=model.unit_number,
            category=model.category,
            make=model.make,
            model=model.model,
            serial_number=model.serial_number,
            year=model.year,
            location_id=model.location_id,
            active=model.active if model.active is not None else True,
            notes=model.notes,
            created_at=model.created_at,
        )
