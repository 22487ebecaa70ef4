"""PostgreSQL implementation of MaintenanceLogRepository"""

from __future__ import annotations

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from ...models import MaintenanceLog
from ...entities import MaintenanceLogEntity
from ..base import MaintenanceLogRepository
from .record import PostgresRecordRepository


class PostgresMaintenanceLogRepository(PostgresRecordRepository, MaintenanceLogRepository):
    """PostgreSQL implementation using SQLAlchemy (joins the parent equipment)"""

    model = MaintenanceLog

    def _select(self) -> Select:
        return select(MaintenanceLog).options(selectinload(MaintenanceLog.equipment))

    def _to_entity(self, model: MaintenanceLog) -> MaintenanceLogEntity:
        """Convert SQLAlchemy model to domain entity"""
        equipment = model.equipment
        return MaintenanceLogEntity(
            id=model.id,
            title=model.title or "",
            description=model.description,
            status=model.status,
            equipment_id=model.equipment_id,
            maintenance_date=model.maintenance_date,
            logged_at=model.logged_at,
            equipment_nickname=equipment.nickname if equipment else None,
            equipment_unit_number=equipment.unit_number if equipment else None,
        )
