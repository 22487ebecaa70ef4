"""PostgreSQL implementation of BuildingRepository"""

from __future__ import annotations

from ...models import Building
from ...entities import BuildingEntity
from ..base import BuildingRepository
from .record import PostgresRecordRepository


class PostgresBuildingRepository(PostgresRecordRepository, BuildingRepository):
    """PostgreSQL implementation using SQLAlchemy"""

    model = Building

    def _to_entity(self, model: Building) -> BuildingEntity:
        """Convert SQLAlchemy model to domain entity"""
        return BuildingEntity(
            id=model.id,
            name=model.name or "",
            code=model.code,
            type=model.type,
            description=model.description,
            capacity=model.capacity,
            year_built=model.year_built,
            location_id=model.location_id,
            notes=model.notes,
            created_at=model.created_at,
        )
