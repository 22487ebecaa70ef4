"""PostgreSQL implementation of LocationRepository"""

from __future__ import annotations

from ...models import Location
from ...entities import LocationEntity
from ..base import LocationRepository
from .record import PostgresRecordRepository


class PostgresLocationRepository(PostgresRecordRepository, LocationRepository):
    """PostgreSQL implementation using SQLAlchemy"""

    model = Location

    def _to_entity(self, model: Location) -> LocationEntity:
        """Convert SQLAlchemy model to domain entity"""
        return LocationEntity(
            id=model.id,
            name=model.name or "",
            code=model.code,
            is_primary=bool(model.is_primary),
            address_line1=model.address_line1,
            city=model.city,
            province=model.province,
            country=model.country,
            nearest_town=model.nearest_town,
            notes=model.notes,
            created_at=model.created_at,
        )
