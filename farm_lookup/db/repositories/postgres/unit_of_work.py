"""PostgreSQL Unit of Work implementation"""

from sqlalchemy.ext.asyncio import AsyncSession

from ..base import UnitOfWork
from .equipment import PostgresEquipmentRepository
from .building import PostgresBuildingRepository
from .location import PostgresLocationRepository
from .maintenance_log import PostgresMaintenanceLogRepository


class PostgresUnitOfWork(UnitOfWork):
    """PostgreSQL implementation of Unit of Work pattern"""

    def __init__(self, session: AsyncSession):
        self._session = session
        self.equipment = PostgresEquipmentRepository(session)
        self.buildings = PostgresBuildingRepository(session)
        self.locations = PostgresLocationRepository(session)
        self.maintenance_logs = PostgresMaintenanceLogRepository(session)

    async def __aenter__(self) -> "PostgresUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.rollback()

    async def rollback(self) -> None:
        """Rollback the (read-only) transaction"""
        await self._session.rollback()
