"""SurrealDB Unit of Work implementation"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..base import UnitOfWork
from .equipment import SurrealEquipmentRepository
from .building import SurrealBuildingRepository
from .location import SurrealLocationRepository
from .maintenance_log import SurrealMaintenanceLogRepository

if TYPE_CHECKING:
    from surrealdb import AsyncSurreal


class SurrealUnitOfWork(UnitOfWork):
    """
    SurrealDB implementation of Unit of Work pattern.

    Lookups only read, and each SurrealQL query is atomic on its own, so no
    transaction is opened.
    """

    def __init__(self, client: "AsyncSurreal"):
        self._client = client

        # Initialize repositories with shared client
        self.equipment = SurrealEquipmentRepository(client)
        self.buildings = SurrealBuildingRepository(client)
        self.locations = SurrealLocationRepository(client)
        self.maintenance_logs = SurrealMaintenanceLogRepository(client)

    async def __aenter__(self) -> "SurrealUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.rollback()

    async def rollback(self) -> None:
        """Nothing to release"""
        return None
