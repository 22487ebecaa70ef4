"""SurrealDB repository implementations"""

from __future__ import annotations

from .equipment import SurrealEquipmentRepository
from .building import SurrealBuildingRepository
from .location import SurrealLocationRepository
from .maintenance_log import SurrealMaintenanceLogRepository
from .unit_of_work import SurrealUnitOfWork

__all__ = [
    "SurrealEquipmentRepository",
    "SurrealBuildingRepository",
    "SurrealLocationRepository",
    "SurrealMaintenanceLogRepository",
    "SurrealUnitOfWork",
]
