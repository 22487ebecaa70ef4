"""PostgreSQL repository implementations"""

from .equipment import PostgresEquipmentRepository
from .building import PostgresBuildingRepository
from .location import PostgresLocationRepository
from .maintenance_log import PostgresMaintenanceLogRepository
from .unit_of_work import PostgresUnitOfWork

__all__ = [
    "PostgresEquipmentRepository",
    "PostgresBuildingRepository",
    "PostgresLocationRepository",
    "PostgresMaintenanceLogRepository",
    "PostgresUnitOfWork",
]
