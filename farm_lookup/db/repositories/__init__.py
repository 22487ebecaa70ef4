"""Repository pattern for database abstraction"""

from .base import (
    RecordRepository,
    EquipmentRepository,
    BuildingRepository,
    LocationRepository,
    MaintenanceLogRepository,
    UnitOfWork,
    contains_pattern,
    literal_pattern,
)

__all__ = [
    "RecordRepository",
    "EquipmentRepository",
    "BuildingRepository",
    "LocationRepository",
    "MaintenanceLogRepository",
    "UnitOfWork",
    "contains_pattern",
    "literal_pattern",
]
