"""Abstract repository interfaces - backend agnostic, read-only"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from uuid import UUID

from ...exceptions import UnknownCollectionError
from ..entities import (
    BuildingEntity,
    EquipmentEntity,
    LocationEntity,
    MaintenanceLogEntity,
)

T = TypeVar("T")


def contains_pattern(term: str) -> str:
    """
    Build a case-insensitive LIKE pattern matching ``term`` anywhere.

    LIKE metacharacters in the input are escaped with a backslash. Hyphens and
    underscores become the single-character wildcard so a slug such as
    ``north-barn`` still finds ``North Barn``.
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%")
    escaped = escaped.replace("_", "-").replace("-", "_")
    return f"%{escaped}%"


def literal_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` anywhere, every character taken literally"""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class RecordRepository(ABC, Generic[T]):
    """
    Read access to one named collection.

    Subclasses declare the fields the display name is taken from (first
    non-empty wins, matching the entity's ``display_name``) and the fixed set
    of text fields searched by typeahead. Every list result is ordered by the
    display name then id, so repeated calls return rows in the same order.
    """

    collection: str = ""
    name_fields: tuple[str, ...] = ("name",)
    search_fields: tuple[str, ...] = ("name",)

    @abstractmethod
    async def find_candidates(
        self,
        identifier: str,
        limit: int = 200,
        match_id: bool = False,
    ) -> list[T]:
        """Display name contains identifier OR equals it OR (match_id) id == identifier"""
        ...

    @abstractmethod
    async def scan(self, limit: int = 500) -> list[T]:
        """Capped full-collection scan"""
        ...

    @abstractmethod
    async def get(self, record_id: UUID) -> Optional[T]:
        """Get record by ID"""
        ...

    @abstractmethod
    async def search(self, query: str, limit: int = 10) -> list[T]:
        """Records where any search field contains query, case-insensitively"""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Count records in the collection"""
        ...


class EquipmentRepository(RecordRepository[EquipmentEntity]):
    collection = "equipment"
    name_fields = ("nickname", "model", "unit_number")
    search_fields = ("nickname", "unit_number", "category", "make", "model")


class BuildingRepository(RecordRepository[BuildingEntity]):
    collection = "buildings"
    name_fields = ("name",)
    search_fields = ("name", "code", "type", "description")


class LocationRepository(RecordRepository[LocationEntity]):
    collection = "locations"
    name_fields = ("name",)
    search_fields = ("name", "code", "city", "nearest_town")


class MaintenanceLogRepository(RecordRepository[MaintenanceLogEntity]):
    collection = "maintenance_logs"
    name_fields = ("title",)
    search_fields = ("title", "description")


class UnitOfWork(ABC):
    """Groups the repositories sharing one store connection"""

    equipment: EquipmentRepository
    buildings: BuildingRepository
    locations: LocationRepository
    maintenance_logs: MaintenanceLogRepository

    # Collections addressable by slug/identifier
    RESOLVABLE = ("equipment", "buildings", "locations")

    def repository(self, collection: str) -> RecordRepository:
        """Look up a repository by collection name"""
        aliases = {
            "equipment": "equipment",
            "buildings": "buildings",
            "building": "buildings",
            "locations": "locations",
            "location": "locations",
            "maintenance": "maintenance_logs",
            "maintenance_logs": "maintenance_logs",
        }
        name = aliases.get(collection)
        if name is None:
            raise UnknownCollectionError(collection)
        return getattr(self, name)

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        ...

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Release the underlying transaction"""
        ...
