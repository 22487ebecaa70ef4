"""In-memory repositories standing in for the record store"""

from __future__ import annotations

import re
from typing import Optional
from uuid import UUID

from farm_lookup.db.repositories.base import (
    BuildingRepository,
    EquipmentRepository,
    LocationRepository,
    MaintenanceLogRepository,
    UnitOfWork,
)


def _like(value: Optional[str], term: str) -> bool:
    """ILIKE '%term%' where '-' and '_' match any single character"""
    if not value:
        return False
    regex = "".join("." if ch in "-_" else re.escape(ch) for ch in term.lower())
    return re.search(regex, value.lower()) is not None


def _contains(value: Optional[str], term: str) -> bool:
    """Case-insensitive literal substring test"""
    return bool(value) and term.lower() in value.lower()


class FakeRepositoryMixin:
    """
    List-backed RecordRepository. Records every call in ``calls`` and raises
    ``fail`` (when set) from every query.
    """

    def __init__(self, records=()):
        self.records = list(records)
        self.calls: list[tuple] = []
        self.fail: Optional[Exception] = None

    def _record_call(self, op: str, *args) -> None:
        self.calls.append((op, *args))
        if self.fail is not None:
            raise self.fail

    def _name(self, record) -> Optional[str]:
        return record.display_name or None

    def _sorted(self, rows):
        return sorted(rows, key=lambda r: (self._name(r) is None, self._name(r) or "", str(r.id)))

    async def find_candidates(self, identifier: str, limit: int = 200, match_id: bool = False):
        self._record_call("find_candidates", identifier, match_id)
        rows = [
            r for r in self.records
            if _like(self._name(r), identifier)
            or self._name(r) == identifier
            or (match_id and str(r.id) == identifier.strip().lower())
        ]
        return self._sorted(rows)[:limit]

    async def scan(self, limit: int = 500):
        self._record_call("scan", limit)
        return self._sorted(self.records)[:limit]

    async def get(self, record_id: UUID):
        self._record_call("get", record_id)
        return next((r for r in self.records if r.id == record_id), None)

    async def search(self, query: str, limit: int = 10):
        self._record_call("search", query, limit)
        rows = [
            r for r in self.records
            if any(_contains(getattr(r, f), query) for f in self.search_fields)
        ]
        return self._sorted(rows)[:limit]

    async def count(self) -> int:
        self._record_call("count")
        return len(self.records)


class FakeEquipmentRepository(FakeRepositoryMixin, EquipmentRepository):
    pass


class FakeBuildingRepository(FakeRepositoryMixin, BuildingRepository):
    pass


class FakeLocationRepository(FakeRepositoryMixin, LocationRepository):
    pass


class FakeMaintenanceLogRepository(FakeRepositoryMixin, MaintenanceLogRepository):
    pass


class FakeUnitOfWork(UnitOfWork):
    def __init__(self, equipment=(), buildings=(), locations=(), maintenance_logs=()):
        self.equipment = FakeEquipmentRepository(equipment)
        self.buildings = FakeBuildingRepository(buildings)
        self.locations = FakeLocationRepository(locations)
        self.maintenance_logs = FakeMaintenanceLogRepository(maintenance_logs)

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.rollback()

    async def rollback(self) -> None:
        return None


