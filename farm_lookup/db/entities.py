"""Domain entities - backend-agnostic record types"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional, Union
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    """Return current UTC time as naive datetime (for DB compatibility)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _join(parts, sep: str = " | ") -> str:
    return sep.join(str(p) for p in parts if p not in (None, ""))


@dataclass(frozen=True)
class Suggestion:
    """Display-only projection of a record for typeahead results"""
    id: UUID
    title: str
    subtitle: str = ""
    type: str = ""
    category: Optional[str] = None


@dataclass
class LocationEntity:
    """A farm site"""
    id: UUID = field(default_factory=uuid4)
    name: str = ""
    code: Optional[str] = None
    is_primary: bool = False
    address_line1: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    nearest_town: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)

    collection = "locations"

    @property
    def display_name(self) -> str:
        return self.name

    def to_suggestion(self) -> Suggestion:
        return Suggestion(
            id=self.id,
            title=self.name,
            subtitle=_join([self.code, self.city, self.province]),
            type="location",
        )


@dataclass
class BuildingEntity:
    """A building on a location"""
    id: UUID = field(default_factory=uuid4)
    name: str = ""
    code: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    capacity: Optional[str] = None
    year_built: Optional[int] = None
    location_id: Optional[UUID] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)

    collection = "buildings"

    @property
    def display_name(self) -> str:
        return self.name

    def to_suggestion(self) -> Suggestion:
        return Suggestion(
            id=self.id,
            title=self.name,
            subtitle=_join([self.code, self.type]),
            type="building",
        )


@dataclass
class EquipmentEntity:
    """A piece of equipment (tractor, truck, loader...)"""
    id: UUID = field(default_factory=uuid4)
    nickname: Optional[str] = None
    unit_number: Optional[str] = None
    category: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    year: Optional[int] = None
    location_id: Optional[UUID] = None
    active: bool = True
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)

    collection = "equipment"

    @property
    def display_name(self) -> str:
        return self.nickname or self.model or self.unit_number or ""

    def to_suggestion(self) -> Suggestion:
        return Suggestion(
            id=self.id,
            title=self.nickname or self.model or self.unit_number or "Equipment",
            subtitle=_join([
                self.category,
                self.make,
                self.model,
                f"Unit {self.unit_number}" if self.unit_number else None,
            ]),
            type="equipment",
            category=self.category or None,
        )


@dataclass
class MaintenanceLogEntity:
    """A maintenance entry recorded against a piece of equipment"""
    id: UUID = field(default_factory=uuid4)
    title: str = ""
    description: Optional[str] = None
    status: Optional[str] = None
    equipment_id: Optional[UUID] = None
    maintenance_date: Optional[date] = None
    logged_at: datetime = field(default_factory=_utcnow)
    # Joined from the parent equipment row when the backend provides it
    equipment_nickname: Optional[str] = None
    equipment_unit_number: Optional[str] = None

    collection = "maintenance_logs"

    @property
    def display_name(self) -> str:
        return self.title

    def to_suggestion(self) -> Suggestion:
        if self.equipment_unit_number:
            subtitle = f"Unit {self.equipment_unit_number}"
        else:
            subtitle = self.equipment_nickname or "Maintenance"
        return Suggestion(
            id=self.id,
            title=self.title,
            subtitle=subtitle,
            type="maintenance",
        )


RecordEntity = Union[EquipmentEntity, BuildingEntity, LocationEntity, MaintenanceLogEntity]
