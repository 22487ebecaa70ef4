"""Shared fixtures: sample farm records and an in-memory unit of work"""

from __future__ import annotations

from uuid import uuid4

import pytest

from farm_lookup.db.entities import (
    BuildingEntity,
    EquipmentEntity,
    LocationEntity,
    MaintenanceLogEntity,
)
from farm_lookup.observability import metrics

from fakes import FakeUnitOfWork


# ============ Sample data ============

@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def sample_locations() -> list[LocationEntity]:
    return [
        LocationEntity(id=uuid4(), name="Home Quarter", code="HQ", city="Lacombe", province="AB"),
        LocationEntity(id=uuid4(), name="River Flats", code="RF", city="Ponoka", province="AB"),
    ]


@pytest.fixture
def sample_buildings(sample_locations) -> list[BuildingEntity]:
    home = sample_locations[0].id
    return [
        BuildingEntity(id=uuid4(), name="North Barn", code="NB", type="Barn", location_id=home),
        BuildingEntity(id=uuid4(), name="Machine Shop", code="MS", type="Shop", location_id=home),
        BuildingEntity(id=uuid4(), name="Grain Bin #3", code="GB3", type="Bin", location_id=home),
    ]


@pytest.fixture
def sample_equipment() -> list[EquipmentEntity]:
    return [
        EquipmentEntity(
            id=uuid4(), nickname="Big Red", unit_number="42", category="Tractor",
            make="Case IH", model="Magnum 340",
        ),
        EquipmentEntity(
            id=uuid4(), nickname="Unit 42 - Loader", unit_number="7", category="Loader",
            make="John Deere", model="644K",
        ),
        EquipmentEntity(
            id=uuid4(), nickname=None, unit_number="12", category="Truck",
            make="Kenworth", model="T800",
        ),
    ]


@pytest.fixture
def sample_maintenance(sample_equipment) -> list[MaintenanceLogEntity]:
    big_red = sample_equipment[0]
    return [
        MaintenanceLogEntity(
            id=uuid4(), title="Tractor oil change", description="15W-40, new filter",
            equipment_id=big_red.id, equipment_nickname=big_red.nickname,
            equipment_unit_number=big_red.unit_number,
        ),
        MaintenanceLogEntity(
            id=uuid4(), title="Replace hydraulic hose", description="Loader arm, left side",
            equipment_id=sample_equipment[1].id, equipment_nickname="Unit 42 - Loader",
        ),
    ]


@pytest.fixture
def fake_uow(sample_equipment, sample_buildings, sample_locations, sample_maintenance) -> FakeUnitOfWork:
    return FakeUnitOfWork(
        equipment=sample_equipment,
        buildings=sample_buildings,
        locations=sample_locations,
        maintenance_logs=sample_maintenance,
    )
