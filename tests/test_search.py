"""Tests for typeahead search: single collection, live search and aggregation"""

from __future__ import annotations

import asyncio
from uuid import uuid4

import pytest

from farm_lookup.db.entities import EquipmentEntity, Suggestion
from farm_lookup.exceptions import AggregateSearchError, StoreUnavailable
from farm_lookup.observability import metrics
from farm_lookup.search import (
    LiveSearch,
    aggregate,
    available_categories,
    search_collection,
)

from fakes import FakeEquipmentRepository


# ============ search_collection ============


class TestSearchCollection:
    @pytest.mark.asyncio
    async def test_empty_query_makes_no_store_call(self, fake_uow):
        assert await search_collection(fake_uow.equipment, "") == []
        assert await search_collection(fake_uow.equipment, "   ") == []
        assert await search_collection(fake_uow.equipment, None) == []
        assert fake_uow.equipment.calls == []

    @pytest.mark.asyncio
    async def test_matches_any_search_field(self, fake_uow):
        # "deere" only appears in make
        results = await search_collection(fake_uow.equipment, "deere")
        assert [s.title for s in results] == ["Unit 42 - Loader"]

    @pytest.mark.asyncio
    async def test_case_insensitive(self, fake_uow):
        results = await search_collection(fake_uow.equipment, "KENWORTH")
        assert [s.title for s in results] == ["T800"]

    @pytest.mark.asyncio
    async def test_ordered_by_display_name(self, fake_uow):
        results = await search_collection(fake_uow.buildings, "b")
        assert [s.title for s in results] == ["Grain Bin #3", "North Barn"]

    @pytest.mark.asyncio
    async def test_limit(self, fake_uow):
        await search_collection(fake_uow.buildings, "n", limit=2)
        assert fake_uow.buildings.calls == [("search", "n", 2)]

    @pytest.mark.asyncio
    async def test_default_limit_from_settings(self, fake_uow):
        await search_collection(fake_uow.buildings, "n")
        assert fake_uow.buildings.calls == [("search", "n", 10)]

    @pytest.mark.asyncio
    async def test_hyphen_and_underscore_are_literal(self):
        repo = FakeEquipmentRepository([
            EquipmentEntity(id=uuid4(), nickname="C11 Seeder"),
            EquipmentEntity(id=uuid4(), nickname="C-1 Sprayer"),
        ])

        assert [s.title for s in await search_collection(repo, "C-1")] == ["C-1 Sprayer"]
        assert await search_collection(repo, "C_1") == []

    @pytest.mark.asyncio
    async def test_only_non_blank_searches_are_counted(self, fake_uow):
        await search_collection(fake_uow.equipment, "  ")
        await search_collection(fake_uow.equipment, "red")

        assert metrics.search_count == 1
        assert len(metrics.search_latencies) == 1

    @pytest.mark.asyncio
    async def test_store_error_propagates(self, fake_uow):
        fake_uow.equipment.fail = StoreUnavailable("down")
        with pytest.raises(StoreUnavailable):
            await search_collection(fake_uow.equipment, "red")


# ============ LiveSearch ============


def _suggestions(*titles: str) -> list[Suggestion]:
    return [Suggestion(id=uuid4(), title=t) for t in titles]


class TestLiveSearch:
    @pytest.mark.asyncio
    async def test_applies_results(self, fake_uow):
        live = LiveSearch.for_repository(fake_uow.equipment)

        applied = await live.update("red")

        assert applied is True
        assert [s.title for s in live.suggestions] == ["Big Red"]
        assert live.query == "red"
        assert live.error is None

    @pytest.mark.asyncio
    async def test_empty_query_clears_without_fetch(self, fake_uow):
        live = LiveSearch.for_repository(fake_uow.equipment)
        await live.update("red")
        fake_uow.equipment.calls.clear()

        await live.update("  ")

        assert live.suggestions == []
        assert fake_uow.equipment.calls == []

    @pytest.mark.asyncio
    async def test_late_response_for_older_query_is_discarded(self):
        gates = {"a": asyncio.Event(), "ab": asyncio.Event()}
        answers = {"a": _suggestions("Apple", "Barn"), "ab": _suggestions("Abbey")}

        async def slow_search(query: str) -> list[Suggestion]:
            await gates[query].wait()
            return answers[query]

        live = LiveSearch(slow_search)
        first = asyncio.create_task(live.update("a"))
        await asyncio.sleep(0)
        second = asyncio.create_task(live.update("ab"))
        await asyncio.sleep(0)

        # "ab" answers first, then the stale "a" response arrives
        gates["ab"].set()
        assert await second is True
        gates["a"].set()
        assert await first is False

        assert live.suggestions == answers["ab"]
        assert live.query == "ab"
        assert metrics.stale_count == 1

    @pytest.mark.asyncio
    async def test_in_order_responses_both_apply(self):
        async def search(query: str) -> list[Suggestion]:
            return _suggestions(query.upper())

        live = LiveSearch(search)
        assert await live.update("a") is True
        assert await live.update("ab") is True
        assert [s.title for s in live.suggestions] == ["AB"]
        assert live.sequence == 2

    @pytest.mark.asyncio
    async def test_debounce_drops_superseded_request_before_fetch(self):
        queried: list[str] = []

        async def search(query: str) -> list[Suggestion]:
            queried.append(query)
            return _suggestions(query)

        live = LiveSearch(search, debounce=0.01)
        results = await asyncio.gather(live.update("a"), live.update("ab"))

        assert results == [False, True]
        assert queried == ["ab"]
        assert [s.title for s in live.suggestions] == ["ab"]

    @pytest.mark.asyncio
    async def test_store_error_degrades_to_empty(self, fake_uow):
        live = LiveSearch.for_repository(fake_uow.equipment)
        await live.update("red")
        fake_uow.equipment.fail = StoreUnavailable("connection reset")

        applied = await live.update("redd")

        assert applied is True
        assert live.suggestions == []
        assert "connection reset" in live.error

    @pytest.mark.asyncio
    async def test_stale_error_is_discarded(self):
        gate = asyncio.Event()

        async def search(query: str) -> list[Suggestion]:
            if query == "a":
                await gate.wait()
                raise StoreUnavailable("late failure")
            return _suggestions("Abbey")

        live = LiveSearch(search)
        first = asyncio.create_task(live.update("a"))
        await asyncio.sleep(0)
        assert await live.update("ab") is True
        gate.set()
        assert await first is False

        assert [s.title for s in live.suggestions] == ["Abbey"]
        assert live.error is None


# ============ aggregate ============


class TestAggregate:
    @pytest.mark.asyncio
    async def test_all_types_equipment_block_first(self, fake_uow):
        results = await aggregate(fake_uow, "loader")

        assert [(s.type, s.title) for s in results] == [
            ("equipment", "Unit 42 - Loader"),
            ("maintenance", "Replace hydraulic hose"),
        ]

    @pytest.mark.asyncio
    async def test_equipment_filter_excludes_maintenance(self, fake_uow):
        results = await aggregate(fake_uow, "loader", type_filter="equipment")

        assert results
        assert all(s.type == "equipment" for s in results)
        assert fake_uow.maintenance_logs.calls == []

    @pytest.mark.asyncio
    async def test_maintenance_filter_excludes_equipment(self, fake_uow):
        results = await aggregate(fake_uow, "loader", type_filter="maintenance")

        assert [s.type for s in results] == ["maintenance"]
        assert fake_uow.equipment.calls == []

    @pytest.mark.asyncio
    async def test_category_filter_only_touches_equipment(self, fake_uow):
        results = await aggregate(fake_uow, "loader", category_filter="Tractor")

        assert [(s.type, s.title) for s in results] == [
            ("maintenance", "Replace hydraulic hose"),
        ]

    @pytest.mark.asyncio
    async def test_category_filter_keeps_matching_equipment(self, fake_uow):
        results = await aggregate(fake_uow, "r", type_filter="equipment", category_filter="Tractor")

        assert [s.title for s in results] == ["Big Red"]

    @pytest.mark.asyncio
    async def test_maintenance_subtitle_names_the_unit(self, fake_uow):
        results = await aggregate(fake_uow, "oil", type_filter="maintenance")

        assert [(s.title, s.subtitle) for s in results] == [("Tractor oil change", "Unit 42")]

    @pytest.mark.asyncio
    async def test_blank_query_makes_no_store_call(self, fake_uow):
        assert await aggregate(fake_uow, "  ") == []
        assert fake_uow.equipment.calls == []
        assert fake_uow.maintenance_logs.calls == []

    @pytest.mark.asyncio
    async def test_invalid_type_filter(self, fake_uow):
        with pytest.raises(ValueError):
            await aggregate(fake_uow, "loader", type_filter="buildings")

    @pytest.mark.asyncio
    async def test_one_failure_fails_everything(self, fake_uow):
        fake_uow.maintenance_logs.fail = StoreUnavailable("maintenance table locked")

        with pytest.raises(AggregateSearchError) as excinfo:
            await aggregate(fake_uow, "loader")

        assert excinfo.value.collections == ["maintenance"]
        assert isinstance(excinfo.value, StoreUnavailable)
        # the healthy collection was still queried
        assert fake_uow.equipment.calls

    @pytest.mark.asyncio
    async def test_programming_error_is_not_folded_into_store_failure(self, fake_uow):
        fake_uow.equipment.fail = StoreUnavailable("equipment table locked")
        fake_uow.maintenance_logs.fail = TypeError("bad row")

        with pytest.raises(TypeError):
            await aggregate(fake_uow, "loader")

    @pytest.mark.asyncio
    async def test_counts_as_one_aggregate_not_as_searches(self, fake_uow):
        await aggregate(fake_uow, "loader")

        assert metrics.aggregate_count == 1
        assert metrics.search_count == 0

    @pytest.mark.asyncio
    async def test_per_collection_limit(self, fake_uow):
        await aggregate(fake_uow, "a", limit=5)

        assert fake_uow.equipment.calls == [("search", "a", 5)]
        assert fake_uow.maintenance_logs.calls == [("search", "a", 5)]


def test_available_categories_first_seen_order():
    suggestions = [
        Suggestion(id=uuid4(), title="x", type="equipment", category="Tractor"),
        Suggestion(id=uuid4(), title="y", type="maintenance"),
        Suggestion(id=uuid4(), title="z", type="equipment", category="Loader"),
        Suggestion(id=uuid4(), title="w", type="equipment", category="Tractor"),
    ]
    assert available_categories(suggestions) == ["Tractor", "Loader"]
