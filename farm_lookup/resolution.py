"""
Resolution: turn a route segment or typed string into one record.

The identifier may be a slug built by the UI ("north-barn"), an exact display
name ("North Barn"), a fragment, or a storage id. Display names are not
unique, so the resolver walks an ordered cascade of lookups and takes the
first hit:

    slug_match       candidate whose name slugs to slug(identifier)
    exact_name       candidate whose name equals identifier, ignoring case
    first_candidate  first candidate in fetch order
    direct_id        id lookup, UUID-shaped identifiers only
    fallback_scan    capped full scan, slug equality only

Nothing matched -> Resolution.not_found(). Ties between records sharing a
slug go to whichever the fetch order puts first; no error is raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Callable, NamedTuple, Optional

from .db.config import settings
from .db.entities import RecordEntity
from .db.repositories.base import UnitOfWork
from .exceptions import UnknownCollectionError
from .fetch import CandidateFetcher
from .observability import log_with_context, metrics, track_latency
from .slug import slug, slug_matches

NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Resolution:
    """Outcome of one resolve call: the record and the stage that found it"""
    record: Optional[RecordEntity]
    stage: str

    @property
    def found(self) -> bool:
        return self.record is not None

    @classmethod
    def not_found(cls) -> "Resolution":
        return cls(record=None, stage=NOT_FOUND)


@dataclass
class LookupContext:
    """Per-call state shared by the strategies; candidates are fetched once"""
    identifier: str
    fetcher: CandidateFetcher
    _candidates: Optional[list] = field(default=None, repr=False)

    @property
    def target_slug(self) -> str:
        return slug(self.identifier)

    async def candidates(self) -> list:
        if self._candidates is None:
            # Ids get their own stage, so the candidate query is name-only
            self._candidates = await self.fetcher.fetch(
                self.identifier, match_id=False, fallback=False
            )
        return self._candidates


Lookup = Callable[[LookupContext], Awaitable[Optional[object]]]


class Strategy(NamedTuple):
    name: str
    lookup: Lookup


async def slug_match(ctx: LookupContext) -> Optional[object]:
    target = ctx.target_slug
    if not target:
        return None
    for candidate in await ctx.candidates():
        if slug(candidate.display_name) == target:
            return candidate
    return None


async def exact_name(ctx: LookupContext) -> Optional[object]:
    wanted = ctx.identifier.lower()
    for candidate in await ctx.candidates():
        if (candidate.display_name or "").lower() == wanted:
            return candidate
    return None


async def first_candidate(ctx: LookupContext) -> Optional[object]:
    candidates = await ctx.candidates()
    return candidates[0] if candidates else None


async def direct_id(ctx: LookupContext) -> Optional[object]:
    return await ctx.fetcher.get(ctx.identifier)


async def fallback_scan(ctx: LookupContext) -> Optional[object]:
    for record in await ctx.fetcher.scan():
        if slug_matches(record.display_name, ctx.identifier):
            return record
    return None


CASCADE: tuple[Strategy, ...] = (
    Strategy("slug_match", slug_match),
    Strategy("exact_name", exact_name),
    Strategy("first_candidate", first_candidate),
    Strategy("direct_id", direct_id),
    Strategy("fallback_scan", fallback_scan),
)


class Resolver:
    """Applies the cascade to one collection"""

    def __init__(self, fetcher: CandidateFetcher, cascade: tuple[Strategy, ...] = CASCADE):
        self.fetcher = fetcher
        self.cascade = cascade

    @track_latency("resolve")
    async def resolve(self, identifier: Optional[str]) -> Resolution:
        """
        Resolve identifier to a record, or Resolution.not_found().

        Issues one to three reads against the store. StoreUnavailable
        propagates.
        """
        if not identifier or not identifier.strip():
            metrics.increment("not_found_count")
            return Resolution.not_found()

        log = log_with_context(collection=self.fetcher.collection, identifier=identifier)
        ctx = LookupContext(identifier=identifier, fetcher=self.fetcher)
        for strategy in self.cascade:
            record = await strategy.lookup(ctx)
            if record is not None:
                log.debug(f"Resolved via {strategy.name}", extra={"extra": {"stage": strategy.name}})
                metrics.record_stage(strategy.name)
                return Resolution(record=record, stage=strategy.name)

        log.info("No matching record")
        metrics.increment("not_found_count")
        metrics.record_stage(NOT_FOUND)
        return Resolution.not_found()


def build_resolver(uow: UnitOfWork, collection: str) -> Resolver:
    """Resolver over a named collection, limits taken from settings"""
    repository = uow.repository(collection)
    if repository.collection not in UnitOfWork.RESOLVABLE:
        raise UnknownCollectionError(collection)
    fetcher = CandidateFetcher(
        repository,
        limit=settings.candidate_limit,
        fallback_limit=settings.fallback_scan_limit,
    )
    return Resolver(fetcher)


async def resolve_record(uow: UnitOfWork, collection: str, identifier: str) -> Resolution:
    """
    Resolve an identifier within a named collection.

    Usage:
        async with get_unit_of_work() as uow:
            resolution = await resolve_record(uow, "buildings", "north-barn")
            if resolution.found:
                ...
    """
    return await build_resolver(uow, collection).resolve(identifier)
