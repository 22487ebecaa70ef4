"""FastAPI endpoints for record resolution and search"""

from dataclasses import asdict
from typing import AsyncGenerator, Optional
from uuid import UUID

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from . import __version__
from .db.config import settings
from .db.repositories.base import UnitOfWork
from .db.repositories.factory import get_unit_of_work
from .exceptions import StoreUnavailable, UnknownCollectionError
from .fetch import CandidateFetcher
from .observability import get_health_status, logger, metrics
from .resolution import build_resolver
from .search import TYPE_FILTERS, aggregate, available_categories, search_collection
from .slug import slug


app = FastAPI(
    title="Farm Lookup API",
    description="Slug resolution and typeahead search for farm records",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============ Schemas ============

class RecordOut(BaseModel):
    id: UUID
    collection: str
    title: str
    slug: str
    stage: str
    data: dict


class SuggestionOut(BaseModel):
    id: UUID
    title: str
    subtitle: str
    type: str
    category: Optional[str] = None

    class Config:
        from_attributes = True


class AggregateOut(BaseModel):
    query: str
    type: str
    category: Optional[str]
    results: list[SuggestionOut]
    categories: list[str]


class SlugOut(BaseModel):
    name: str
    slug: str


# ============ Lifecycle ============

@app.on_event("startup")
async def startup():
    if settings.backend == "surrealdb":
        from .db.surrealdb import init_surreal_db
        await init_surreal_db()
    elif settings.debug:
        from .db.database import init_db
        await init_db()


@app.on_event("shutdown")
async def shutdown():
    if settings.backend == "surrealdb":
        from .db.surrealdb import close_surreal_db
        await close_surreal_db()
    else:
        from .db.database import close_db
        await close_db()


# ============ Dependencies ============

async def get_uow() -> AsyncGenerator[UnitOfWork, None]:
    async with get_unit_of_work() as uow:
        yield uow


def _repository(uow: UnitOfWork, collection: str):
    try:
        return uow.repository(collection)
    except UnknownCollectionError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ============ Endpoints ============

@app.get("/resolve/{collection}/{identifier:path}", response_model=RecordOut)
async def resolve_endpoint(
    collection: str,
    identifier: str,
    uow: UnitOfWork = Depends(get_uow),
):
    """Resolve a slug, name or id to a single record"""
    try:
        resolver = build_resolver(uow, collection)
    except UnknownCollectionError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        resolution = await resolver.resolve(identifier)
    except StoreUnavailable as e:
        metrics.increment("error_count")
        logger.error(f"Resolve {collection}/{identifier} failed: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    if not resolution.found:
        raise HTTPException(status_code=404, detail=f"No {collection} record for '{identifier}'")

    record = resolution.record
    return RecordOut(
        id=record.id,
        collection=record.collection,
        title=record.display_name,
        slug=slug(record.display_name),
        stage=resolution.stage,
        data=asdict(record),
    )


@app.get("/candidates/{collection}/{identifier:path}", response_model=list[SuggestionOut])
async def candidates_endpoint(
    collection: str,
    identifier: str,
    uow: UnitOfWork = Depends(get_uow),
):
    """Every record an identifier might refer to, in resolution order"""
    repository = _repository(uow, collection)
    try:
        fetcher = CandidateFetcher(
            repository,
            limit=settings.candidate_limit,
            fallback_limit=settings.fallback_scan_limit,
        )
        records = await fetcher.fetch(identifier)
    except StoreUnavailable as e:
        metrics.increment("error_count")
        raise HTTPException(status_code=503, detail=str(e))
    return [SuggestionOut.model_validate(record.to_suggestion()) for record in records]


@app.get("/search", response_model=AggregateOut)
async def aggregate_endpoint(
    q: str = "",
    type: str = "all",
    category: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    uow: UnitOfWork = Depends(get_uow),
):
    """Search equipment and maintenance logs together"""
    if type not in TYPE_FILTERS:
        raise HTTPException(status_code=422, detail=f"type must be one of {', '.join(TYPE_FILTERS)}")
    try:
        results = await aggregate(uow, q, type_filter=type, category_filter=category or None, limit=limit)
    except StoreUnavailable as e:
        metrics.increment("error_count")
        logger.error(f"Search for '{q}' failed: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    return AggregateOut(
        query=q,
        type=type,
        category=category or None,
        results=[SuggestionOut.model_validate(s) for s in results],
        categories=available_categories(results),
    )


@app.get("/search/{collection}", response_model=list[SuggestionOut])
async def search_endpoint(
    collection: str,
    q: str = "",
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    uow: UnitOfWork = Depends(get_uow),
):
    """Typeahead suggestions for one collection; store errors give an empty list"""
    repository = _repository(uow, collection)
    try:
        suggestions = await search_collection(repository, q, limit)
    except StoreUnavailable as e:
        logger.warning(f"Typeahead on {collection} for '{q}' failed: {e}")
        return []
    return [SuggestionOut.model_validate(s) for s in suggestions]


@app.get("/slug", response_model=SlugOut)
async def slug_endpoint(name: str = ""):
    """Slug a display name the same way links are built"""
    return SlugOut(name=name, slug=slug(name))


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "version": app.version}


@app.get("/health/detailed")
async def detailed_health(uow: UnitOfWork = Depends(get_uow)):
    """Get detailed health status"""
    return await get_health_status(uow)


@app.get("/metrics")
async def metrics_endpoint():
    """Get application metrics"""
    return metrics.to_dict()


@app.post("/metrics/reset")
async def reset_metrics():
    """Reset all metrics"""
    metrics.reset()
    return {"status": "reset"}
