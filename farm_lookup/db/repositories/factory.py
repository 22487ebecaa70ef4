"""Repository factory for backend selection"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from ..config import settings
from .base import UnitOfWork


@asynccontextmanager
async def get_unit_of_work() -> AsyncGenerator[UnitOfWork, None]:
    """
    Get a Unit of Work based on configured backend.

    Usage:
        async with get_unit_of_work() as uow:
            building = await uow.buildings.get(building_id)
    """
    backend = getattr(settings, "backend", "postgres")

    if backend == "surrealdb":
        from ..surrealdb import get_surreal_connection
        from .surrealdb import SurrealUnitOfWork

        async with get_surreal_connection() as client:
            async with SurrealUnitOfWork(client) as uow:
                yield uow
    else:
        # PostgreSQL (default)
        from ..database import async_session_factory
        from .postgres import PostgresUnitOfWork

        async with async_session_factory() as session:
            async with PostgresUnitOfWork(session) as uow:
                yield uow
