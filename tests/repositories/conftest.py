"""Test fixtures for repository tests"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio


# Postgres fixtures
@pytest.fixture
def pg_session():
    """AsyncSession double that records executed statements and returns no rows"""
    result = MagicMock()
    result.scalars.return_value.all.return_value = []
    result.scalar.return_value = 0

    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    return session


# SurrealDB fixtures
@pytest_asyncio.fixture
async def surreal_client() -> AsyncGenerator:
    """Create a temporary SurrealDB client for testing"""
    # Skip if surrealdb not installed
    pytest.importorskip("surrealdb")

    from surrealdb import AsyncSurreal

    # Use temporary directory for test database
    with tempfile.TemporaryDirectory() as tmpdir:
        url = f"file://{tmpdir}/test"

        client = AsyncSurreal(url)
        await client.connect()
        await client.use("test", "test")

        # Initialize schema
        schema_path = Path(__file__).parent.parent.parent / "farm_lookup" / "db" / "surrealdb" / "schema.surql"
        if schema_path.exists():
            await client.query(schema_path.read_text())

        yield client

        await client.close()


@pytest_asyncio.fixture
async def surreal_uow(surreal_client) -> AsyncGenerator:
    """Create a SurrealDB Unit of Work for testing"""
    from farm_lookup.db.repositories.surrealdb import SurrealUnitOfWork

    uow = SurrealUnitOfWork(surreal_client)
    yield uow


