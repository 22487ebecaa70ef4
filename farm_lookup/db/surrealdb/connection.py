"""SurrealDB connection management (embedded file:// or remote ws://)"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, AsyncGenerator, Optional

from ...exceptions import StoreUnavailable
from ...observability import logger

if TYPE_CHECKING:
    from surrealdb import AsyncSurreal

SCHEMA_PATH = Path(__file__).parent / "schema.surql"


class SurrealConnection:
    """
    Process-wide SurrealDB client holder.

    Connection string format: file://./path/to/data for the embedded engine,
    ws://host:port/rpc for a server.
    """

    _instance: Optional["SurrealConnection"] = None

    def __init__(
        self,
        url: Optional[str] = None,
        namespace: Optional[str] = None,
        database: Optional[str] = None,
    ):
        from ..config import settings

        self.url = url or settings.surreal_url
        self.namespace = namespace or settings.surreal_namespace
        self.database = database or settings.surreal_database
        self._client: Optional["AsyncSurreal"] = None
        self._initialized = False

        if self.url.startswith("file://"):
            data_path = self.url.replace("file://", "")
            if data_path.startswith("./"):
                data_path = Path.cwd() / data_path[2:]
            Path(data_path).mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_instance(cls) -> "SurrealConnection":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton (for testing)"""
        cls._instance = None

    async def connect(self) -> "AsyncSurreal":
        """Connect on first use and return the shared client"""
        if self._client is not None:
            return self._client

        from surrealdb import AsyncSurreal

        try:
            client = AsyncSurreal(self.url)
            await client.connect()
            await client.use(self.namespace, self.database)
        except Exception as e:
            raise StoreUnavailable(f"Cannot connect to SurrealDB at {self.url}: {e}") from e

        logger.info(f"Connected to SurrealDB {self.url} ({self.namespace}/{self.database})")
        self._client = client
        return client

    async def disconnect(self) -> None:
        """Disconnect from SurrealDB"""
        if self._client is not None:
            await self._client.close()
            self._client = None
            self._initialized = False

    async def init_schema(self, force: bool = False) -> None:
        """Apply schema.surql (DEFINE ... IF NOT EXISTS statements are idempotent)"""
        if self._initialized and not force:
            return

        client = await self.connect()
        await client.query(SCHEMA_PATH.read_text())
        self._initialized = True

    @property
    def is_connected(self) -> bool:
        return self._client is not None


@asynccontextmanager
async def get_surreal_connection() -> AsyncGenerator["AsyncSurreal", None]:
    """
    Yield the shared client; the connection stays open after the block.

    Usage:
        async with get_surreal_connection() as db:
            rows = await db.query("SELECT * FROM buildings")
    """
    conn = SurrealConnection.get_instance()
    yield await conn.connect()


async def init_surreal_db(force: bool = False) -> None:
    """Connect and apply the schema; called at application startup"""
    conn = SurrealConnection.get_instance()
    await conn.init_schema(force=force)


async def close_surreal_db() -> None:
    """Close the shared client; called at application shutdown"""
    conn = SurrealConnection.get_instance()
    await conn.disconnect()
    SurrealConnection.reset_instance()
