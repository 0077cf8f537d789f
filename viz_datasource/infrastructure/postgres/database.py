"""Database connection pool."""

import json
from contextlib import asynccontextmanager
from typing import Optional, AsyncIterator, Dict, Any, List
import asyncpg
from asyncpg import Pool

from ...core.abstractions.database import IDatabasePool
from .adapters import AsyncpgConnectionAdapter


class DatabasePool(IDatabasePool):
    """Manages the PostgreSQL connection pool."""

    def __init__(self, dsn: str):
        self.dsn = dsn
        self._pool: Optional[Pool] = None

    async def initialize(self, min_size: int = 2, max_size: int = 10):
        """Initialize the connection pool."""
        if self._pool is None:
            self._pool = await asyncpg.create_pool(
                self.dsn,
                min_size=min_size,
                max_size=max_size,
                command_timeout=60,
                init=self._init_connection
            )

    async def _init_connection(self, conn):
        """Decode json/jsonb columns into Python objects."""
        for type_name in ("json", "jsonb"):
            await conn.set_type_codec(
                type_name,
                encoder=json.dumps,
                decoder=json.loads,
                schema="pg_catalog"
            )

    async def close(self):
        """Close all connections in the pool."""
        if self._pool:
            await self._pool.close()
            self._pool = None

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[AsyncpgConnectionAdapter]:
        """Acquire a connection from the pool."""
        if not self._pool:
            raise RuntimeError("Database pool not initialized")

        async with self._pool.acquire() as connection:
            yield AsyncpgConnectionAdapter(connection)

    async def fetchrow(self, query: str, *args) -> Optional[Dict[str, Any]]:
        """Execute a query and return a single row."""
        if not self._pool:
            raise RuntimeError("Database pool not initialized")
        row = await self._pool.fetchrow(query, *args)
        return dict(row) if row else None

    async def fetch(self, query: str, *args) -> List[Dict[str, Any]]:
        """Execute a query and return all rows."""
        if not self._pool:
            raise RuntimeError("Database pool not initialized")
        rows = await self._pool.fetch(query, *args)
        return [dict(row) for row in rows]
