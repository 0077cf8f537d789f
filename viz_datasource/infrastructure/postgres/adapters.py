"""Adapters to convert between asyncpg types and generic interfaces."""

from typing import Any, Optional, Dict, List
from contextlib import asynccontextmanager
import asyncpg
from ...core.abstractions.database import IDatabaseConnection


class AsyncpgConnectionAdapter(IDatabaseConnection):
    """Adapter to wrap asyncpg.Connection with generic interface."""

    def __init__(self, connection: asyncpg.Connection):
        self._conn = connection

    async def execute(self, query: str, *args) -> str:
        """Execute a query without returning results."""
        return await self._conn.execute(query, *args)

    async def executemany(self, query: str, args: List[tuple]) -> None:
        """Execute a query multiple times with different arguments."""
        await self._conn.executemany(query, args)

    async def fetchrow(self, query: str, *args) -> Optional[Dict[str, Any]]:
        """Execute a query and return a single row as a dictionary."""
        row = await self._conn.fetchrow(query, *args)
        return dict(row) if row else None

    async def fetch(self, query: str, *args) -> List[Dict[str, Any]]:
        """Execute a query and return all rows as list of dictionaries."""
        rows = await self._conn.fetch(query, *args)
        return [dict(row) for row in rows]

    async def fetchval(self, query: str, *args, column: int = 0) -> Any:
        """Execute a query and return a single value."""
        return await self._conn.fetchval(query, *args, column=column)

    @asynccontextmanager
    async def transaction(self):
        """Run the block in a transaction; rolled back if it raises."""
        async with self._conn.transaction():
            yield
