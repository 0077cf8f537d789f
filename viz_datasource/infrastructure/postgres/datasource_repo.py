"""PostgreSQL implementation of IDatasourceRepository.

Each datasource gets its own table named after the datasource id. Table
creation and all inserts run in one transaction, so a failed insert leaves
no table behind.
"""

import logging
from typing import List, Optional, Sequence
from uuid import UUID

import asyncpg

from ...core.abstractions.database import IDatabasePool
from ...core.abstractions.repositories import IDatasourceRepository
from ...core.models import DataRecord

logger = logging.getLogger(__name__)


class PostgresDatasourceRepository(IDatasourceRepository):
    """Datasource records stored as jsonb rows in per-datasource tables."""

    def __init__(self, pool: IDatabasePool, schema_name: str = "viz_data", batch_size: int = 1000):
        self._pool = pool
        self._schema_name = schema_name
        self._batch_size = batch_size

    def table_name(self, datasource_id: UUID) -> str:
        """Quoted table name for a datasource; only uuid hex reaches the SQL."""
        return f'"{self._schema_name}"."ds_{UUID(str(datasource_id)).hex}"'

    async def insert(self, datasource_id: UUID, records: Sequence[DataRecord]) -> None:
        """Create the datasource table and insert all records atomically."""
        table = self.table_name(datasource_id)
        create_query = f"""
            CREATE TABLE {table} (
                row_index INTEGER PRIMARY KEY,
                record JSONB NOT NULL
            )
        """
        insert_query = f"INSERT INTO {table} (row_index, record) VALUES ($1, $2)"

        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(create_query)
                for start in range(0, len(records), self._batch_size):
                    batch = records[start:start + self._batch_size]
                    await conn.executemany(
                        insert_query,
                        [(start + offset, dict(record)) for offset, record in enumerate(batch)]
                    )

        logger.info(f"Inserted {len(records)} records into {table}")

    async def fetch(self, datasource_id: UUID, limit: Optional[int] = None) -> List[DataRecord]:
        """Get records in upload order."""
        table = self.table_name(datasource_id)
        query = f"SELECT record FROM {table} ORDER BY row_index"
        args = []
        if limit is not None:
            query += " LIMIT $1"
            args.append(limit)

        async with self._pool.acquire() as conn:
            try:
                rows = await conn.fetch(query, *args)
            except asyncpg.UndefinedTableError:
                return []
        return [row['record'] for row in rows]

    async def drop(self, datasource_id: UUID) -> None:
        """Drop the datasource table if present."""
        table = self.table_name(datasource_id)
        async with self._pool.acquire() as conn:
            await conn.execute(f"DROP TABLE IF EXISTS {table}")
