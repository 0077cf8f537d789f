"""PostgreSQL implementation of IDatasourceMetadataRepository."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from ...core.abstractions.database import IDatabasePool
from ...core.abstractions.repositories import IDatasourceMetadataRepository
from ...core.constants import ColumnType
from ...core.models import DatasourceMetadata, InferredSchema


class PostgresDatasourceMetadataRepository(IDatasourceMetadataRepository):
    """Datasource metadata stored in a single PostgreSQL table."""

    def __init__(self, pool: IDatabasePool, schema_name: str = "viz_core"):
        self._pool = pool
        self._table = f'"{schema_name}".datasource_metadata'

    async def insert(self, name: str, schema: InferredSchema) -> UUID:
        """Insert metadata and return the generated id."""
        query = f"""
            INSERT INTO {self._table} (name, datasource_schema)
            VALUES ($1, $2)
            RETURNING id
        """
        payload = [
            {"name": column, "type": column_type.value}
            for column, column_type in schema.items()
        ]
        async with self._pool.acquire() as conn:
            return await conn.fetchval(query, name, payload)

    async def delete(self, datasource_id: UUID) -> None:
        """Delete metadata by id. Unknown ids are ignored."""
        query = f"DELETE FROM {self._table} WHERE id = $1"
        async with self._pool.acquire() as conn:
            await conn.execute(query, datasource_id)

    async def get_by_id(self, datasource_id: UUID) -> Optional[DatasourceMetadata]:
        """Get metadata by id."""
        query = f"""
            SELECT id, name, datasource_schema, created_at
            FROM {self._table}
            WHERE id = $1
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(query, datasource_id)
        return self._to_metadata(row) if row else None

    async def list_all(self) -> List[DatasourceMetadata]:
        """List metadata, newest first."""
        query = f"""
            SELECT id, name, datasource_schema, created_at
            FROM {self._table}
            ORDER BY created_at DESC, name
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(query)
        return [self._to_metadata(row) for row in rows]

    @staticmethod
    def _to_metadata(row: Dict[str, Any]) -> DatasourceMetadata:
        # Stored as a list of {name, type}; jsonb objects do not keep key order
        schema = {
            column["name"]: ColumnType(column["type"])
            for column in row['datasource_schema']
        }
        return DatasourceMetadata(
            id=row['id'],
            name=row['name'],
            schema=schema,
            created_at=row.get('created_at')
        )
