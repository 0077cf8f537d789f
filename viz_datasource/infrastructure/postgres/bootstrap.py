"""Creates the database objects the datasource stores rely on."""

import logging
from typing import List

from ...core.abstractions.database import IDatabasePool
from ...core.config import Settings

logger = logging.getLogger(__name__)


def schema_statements(settings: Settings) -> List[str]:
    """DDL for the metadata table and the data schema."""
    metadata_schema = settings.metadata_schema
    data_schema = settings.data_schema
    return [
        f'CREATE SCHEMA IF NOT EXISTS "{metadata_schema}"',
        f'CREATE SCHEMA IF NOT EXISTS "{data_schema}"',
        f"""
        CREATE TABLE IF NOT EXISTS "{metadata_schema}".datasource_metadata (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name TEXT NOT NULL,
            datasource_schema JSONB NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """,
        f"""
        CREATE INDEX IF NOT EXISTS idx_datasource_metadata_created_at
        ON "{metadata_schema}".datasource_metadata (created_at DESC)
        """,
    ]


async def ensure_schema(pool: IDatabasePool, settings: Settings) -> None:
    """Apply the DDL. Safe to run on every startup."""
    async with pool.acquire() as conn:
        async with conn.transaction():
            for statement in schema_statements(settings):
                await conn.execute(statement)
    logger.info(
        f"Datasource schema ready ({settings.metadata_schema}, {settings.data_schema})"
    )
