#!/usr/bin/env python3
"""Initialize the database with the datasource schema."""

import asyncio
import sys

from viz_datasource.core.config import get_settings
from viz_datasource.infrastructure.postgres import DatabasePool, ensure_schema


async def init_database() -> int:
    """Create the metadata table and data schema."""
    settings = get_settings()

    print(f"Connecting to database: {settings.POSTGRESQL_HOST}:{settings.POSTGRESQL_PORT}/{settings.POSTGRESQL_DATABASE}")

    pool = DatabasePool(settings.database_dsn)
    await pool.initialize(min_size=1, max_size=1)
    try:
        await ensure_schema(pool, settings)

        schemas = await pool.fetch(
            """
            SELECT schema_name
            FROM information_schema.schemata
            WHERE schema_name = ANY($1::text[])
            ORDER BY schema_name
            """,
            [settings.metadata_schema, settings.data_schema]
        )
        print("\nSchemas:")
        for schema in schemas:
            print(f"  - {schema['schema_name']}")

        count = await pool.fetchrow(
            f'SELECT COUNT(*) AS total FROM "{settings.metadata_schema}".datasource_metadata'
        )
        print(f"\nDatasources registered: {count['total']}")
        return 0
    except Exception as e:
        print(f"Error initializing database: {e}")
        return 1
    finally:
        await pool.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(init_database()))
