"""Dependency wiring for the datasource service."""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends

from ..core.abstractions import IDatasourceMetadataRepository, IDatasourceRepository
from ..core.config import Settings, get_settings
from ..core.constants import StorageBackendType
from ..features.datasources import (
    DeleteDatasourceHandler,
    GetDatasourceDataHandler,
    GetDatasourceHeadersHandler,
    ListDatasourcesHandler,
    UploadDatasourceHandler,
    UploadGuard,
)
from ..infrastructure.external import LocalUploadedFileStore
from ..infrastructure.memory import InMemoryDatasourceMetadataRepository, InMemoryDatasourceRepository
from ..infrastructure.postgres import (
    DatabasePool,
    PostgresDatasourceMetadataRepository,
    PostgresDatasourceRepository,
    ensure_schema,
)
from ..infrastructure.services import CsvDatasourceParser

logger = logging.getLogger(__name__)


@dataclass
class StorageBundle:
    """The two datasource stores plus the pool backing them, if any."""
    metadata_repo: IDatasourceMetadataRepository
    datasource_repo: IDatasourceRepository
    pool: Optional[DatabasePool] = None


# Global instance (initialized in the application lifespan)
_storage: Optional[StorageBundle] = None


def set_storage(storage: Optional[StorageBundle]) -> None:
    """Set the global storage bundle."""
    global _storage
    _storage = storage


def get_storage() -> StorageBundle:
    """Get storage dependency."""
    if _storage is None:
        raise RuntimeError("Datasource storage not initialized")
    return _storage


async def create_storage(settings: Settings) -> StorageBundle:
    """Create the stores for the configured backend."""
    if settings.storage_backend == StorageBackendType.MEMORY:
        logger.info("Using in-memory datasource storage")
        return StorageBundle(
            metadata_repo=InMemoryDatasourceMetadataRepository(),
            datasource_repo=InMemoryDatasourceRepository()
        )

    pool = DatabasePool(settings.database_dsn)
    await pool.initialize(
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size
    )
    await ensure_schema(pool, settings)
    logger.info(f"Using PostgreSQL datasource storage at {settings.POSTGRESQL_HOST}")
    return StorageBundle(
        metadata_repo=PostgresDatasourceMetadataRepository(pool, settings.metadata_schema),
        datasource_repo=PostgresDatasourceRepository(
            pool,
            settings.data_schema,
            batch_size=settings.insert_batch_size
        ),
        pool=pool
    )


async def close_storage(storage: StorageBundle) -> None:
    if storage.pool is not None:
        await storage.pool.close()


def get_upload_handler(
    storage: StorageBundle = Depends(get_storage),
    settings: Settings = Depends(get_settings)
) -> UploadDatasourceHandler:
    """Build the upload handler."""
    return UploadDatasourceHandler(
        metadata_repo=storage.metadata_repo,
        datasource_repo=storage.datasource_repo,
        parser=CsvDatasourceParser(),
        file_store=LocalUploadedFileStore(),
        guard=UploadGuard.from_settings(settings)
    )


def get_list_datasources_handler(storage: StorageBundle = Depends(get_storage)) -> ListDatasourcesHandler:
    return ListDatasourcesHandler(storage.metadata_repo)


def get_headers_handler(storage: StorageBundle = Depends(get_storage)) -> GetDatasourceHeadersHandler:
    return GetDatasourceHeadersHandler(storage.metadata_repo)


def get_data_handler(storage: StorageBundle = Depends(get_storage)) -> GetDatasourceDataHandler:
    return GetDatasourceDataHandler(storage.metadata_repo, storage.datasource_repo)


def get_delete_handler(storage: StorageBundle = Depends(get_storage)) -> DeleteDatasourceHandler:
    return DeleteDatasourceHandler(storage.metadata_repo, storage.datasource_repo)
