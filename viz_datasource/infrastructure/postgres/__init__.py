"""PostgreSQL infrastructure implementations."""

from .database import DatabasePool
from .datasource_metadata_repo import PostgresDatasourceMetadataRepository
from .datasource_repo import PostgresDatasourceRepository
from .bootstrap import ensure_schema

__all__ = [
    'DatabasePool',
    'PostgresDatasourceMetadataRepository',
    'PostgresDatasourceRepository',
    'ensure_schema',
]
