"""Core abstractions for the datasource service."""

from .database import IDatabaseConnection, IDatabasePool
from .external import IUploadedFileStore
from .repositories import IDatasourceMetadataRepository, IDatasourceRepository
from .services import ICsvParser, IUploadGuard

__all__ = [
    'IDatabaseConnection',
    'IDatabasePool',
    'IUploadedFileStore',
    'IDatasourceMetadataRepository',
    'IDatasourceRepository',
    'ICsvParser',
    'IUploadGuard',
]
