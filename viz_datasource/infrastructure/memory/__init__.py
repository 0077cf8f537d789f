from .datasource_store import InMemoryDatasourceMetadataRepository, InMemoryDatasourceRepository

__all__ = ['InMemoryDatasourceMetadataRepository', 'InMemoryDatasourceRepository']
