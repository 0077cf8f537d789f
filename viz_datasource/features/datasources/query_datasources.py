"""Read-side handlers used by chart configuration."""

from typing import List, Optional
from uuid import UUID

from viz_datasource.core.abstractions import IDatasourceMetadataRepository, IDatasourceRepository
from viz_datasource.core.domain_exceptions import EntityNotFoundException, InvalidInputException
from viz_datasource.core.models import ColumnHeader, DataRecord, DatasourceMetadata, DatasourceSummary
from viz_datasource.features.base_handler import BaseHandler, with_error_handling


async def _require_metadata(
    metadata_repo: IDatasourceMetadataRepository,
    datasource_id: UUID
) -> DatasourceMetadata:
    metadata = await metadata_repo.get_by_id(datasource_id)
    if metadata is None:
        raise EntityNotFoundException("Datasource", datasource_id)
    return metadata


class ListDatasourcesHandler(BaseHandler[List[DatasourceSummary]]):
    """Lists datasources for selection, newest first"""

    def __init__(self, metadata_repo: IDatasourceMetadataRepository):
        self._metadata_repo = metadata_repo

    @with_error_handling
    async def handle(self) -> List[DatasourceSummary]:
        datasources = await self._metadata_repo.list_all()
        return [
            DatasourceSummary(id=item.id, name=item.name, created_at=item.created_at)
            for item in datasources
        ]


class GetDatasourceHeadersHandler(BaseHandler[List[ColumnHeader]]):
    """Returns the columns of a datasource in header order"""

    def __init__(self, metadata_repo: IDatasourceMetadataRepository):
        self._metadata_repo = metadata_repo

    @with_error_handling
    async def handle(self, datasource_id: UUID) -> List[ColumnHeader]:
        metadata = await _require_metadata(self._metadata_repo, datasource_id)
        return [
            ColumnHeader(name=name, type=column_type)
            for name, column_type in metadata.schema.items()
        ]


class GetDatasourceDataHandler(BaseHandler[List[DataRecord]]):
    """Returns the records of a datasource"""

    def __init__(
        self,
        metadata_repo: IDatasourceMetadataRepository,
        datasource_repo: IDatasourceRepository
    ):
        self._metadata_repo = metadata_repo
        self._datasource_repo = datasource_repo

    @with_error_handling
    async def handle(self, datasource_id: UUID, limit: Optional[int] = None) -> List[DataRecord]:
        """
        Get records in upload order.

        Args:
            datasource_id: Datasource (collection) id
            limit: Maximum number of records, all when None

        Raises:
            EntityNotFoundException: If no datasource has this id
            InvalidInputException: If limit is not positive
        """
        if limit is not None and limit < 1:
            raise InvalidInputException("Limit must be a positive integer")
        await _require_metadata(self._metadata_repo, datasource_id)
        return await self._datasource_repo.fetch(datasource_id, limit=limit)
