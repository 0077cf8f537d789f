import logging
from uuid import UUID

from viz_datasource.core.abstractions import IDatasourceMetadataRepository, IDatasourceRepository
from viz_datasource.features.base_handler import BaseHandler, with_error_handling

logger = logging.getLogger(__name__)


class DeleteDatasourceHandler(BaseHandler[None]):
    """Deletes a datasource's records and then its metadata"""

    def __init__(
        self,
        metadata_repo: IDatasourceMetadataRepository,
        datasource_repo: IDatasourceRepository
    ):
        self._metadata_repo = metadata_repo
        self._datasource_repo = datasource_repo

    @with_error_handling
    async def handle(self, datasource_id: UUID) -> None:
        # Records before metadata, so a partial delete never leaves unreachable records
        await self._datasource_repo.drop(datasource_id)
        await self._metadata_repo.delete(datasource_id)
        logger.info(f"Deleted datasource {datasource_id}")
