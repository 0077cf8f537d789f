"""In-memory datasource stores for development and tests."""

import copy
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
from uuid import UUID, uuid4

from viz_datasource.core.abstractions.repositories import (
    IDatasourceMetadataRepository,
    IDatasourceRepository,
)
from viz_datasource.core.models import DataRecord, DatasourceMetadata, InferredSchema

logger = logging.getLogger(__name__)


class InMemoryDatasourceMetadataRepository(IDatasourceMetadataRepository):
    """Metadata kept in a dict keyed by id"""

    def __init__(self):
        self._metadata: Dict[UUID, DatasourceMetadata] = {}
        logger.info("Initialized in-memory datasource metadata store")

    async def insert(self, name: str, schema: InferredSchema) -> UUID:
        datasource_id = uuid4()
        self._metadata[datasource_id] = DatasourceMetadata(
            id=datasource_id,
            name=name,
            schema=dict(schema),
            created_at=datetime.now(timezone.utc)
        )
        return datasource_id

    async def delete(self, datasource_id: UUID) -> None:
        self._metadata.pop(datasource_id, None)

    async def get_by_id(self, datasource_id: UUID) -> Optional[DatasourceMetadata]:
        return self._metadata.get(datasource_id)

    async def list_all(self) -> List[DatasourceMetadata]:
        # Insertion order breaks ties between equal timestamps
        ordered = list(self._metadata.values())
        ordered.reverse()
        return sorted(ordered, key=lambda item: item.created_at, reverse=True)


class InMemoryDatasourceRepository(IDatasourceRepository):
    """Records kept per datasource id"""

    def __init__(self):
        self._collections: Dict[UUID, List[DataRecord]] = {}

    async def insert(self, datasource_id: UUID, records: Sequence[DataRecord]) -> None:
        if datasource_id in self._collections:
            raise ValueError(f"Collection {datasource_id} already exists")
        # Assigned only after every record is copied
        stored = [copy.deepcopy(dict(record)) for record in records]
        self._collections[datasource_id] = stored

    async def fetch(self, datasource_id: UUID, limit: Optional[int] = None) -> List[DataRecord]:
        records = self._collections.get(datasource_id, [])
        if limit is not None:
            records = records[:limit]
        return [dict(record) for record in records]

    async def drop(self, datasource_id: UUID) -> None:
        self._collections.pop(datasource_id, None)

    def has_collection(self, datasource_id: UUID) -> bool:
        return datasource_id in self._collections
