"""Repository interfaces for the two datasource stores.

Metadata and data live in independent stores. Nothing here spans both, so
callers that write to both must compensate on failure themselves.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from ..models import DataRecord, DatasourceMetadata, InferredSchema


class IDatasourceMetadataRepository(ABC):
    """Datasource metadata operations"""

    @abstractmethod
    async def insert(self, name: str, schema: InferredSchema) -> UUID:
        """Create a metadata row and return its store-assigned id.

        Either the row is created and an id returned, or the call fails
        without effect.
        """
        pass

    @abstractmethod
    async def delete(self, datasource_id: UUID) -> None:
        """Delete a metadata row. Deleting an unknown id is not an error."""
        pass

    @abstractmethod
    async def get_by_id(self, datasource_id: UUID) -> Optional[DatasourceMetadata]:
        pass

    @abstractmethod
    async def list_all(self) -> List[DatasourceMetadata]:
        """List all datasources, newest first."""
        pass


class IDatasourceRepository(ABC):
    """Per-datasource record collections"""

    @abstractmethod
    async def insert(self, datasource_id: UUID, records: Sequence[DataRecord]) -> None:
        """Persist records into the collection keyed by datasource_id.

        All-or-nothing: on failure no record of this call is visible.
        """
        pass

    @abstractmethod
    async def fetch(self, datasource_id: UUID, limit: Optional[int] = None) -> List[DataRecord]:
        """Return records in insertion order."""
        pass

    @abstractmethod
    async def drop(self, datasource_id: UUID) -> None:
        """Remove the collection. Dropping an unknown collection is not an error."""
        pass
