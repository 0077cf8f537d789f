"""Datasource domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel

from ..constants import ColumnType, UploadState


CellValue = Union[int, float, bool, str]
DataRecord = Dict[str, CellValue]
InferredSchema = Dict[str, ColumnType]


@dataclass(frozen=True)
class UploadedArtifact:
    """Descriptor of an uploaded file waiting in temporary storage."""
    temporary_path: str
    original_name: str
    declared_mime_type: str
    size_in_bytes: int


@dataclass
class ParsedCsv:
    """Result of parsing CSV content."""
    schema: InferredSchema
    records: List[DataRecord]

    @property
    def row_count(self) -> int:
        return len(self.records)


@dataclass
class DatasourceMetadata:
    """Metadata row describing one uploaded datasource."""
    id: UUID
    name: str
    schema: InferredSchema
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class UploadResult:
    """Successful upload outcome."""
    collection_id: UUID


@dataclass
class UploadAttempt:
    """Tracks the state transitions of one upload."""
    artifact_name: str
    state: UploadState = UploadState.VALIDATING
    collection_id: Optional[UUID] = None
    history: List[UploadState] = field(default_factory=list)


class DatasourceSummary(BaseModel):
    """Datasource entry for selection lists."""
    id: UUID
    name: str
    created_at: Optional[datetime] = None


class ColumnHeader(BaseModel):
    """Column name and inferred type of a datasource."""
    name: str
    type: ColumnType
