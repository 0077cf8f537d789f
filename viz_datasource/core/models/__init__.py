from .datasource import (
    CellValue,
    ColumnHeader,
    DataRecord,
    DatasourceMetadata,
    DatasourceSummary,
    InferredSchema,
    ParsedCsv,
    UploadAttempt,
    UploadedArtifact,
    UploadResult,
)

__all__ = [
    "CellValue",
    "ColumnHeader",
    "DataRecord",
    "DatasourceMetadata",
    "DatasourceSummary",
    "InferredSchema",
    "ParsedCsv",
    "UploadAttempt",
    "UploadedArtifact",
    "UploadResult",
]
