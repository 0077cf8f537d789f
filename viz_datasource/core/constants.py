"""Core constants and enums used across the system."""

from enum import Enum


MAX_UPLOAD_SIZE_BYTES = 10 * 1024 * 1024  # 10MB

DEFAULT_ALLOWED_MIME_TYPES = [
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
    "text/plain",
]


class UploadErrorMessages:
    """Reason strings surfaced by the upload pipeline."""
    FILE_TOO_LARGE = "File is too large"
    UNSUPPORTED_FILE_TYPE = "Unsupported file type"
    UPLOAD_DATA_FAILED = "Error while uploading csv file data"
    FILE_UNREADABLE = "Uploaded file could not be read"
    EMPTY_FILE = "CSV file is empty"
    NO_DATA_ROWS = "CSV file has no data rows"
    NOT_UTF8 = "CSV file must be UTF-8 encoded"
    EMPTY_COLUMN_NAME = "CSV header contains an empty column name"


class ColumnType(str, Enum):
    """Type tag inferred for a datasource column."""
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"


class UploadState(str, Enum):
    """States of a single upload attempt."""
    VALIDATING = "validating"
    PARSING = "parsing"
    METADATA_INSERTED = "metadata_inserted"
    DATA_INSERTED = "data_inserted"
    ROLLING_BACK = "rolling_back"
    FAILED = "failed"


class StorageBackendType:
    """Storage backend constants."""
    POSTGRES = "postgres"
    MEMORY = "memory"
