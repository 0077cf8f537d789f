"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import List, Literal, Optional
from urllib.parse import quote_plus

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_ALLOWED_MIME_TYPES, MAX_UPLOAD_SIZE_BYTES


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
    )

    # App settings
    app_name: str = "Visualization Datasource Service"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Storage
    storage_backend: Literal["postgres", "memory"] = "postgres"

    # PostgreSQL settings
    POSTGRESQL_HOST: str = "localhost"
    POSTGRESQL_PORT: int = 5432
    POSTGRESQL_USER: str = "postgres"
    POSTGRESQL_PASSWORD: str = "postgres"
    POSTGRESQL_DATABASE: str = "visualization"

    # Database pool settings
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10

    # Schemas holding datasource metadata and per-datasource data tables
    metadata_schema: str = "viz_core"
    data_schema: str = "viz_data"

    # Uploads
    max_upload_size: int = MAX_UPLOAD_SIZE_BYTES
    enforce_mime_type: bool = False
    allowed_mime_types: List[str] = DEFAULT_ALLOWED_MIME_TYPES
    insert_batch_size: int = 1000

    @field_validator("metadata_schema", "data_schema")
    @classmethod
    def _validate_identifier(cls, value: str) -> str:
        if not value.replace("_", "").isalnum() or value[0].isdigit():
            raise ValueError(f"Invalid schema name: {value!r}")
        return value

    @field_validator("max_upload_size", "insert_batch_size")
    @classmethod
    def _validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be positive")
        return value

    @property
    def database_dsn(self) -> str:
        """Build the asyncpg DSN from the individual PostgreSQL settings."""
        password = quote_plus(self.POSTGRESQL_PASSWORD)
        return (
            f"postgresql://{self.POSTGRESQL_USER}:{password}"
            f"@{self.POSTGRESQL_HOST}:{self.POSTGRESQL_PORT}/{self.POSTGRESQL_DATABASE}"
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def resolve_settings(settings: Optional[Settings] = None) -> Settings:
    """Return the given settings or the cached application settings."""
    return settings if settings is not None else get_settings()
