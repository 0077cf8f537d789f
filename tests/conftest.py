"""Pytest configuration and fixtures."""

import os
from typing import Callable

import pytest

from viz_datasource.core.models import UploadedArtifact
from viz_datasource.infrastructure.memory import (
    InMemoryDatasourceMetadataRepository,
    InMemoryDatasourceRepository,
)


@pytest.fixture
def metadata_repo():
    return InMemoryDatasourceMetadataRepository()


@pytest.fixture
def datasource_repo():
    return InMemoryDatasourceRepository()


@pytest.fixture
def write_upload(tmp_path) -> Callable[..., UploadedArtifact]:
    """Write content to a temporary upload file and describe it as an artifact."""
    def _write(content, name: str = "test.csv", mime_type: str = "text/csv") -> UploadedArtifact:
        data = content.encode("utf-8") if isinstance(content, str) else content
        path = tmp_path / f"upload-{len(os.listdir(tmp_path))}"
        path.write_bytes(data)
        return UploadedArtifact(
            temporary_path=str(path),
            original_name=name,
            declared_mime_type=mime_type,
            size_in_bytes=len(data)
        )
    return _write
