"""Unit tests for the error handlers, health check and handler providers."""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from viz_datasource.api.dependencies import (
    StorageBundle,
    get_data_handler,
    get_delete_handler,
    get_headers_handler,
    get_list_datasources_handler,
    get_upload_handler,
)
from viz_datasource.api.error_handlers import register_error_handlers
from viz_datasource.core.config import Settings
from viz_datasource.core.domain_exceptions import InvalidInputException
from viz_datasource.infrastructure.memory import (
    InMemoryDatasourceMetadataRepository,
    InMemoryDatasourceRepository,
)
from viz_datasource.main import create_app


@pytest.fixture
def failing_app():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/invalid")
    async def invalid():
        raise InvalidInputException("CSV file is empty")

    @app.get("/crash")
    async def crash():
        raise RuntimeError("boom")

    return app


@pytest.mark.asyncio
async def test_domain_exception_response(failing_app):
    transport = httpx.ASGITransport(app=failing_app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/invalid")

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_INPUT"
    assert body["message"] == "CSV file is empty"
    assert "request_id" in body


@pytest.mark.asyncio
async def test_unexpected_exception_response(failing_app):
    transport = httpx.ASGITransport(app=failing_app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/crash")

    assert response.status_code == 500
    assert response.json()["message"] == "An unexpected error occurred"


def test_health_with_memory_storage():
    app = create_app(Settings(_env_file=None, storage_backend="memory"))

    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "storage_backend": "memory"}


class TestHandlerProviders:
    """Handlers built from a memory-backed storage bundle."""

    @pytest.fixture
    def storage(self):
        return StorageBundle(
            metadata_repo=InMemoryDatasourceMetadataRepository(),
            datasource_repo=InMemoryDatasourceRepository()
        )

    @pytest.mark.asyncio
    async def test_upload_then_read_back(self, storage, write_upload):
        settings = Settings(_env_file=None, storage_backend="memory")
        artifact = write_upload("hour,active\n0,true\n1,false\n")

        result = await get_upload_handler(storage=storage, settings=settings).handle(artifact)

        summaries = await get_list_datasources_handler(storage=storage).handle()
        assert [summary.id for summary in summaries] == [result.collection_id]

        headers = await get_headers_handler(storage=storage).handle(result.collection_id)
        assert [header.name for header in headers] == ["hour", "active"]

        data = await get_data_handler(storage=storage).handle(result.collection_id, limit=1)
        assert data == [{"hour": 0, "active": True}]

        await get_delete_handler(storage=storage).handle(result.collection_id)
        assert await storage.metadata_repo.get_by_id(result.collection_id) is None

    @pytest.mark.asyncio
    async def test_upload_handler_uses_configured_size_limit(self, storage, write_upload):
        settings = Settings(_env_file=None, storage_backend="memory", max_upload_size=8)
        artifact = write_upload("hour,active\n0,true\n")

        with pytest.raises(InvalidInputException) as exc_info:
            await get_upload_handler(storage=storage, settings=settings).handle(artifact)

        assert exc_info.value.message == "File is too large"
        assert await storage.metadata_repo.list_all() == []
