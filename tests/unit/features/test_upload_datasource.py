"""Unit tests for UploadDatasourceHandler."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from viz_datasource.core.abstractions import (
    ICsvParser,
    IDatasourceMetadataRepository,
    IDatasourceRepository,
    IUploadedFileStore,
)
from viz_datasource.core.constants import ColumnType, UploadErrorMessages
from viz_datasource.core.domain_exceptions import InvalidInputException
from viz_datasource.core.models import ParsedCsv, UploadedArtifact, UploadResult
from viz_datasource.features.datasources import UploadDatasourceHandler, UploadGuard


RECORDS = [
    {"hour": 0, "susceptible": 1},
    {"hour": 1, "susceptible": 2},
    {"hour": 2, "susceptible": 3},
]
SCHEMA = {"hour": ColumnType.NUMBER, "susceptible": ColumnType.NUMBER}


def _artifact(size: int = 12132) -> UploadedArtifact:
    return UploadedArtifact(
        temporary_path="/uploads/1223",
        original_name="test.csv",
        declared_mime_type="text/csv",
        size_in_bytes=size
    )


class TestUploadCsv:
    """Test the upload saga with mocked collaborators."""

    @pytest.fixture
    def mock_metadata_repo(self):
        repo = AsyncMock(spec=IDatasourceMetadataRepository)
        repo.insert.return_value = "collection"
        return repo

    @pytest.fixture
    def mock_datasource_repo(self):
        return AsyncMock(spec=IDatasourceRepository)

    @pytest.fixture
    def mock_parser(self):
        parser = Mock(spec=ICsvParser)
        parser.parse_bytes.return_value = ParsedCsv(schema=dict(SCHEMA), records=list(RECORDS))
        return parser

    @pytest.fixture
    def mock_file_store(self):
        store = Mock(spec=IUploadedFileStore)
        store.read_bytes = AsyncMock(return_value=b"hour,susceptible\n0,1\n1,2\n2,3\n")
        store.exists.return_value = True
        return store

    @pytest.fixture
    def handler(self, mock_metadata_repo, mock_datasource_repo, mock_parser, mock_file_store):
        return UploadDatasourceHandler(
            metadata_repo=mock_metadata_repo,
            datasource_repo=mock_datasource_repo,
            parser=mock_parser,
            file_store=mock_file_store,
            guard=UploadGuard()
        )

    @pytest.mark.asyncio
    async def test_returns_collection_id(self, handler):
        result = await handler.upload_csv(_artifact())

        assert result == UploadResult(collection_id="collection")

    @pytest.mark.asyncio
    async def test_inserts_name_and_schema_as_metadata(self, handler, mock_metadata_repo):
        await handler.upload_csv(_artifact())

        mock_metadata_repo.insert.assert_awaited_once_with(
            "test.csv", {"hour": "number", "susceptible": "number"}
        )

    @pytest.mark.asyncio
    async def test_inserts_records_under_collection_id(self, handler, mock_datasource_repo):
        await handler.upload_csv(_artifact())

        mock_datasource_repo.insert.assert_awaited_once_with("collection", RECORDS)

    @pytest.mark.asyncio
    async def test_reads_temporary_file(self, handler, mock_file_store, mock_parser):
        await handler.upload_csv(_artifact())

        mock_file_store.read_bytes.assert_awaited_once_with("/uploads/1223")
        mock_parser.parse_bytes.assert_called_once_with(b"hour,susceptible\n0,1\n1,2\n2,3\n")

    @pytest.mark.asyncio
    async def test_data_insert_failure_raises_invalid_input(self, handler, mock_datasource_repo):
        mock_datasource_repo.insert.side_effect = Exception()

        with pytest.raises(InvalidInputException) as exc_info:
            await handler.upload_csv(_artifact())

        assert exc_info.value == InvalidInputException("Error while uploading csv file data")
        assert isinstance(exc_info.value.__cause__, Exception)

    @pytest.mark.asyncio
    async def test_data_insert_failure_deletes_metadata(self, handler, mock_metadata_repo, mock_datasource_repo):
        mock_metadata_repo.insert.return_value = "collectionId"
        mock_datasource_repo.insert.side_effect = RuntimeError("connection lost")

        with pytest.raises(InvalidInputException):
            await handler.upload_csv(_artifact())

        mock_metadata_repo.delete.assert_awaited_once_with("collectionId")

    @pytest.mark.asyncio
    async def test_rollback_failure_keeps_original_error(self, handler, mock_metadata_repo, mock_datasource_repo):
        mock_datasource_repo.insert.side_effect = RuntimeError("insert failed")
        mock_metadata_repo.delete.side_effect = RuntimeError("delete failed")

        with pytest.raises(InvalidInputException) as exc_info:
            await handler.upload_csv(_artifact())

        assert exc_info.value.message == UploadErrorMessages.UPLOAD_DATA_FAILED
        assert str(exc_info.value.__cause__) == "insert failed"
        mock_metadata_repo.delete.assert_awaited_once_with("collection")

    @pytest.mark.asyncio
    async def test_data_insert_timeout_rolls_back(self, handler, mock_metadata_repo, mock_datasource_repo):
        mock_datasource_repo.insert.side_effect = asyncio.TimeoutError()

        with pytest.raises(InvalidInputException):
            await handler.upload_csv(_artifact())

        mock_metadata_repo.delete.assert_awaited_once_with("collection")

    @pytest.mark.asyncio
    async def test_cancellation_is_not_compensated(self, handler, mock_metadata_repo, mock_datasource_repo):
        mock_datasource_repo.insert.side_effect = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await handler.upload_csv(_artifact())

        mock_metadata_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_metadata_insert_failure(self, handler, mock_metadata_repo, mock_datasource_repo):
        mock_metadata_repo.insert.side_effect = RuntimeError("metadata store down")

        with pytest.raises(InvalidInputException) as exc_info:
            await handler.upload_csv(_artifact())

        assert exc_info.value.message == UploadErrorMessages.UPLOAD_DATA_FAILED
        mock_datasource_repo.insert.assert_not_awaited()
        mock_metadata_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_file_too_large(self, handler, mock_metadata_repo, mock_datasource_repo, mock_file_store):
        with pytest.raises(InvalidInputException) as exc_info:
            await handler.upload_csv(_artifact(size=10485761))

        assert exc_info.value == InvalidInputException("File is too large")
        mock_file_store.read_bytes.assert_not_awaited()
        mock_metadata_repo.insert.assert_not_awaited()
        mock_datasource_repo.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_parse_error_propagates_unchanged(self, handler, mock_parser, mock_metadata_repo):
        mock_parser.parse_bytes.side_effect = InvalidInputException("CSV file is empty")

        with pytest.raises(InvalidInputException) as exc_info:
            await handler.upload_csv(_artifact())

        assert exc_info.value.message == "CSV file is empty"
        mock_metadata_repo.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unreadable_file(self, handler, mock_file_store, mock_metadata_repo):
        mock_file_store.read_bytes.side_effect = FileNotFoundError("/uploads/1223")

        with pytest.raises(InvalidInputException) as exc_info:
            await handler.upload_csv(_artifact())

        assert exc_info.value.message == UploadErrorMessages.FILE_UNREADABLE
        mock_metadata_repo.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upload_csv_does_not_remove_file(self, handler, mock_file_store):
        await handler.upload_csv(_artifact())

        mock_file_store.remove.assert_not_called()


class TestUploadedFileCleanup:
    """Test removal of temporary upload files."""

    @pytest.fixture
    def mock_file_store(self):
        store = Mock(spec=IUploadedFileStore)
        store.read_bytes = AsyncMock(return_value=b"a\n1\n")
        return store

    @pytest.fixture
    def mock_datasource_repo(self):
        return AsyncMock(spec=IDatasourceRepository)

    @pytest.fixture
    def handler(self, mock_file_store, mock_datasource_repo):
        metadata_repo = AsyncMock(spec=IDatasourceMetadataRepository)
        metadata_repo.insert.return_value = "collection"
        parser = Mock(spec=ICsvParser)
        parser.parse_bytes.return_value = ParsedCsv(schema={"a": ColumnType.NUMBER}, records=[{"a": 1}])
        return UploadDatasourceHandler(
            metadata_repo=metadata_repo,
            datasource_repo=mock_datasource_repo,
            parser=parser,
            file_store=mock_file_store,
            guard=UploadGuard()
        )

    def test_delete_uploaded_file_removes_existing_path(self, handler, mock_file_store):
        mock_file_store.exists.return_value = True

        handler.delete_uploaded_file("path")

        mock_file_store.remove.assert_called_once_with("path")

    def test_delete_uploaded_file_skips_missing_path(self, handler, mock_file_store):
        mock_file_store.exists.return_value = False

        handler.delete_uploaded_file("path")

        mock_file_store.remove.assert_not_called()

    @pytest.mark.asyncio
    async def test_ingest_cleans_up_after_success(self, handler, mock_file_store):
        mock_file_store.exists.return_value = True

        result = await handler.ingest(_artifact())

        assert result.collection_id == "collection"
        mock_file_store.remove.assert_called_once_with("/uploads/1223")

    @pytest.mark.asyncio
    async def test_ingest_cleans_up_after_failure(self, handler, mock_file_store, mock_datasource_repo):
        mock_file_store.exists.return_value = True
        mock_datasource_repo.insert.side_effect = RuntimeError()

        with pytest.raises(InvalidInputException):
            await handler.ingest(_artifact())

        mock_file_store.remove.assert_called_once_with("/uploads/1223")

    @pytest.mark.asyncio
    async def test_ingest_cleans_up_rejected_file(self, handler, mock_file_store):
        mock_file_store.exists.return_value = True

        with pytest.raises(InvalidInputException):
            await handler.ingest(_artifact(size=10485761))

        mock_file_store.remove.assert_called_once_with("/uploads/1223")

    @pytest.mark.asyncio
    async def test_cleanup_error_does_not_mask_result(self, handler, mock_file_store):
        mock_file_store.exists.return_value = True
        mock_file_store.remove.side_effect = PermissionError("read-only")

        result = await handler.handle(_artifact())

        assert result.collection_id == "collection"

    @pytest.mark.asyncio
    async def test_uploaded_artifact_context_cleans_up_on_error(self, handler, mock_file_store):
        mock_file_store.exists.return_value = True

        with pytest.raises(ValueError):
            async with handler.uploaded_artifact(_artifact()):
                raise ValueError("boom")

        mock_file_store.remove.assert_called_once_with("/uploads/1223")
