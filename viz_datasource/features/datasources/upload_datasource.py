"""Datasource upload: validate, parse, then write metadata and records.

Metadata and records live in independent stores, so the upload runs as a
two-step saga. If the record insert fails after the metadata row exists, the
metadata row is deleted again before the failure is reported.

States of one upload::

    VALIDATING -> PARSING -> METADATA_INSERTED -> DATA_INSERTED
         |           |               |
         +-----------+--> FAILED <---+-- ROLLING_BACK
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

from viz_datasource.core.abstractions import (
    ICsvParser,
    IDatasourceMetadataRepository,
    IDatasourceRepository,
    IUploadedFileStore,
    IUploadGuard,
)
from viz_datasource.core.constants import UploadErrorMessages, UploadState
from viz_datasource.core.domain_exceptions import InvalidInputException
from viz_datasource.core.models import ParsedCsv, UploadAttempt, UploadedArtifact, UploadResult
from viz_datasource.features.base_handler import BaseHandler

logger = logging.getLogger(__name__)


class UploadDatasourceHandler(BaseHandler[UploadResult]):
    """Handler that ingests an uploaded CSV file as a new datasource"""

    def __init__(
        self,
        metadata_repo: IDatasourceMetadataRepository,
        datasource_repo: IDatasourceRepository,
        parser: ICsvParser,
        file_store: IUploadedFileStore,
        guard: IUploadGuard
    ):
        self._metadata_repo = metadata_repo
        self._datasource_repo = datasource_repo
        self._parser = parser
        self._file_store = file_store
        self._guard = guard

    async def handle(self, artifact: UploadedArtifact) -> UploadResult:
        """Ingest the artifact and always remove its temporary file."""
        return await self.ingest(artifact)

    async def ingest(self, artifact: UploadedArtifact) -> UploadResult:
        async with self.uploaded_artifact(artifact):
            return await self.upload_csv(artifact)

    async def upload_csv(self, artifact: UploadedArtifact) -> UploadResult:
        """
        Store an uploaded CSV file as a datasource.

        Steps:
        1. Validate size and type
        2. Read and parse the file
        3. Insert metadata {name, schema}, receiving the collection id
        4. Insert records under that id, deleting the metadata if this fails

        Returns:
            UploadResult carrying the collection id

        Raises:
            InvalidInputException: With the guard or parser reason for
                rejected files, or "Error while uploading csv file data" for
                any storage failure
        """
        attempt = UploadAttempt(artifact_name=artifact.original_name)
        try:
            self._transition(attempt, UploadState.VALIDATING)
            self._guard.validate(artifact)

            self._transition(attempt, UploadState.PARSING)
            parsed = await self._read_and_parse(artifact)
        except InvalidInputException:
            self._transition(attempt, UploadState.FAILED)
            raise

        collection_id = await self._insert_metadata(attempt, artifact.original_name, parsed)
        await self._insert_records(attempt, collection_id, parsed)

        logger.info(
            f"Uploaded datasource '{artifact.original_name}' as {collection_id} "
            f"({parsed.row_count} rows, {len(parsed.schema)} columns)"
        )
        return UploadResult(collection_id=collection_id)

    def delete_uploaded_file(self, path: str) -> None:
        """Remove the temporary upload at path; no-op if it is already gone."""
        if self._file_store.exists(path):
            self._file_store.remove(path)
            logger.debug(f"Removed uploaded file {path}")

    @asynccontextmanager
    async def uploaded_artifact(self, artifact: UploadedArtifact) -> AsyncIterator[UploadedArtifact]:
        """Yield the artifact and remove its temporary file on every exit path."""
        try:
            yield artifact
        finally:
            try:
                self.delete_uploaded_file(artifact.temporary_path)
            except OSError as e:
                logger.warning(f"Could not remove uploaded file {artifact.temporary_path}: {e}")

    async def _read_and_parse(self, artifact: UploadedArtifact) -> ParsedCsv:
        try:
            content = await self._file_store.read_bytes(artifact.temporary_path)
        except OSError as e:
            raise InvalidInputException(
                UploadErrorMessages.FILE_UNREADABLE,
                details={"file": artifact.original_name}
            ) from e
        return self._parser.parse_bytes(content)

    async def _insert_metadata(self, attempt: UploadAttempt, name: str, parsed: ParsedCsv) -> UUID:
        try:
            collection_id = await self._metadata_repo.insert(name, parsed.schema)
        except Exception as e:
            # No metadata row exists yet
            logger.error(f"Metadata insert failed for '{name}': {e}")
            self._transition(attempt, UploadState.FAILED)
            raise InvalidInputException(UploadErrorMessages.UPLOAD_DATA_FAILED) from e

        attempt.collection_id = collection_id
        self._transition(attempt, UploadState.METADATA_INSERTED)
        return collection_id

    async def _insert_records(self, attempt: UploadAttempt, collection_id: UUID, parsed: ParsedCsv) -> None:
        try:
            await self._datasource_repo.insert(collection_id, parsed.records)
        except Exception as e:
            logger.warning(f"Record insert failed for {collection_id}, rolling back metadata: {e}")
            self._transition(attempt, UploadState.ROLLING_BACK)
            await self._rollback_metadata(collection_id)
            self._transition(attempt, UploadState.FAILED)
            raise InvalidInputException(UploadErrorMessages.UPLOAD_DATA_FAILED) from e

        self._transition(attempt, UploadState.DATA_INSERTED)

    async def _rollback_metadata(self, collection_id: UUID) -> None:
        try:
            await self._metadata_repo.delete(collection_id)
        except Exception:
            logger.error(
                f"Rollback failed, metadata {collection_id} is orphaned",
                exc_info=True
            )

    @staticmethod
    def _transition(attempt: UploadAttempt, state: UploadState) -> None:
        attempt.history.append(state)
        attempt.state = state
        logger.debug(f"Upload '{attempt.artifact_name}' -> {state.value}")
        if state == UploadState.FAILED:
            path = " -> ".join(step.value for step in attempt.history)
            logger.info(f"Upload '{attempt.artifact_name}' failed: {path}")
