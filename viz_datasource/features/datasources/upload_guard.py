"""Size and content-type checks for uploaded artifacts."""

from typing import Iterable, Optional

from viz_datasource.core.abstractions.services import IUploadGuard
from viz_datasource.core.constants import (
    DEFAULT_ALLOWED_MIME_TYPES,
    MAX_UPLOAD_SIZE_BYTES,
    UploadErrorMessages,
)
from viz_datasource.core.domain_exceptions import InvalidInputException
from viz_datasource.core.models import UploadedArtifact


class UploadGuard(IUploadGuard):
    """Rejects artifacts before any file read or store write happens."""

    def __init__(
        self,
        max_size_bytes: int = MAX_UPLOAD_SIZE_BYTES,
        enforce_mime_type: bool = False,
        allowed_mime_types: Optional[Iterable[str]] = None
    ):
        self._max_size_bytes = max_size_bytes
        self._enforce_mime_type = enforce_mime_type
        self._allowed_mime_types = {
            mime.lower() for mime in (allowed_mime_types or DEFAULT_ALLOWED_MIME_TYPES)
        }

    @classmethod
    def from_settings(cls, settings) -> "UploadGuard":
        return cls(
            max_size_bytes=settings.max_upload_size,
            enforce_mime_type=settings.enforce_mime_type,
            allowed_mime_types=settings.allowed_mime_types
        )

    def validate(self, artifact: UploadedArtifact) -> None:
        """
        Validate an uploaded artifact.

        Raises:
            InvalidInputException: If the artifact is larger than the limit, or
                its declared type is not allowed while type checks are enabled
        """
        if artifact.size_in_bytes > self._max_size_bytes:
            raise InvalidInputException(
                UploadErrorMessages.FILE_TOO_LARGE,
                details={"max_size_bytes": self._max_size_bytes}
            )

        if self._enforce_mime_type:
            mime_type = (artifact.declared_mime_type or "").split(";")[0].strip().lower()
            if mime_type not in self._allowed_mime_types:
                raise InvalidInputException(
                    UploadErrorMessages.UNSUPPORTED_FILE_TYPE,
                    details={"mime_type": artifact.declared_mime_type}
                )
