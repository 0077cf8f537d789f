"""Service interfaces for domain services."""

from abc import ABC, abstractmethod

from ..models import ParsedCsv, UploadedArtifact


class ICsvParser(ABC):
    """Turns raw CSV text into an inferred schema and typed records."""

    @abstractmethod
    def parse(self, raw_content: str) -> ParsedCsv:
        """Parse CSV text.

        Raises:
            InvalidInputException: If the content is malformed or a value
                cannot be converted to its column type.
        """
        pass

    @abstractmethod
    def parse_bytes(self, content: bytes) -> ParsedCsv:
        """Decode raw file content and parse it."""
        pass


class IUploadGuard(ABC):
    """Checks an uploaded artifact before anything is read or stored."""

    @abstractmethod
    def validate(self, artifact: UploadedArtifact) -> None:
        pass
