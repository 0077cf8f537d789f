"""Interfaces for external file access."""

from abc import ABC, abstractmethod


class IUploadedFileStore(ABC):
    """Access to uploaded files in temporary storage."""

    @abstractmethod
    async def read_bytes(self, path: str) -> bytes:
        """Read the full content of an uploaded file."""
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove the file or directory tree at path."""
        pass
