"""Local file system access to uploaded files."""

import os
import shutil

import aiofiles

from viz_datasource.core.abstractions.external import IUploadedFileStore


class LocalUploadedFileStore(IUploadedFileStore):
    """Local file system implementation of IUploadedFileStore."""

    async def read_bytes(self, path: str) -> bytes:
        """Read an uploaded file."""
        if not os.path.isfile(path):
            raise FileNotFoundError(f"File not found: {path}")

        async with aiofiles.open(path, 'rb') as f:
            return await f.read()

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def remove(self, path: str) -> None:
        """Remove a file, or a directory tree for multi-part upload folders."""
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
