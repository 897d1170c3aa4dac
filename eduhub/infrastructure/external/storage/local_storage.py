"""Local filesystem storage for uploaded content (atomic writes, path validation)."""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path

import aiofiles
import aiofiles.os

from eduhub.infrastructure.exceptions import (
    StorageDeleteError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)


class LocalStorageService:
    """Stores files under storage_root and returns paths relative to it.

    Writes go to a temp file in the target directory and are renamed into
    place. Every path is resolved and must stay inside storage_root.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, storage_root: str) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, stored_path: str) -> Path:
        full_path = (self.storage_root / stored_path).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(stored_path) from e
        return full_path

    async def save(self, data: bytes, relative_name: str) -> str:
        """Write data atomically to storage_root/relative_name; return relative_name."""
        target_path = self._get_full_path(relative_name)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent, prefix=".tmp_", suffix=target_path.suffix
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except OSError as e:
            raise StorageUploadError(relative_name, str(e)) from e
        return relative_name

    async def delete(self, stored_path: str) -> bool:
        """Delete a stored file. Returns False if it did not exist."""
        file_path = self._get_full_path(stored_path)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(stored_path, str(e)) from e
        return True

    async def exists(self, stored_path: str) -> bool:
        return self._get_full_path(stored_path).is_file()

    async def stream(self, stored_path: str) -> AsyncIterator[bytes]:
        """Yield the file in CHUNK_SIZE chunks; StorageNotFoundError if missing."""
        file_path = self._get_full_path(stored_path)
        if not file_path.is_file():
            raise StorageNotFoundError(stored_path)
        async with aiofiles.open(file_path, "rb") as f:
            while True:
                chunk = await f.read(self.CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
