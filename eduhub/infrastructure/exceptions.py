"""Infrastructure exceptions for file storage.

Storage errors extend EduHubException so the exception handlers map them
to HTTP responses like any domain error.
"""

from eduhub.domain.exceptions import EduHubException


class StorageException(EduHubException):
    """Base exception for storage operations."""


class StorageNotFoundError(StorageException):
    """Stored file missing on disk."""

    def __init__(self, file_path: str) -> None:
        super().__init__(
            "File not found on server",
            "STORAGE_NOT_FOUND",
            {"file_path": file_path},
        )


class StorageUploadError(StorageException):
    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to store file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDeleteError(StorageException):
    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Path escapes the storage root."""

    def __init__(self, file_path: str) -> None:
        super().__init__(
            f"Invalid storage path: {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path},
        )
