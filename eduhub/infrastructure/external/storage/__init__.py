"""File storage backends. Only the local filesystem backend is provided."""

from eduhub.infrastructure.external.storage.local_storage import LocalStorageService

__all__ = ["LocalStorageService"]
