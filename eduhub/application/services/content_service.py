"""Content application service: uploads stored on disk plus their metadata rows."""

from __future__ import annotations

import logging
import secrets
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

from eduhub.application.interfaces.services import IFileStorage
from eduhub.application.services.file_rules import (
    FileTypeRule,
    file_extension,
    mime_type_for,
    validate_upload,
)
from eduhub.application.services.validation import validate_max_length, validate_required
from eduhub.domain.enums import ContentType, RecordStatus
from eduhub.domain.exceptions import ResourceNotFoundException
from eduhub.domain.value_objects import Principal, QueryOptions
from eduhub.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentFile:
    """A stored file ready to stream: download name, MIME type and chunk iterator."""

    filename: str
    media_type: str
    chunks: AsyncIterator[bytes]


class ContentService:
    def __init__(
        self,
        content_repo: Any,
        storage: IFileStorage,
        file_rules: dict[ContentType, FileTypeRule],
    ) -> None:
        self._contents = content_repo
        self._storage = storage
        self._rules = file_rules

    @staticmethod
    def _stored_name(batch_id: int, extension: str) -> str:
        stamp = utc_now().strftime("%Y%m%d%H%M%S")
        return f"batch-{batch_id}/file-{stamp}-{secrets.token_hex(8)}{extension}"

    def check_upload(
        self, content_type: ContentType, filename: str | None, size: int | None
    ) -> None:
        """Reject an upload from its declared size, before the body is read."""
        validate_upload(self._rules, content_type, filename, size or 0)

    async def create(
        self,
        principal: Principal,
        batch_id: int,
        *,
        title: str,
        content_type: ContentType,
        filename: str | None,
        data: bytes,
        status: RecordStatus = RecordStatus.ACTIVE,
    ) -> Any:
        """Validate and store the upload, then insert the row.

        The stored file is removed again when the insert fails.
        """
        validate_required(title and title.strip(), "title")
        validate_max_length(title, 255, "title")
        extension = validate_upload(self._rules, content_type, filename, len(data))
        stored_path = await self._storage.save(data, self._stored_name(batch_id, extension))
        try:
            content = await self._contents.create(
                self._contents.model(
                    batch_id=batch_id,
                    title=title.strip(),
                    type=content_type.value,
                    file_path=stored_path,
                    file_size=len(data),
                    status=status.value,
                    uploaded_by=principal.id,
                )
            )
        except Exception:
            await self._storage.delete(stored_path)
            raise
        logger.info("Content created: id=%s batch=%s size=%s", content.id, batch_id, len(data))
        return content

    async def get(self, content_id: int, options: QueryOptions | None = None) -> Any:
        content = await self._contents.find_one(
            (options or QueryOptions()).with_where(id=content_id)
        )
        if content is None:
            raise ResourceNotFoundException("Content", content_id)
        return content

    async def list_for_batch(
        self,
        batch_id: int,
        options: QueryOptions,
        content_type: ContentType | None = None,
        status: RecordStatus | None = None,
        search: str | None = None,
    ) -> list[Any]:
        """Contents of a batch filtered by type, status and case-insensitive title search."""
        opts = options.with_where(batch_id=batch_id)
        if content_type is not None:
            opts = opts.with_where(type=content_type.value)
        if status is not None:
            opts = opts.with_where(status=status.value)
        if search:
            opts = opts.with_where(search=self._contents.title_contains(search))
        return await self._contents.find_many(opts)

    async def open_file(self, content_id: int) -> ContentFile:
        """Return the stored file of a content row.

        Raises:
            ResourceNotFoundException: no such row, or its file is missing on disk.
        """
        content = await self.get(content_id)
        if not await self._storage.exists(content.file_path):
            raise ResourceNotFoundException("Content", content_id, message="File not found on server")
        extension = file_extension(content.file_path)
        return ContentFile(
            filename=f"{content.title}{extension}",
            media_type=mime_type_for(self._rules, content.type, content.file_path),
            chunks=self._storage.stream(content.file_path),
        )

    async def update(
        self,
        principal: Principal,
        content_id: int,
        title: str | None = None,
        status: RecordStatus | None = None,
    ) -> Any:
        content = await self.get(content_id)
        updated = await self._contents.update(
            content,
            title=title,
            status=status.value if status is not None else None,
            updated_by=principal.id,
        )
        logger.info("Content updated: id=%s by %s", content_id, principal.id)
        return updated

    async def delete(self, content_id: int) -> None:
        """Delete the row, then the stored file (a missing file is only logged)."""
        content = await self.get(content_id)
        await self._contents.delete(content)
        if not await self._storage.delete(content.file_path):
            logger.warning("Stored file already missing: %s", content.file_path)
        logger.info("Content deleted: id=%s", content_id)
