"""Content API schemas (uploads are multipart form fields, see endpoints.contents)."""

from pydantic import BaseModel, Field

from eduhub.domain.enums import RecordStatus


class ContentUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    status: RecordStatus | None = None
