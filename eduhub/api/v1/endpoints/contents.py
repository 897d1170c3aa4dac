"""Content API: uploads to a batch, metadata and file download."""

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Path, Request, UploadFile
from fastapi.responses import StreamingResponse

from eduhub.api.v1.dependencies import (
    CurrentPrincipal,
    get_content_query_service,
    get_content_service,
    get_query_options,
    require_access,
    require_roles,
)
from eduhub.application.services.content_service import ContentService
from eduhub.core.limiter import limit_upload, limit_writes
from eduhub.domain.enums import ContentType, EntityKind, RecordStatus, UserRole
from eduhub.domain.value_objects import QueryOptions
from eduhub.infrastructure.persistence.query import serialize, serialize_many
from eduhub.schemas.content import ContentUpdateRequest

router = APIRouter()

BatchId = Annotated[int, Path(gt=0)]
ContentId = Annotated[int, Path(gt=0)]
Options = Annotated[QueryOptions, Depends(get_query_options)]
Contents = Annotated[ContentService, Depends(get_content_service)]
ContentQueries = Annotated[ContentService, Depends(get_content_query_service)]
_batch_access = Depends(require_access(EntityKind.BATCH, "batch_id"))
_content_access = Depends(require_access(EntityKind.CONTENT, "content_id"))
_staff = Depends(require_roles(UserRole.ADMIN, UserRole.TEACHER))


def _attachment(filename: str) -> str:
    """Content-Disposition value safe for non-ASCII titles (RFC 5987)."""
    return f"attachment; filename*=UTF-8''{quote(filename)}"


@router.post(
    "/batches/{batch_id}/contents", status_code=201, dependencies=[_staff, _batch_access]
)
@limit_upload
async def upload_content(
    request: Request,
    batch_id: BatchId,
    principal: CurrentPrincipal,
    service: Contents,
    title: Annotated[str, Form(min_length=1, max_length=255)],
    type: Annotated[ContentType, Form()],
    file: UploadFile = File(...),
    status: Annotated[RecordStatus, Form()] = RecordStatus.ACTIVE,
):
    """Upload a PDF or image to the batch (multipart: file, title, type, status)."""
    service.check_upload(type, file.filename, file.size)
    data = await file.read()
    content = await service.create(
        principal,
        batch_id,
        title=title,
        content_type=type,
        filename=file.filename,
        data=data,
        status=status,
    )
    return serialize(content)


@router.get("/batches/{batch_id}/contents", dependencies=[_batch_access])
async def list_batch_contents(
    batch_id: BatchId,
    options: Options,
    service: ContentQueries,
    type: ContentType | None = None,
    status: RecordStatus | None = None,
    search: str | None = None,
):
    """Contents of the batch; search matches the title case-insensitively."""
    contents = await service.list_for_batch(
        batch_id, options, content_type=type, status=status, search=search
    )
    return serialize_many(contents, options)


@router.get("/contents/{content_id}", dependencies=[_content_access])
async def get_content(content_id: ContentId, options: Options, service: ContentQueries):
    return serialize(await service.get(content_id, options), options)


@router.get("/contents/{content_id}/file", dependencies=[_content_access])
async def download_content_file(content_id: ContentId, service: ContentQueries):
    """Stream the stored file with its MIME type and a <title><ext> download name."""
    stored = await service.open_file(content_id)
    return StreamingResponse(
        stored.chunks,
        media_type=stored.media_type,
        headers={"Content-Disposition": _attachment(stored.filename)},
    )


@router.put("/contents/{content_id}", dependencies=[_staff, _content_access])
@limit_writes
async def update_content(
    request: Request,
    content_id: ContentId,
    body: ContentUpdateRequest,
    principal: CurrentPrincipal,
    service: Contents,
):
    updated = await service.update(principal, content_id, title=body.title, status=body.status)
    return serialize(updated)


@router.delete("/contents/{content_id}", status_code=204, dependencies=[_staff, _content_access])
async def delete_content(content_id: ContentId, service: Contents) -> None:
    """Delete the row and its stored file."""
    await service.delete(content_id)
