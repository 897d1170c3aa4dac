"""Upload rules per content type: extensions, MIME types, allow-list and size limits."""

from dataclasses import dataclass
from pathlib import PurePath

from eduhub.core.config import Settings
from eduhub.domain.enums import ContentType
from eduhub.domain.exceptions import ValidationException

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class FileTypeRule:
    """Accepted extensions (with dot) and their MIME types for one ContentType."""

    extensions: dict[str, str]
    max_size_bytes: int
    allowed: bool

    def mime_type(self, extension: str) -> str:
        return self.extensions.get(extension.lower(), DEFAULT_MIME_TYPE)


def build_file_rules(settings: Settings) -> dict[ContentType, FileTypeRule]:
    """Rules derived from ALLOWED_FILE_TYPES and MAX_*_SIZE_MB.

    IMAGE is allowed when at least one image format is in the allow-list.
    """
    formats = set(settings.allowed_file_formats)
    images = {".jpg": "image/jpeg", ".jpeg": "image/jpeg", ".png": "image/png"}
    return {
        ContentType.PDF: FileTypeRule(
            extensions={".pdf": "application/pdf"},
            max_size_bytes=settings.max_pdf_size_bytes,
            allowed="pdf" in formats,
        ),
        ContentType.IMAGE: FileTypeRule(
            extensions=images,
            max_size_bytes=settings.max_image_size_bytes,
            allowed=bool(formats & {ext.lstrip(".") for ext in images}),
        ),
    }


def file_extension(filename: str | None) -> str:
    return PurePath(filename or "").suffix.lower()


def validate_upload(
    rules: dict[ContentType, FileTypeRule],
    content_type: ContentType,
    filename: str | None,
    size: int,
) -> str:
    """Check an upload against its type's rule; return the lower-cased extension.

    Raises:
        ValidationException: No file, type not allowed, extension mismatch or too large.
    """
    if not filename:
        raise ValidationException("No file uploaded", field="file")
    rule = rules[content_type]
    if not rule.allowed:
        raise ValidationException("File type is not allowed", field="type")
    extension = file_extension(filename)
    if extension not in rule.extensions:
        raise ValidationException("File extension does not match content type", field="file")
    if size > rule.max_size_bytes:
        raise ValidationException("File size exceeds allowed limit", field="file")
    return extension


def mime_type_for(
    rules: dict[ContentType, FileTypeRule], content_type: str, filename: str
) -> str:
    """MIME type for a stored file; application/octet-stream when unknown."""
    try:
        rule = rules[ContentType(content_type)]
    except ValueError:
        return DEFAULT_MIME_TYPE
    return rule.mime_type(file_extension(filename))
