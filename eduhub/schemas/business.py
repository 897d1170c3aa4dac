"""Business API schemas."""

from pydantic import BaseModel, EmailStr, Field, field_validator


def _normalize_slug(value: str) -> str:
    """Lowercase, no spaces, join with '-' (e.g. 'Bright Minds' -> 'bright-minds')."""
    return "-".join(value.strip().lower().split())


class BusinessCreateRequest(BaseModel):
    """Request body for creating a business. The caller becomes attached to it."""

    institute_name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(
        ...,
        min_length=1,
        max_length=255,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Unique slug (normalized to lowercase, hyphen-separated)",
    )
    logo_url: str | None = None
    contact_number: str | None = Field(default=None, max_length=32)
    email: EmailStr | None = None
    tagline: str | None = Field(default=None, max_length=255)
    address: str | None = None
    website_url: str | None = None
    facebook_url: str | None = None
    instagram_url: str | None = None
    youtube_url: str | None = None

    @field_validator("slug", mode="before")
    @classmethod
    def normalize_slug(cls, v: str) -> str:
        return _normalize_slug(v) if isinstance(v, str) else v


class BusinessUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    institute_name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(
        default=None, min_length=1, max_length=255, pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$"
    )
    logo_url: str | None = None
    contact_number: str | None = Field(default=None, max_length=32)
    email: EmailStr | None = None
    tagline: str | None = Field(default=None, max_length=255)
    address: str | None = None
    website_url: str | None = None
    facebook_url: str | None = None
    instagram_url: str | None = None
    youtube_url: str | None = None

    @field_validator("slug", mode="before")
    @classmethod
    def normalize_slug(cls, v: str | None) -> str | None:
        return _normalize_slug(v) if isinstance(v, str) else v
