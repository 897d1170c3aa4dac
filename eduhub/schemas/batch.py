"""Batch and batch membership API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class BatchCreateRequest(BaseModel):
    code_name: str = Field(..., min_length=1, max_length=64)
    display_name: str = Field(..., min_length=1, max_length=255)
    start_date: datetime
    end_date: datetime
    course_id: int = Field(..., gt=0)
    is_active: bool = True

    @model_validator(mode="after")
    def end_after_start(self) -> "BatchCreateRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class BatchUpdateRequest(BaseModel):
    code_name: str | None = Field(default=None, min_length=1, max_length=64)
    display_name: str | None = Field(default=None, min_length=1, max_length=255)
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_active: bool | None = None


class BatchMemberRequest(BaseModel):
    """Body for /batches/add-user and /batches/remove-user."""

    user_id: int = Field(..., gt=0)
    batch_id: int = Field(..., gt=0)


class BatchMemberUpdateRequest(BaseModel):
    is_active: bool
