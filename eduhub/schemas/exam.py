"""Exam, course and subject API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from eduhub.domain.enums import RecordStatus


class _DateRange(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    start_date: datetime | None = None
    end_date: datetime | None = None

    @model_validator(mode="after")
    def end_after_start(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ExamCreateRequest(_DateRange):
    name: str = Field(..., min_length=1, max_length=255)
    business_id: int = Field(..., gt=0)
    code: str | None = Field(default=None, max_length=64)
    description: str | None = None
    status: RecordStatus = RecordStatus.ACTIVE


class ExamUpdateRequest(_DateRange):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    code: str | None = Field(default=None, max_length=64)
    description: str | None = None
    status: RecordStatus | None = None


class CourseCreateRequest(_DateRange):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    duration: str | None = Field(default=None, max_length=64)
    status: RecordStatus = RecordStatus.ACTIVE


class CourseUpdateRequest(_DateRange):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    duration: str | None = Field(default=None, max_length=64)
    status: RecordStatus | None = None


class SubjectCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: RecordStatus = RecordStatus.ACTIVE


class SubjectUpdateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: RecordStatus | None = None
