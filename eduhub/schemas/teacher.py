"""Teacher profile API schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from eduhub.domain.enums import Gender, RecordStatus


class ProfessionalDetails(BaseModel):
    """Professional section. experience_years is range-checked by the service."""

    qualification: str = Field(..., min_length=1, max_length=255)
    experience_years: int = 0
    designation: str = Field(..., min_length=1, max_length=255)
    bio: str | None = None
    languages: list[str] = Field(default_factory=list)


class ProfessionalUpdate(BaseModel):
    qualification: str | None = Field(default=None, min_length=1, max_length=255)
    experience_years: int | None = None
    designation: str | None = Field(default=None, min_length=1, max_length=255)
    bio: str | None = None
    languages: list[str] | None = None


class PersonalDetails(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    gender: Gender | None = None
    dob: date | None = None
    address: str | None = None


class TeacherCreateRequest(BaseModel):
    user_id: int = Field(..., gt=0)
    business_id: int = Field(..., gt=0)
    professional: ProfessionalDetails
    personal: PersonalDetails | None = None


class TeacherUpdateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    professional: ProfessionalUpdate | None = None
    personal: PersonalDetails | None = None
    status: RecordStatus | None = None
