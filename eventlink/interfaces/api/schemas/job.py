"""Job posting and application schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class JobBase(BaseModel):
    title: str = Field(..., max_length=200)
    company: str = Field(..., max_length=200)
    location: str = Field(..., max_length=200)
    type: str
    rate: str = Field(..., max_length=100)
    description: str
    event_date: date | None = None
    skills: list[str] = []


class JobCreate(JobBase):
    status: str = "active"


class JobUpdate(BaseModel):
    title: str | None = Field(default=None, max_length=200)
    company: str | None = Field(default=None, max_length=200)
    location: str | None = Field(default=None, max_length=200)
    type: str | None = None
    rate: str | None = Field(default=None, max_length=100)
    description: str | None = None
    event_date: date | None = None
    skills: list[str] | None = None
    status: str | None = None

    model_config = ConfigDict(extra="forbid")


class JobRead(JobBase):
    id: int
    recruiter_id: int
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ApplicationCreate(BaseModel):
    cover_letter: str | None = None


class ApplicationRead(BaseModel):
    id: int
    job_id: int
    freelancer_id: int
    status: str
    cover_letter: str | None = None
    rejection_message: str | None = None
    applied_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ApplicationWithJobRead(ApplicationRead):
    job: JobRead | None = None


class ApplicationStatusUpdate(BaseModel):
    status: str
    rejection_message: str | None = None
