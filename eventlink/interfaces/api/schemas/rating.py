"""Rating schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RatingCreate(BaseModel):
    job_application_id: int
    rating: int


class RatingRead(BaseModel):
    id: int
    job_application_id: int
    recruiter_id: int
    freelancer_id: int
    rating: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AverageRatingRead(BaseModel):
    freelancer_id: int
    average: float | None = None
    count: int


class RatingRequestCreate(BaseModel):
    job_application_id: int


class RatingRequestRead(BaseModel):
    id: int
    job_application_id: int
    freelancer_id: int
    recruiter_id: int
    status: str
    requested_at: datetime | None = None
    responded_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
