"""Profile schemas for both marketplace roles."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .user import UserRead


class FreelancerProfileRead(BaseModel):
    id: int
    user_id: int
    first_name: str
    last_name: str
    title: str | None = None
    bio: str | None = None
    location: str | None = None
    experience_years: int | None = None
    skills: list[str] = []
    portfolio_url: str | None = None
    linkedin_url: str | None = None
    website_url: str | None = None
    availability_status: str
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RecruiterProfileRead(BaseModel):
    id: int
    user_id: int
    company_name: str
    contact_name: str | None = None
    company_type: str | None = None
    location: str | None = None
    description: str | None = None
    website_url: str | None = None
    linkedin_url: str | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileRead(BaseModel):
    user: UserRead
    profile: FreelancerProfileRead | RecruiterProfileRead | None = None


class ProfileUpdate(BaseModel):
    """Fields accepted for either role; the caller's role decides which apply."""

    first_name: str | None = None
    last_name: str | None = None
    title: str | None = None
    bio: str | None = None
    location: str | None = None
    experience_years: int | None = None
    skills: list[str] | None = None
    portfolio_url: str | None = None
    linkedin_url: str | None = None
    website_url: str | None = None
    availability_status: str | None = None
    company_name: str | None = None
    contact_name: str | None = None
    company_type: str | None = None
    description: str | None = None
