"""Domain entities describing public freelancer and recruiter profiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

AVAILABILITY_STATUSES = ("available", "busy", "unavailable")


@dataclass
class FreelancerProfile:
    """Crew member profile shown to recruiters."""

    id: int | None
    user_id: int
    first_name: str
    last_name: str
    title: str | None = None
    bio: str | None = None
    location: str | None = None
    experience_years: int | None = None
    skills: list[str] = field(default_factory=list)
    portfolio_url: str | None = None
    linkedin_url: str | None = None
    website_url: str | None = None
    availability_status: str = "available"
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class RecruiterProfile:
    """Company profile attached to a recruiter account."""

    id: int | None
    user_id: int
    company_name: str
    contact_name: str | None = None
    company_type: str | None = None
    location: str | None = None
    description: str | None = None
    website_url: str | None = None
    linkedin_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["AVAILABILITY_STATUSES", "FreelancerProfile", "RecruiterProfile"]
