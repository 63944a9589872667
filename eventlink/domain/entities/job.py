"""Domain entities for job postings and applications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

JOB_STATUS_ACTIVE = "active"
JOB_STATUS_PAUSED = "paused"
JOB_STATUS_CLOSED = "closed"
JOB_STATUSES = (JOB_STATUS_ACTIVE, JOB_STATUS_PAUSED, JOB_STATUS_CLOSED)

JOB_TYPES = ("full-time", "part-time", "contract", "temporary", "freelance")

APPLICATION_STATUS_APPLIED = "applied"
APPLICATION_STATUS_REVIEWED = "reviewed"
APPLICATION_STATUS_SHORTLISTED = "shortlisted"
APPLICATION_STATUS_REJECTED = "rejected"
APPLICATION_STATUS_HIRED = "hired"
APPLICATION_STATUSES = (
    APPLICATION_STATUS_APPLIED,
    APPLICATION_STATUS_REVIEWED,
    APPLICATION_STATUS_SHORTLISTED,
    APPLICATION_STATUS_REJECTED,
    APPLICATION_STATUS_HIRED,
)
# Applicants still in the running receive updates when the job changes.
ACTIVE_APPLICATION_STATUSES = (
    APPLICATION_STATUS_APPLIED,
    APPLICATION_STATUS_REVIEWED,
    APPLICATION_STATUS_SHORTLISTED,
)


@dataclass
class Job:
    """A gig posted by a recruiter."""

    id: int | None
    recruiter_id: int
    title: str
    company: str
    location: str
    type: str
    rate: str
    description: str
    event_date: date | None = None
    skills: list[str] = field(default_factory=list)
    status: str = JOB_STATUS_ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class JobApplication:
    """A freelancer's application to a job."""

    id: int | None
    job_id: int
    freelancer_id: int
    status: str = APPLICATION_STATUS_APPLIED
    cover_letter: str | None = None
    rejection_message: str | None = None
    freelancer_deleted: bool = False
    recruiter_deleted: bool = False
    applied_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "ACTIVE_APPLICATION_STATUSES",
    "APPLICATION_STATUSES",
    "APPLICATION_STATUS_APPLIED",
    "APPLICATION_STATUS_HIRED",
    "APPLICATION_STATUS_REJECTED",
    "APPLICATION_STATUS_REVIEWED",
    "APPLICATION_STATUS_SHORTLISTED",
    "JOB_STATUSES",
    "JOB_STATUS_ACTIVE",
    "JOB_STATUS_CLOSED",
    "JOB_STATUS_PAUSED",
    "JOB_TYPES",
    "Job",
    "JobApplication",
]
