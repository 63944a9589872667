"""Domain entity describing a freelancer's saved job alert."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from .job import Job


@dataclass
class JobAlertFilter:
    """Criteria used to decide whether a new job should alert a freelancer.

    Every populated criterion must pass; inside a criterion any single value
    matching is enough.
    """

    id: int | None
    user_id: int
    skills: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    job_types: list[str] = field(default_factory=list)
    date_from: date | None = None
    date_to: date | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def matches(self, job: Job) -> bool:
        if not self.is_active:
            return False

        if self.skills:
            job_skills = [skill.lower() for skill in job.skills]
            if not any(
                _overlaps(wanted.lower(), offered)
                for wanted in self.skills
                for offered in job_skills
            ):
                return False

        if self.locations:
            job_location = (job.location or "").lower()
            if not any(_overlaps(wanted.lower(), job_location) for wanted in self.locations):
                return False

        if self.keywords:
            haystack = f"{job.title} {job.description}".lower()
            if not any(keyword.lower() in haystack for keyword in self.keywords):
                return False

        if self.job_types:
            if (job.type or "").lower() not in {kind.lower() for kind in self.job_types}:
                return False

        if self.date_from or self.date_to:
            if job.event_date is None:
                return False
            if self.date_from and job.event_date < self.date_from:
                return False
            if self.date_to and job.event_date > self.date_to:
                return False

        return True


def _overlaps(left: str, right: str) -> bool:
    if not left or not right:
        return False
    return left in right or right in left


__all__ = ["JobAlertFilter"]
