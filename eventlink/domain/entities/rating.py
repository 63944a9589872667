"""Domain entities for freelancer ratings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

RATING_REQUEST_PENDING = "pending"
RATING_REQUEST_COMPLETED = "completed"
RATING_REQUEST_DECLINED = "declined"


@dataclass
class Rating:
    id: int | None
    job_application_id: int
    recruiter_id: int
    freelancer_id: int
    rating: int
    created_at: datetime | None = None


@dataclass
class RatingRequest:
    """A freelancer asking the recruiter of a finished gig for a rating."""

    id: int | None
    job_application_id: int
    freelancer_id: int
    recruiter_id: int
    status: str = RATING_REQUEST_PENDING
    requested_at: datetime | None = None
    responded_at: datetime | None = None


__all__ = [
    "RATING_REQUEST_COMPLETED",
    "RATING_REQUEST_DECLINED",
    "RATING_REQUEST_PENDING",
    "Rating",
    "RatingRequest",
]
