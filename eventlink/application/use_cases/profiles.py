"""Use cases for freelancer and recruiter profiles."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from eventlink.domain.entities import (
    AVAILABILITY_STATUSES,
    FreelancerProfile,
    RecruiterProfile,
    User,
)
from eventlink.infrastructure.repositories import (
    FreelancerProfileRepository,
    RecruiterProfileRepository,
    UserRepository,
)

_FREELANCER_FIELDS = (
    "first_name",
    "last_name",
    "title",
    "bio",
    "location",
    "experience_years",
    "skills",
    "portfolio_url",
    "linkedin_url",
    "website_url",
    "availability_status",
)
_RECRUITER_FIELDS = (
    "company_name",
    "contact_name",
    "company_type",
    "location",
    "description",
    "website_url",
    "linkedin_url",
)

Profile = FreelancerProfile | RecruiterProfile


def get_profile(session: Session, user_id: int) -> tuple[User, Profile | None]:
    user = UserRepository(session).get(user_id)
    if user is None:
        raise LookupError("User not found")
    if user.is_freelancer():
        return user, FreelancerProfileRepository(session).get_by_user(user_id)
    if user.is_recruiter():
        return user, RecruiterProfileRepository(session).get_by_user(user_id)
    return user, None


def save_profile(session: Session, user: User, changes: dict[str, Any]) -> Profile:
    """Create or update the profile matching the caller's role."""

    if user.is_freelancer():
        return _save_freelancer_profile(session, user, changes)
    if user.is_recruiter():
        return _save_recruiter_profile(session, user, changes)
    raise PermissionError("Only freelancers and recruiters have profiles")


def _save_freelancer_profile(
    session: Session, user: User, changes: dict[str, Any]
) -> FreelancerProfile:
    repository = FreelancerProfileRepository(session)
    profile = repository.get_by_user(user.id) or FreelancerProfile(
        id=None,
        user_id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
    )
    for field_name in _FREELANCER_FIELDS:
        if field_name in changes:
            setattr(profile, field_name, changes[field_name])

    if not (profile.first_name or "").strip() or not (profile.last_name or "").strip():
        raise ValueError("First and last name are required")
    if profile.availability_status not in AVAILABILITY_STATUSES:
        raise ValueError("Invalid availability status")
    if profile.experience_years is not None and profile.experience_years < 0:
        raise ValueError("Experience years cannot be negative")
    profile.skills = [skill.strip() for skill in profile.skills or [] if skill.strip()]
    return repository.upsert(profile)


def _save_recruiter_profile(
    session: Session, user: User, changes: dict[str, Any]
) -> RecruiterProfile:
    repository = RecruiterProfileRepository(session)
    profile = repository.get_by_user(user.id) or RecruiterProfile(
        id=None, user_id=user.id, company_name=""
    )
    for field_name in _RECRUITER_FIELDS:
        if field_name in changes:
            setattr(profile, field_name, changes[field_name])

    if not (profile.company_name or "").strip():
        raise ValueError("Company name is required")
    return repository.upsert(profile)


def search_freelancers(
    session: Session,
    *,
    skill: str | None = None,
    location: str | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[FreelancerProfile]:
    return FreelancerProfileRepository(session).search(
        skill=skill, location=location, skip=skip, limit=limit
    )


__all__ = ["get_profile", "save_profile", "search_freelancers"]
