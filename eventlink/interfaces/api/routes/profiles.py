"""Routes for freelancer and recruiter profiles."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eventlink.application.use_cases.profiles import (
    get_profile as get_profile_uc,
    save_profile as save_profile_uc,
    search_freelancers as search_freelancers_uc,
)
from eventlink.domain.entities import FreelancerProfile, User
from eventlink.infrastructure.database import get_db
from eventlink.interfaces.api.dependencies import get_current_user
from eventlink.interfaces.api.routes_helpers import http_errors
from eventlink.interfaces.api.schemas import (
    FreelancerProfileRead,
    ProfileRead,
    ProfileUpdate,
    RecruiterProfileRead,
    UserRead,
)

router = APIRouter(tags=["profiles"])


def _profile_schema(profile):
    if profile is None:
        return None
    if isinstance(profile, FreelancerProfile):
        return FreelancerProfileRead.model_validate(profile)
    return RecruiterProfileRead.model_validate(profile)


def _read_profile(db: Session, user_id: int) -> ProfileRead:
    with http_errors():
        user, profile = get_profile_uc(db, user_id)
    return ProfileRead(user=UserRead.model_validate(user), profile=_profile_schema(profile))


@router.get("/profiles/me", response_model=ProfileRead)
def read_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProfileRead:
    return _read_profile(db, current_user.id)


@router.put("/profiles/me", response_model=ProfileRead)
def save_my_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProfileRead:
    """Create or update the profile that matches the caller's role."""

    with http_errors():
        profile = save_profile_uc(db, current_user, payload.model_dump(exclude_unset=True))
    return ProfileRead(user=UserRead.model_validate(current_user), profile=_profile_schema(profile))


@router.get("/profiles/{user_id}", response_model=ProfileRead)
def read_profile(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> ProfileRead:
    return _read_profile(db, user_id)


@router.get("/freelancers", response_model=list[FreelancerProfileRead])
def search_freelancers(
    skill: str | None = Query(default=None),
    location: str | None = Query(default=None),
    skip: int = 0,
    limit: int = 50,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[FreelancerProfileRead]:
    profiles = search_freelancers_uc(db, skill=skill, location=location, skip=skip, limit=limit)
    return [FreelancerProfileRead.model_validate(profile) for profile in profiles]
