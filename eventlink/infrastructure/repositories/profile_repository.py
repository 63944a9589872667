"""Persistence helpers for freelancer and recruiter profiles."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from eventlink.domain.entities import FreelancerProfile, RecruiterProfile
from eventlink.infrastructure.models import (
    FreelancerProfileModel,
    RecruiterProfileModel,
    UserModel,
)


class FreelancerProfileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_user(self, user_id: int) -> FreelancerProfile | None:
        model = (
            self.session.query(FreelancerProfileModel)
            .filter(FreelancerProfileModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def search(
        self,
        *,
        skill: str | None = None,
        location: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> Sequence[FreelancerProfile]:
        query = (
            self.session.query(FreelancerProfileModel)
            .join(UserModel, UserModel.id == FreelancerProfileModel.user_id)
            .filter(UserModel.deleted_at.is_(None))
        )
        if location:
            query = query.filter(
                func.lower(FreelancerProfileModel.location).contains(location.lower())
            )
        query = query.order_by(FreelancerProfileModel.updated_at.desc(), FreelancerProfileModel.id)
        profiles = [self._to_entity(model) for model in query.all()]
        # Skills live in a JSON column, so the match runs in Python.
        if skill:
            needle = skill.lower()
            profiles = [
                profile
                for profile in profiles
                if any(needle in candidate.lower() for candidate in profile.skills)
            ]
        return profiles[skip : skip + limit]

    def upsert(self, profile: FreelancerProfile) -> FreelancerProfile:
        model = (
            self.session.query(FreelancerProfileModel)
            .filter(FreelancerProfileModel.user_id == profile.user_id)
            .first()
        )
        if model is None:
            model = FreelancerProfileModel(user_id=profile.user_id)
        model.first_name = profile.first_name
        model.last_name = profile.last_name
        model.title = profile.title
        model.bio = profile.bio
        model.location = profile.location
        model.experience_years = profile.experience_years
        model.skills = list(profile.skills or [])
        model.portfolio_url = profile.portfolio_url
        model.linkedin_url = profile.linkedin_url
        model.website_url = profile.website_url
        model.availability_status = profile.availability_status
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: FreelancerProfileModel) -> FreelancerProfile:
        return FreelancerProfile(
            id=model.id,
            user_id=model.user_id,
            first_name=model.first_name,
            last_name=model.last_name,
            title=model.title,
            bio=model.bio,
            location=model.location,
            experience_years=model.experience_years,
            skills=list(model.skills or []),
            portfolio_url=model.portfolio_url,
            linkedin_url=model.linkedin_url,
            website_url=model.website_url,
            availability_status=model.availability_status,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class RecruiterProfileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_user(self, user_id: int) -> RecruiterProfile | None:
        model = (
            self.session.query(RecruiterProfileModel)
            .filter(RecruiterProfileModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def upsert(self, profile: RecruiterProfile) -> RecruiterProfile:
        model = (
            self.session.query(RecruiterProfileModel)
            .filter(RecruiterProfileModel.user_id == profile.user_id)
            .first()
        )
        if model is None:
            model = RecruiterProfileModel(user_id=profile.user_id)
        model.company_name = profile.company_name
        model.contact_name = profile.contact_name
        model.company_type = profile.company_type
        model.location = profile.location
        model.description = profile.description
        model.website_url = profile.website_url
        model.linkedin_url = profile.linkedin_url
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: RecruiterProfileModel) -> RecruiterProfile:
        return RecruiterProfile(
            id=model.id,
            user_id=model.user_id,
            company_name=model.company_name,
            contact_name=model.contact_name,
            company_type=model.company_type,
            location=model.location,
            description=model.description,
            website_url=model.website_url,
            linkedin_url=model.linkedin_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["FreelancerProfileRepository", "RecruiterProfileRepository"]
