"""Persistence helpers for job postings."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from eventlink.domain.entities import Job
from eventlink.infrastructure.models import (
    JobApplicationModel,
    JobModel,
    RatingModel,
    RatingRequestModel,
)
from eventlink.utils import now_in_app_naive_datetime


class JobRepository:
    """Provide CRUD operations for :class:`Job` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        status: str | None = None,
        keyword: str | None = None,
        location: str | None = None,
        recruiter_id: int | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> Sequence[Job]:
        query = self.session.query(JobModel)
        if status:
            query = query.filter(JobModel.status == status)
        if recruiter_id is not None:
            query = query.filter(JobModel.recruiter_id == recruiter_id)
        if location:
            query = query.filter(func.lower(JobModel.location).contains(location.lower()))
        if keyword:
            needle = keyword.lower()
            query = query.filter(
                or_(
                    func.lower(JobModel.title).contains(needle),
                    func.lower(JobModel.description).contains(needle),
                    func.lower(JobModel.company).contains(needle),
                )
            )
        query = query.order_by(JobModel.created_at.desc(), JobModel.id.desc())
        return [self._to_entity(model) for model in query.offset(skip).limit(limit).all()]

    def get(self, job_id: int) -> Job | None:
        model = self.session.get(JobModel, job_id)
        return self._to_entity(model) if model else None

    def count_by_status(self) -> dict[str, int]:
        rows = (
            self.session.query(JobModel.status, func.count(JobModel.id))
            .group_by(JobModel.status)
            .all()
        )
        return {status: count for status, count in rows}

    def create(self, job: Job) -> Job:
        model = JobModel()
        self._apply_entity_to_model(model, job)
        model.created_at = job.created_at or now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, job: Job) -> Job:
        model = self.session.get(JobModel, job.id)
        if model is None:
            msg = f"Job with id {job.id} not found"
            raise LookupError(msg)
        self._apply_entity_to_model(model, job)
        model.updated_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, job_id: int) -> None:
        model = self.session.get(JobModel, job_id)
        if model is None:
            msg = f"Job with id {job_id} not found"
            raise LookupError(msg)
        application_ids = [
            application_id
            for (application_id,) in self.session.query(JobApplicationModel.id)
            .filter(JobApplicationModel.job_id == job_id)
            .all()
        ]
        if application_ids:
            for dependant in (RatingModel, RatingRequestModel):
                self.session.query(dependant).filter(
                    dependant.job_application_id.in_(application_ids)
                ).delete(synchronize_session=False)
            self.session.query(JobApplicationModel).filter(
                JobApplicationModel.id.in_(application_ids)
            ).delete(synchronize_session=False)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _apply_entity_to_model(model: JobModel, job: Job) -> None:
        model.recruiter_id = job.recruiter_id
        model.title = job.title
        model.company = job.company
        model.location = job.location
        model.type = job.type
        model.rate = job.rate
        model.description = job.description
        model.event_date = job.event_date
        model.skills = list(job.skills or [])
        model.status = job.status

    @staticmethod
    def _to_entity(model: JobModel) -> Job:
        return Job(
            id=model.id,
            recruiter_id=model.recruiter_id,
            title=model.title,
            company=model.company,
            location=model.location,
            type=model.type,
            rate=model.rate,
            description=model.description,
            event_date=model.event_date,
            skills=list(model.skills or []),
            status=model.status,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["JobRepository"]
