"""Persistence helpers for job applications."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from eventlink.domain.entities import JobApplication
from eventlink.infrastructure.models import JobApplicationModel, JobModel
from eventlink.utils import now_in_app_naive_datetime


class JobApplicationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, application_id: int) -> JobApplication | None:
        model = self.session.get(JobApplicationModel, application_id)
        return self._to_entity(model) if model else None

    def get_by_job_and_freelancer(
        self, *, job_id: int, freelancer_id: int
    ) -> JobApplication | None:
        model = (
            self.session.query(JobApplicationModel)
            .filter(JobApplicationModel.job_id == job_id)
            .filter(JobApplicationModel.freelancer_id == freelancer_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_job(
        self, job_id: int, *, statuses: Iterable[str] | None = None
    ) -> Sequence[JobApplication]:
        query = self.session.query(JobApplicationModel).filter(
            JobApplicationModel.job_id == job_id
        )
        if statuses is not None:
            query = query.filter(JobApplicationModel.status.in_(list(statuses)))
        query = query.order_by(JobApplicationModel.applied_at.desc(), JobApplicationModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def list_for_freelancer(self, freelancer_id: int) -> Sequence[JobApplication]:
        query = (
            self.session.query(JobApplicationModel)
            .filter(JobApplicationModel.freelancer_id == freelancer_id)
            .filter(JobApplicationModel.freelancer_deleted.is_(False))
            .order_by(JobApplicationModel.applied_at.desc(), JobApplicationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_recruiter(self, recruiter_id: int) -> Sequence[JobApplication]:
        query = (
            self.session.query(JobApplicationModel)
            .join(JobModel, JobModel.id == JobApplicationModel.job_id)
            .filter(JobModel.recruiter_id == recruiter_id)
            .filter(JobApplicationModel.recruiter_deleted.is_(False))
            .order_by(JobApplicationModel.applied_at.desc(), JobApplicationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def count(self) -> int:
        return self.session.query(func.count(JobApplicationModel.id)).scalar() or 0

    def create(self, application: JobApplication) -> JobApplication:
        model = JobApplicationModel()
        self._apply_entity_to_model(model, application)
        model.applied_at = application.applied_at or now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, application: JobApplication) -> JobApplication:
        model = self.session.get(JobApplicationModel, application.id)
        if model is None:
            msg = f"Application with id {application.id} not found"
            raise LookupError(msg)
        self._apply_entity_to_model(model, application)
        model.updated_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: JobApplicationModel, application: JobApplication) -> None:
        model.job_id = application.job_id
        model.freelancer_id = application.freelancer_id
        model.status = application.status
        model.cover_letter = application.cover_letter
        model.rejection_message = application.rejection_message
        model.freelancer_deleted = application.freelancer_deleted
        model.recruiter_deleted = application.recruiter_deleted

    @staticmethod
    def _to_entity(model: JobApplicationModel) -> JobApplication:
        return JobApplication(
            id=model.id,
            job_id=model.job_id,
            freelancer_id=model.freelancer_id,
            status=model.status,
            cover_letter=model.cover_letter,
            rejection_message=model.rejection_message,
            freelancer_deleted=bool(model.freelancer_deleted),
            recruiter_deleted=bool(model.recruiter_deleted),
            applied_at=model.applied_at,
            updated_at=model.updated_at,
        )


__all__ = ["JobApplicationRepository"]
