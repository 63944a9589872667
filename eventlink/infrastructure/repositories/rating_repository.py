"""Persistence helpers for ratings and rating requests."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from eventlink.domain.entities import RATING_REQUEST_PENDING, Rating, RatingRequest
from eventlink.infrastructure.models import RatingModel, RatingRequestModel
from eventlink.utils import now_in_app_naive_datetime


class RatingRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_application(self, job_application_id: int) -> Rating | None:
        model = (
            self.session.query(RatingModel)
            .filter(RatingModel.job_application_id == job_application_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_freelancer(self, freelancer_id: int) -> Sequence[Rating]:
        query = (
            self.session.query(RatingModel)
            .filter(RatingModel.freelancer_id == freelancer_id)
            .order_by(RatingModel.created_at.desc(), RatingModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def average_for_freelancer(self, freelancer_id: int) -> tuple[float | None, int]:
        """Return ``(average, count)`` of the ratings received by ``freelancer_id``."""

        average, count = (
            self.session.query(func.avg(RatingModel.rating), func.count(RatingModel.id))
            .filter(RatingModel.freelancer_id == freelancer_id)
            .one()
        )
        if not count:
            return None, 0
        return round(float(average), 2), int(count)

    def create(self, rating: Rating) -> Rating:
        model = RatingModel(
            job_application_id=rating.job_application_id,
            recruiter_id=rating.recruiter_id,
            freelancer_id=rating.freelancer_id,
            rating=rating.rating,
            created_at=rating.created_at or now_in_app_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: RatingModel) -> Rating:
        return Rating(
            id=model.id,
            job_application_id=model.job_application_id,
            recruiter_id=model.recruiter_id,
            freelancer_id=model.freelancer_id,
            rating=model.rating,
            created_at=model.created_at,
        )


class RatingRequestRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, request_id: int) -> RatingRequest | None:
        model = self.session.get(RatingRequestModel, request_id)
        return self._to_entity(model) if model else None

    def get_pending_for_application(self, job_application_id: int) -> RatingRequest | None:
        model = (
            self.session.query(RatingRequestModel)
            .filter(RatingRequestModel.job_application_id == job_application_id)
            .filter(RatingRequestModel.status == RATING_REQUEST_PENDING)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_pending_for_recruiter(self, recruiter_id: int) -> Sequence[RatingRequest]:
        query = (
            self.session.query(RatingRequestModel)
            .filter(RatingRequestModel.recruiter_id == recruiter_id)
            .filter(RatingRequestModel.status == RATING_REQUEST_PENDING)
            .order_by(RatingRequestModel.requested_at.desc(), RatingRequestModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, request: RatingRequest) -> RatingRequest:
        model = RatingRequestModel(
            job_application_id=request.job_application_id,
            freelancer_id=request.freelancer_id,
            recruiter_id=request.recruiter_id,
            status=request.status,
            requested_at=request.requested_at or now_in_app_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_status(self, request_id: int, status: str) -> RatingRequest:
        model = self.session.get(RatingRequestModel, request_id)
        if model is None:
            msg = f"Rating request with id {request_id} not found"
            raise LookupError(msg)
        model.status = status
        model.responded_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: RatingRequestModel) -> RatingRequest:
        return RatingRequest(
            id=model.id,
            job_application_id=model.job_application_id,
            freelancer_id=model.freelancer_id,
            recruiter_id=model.recruiter_id,
            status=model.status,
            requested_at=model.requested_at,
            responded_at=model.responded_at,
        )


__all__ = ["RatingRepository", "RatingRequestRepository"]
