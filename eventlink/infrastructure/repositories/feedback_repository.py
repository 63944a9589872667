"""Persistence helpers for feedback and contact form submissions."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from eventlink.domain.entities import ContactMessage, Feedback
from eventlink.infrastructure.models import ContactMessageModel, FeedbackModel
from eventlink.utils import now_in_app_naive_datetime


class FeedbackRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, feedback_id: int) -> Feedback | None:
        model = self.session.get(FeedbackModel, feedback_id)
        return self._to_entity(model) if model else None

    def list(self, *, status: str | None = None) -> Sequence[Feedback]:
        query = self.session.query(FeedbackModel)
        if status:
            query = query.filter(FeedbackModel.status == status)
        query = query.order_by(FeedbackModel.created_at.desc(), FeedbackModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def count_by_status(self) -> dict[str, int]:
        rows = (
            self.session.query(FeedbackModel.status, func.count(FeedbackModel.id))
            .group_by(FeedbackModel.status)
            .all()
        )
        return {status: count for status, count in rows}

    def create(self, feedback: Feedback) -> Feedback:
        model = FeedbackModel()
        self._apply_entity_to_model(model, feedback)
        model.created_at = feedback.created_at or now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, feedback: Feedback) -> Feedback:
        model = self.session.get(FeedbackModel, feedback.id)
        if model is None:
            msg = f"Feedback with id {feedback.id} not found"
            raise LookupError(msg)
        self._apply_entity_to_model(model, feedback)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: FeedbackModel, feedback: Feedback) -> None:
        model.user_id = feedback.user_id
        model.feedback_type = feedback.feedback_type
        model.message = feedback.message
        model.page_url = feedback.page_url
        model.source = feedback.source
        model.user_email = feedback.user_email
        model.user_name = feedback.user_name
        model.status = feedback.status
        model.admin_response = feedback.admin_response
        model.admin_user_id = feedback.admin_user_id
        model.resolved_at = feedback.resolved_at

    @staticmethod
    def _to_entity(model: FeedbackModel) -> Feedback:
        return Feedback(
            id=model.id,
            feedback_type=model.feedback_type,
            message=model.message,
            user_id=model.user_id,
            page_url=model.page_url,
            source=model.source,
            user_email=model.user_email,
            user_name=model.user_name,
            status=model.status,
            admin_response=model.admin_response,
            admin_user_id=model.admin_user_id,
            created_at=model.created_at,
            resolved_at=model.resolved_at,
        )


class ContactMessageRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> Sequence[ContactMessage]:
        query = self.session.query(ContactMessageModel).order_by(
            ContactMessageModel.created_at.desc(), ContactMessageModel.id.desc()
        )
        return [self._to_entity(model) for model in query.all()]

    def count_pending(self) -> int:
        return (
            self.session.query(ContactMessageModel)
            .filter(ContactMessageModel.status == "pending")
            .count()
        )

    def create(self, contact: ContactMessage) -> ContactMessage:
        model = ContactMessageModel(
            name=contact.name,
            email=contact.email,
            subject=contact.subject,
            message=contact.message,
            status=contact.status,
            created_at=contact.created_at or now_in_app_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ContactMessageModel) -> ContactMessage:
        return ContactMessage(
            id=model.id,
            name=model.name,
            email=model.email,
            subject=model.subject,
            message=model.message,
            status=model.status,
            created_at=model.created_at,
        )


__all__ = ["ContactMessageRepository", "FeedbackRepository"]
